"""
Pytest configuration and fixtures for the bar assistant tests.
"""

import os
import random
import sys
from typing import Optional

import pytest

# Make src/ importable when pytest is run without an installed package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from application.services.chat_history import ChatHistoryService
from application.services.chat_session import ChatSession
from application.services.inventory import InventoryService
from application.services.recipe_collection import RecipeCollectionService
from application.services.suggestion_engine import SuggestionEngine
from domain.entities import Ingredient
from domain.exceptions import CompletionError
from infrastructure.persistence.chat_message_repo import SQLiteChatMessageRepository
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.ingredient_repo import SQLiteIngredientRepository
from infrastructure.persistence.migrations import run_migrations
from infrastructure.persistence.recipe_repo import SQLiteRecipeRepository


class FakeCompletionClient:
    """Scripted CompletionClientPort: returns queued answers in order.

    A queued exception instance is raised instead of returned. Every call's
    arguments are recorded in .calls.
    """

    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls: list[dict] = []

    def queue(self, *responses) -> None:
        self._responses.extend(responses)

    async def complete(self, messages, *, temperature, max_tokens, json_mode=False):
        self.calls.append({
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
        })
        if not self._responses:
            raise CompletionError("No scripted response left")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def rng():
    return random.Random(7)


@pytest.fixture
def sample_inventory():
    """Sample bar inventory for prompt and engine tests."""
    return [
        Ingredient(id=1, name="Hendrick's Gin", category="Spirit", quantity=700),
        Ingredient(id=2, name="Campari", category="Liqueur", quantity=500),
        Ingredient(id=3, name="Tonic Water", category="Mixer", quantity=1000),
    ]


@pytest.fixture
async def connection(tmp_path):
    """Migrated SQLite database in a temporary directory."""
    conn = AsyncSQLiteConnection(str(tmp_path / "test.db"))
    await conn.open()
    await run_migrations(conn)
    yield conn
    await conn.close()


@pytest.fixture
def inventory_service(connection):
    return InventoryService(ingredient_repo=SQLiteIngredientRepository(connection))


@pytest.fixture
def collection_service(connection):
    return RecipeCollectionService(recipe_repo=SQLiteRecipeRepository(connection))


@pytest.fixture
def history_service(connection):
    return ChatHistoryService(message_repo=SQLiteChatMessageRepository(connection))


@pytest.fixture
def make_session(inventory_service, collection_service, history_service, rng):
    """Build a ChatSession around an optional scripted client."""

    def _make(client: Optional[FakeCompletionClient] = None) -> ChatSession:
        return ChatSession(
            engine=SuggestionEngine(client=client, rng=rng),
            chat_history=history_service,
            inventory=inventory_service,
            collection=collection_service,
        )

    return _make
