"""
factory - Composition root for the bar assistant.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (CLI, tests) call this factory to get fully
configured services.

Usage:
    from factory import ServiceFactory
    from infrastructure.config import Settings

    config = Settings.from_env()
    factory = ServiceFactory(config)
    await factory.initialize()  # open DB, run migrations
    try:
        session = factory.create_chat_session()
        await session.start()
        reply = await session.send("Give me 2 margarita cocktails")
    finally:
        await factory.close()
"""

from __future__ import annotations

import logging
from typing import Optional

from application.services.chat_history import ChatHistoryService
from application.services.chat_session import ChatSession
from application.services.inventory import InventoryService
from application.services.recipe_collection import RecipeCollectionService
from application.services.suggestion_engine import SuggestionEngine
from domain.ports import CompletionClientPort
from infrastructure.config import Settings
from infrastructure.llm.completion_client import OpenAICompletionClient
from infrastructure.persistence.chat_message_repo import SQLiteChatMessageRepository
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.ingredient_repo import SQLiteIngredientRepository
from infrastructure.persistence.migrations import run_migrations
from infrastructure.persistence.recipe_repo import SQLiteRecipeRepository

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root; wires all dependencies together.

    Call initialize() once at startup and close() on shutdown; create
    services in between.
    """

    def __init__(
        self,
        config: Settings,
        completion_client: Optional[CompletionClientPort] = None,
    ):
        self._config = config
        self._connection = AsyncSQLiteConnection(config.db_path)
        self._completion_client = completion_client
        self._initialized = False

    @property
    def config(self) -> Settings:
        return self._config

    async def initialize(self) -> None:
        """One-time startup: open the database and run migrations."""
        logger.info("Initializing ServiceFactory (db=%s)", self._config.db_path)
        await self._connection.open()
        await run_migrations(self._connection)
        self._initialized = True
        logger.info("ServiceFactory ready")

    async def close(self) -> None:
        await self._connection.close()
        self._initialized = False

    async def __aenter__(self) -> ServiceFactory:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def create_inventory_service(self) -> InventoryService:
        self._ensure_initialized()
        return InventoryService(
            ingredient_repo=SQLiteIngredientRepository(self._connection),
        )

    def create_recipe_collection(self) -> RecipeCollectionService:
        self._ensure_initialized()
        return RecipeCollectionService(
            recipe_repo=SQLiteRecipeRepository(self._connection),
        )

    def create_chat_history_service(self) -> ChatHistoryService:
        self._ensure_initialized()
        return ChatHistoryService(
            message_repo=SQLiteChatMessageRepository(self._connection),
        )

    def create_suggestion_engine(self) -> SuggestionEngine:
        """Engine backed by the completion API, or fallback-only without a key."""
        return SuggestionEngine(client=self._build_completion_client())

    def create_chat_session(self) -> ChatSession:
        """Create a ChatSession with all dependencies wired."""
        return ChatSession(
            engine=self.create_suggestion_engine(),
            chat_history=self.create_chat_history_service(),
            inventory=self.create_inventory_service(),
            collection=self.create_recipe_collection(),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_completion_client(self) -> Optional[CompletionClientPort]:
        if self._completion_client is not None:
            return self._completion_client
        if not self._config.is_api_configured:
            logger.info("OPENAI_API_KEY not set; suggestions use the fallback library")
            return None
        return OpenAICompletionClient(
            api_key=self._config.openai_api_key,
            base_url=self._config.openai_base_url,
            model=self._config.openai_model,
            timeout=self._config.openai_timeout,
        )

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError(
                "ServiceFactory not initialized. Call await factory.initialize() first."
            )
