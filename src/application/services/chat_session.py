"""
application.services.chat_session - State and flow of the assistant chat.

One ChatSession per open chat. It keeps the in-memory message list and
the accumulated recipe suggestions, and runs each send action:

    user text → classify → generate recipe(s) → narrate → persist both turns

At most two completion calls are made per send, one after the other.
A send issued while another is in flight is ignored.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from application.dto import ChatReply
from application.intent import classify_request, wants_recipe
from application.prompts import recipes_to_json
from application.services.chat_history import ChatHistoryService
from application.services.inventory import InventoryService
from application.services.recipe_collection import RecipeCollectionService
from application.services.suggestion_engine import SuggestionEngine
from domain.entities import ChatMessage, Ingredient, Recipe
from domain.models import RecipeSuggestion

logger = logging.getLogger(__name__)


class ChatSession:
    """Per-chat state: messages, inventory snapshot and suggestions."""

    def __init__(
        self,
        engine: SuggestionEngine,
        chat_history: ChatHistoryService,
        inventory: InventoryService,
        collection: RecipeCollectionService,
    ):
        self._engine = engine
        self._chat_history = chat_history
        self._inventory_service = inventory
        self._collection = collection

        self._messages: list[ChatMessage] = []
        self._suggestions: list[RecipeSuggestion] = []
        self._inventory: list[Ingredient] = []
        self._busy = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def messages(self) -> Sequence[ChatMessage]:
        return tuple(self._messages)

    @property
    def suggestions(self) -> Sequence[RecipeSuggestion]:
        return tuple(self._suggestions)

    @property
    def inventory(self) -> Sequence[Ingredient]:
        return tuple(self._inventory)

    @property
    def busy(self) -> bool:
        return self._busy

    async def start(self) -> None:
        """Load persisted history and the current inventory."""
        await self.reload_history()
        await self.refresh_inventory()

    async def reload_history(self) -> None:
        self._messages = await self._chat_history.load_history()

    async def refresh_inventory(self) -> None:
        self._inventory = await self._inventory_service.list_ingredients()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def send(self, text: str) -> Optional[ChatReply]:
        """Handle one user message.

        Returns None without side effects when *text* is blank or another
        send is still running. Storage errors propagate (RepositoryError);
        completion failures never do.
        """
        text = (text or "").strip()
        if not text or self._busy:
            return None

        self._busy = True
        try:
            prior = list(self._messages)
            user_msg = await self._chat_history.record_user_message(text)
            self._messages.append(user_msg)

            recipes = await self._generate(text)
            response = await self._engine.narrate(recipes_to_json(recipes), prior, text)

            agent_msg = await self._chat_history.record_agent_message(response)
            self._messages.append(agent_msg)
            self._suggestions.extend(recipes)
            return ChatReply(message=agent_msg, recipes=recipes)
        finally:
            self._busy = False

    async def save_suggestion(self, index: int) -> Recipe:
        """Save suggestion *index* to the collection.

        The suggestion list is left untouched whether or not the save
        succeeds.

        Raises:
            IndexError: If there is no suggestion at *index*.
            RepositoryError: If the store write fails.
        """
        if not 0 <= index < len(self._suggestions):
            raise IndexError(f"No suggestion #{index + 1}")
        return await self._collection.save_suggestion(self._suggestions[index])

    async def clear(self) -> None:
        """Delete the stored history and reset messages and suggestions."""
        await self._chat_history.clear_history()
        self._messages = []
        self._suggestions = []
        await self.reload_history()
        logger.info("Chat history cleared")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _generate(self, text: str) -> list[RecipeSuggestion]:
        request = classify_request(text)
        if request.is_multiple:
            logger.info("Request for %d recipes", request.count)
            return await self._engine.generate_recipes(text, self._inventory, request.count)
        if wants_recipe(text):
            return [await self._engine.generate_recipe(text, self._inventory)]
        return []
