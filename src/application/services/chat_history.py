"""
application.services.chat_history - Conversation persistence service.

Saves and loads chat turns in arrival order. Individual messages are never
edited or removed; the whole history can only be cleared at once.
"""

from __future__ import annotations

import logging
from datetime import datetime

from domain.entities import ChatMessage
from domain.models import Sender
from domain.ports import ChatMessageRepository

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome to your professional cocktail assistant. I can analyze your "
    "inventory, suggest recipes based on available ingredients, and provide "
    "detailed preparation instructions. Ask me for single recipes or multiple "
    "suggestions at once!"
)


class ChatHistoryService:
    """Persists and retrieves conversation messages."""

    def __init__(self, message_repo: ChatMessageRepository):
        self._message_repo = message_repo

    async def record_user_message(self, content: str) -> ChatMessage:
        return await self._record(Sender.USER, content)

    async def record_agent_message(self, content: str) -> ChatMessage:
        return await self._record(Sender.AGENT, content)

    async def load_history(self) -> list[ChatMessage]:
        """Load all messages ordered by timestamp ASC.

        An empty history yields a single welcome message that is shown but
        never persisted.
        """
        history = await self._message_repo.get_all()
        if history:
            logger.info("Loaded %d chat message(s)", len(history))
            return history
        return [self.welcome_message()]

    async def clear_history(self) -> None:
        await self._message_repo.clear()

    @staticmethod
    def welcome_message() -> ChatMessage:
        return ChatMessage(
            id=0,
            sender=Sender.AGENT.value,
            message=WELCOME_MESSAGE,
            timestamp=datetime.now().isoformat(),
        )

    async def _record(self, sender: Sender, content: str) -> ChatMessage:
        msg = ChatMessage(
            sender=sender.value,
            message=content,
            timestamp=datetime.now().isoformat(),
        )
        msg.id = await self._message_repo.save(msg)
        return msg
