"""
infrastructure.persistence.chat_message_repo - SQLite chat message repository.

Append-only log of user and agent turns. Individual messages are never
edited or deleted; the whole history can be cleared.
"""

from __future__ import annotations

import logging
from datetime import datetime

from domain.entities import ChatMessage
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)


class SQLiteChatMessageRepository:
    """Async SQLite implementation of ChatMessageRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, message: ChatMessage) -> int:
        timestamp = message.timestamp or datetime.now().isoformat()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO chat_history (sender, message, timestamp)
                   VALUES (?, ?, ?)""",
                (message.sender, message.message, timestamp),
            )
            return cursor.lastrowid

    async def get_all(self) -> list[ChatMessage]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT id, sender, message, timestamp
                   FROM chat_history
                   ORDER BY timestamp ASC, id ASC""",
            )
            return [self._row_to_entity(r) for r in rows]

    async def clear(self) -> None:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute("DELETE FROM chat_history")
            logger.info("Cleared chat history (%d message(s))", cursor.rowcount)

    @staticmethod
    def _row_to_entity(row) -> ChatMessage:
        return ChatMessage(
            id=row["id"],
            sender=row["sender"] or "",
            message=row["message"] or "",
            timestamp=row["timestamp"] or "",
        )
