"""
infrastructure.persistence.connection - Async SQLite connection manager.

Owns a single aiosqlite connection with an explicit lifecycle: open() on
startup, close() on shutdown. Repositories borrow it through acquire(),
which commits on success and rolls back on exception.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import aiosqlite

from domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class AsyncSQLiteConnection:
    """Async SQLite connection provider with auto-commit/rollback."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: Optional[aiosqlite.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        if self._conn is not None:
            return
        try:
            self._conn = await aiosqlite.connect(self._db_path)
        except (aiosqlite.Error, OSError) as e:
            raise RepositoryError(f"Cannot open database {self._db_path}: {e}") from e
        self._conn.row_factory = aiosqlite.Row
        logger.info("Opened database %s", self._db_path)

    async def close(self) -> None:
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("Closed database %s", self._db_path)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield the open connection.

        Commits on success, rolls back on exception. aiosqlite errors are
        re-raised as RepositoryError.
        """
        if self._conn is None:
            raise RepositoryError("Database is not open. Call open() first.")
        try:
            yield self._conn
            await self._conn.commit()
        except aiosqlite.Error as e:
            await self._conn.rollback()
            logger.exception("Database operation failed, transaction rolled back.")
            raise RepositoryError(str(e)) from e
        except Exception:
            await self._conn.rollback()
            logger.exception("Database operation failed, transaction rolled back.")
            raise
