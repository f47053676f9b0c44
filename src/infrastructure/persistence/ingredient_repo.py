"""
infrastructure.persistence.ingredient_repo - SQLite bar inventory repository.

Implements IngredientRepository port.
"""

from __future__ import annotations

import logging
from datetime import datetime

from domain.entities import Ingredient
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)


class SQLiteIngredientRepository:
    """Async SQLite implementation of IngredientRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, ingredient: Ingredient) -> int:
        date_added = ingredient.date_added or datetime.now().isoformat()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO ingredients (name, category, quantity, dateAdded)
                   VALUES (?, ?, ?, ?)""",
                (ingredient.name, ingredient.category, ingredient.quantity, date_added),
            )
            logger.info("Saved ingredient '%s' (id=%d)", ingredient.name, cursor.lastrowid)
            return cursor.lastrowid

    async def get_all(self) -> list[Ingredient]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT id, name, category, quantity, dateAdded
                   FROM ingredients
                   ORDER BY dateAdded DESC, id DESC""",
            )
            return [self._row_to_entity(r) for r in rows]

    async def delete(self, ingredient_id: int) -> None:
        async with self._conn.acquire() as conn:
            await conn.execute("DELETE FROM ingredients WHERE id = ?", (ingredient_id,))

    @staticmethod
    def _row_to_entity(row) -> Ingredient:
        return Ingredient(
            id=row["id"],
            name=row["name"] or "",
            category=row["category"] or "",
            quantity=row["quantity"] or 0.0,
            date_added=row["dateAdded"] or "",
        )
