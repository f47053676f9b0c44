"""
infrastructure.persistence.recipe_repo - SQLite recipe collection repository.

Implements RecipeRepository port.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.entities import Recipe
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, ingredients, instructions, glass, source, dateAdded"


class SQLiteRecipeRepository:
    """Async SQLite implementation of RecipeRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, recipe: Recipe) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO recipes
                   (name, ingredients, instructions, glass, source, dateAdded)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (recipe.name, recipe.ingredients, recipe.instructions,
                 recipe.glass, recipe.source, recipe.date_added),
            )
            logger.info(
                "Saved recipe '%s' (id=%d, source=%s)",
                recipe.name, cursor.lastrowid, recipe.source,
            )
            return cursor.lastrowid

    async def get_all(self) -> list[Recipe]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                f"SELECT {_COLUMNS} FROM recipes ORDER BY dateAdded DESC, id DESC",
            )
            return [self._row_to_entity(r) for r in rows]

    async def get_by_id(self, recipe_id: int) -> Optional[Recipe]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                f"SELECT {_COLUMNS} FROM recipes WHERE id = ?",
                (recipe_id,),
            )
            return self._row_to_entity(rows[0]) if rows else None

    async def delete(self, recipe_id: int) -> None:
        async with self._conn.acquire() as conn:
            await conn.execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))

    @staticmethod
    def _row_to_entity(row) -> Recipe:
        return Recipe(
            id=row["id"],
            name=row["name"] or "",
            ingredients=row["ingredients"] or "",
            instructions=row["instructions"] or "",
            glass=row["glass"] or "rocks",
            source=row["source"] or "",
            date_added=row["dateAdded"] or "",
        )
