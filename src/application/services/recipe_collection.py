"""
application.services.recipe_collection - Saved recipe collection.

Handles manual entries and promotion of AI suggestions to saved recipes.
Saved recipes carry a source tag and the date they were added (YYYY-MM-DD).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from application.dto import CollectionStats
from domain.entities import Recipe
from domain.exceptions import InputValidationError, NotFoundError
from domain.models import GlassType, RecipeSource, RecipeSuggestion
from domain.ports import RecipeRepository

logger = logging.getLogger(__name__)


class RecipeCollectionService:
    """Manages the user's saved recipes."""

    def __init__(self, recipe_repo: RecipeRepository):
        self._recipe_repo = recipe_repo

    async def add_manual_recipe(
        self,
        name: str,
        ingredients: str,
        instructions: str,
        glass: str = GlassType.ROCKS.value,
    ) -> Recipe:
        """Save a hand-entered recipe.

        Raises:
            InputValidationError: If name, ingredients or instructions is blank.
        """
        name, ingredients, instructions = (
            (name or "").strip(),
            (ingredients or "").strip(),
            (instructions or "").strip(),
        )
        if not (name and ingredients and instructions):
            raise InputValidationError("Please complete all required fields")

        return await self._save(Recipe(
            name=name,
            ingredients=ingredients,
            instructions=instructions,
            glass=GlassType.coerce(glass).value,
            source=RecipeSource.MANUAL_ENTRY.value,
        ))

    async def save_suggestion(self, suggestion: RecipeSuggestion) -> Recipe:
        """Promote an engine suggestion to a saved recipe, fields unchanged."""
        return await self._save(Recipe(
            name=suggestion.name,
            ingredients=suggestion.ingredients,
            instructions=suggestion.instructions,
            glass=GlassType.coerce(suggestion.glass).value,
            source=RecipeSource.AI_GENERATED.value,
        ))

    async def list_recipes(self) -> list[Recipe]:
        """All saved recipes, newest first."""
        return await self._recipe_repo.get_all()

    async def get_recipe(self, recipe_id: int) -> Recipe:
        recipe: Optional[Recipe] = await self._recipe_repo.get_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(f"No recipe with id {recipe_id}")
        return recipe

    async def remove_recipe(self, recipe_id: int) -> None:
        await self._recipe_repo.delete(recipe_id)
        logger.info("Removed recipe id=%d", recipe_id)

    async def get_stats(self) -> CollectionStats:
        recipes = await self._recipe_repo.get_all()
        return CollectionStats(
            total=len(recipes),
            ai_generated=sum(1 for r in recipes if r.source == RecipeSource.AI_GENERATED.value),
            manual=sum(1 for r in recipes if r.source == RecipeSource.MANUAL_ENTRY.value),
        )

    async def _save(self, recipe: Recipe) -> Recipe:
        recipe.date_added = date.today().isoformat()
        recipe.id = await self._recipe_repo.save(recipe)
        logger.info("Recipe '%s' saved with id=%d", recipe.name, recipe.id)
        return recipe
