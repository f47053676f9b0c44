"""
application.services.inventory - Bar inventory management.

Validates form input before anything touches the store: a blank name is
rejected, an unparsable quantity becomes 0.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from domain.entities import Ingredient
from domain.exceptions import InputValidationError
from domain.ports import IngredientRepository

logger = logging.getLogger(__name__)

CATEGORIES = ("Spirit", "Liqueur", "Mixer", "Bitters", "Garnish", "Other")
DEFAULT_CATEGORY = "Spirit"


def parse_quantity(value: object) -> float:
    """Parse a user-entered quantity in ml; anything invalid is 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0.0
    return number if math.isfinite(number) else 0.0


class InventoryService:
    """Add, list and remove bar ingredients."""

    def __init__(self, ingredient_repo: IngredientRepository):
        self._ingredient_repo = ingredient_repo

    async def add_ingredient(
        self,
        name: str,
        category: str = DEFAULT_CATEGORY,
        quantity: object = "",
    ) -> Ingredient:
        """Store a new ingredient and return it with its id.

        Raises:
            InputValidationError: If name is blank.
        """
        name = (name or "").strip()
        if not name:
            raise InputValidationError("Please enter an ingredient name")

        ingredient = Ingredient(
            name=name,
            category=(category or "").strip() or DEFAULT_CATEGORY,
            quantity=parse_quantity(quantity),
            date_added=datetime.now().isoformat(),
        )
        ingredient.id = await self._ingredient_repo.save(ingredient)
        return ingredient

    async def list_ingredients(self) -> list[Ingredient]:
        """All ingredients, most recently added first."""
        return await self._ingredient_repo.get_all()

    async def remove_ingredient(self, ingredient_id: int) -> None:
        await self._ingredient_repo.delete(ingredient_id)
        logger.info("Removed ingredient id=%d", ingredient_id)
