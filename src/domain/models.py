"""
domain.models - Value objects for the suggestion pipeline.

These are immutable data containers with no business logic and no
dependencies on infrastructure (no HTTP, no SQLite).
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class GlassType(str, Enum):
    """Closed set of serving vessels a recipe may name."""
    ROCKS = "rocks"
    HIGHBALL = "highball"
    COUPE = "coupe"
    MARTINI = "martini"
    WINE = "wine"
    SHOT = "shot"

    @classmethod
    def values(cls) -> list[str]:
        return [g.value for g in cls]

    @classmethod
    def coerce(cls, value: object) -> GlassType:
        """Map any observed value onto the closed set, defaulting to ROCKS."""
        if isinstance(value, str):
            normalized = value.strip().lower()
            for glass in cls:
                if glass.value == normalized:
                    return glass
        return cls.ROCKS


class RecipeSource(str, Enum):
    """Source tag stored on every saved recipe."""
    AI_GENERATED = "AI Generated"
    MANUAL_ENTRY = "Manual Entry"


class Sender(str, Enum):
    USER = "user"
    AGENT = "agent"


# ---------------------------------------------------------------------------
# Recipe suggestion
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecipeSuggestion:
    """A recipe produced by the suggestion engine.

    Never persisted directly; promoted to a Recipe entity only when the
    user explicitly saves it.
    """
    name: str
    glass: str
    ingredients: str
    instructions: str

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Intent
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecipeRequest:
    """How many recipes a free-text request asks for.

    count is always within [1, 5]. plural records whether a plural keyword
    was seen, independently of any explicit number.
    """
    count: int = 1
    plural: bool = False

    @property
    def is_multiple(self) -> bool:
        return self.plural or self.count > 1


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecipeValidation:
    """Tagged result of validating one parsed recipe.

    Exactly one of recipe / reason is set.
    """
    recipe: Optional[RecipeSuggestion] = None
    reason: str = ""

    @property
    def is_valid(self) -> bool:
        return self.recipe is not None

    @classmethod
    def accept(cls, recipe: RecipeSuggestion) -> RecipeValidation:
        return cls(recipe=recipe)

    @classmethod
    def reject(cls, reason: str) -> RecipeValidation:
        return cls(reason=reason)
