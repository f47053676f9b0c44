"""
domain.fallbacks - Built-in recipe library and canned chat replies.

The data lives in domain/data/*.json so it can be versioned and reviewed
separately from code. Both tables are loaded once per process.

Used whenever the completion endpoint is unavailable or returns data that
fails validation.
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from domain.models import GlassType, RecipeSuggestion

_DATA_DIR = Path(__file__).resolve().parent / "data"
_RECIPES_FILE = _DATA_DIR / "fallback_recipes.json"
_REPLIES_FILE = _DATA_DIR / "fallback_replies.json"


@dataclass(frozen=True)
class FallbackReply:
    keywords: tuple[str, ...]
    reply: str

    def matches(self, lowered_message: str) -> bool:
        return any(keyword in lowered_message for keyword in self.keywords)


@dataclass(frozen=True)
class FallbackLibrary:
    """Static fallback data: recipes and an ordered keyword → reply table."""
    recipes: tuple[RecipeSuggestion, ...]
    replies: tuple[FallbackReply, ...]
    default_reply: str

    def pick_recipe(self, rng: Optional[random.Random] = None) -> RecipeSuggestion:
        """Pick one recipe uniformly at random."""
        return (rng or random).choice(self.recipes)

    def pick_recipes(
        self, count: int, rng: Optional[random.Random] = None,
    ) -> list[RecipeSuggestion]:
        """Pick *count* recipes independently; duplicates are allowed."""
        return [self.pick_recipe(rng) for _ in range(count)]

    def reply_for(self, message: str) -> str:
        """First reply whose keywords appear in *message*, else the catch-all."""
        lowered = message.lower()
        for entry in self.replies:
            if entry.matches(lowered):
                return entry.reply
        return self.default_reply


@lru_cache(maxsize=1)
def load_fallback_library() -> FallbackLibrary:
    """Load and cache the bundled fallback tables."""
    recipes_data = json.loads(_RECIPES_FILE.read_text(encoding="utf-8"))
    replies_data = json.loads(_REPLIES_FILE.read_text(encoding="utf-8"))

    recipes = tuple(
        RecipeSuggestion(
            name=r["name"],
            glass=GlassType.coerce(r["glass"]).value,
            ingredients=r["ingredients"],
            instructions=r["instructions"],
        )
        for r in recipes_data["recipes"]
    )
    replies = tuple(
        FallbackReply(keywords=tuple(k.lower() for k in r["keywords"]), reply=r["reply"])
        for r in replies_data["replies"]
    )
    return FallbackLibrary(
        recipes=recipes,
        replies=replies,
        default_reply=replies_data["default"],
    )
