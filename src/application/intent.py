"""
application.intent - Keyword/regex classification of recipe requests.

Pure functions, no I/O: map the user's free text to how many recipes
should be generated, and whether the text asks for a recipe at all.
"""

from __future__ import annotations

import re

from domain.models import RecipeRequest

MIN_RECIPES = 1
MAX_RECIPES = 5
DEFAULT_PLURAL_COUNT = 3

PLURAL_KEYWORDS = (
    "recipes",
    "suggestions",
    "options",
    "cocktails",
    "multiple",
    "few",
    "several",
)

RECIPE_KEYWORDS = ("recipe", "make", "suggest")

# "3 recipes", "5cocktails", "2 margarita cocktails"; at most one separate word between
# the number and the noun, so "700ml gin cocktail" has no count
_COUNT_PATTERN = re.compile(
    r"(\d+)(?:\s+[a-z'-]+\s+|\s*)(recipe|cocktail|drink|suggestion)",
    re.IGNORECASE,
)


def clamp_count(count: int) -> int:
    return min(max(count, MIN_RECIPES), MAX_RECIPES)


def extract_count(text: str) -> int | None:
    """Return the explicit number in e.g. "3 recipes" or "5 cocktails", if any."""
    match = _COUNT_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group(1))


def has_plural_keyword(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in PLURAL_KEYWORDS)


def classify_request(text: str) -> RecipeRequest:
    """Decide how many recipes *text* asks for.

    An explicit count wins; otherwise a plural keyword means 3, else 1.
    The result is clamped to [1, 5].
    """
    plural = has_plural_keyword(text)
    explicit = extract_count(text)
    if explicit is not None:
        count = explicit
    elif plural:
        count = DEFAULT_PLURAL_COUNT
    else:
        count = MIN_RECIPES
    return RecipeRequest(count=clamp_count(count), plural=plural)


def wants_recipe(text: str) -> bool:
    """True when a single-recipe request should trigger generation."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in RECIPE_KEYWORDS)
