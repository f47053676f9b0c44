"""
application.validation - Validate and repair recipe JSON from the model.

Every function returns a RecipeValidation (or a list of accepted recipes)
instead of mutating the parsed payload in place. Glass values outside the
closed set are repaired to "rocks"; missing or empty fields reject the
recipe.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from domain.exceptions import RecipeFormatError
from domain.models import GlassType, RecipeSuggestion, RecipeValidation

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("name", "ingredients", "instructions")


def _as_text(value: Any) -> str:
    """Normalize a field value to stripped text ("" when unusable)."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list) and all(isinstance(v, (str, int, float)) for v in value):
        return "\n".join(str(v).strip() for v in value if str(v).strip())
    return ""


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def validate_recipe(data: Any) -> RecipeValidation:
    """Validate one parsed recipe object.

    name, ingredients and instructions must be usable text. glass only has
    to be present: any value outside the closed set becomes "rocks".
    """
    if not isinstance(data, dict):
        return RecipeValidation.reject(f"expected an object, got {type(data).__name__}")

    fields = {name: _as_text(data.get(name)) for name in TEXT_FIELDS}
    missing = [name for name in TEXT_FIELDS if not fields[name]]
    if _is_blank(data.get("glass")):
        missing.append("glass")
    if missing:
        return RecipeValidation.reject(f"missing or empty field(s): {', '.join(missing)}")

    raw_glass = data["glass"]
    glass = GlassType.coerce(raw_glass)
    if not isinstance(raw_glass, str) or glass.value != raw_glass.strip().lower():
        logger.info("Replacing unknown glass %r with %r", raw_glass, glass.value)

    return RecipeValidation.accept(RecipeSuggestion(
        name=fields["name"],
        glass=glass.value,
        ingredients=fields["ingredients"],
        instructions=fields["instructions"],
    ))


def _load_json(content: str) -> Any:
    try:
        return json.loads(content)
    except (TypeError, ValueError) as e:
        raise RecipeFormatError(f"Response is not valid JSON: {e}") from e


def parse_single_recipe(content: str) -> RecipeValidation:
    """Parse a single-recipe response.

    Accepts either the single-object shape or a {"recipes": [...]} array,
    in which case the first entry is used.
    """
    try:
        parsed = _load_json(content)
    except RecipeFormatError as e:
        return RecipeValidation.reject(str(e))

    if isinstance(parsed, dict) and isinstance(parsed.get("recipes"), list):
        if not parsed["recipes"]:
            return RecipeValidation.reject("empty recipes array")
        return validate_recipe(parsed["recipes"][0])
    return validate_recipe(parsed)


def parse_recipe_list(content: str) -> list[RecipeSuggestion]:
    """Parse a multi-recipe response, keeping only valid entries.

    Raises:
        RecipeFormatError: If the content is not JSON, has no recipes array,
            or no entry survives validation.
    """
    parsed = _load_json(content)
    if not isinstance(parsed, dict) or not isinstance(parsed.get("recipes"), list):
        raise RecipeFormatError("Response has no 'recipes' array")

    accepted: list[RecipeSuggestion] = []
    for index, entry in enumerate(parsed["recipes"]):
        result = validate_recipe(entry)
        if result.is_valid:
            accepted.append(result.recipe)
        else:
            logger.info("Dropping recipe #%d: %s", index, result.reason)

    if not accepted:
        raise RecipeFormatError("No valid recipes in response")
    return accepted
