"""
application.services.suggestion_engine - Cocktail recipe generation with fallback.

Turns a free-text request plus an inventory snapshot into structured
recipes, and a set of structured recipes into friendly prose.

Every operation absorbs its own failures: if the completion API is not
configured, unreachable, returns a non-2xx status, or returns content that
fails validation, the engine substitutes data from the built-in fallback
library. Nothing here raises past its own boundary.

Usage (wired in factory.py):
    client = OpenAICompletionClient(api_key=config.openai_api_key, ...)
    engine = SuggestionEngine(client=client)
    recipes = await engine.generate_recipes("3 gin cocktails", inventory, 3)
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from application.intent import clamp_count
from application.prompts import (
    MULTIPLE_RECIPES_PARAMS,
    NARRATIVE_PARAMS,
    SINGLE_RECIPE_PARAMS,
    build_multiple_recipes_prompt,
    build_narrative_prompt,
    build_single_recipe_prompt,
)
from application.validation import parse_recipe_list, parse_single_recipe
from domain.entities import ChatMessage, Ingredient
from domain.exceptions import CompletionError, RecipeFormatError
from domain.fallbacks import FallbackLibrary, load_fallback_library
from domain.models import RecipeSuggestion
from domain.ports import CompletionClientPort

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 6


class SuggestionEngine:
    """Recipe generation and narration over a completion client.

    client=None means no API credential is configured; every call then goes
    straight to the fallback library without touching the network.
    """

    def __init__(
        self,
        client: Optional[CompletionClientPort],
        fallbacks: Optional[FallbackLibrary] = None,
        rng: Optional[random.Random] = None,
        history_window: int = HISTORY_WINDOW,
    ):
        self._client = client
        self._fallbacks = fallbacks or load_fallback_library()
        self._rng = rng
        self._history_window = history_window

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate_recipe(
        self, text: str, inventory: Sequence[Ingredient],
    ) -> RecipeSuggestion:
        """Generate one recipe for *text*; falls back on any failure."""
        if self._client is None:
            logger.info("Completion API not configured, using fallback recipe")
            return self.fallback_recipe()

        messages = [
            {"role": "system", "content": build_single_recipe_prompt(inventory)},
            {"role": "user", "content": text},
        ]
        try:
            content = await self._client.complete(
                messages,
                temperature=SINGLE_RECIPE_PARAMS.temperature,
                max_tokens=SINGLE_RECIPE_PARAMS.max_tokens,
                json_mode=True,
            )
            result = parse_single_recipe(content)
            if not result.is_valid:
                raise RecipeFormatError(result.reason)
            return result.recipe
        except CompletionError as e:
            logger.warning("Recipe generation failed (%s); using fallback", e)
        except RecipeFormatError as e:
            logger.warning("Invalid recipe from completion API (%s); using fallback", e)
        except Exception as e:
            logger.warning("Recipe generation unexpected error (%s); using fallback", e)
        return self.fallback_recipe()

    async def generate_recipes(
        self, text: str, inventory: Sequence[Ingredient], count: int = 3,
    ) -> list[RecipeSuggestion]:
        """Generate up to *count* (clamped to 1-5) recipes in one call.

        Invalid entries are dropped; if none survive, the full fallback set
        of *count* recipes is returned instead.
        """
        count = clamp_count(count)
        if self._client is None:
            logger.info("Completion API not configured, using %d fallback recipe(s)", count)
            return self.fallback_recipes(count)

        messages = [
            {"role": "system", "content": build_multiple_recipes_prompt(inventory, count)},
            {"role": "user", "content": text},
        ]
        try:
            content = await self._client.complete(
                messages,
                temperature=MULTIPLE_RECIPES_PARAMS.temperature,
                max_tokens=MULTIPLE_RECIPES_PARAMS.max_tokens,
                json_mode=True,
            )
            recipes = parse_recipe_list(content)
            logger.info("Completion API produced %d valid recipe(s) of %d requested",
                        len(recipes), count)
            return recipes
        except CompletionError as e:
            logger.warning("Multi-recipe generation failed (%s); using fallback", e)
        except RecipeFormatError as e:
            logger.warning("Invalid recipes from completion API (%s); using fallback", e)
        except Exception as e:
            logger.warning("Multi-recipe generation unexpected error (%s); using fallback", e)
        return self.fallback_recipes(count)

    # ------------------------------------------------------------------
    # Narrative
    # ------------------------------------------------------------------

    async def narrate(
        self,
        recipes_json: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> str:
        """Describe the already-generated recipes in friendly prose.

        Only the last few history turns are sent. Falls back to the canned
        reply table on any failure or an empty answer.
        """
        if self._client is None:
            logger.info("Completion API not configured, using fallback reply")
            return self.fallback_reply(message)

        recent = list(history)[-self._history_window:] if self._history_window else []
        messages = [{"role": "system", "content": build_narrative_prompt(recipes_json)}]
        messages.extend({"role": m.role, "content": m.message} for m in recent)
        messages.append({"role": "user", "content": message})

        try:
            content = await self._client.complete(
                messages,
                temperature=NARRATIVE_PARAMS.temperature,
                max_tokens=NARRATIVE_PARAMS.max_tokens,
            )
        except CompletionError as e:
            logger.warning("Narrative call failed (%s); using fallback reply", e)
            return self.fallback_reply(message)
        except Exception as e:
            logger.warning("Narrative unexpected error (%s); using fallback reply", e)
            return self.fallback_reply(message)

        if not content.strip():
            logger.warning("Narrative call returned no text; using fallback reply")
            return self.fallback_reply(message)
        return content.strip()

    # ------------------------------------------------------------------
    # Fallback accessors
    # ------------------------------------------------------------------

    def fallback_recipe(self) -> RecipeSuggestion:
        return self._fallbacks.pick_recipe(self._rng)

    def fallback_recipes(self, count: int) -> list[RecipeSuggestion]:
        return self._fallbacks.pick_recipes(clamp_count(count), self._rng)

    def fallback_reply(self, message: str) -> str:
        return self._fallbacks.reply_for(message)
