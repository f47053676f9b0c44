"""
application.prompts - System prompts for recipe generation and narration.

Prompt text plus the sampling parameters that go with each mode. Pure
string building, no I/O.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable

from domain.entities import Ingredient
from domain.models import GlassType, RecipeSuggestion

NO_INVENTORY = "No inventory available"


@dataclass(frozen=True)
class SamplingParams:
    temperature: float
    max_tokens: int


# Higher temperature and budget for multi-recipe requests, to encourage variety.
SINGLE_RECIPE_PARAMS = SamplingParams(temperature=0.8, max_tokens=600)
MULTIPLE_RECIPES_PARAMS = SamplingParams(temperature=0.9, max_tokens=1500)
NARRATIVE_PARAMS = SamplingParams(temperature=0.7, max_tokens=350)

_GLASS_CHOICES = "|".join(GlassType.values())
_GLASS_SENTENCE = ", ".join(GlassType.values()[:-1]) + f", or {GlassType.values()[-1]}"


def format_inventory(inventory: Iterable[Ingredient]) -> str:
    """Render the inventory as "name (category)" pairs, comma-joined."""
    items = [f"{item.name} ({item.category})" for item in inventory]
    return ", ".join(items) if items else NO_INVENTORY


def recipes_to_json(recipes: Iterable[RecipeSuggestion]) -> str:
    """Serialize recipes in the {"recipes": [...]} shape used by the narrative pass."""
    return json.dumps({"recipes": [r.to_dict() for r in recipes]}, ensure_ascii=False)


def build_single_recipe_prompt(inventory: Iterable[Ingredient]) -> str:
    return f"""You are an expert mixologist and cocktail creator. Create a detailed cocktail recipe based on the user's request.

Available ingredients in their bar: {format_inventory(inventory)}

IMPORTANT: You must respond with ONLY a valid JSON object in this exact format:
{{
  "name": "Cocktail Name",
  "glass": "{_GLASS_CHOICES}",
  "ingredients": "Detailed ingredient list with exact measurements (e.g., 60ml Gin, 30ml Vermouth, etc.)",
  "instructions": "Step-by-step preparation instructions"
}}

Use ingredients from their inventory when possible, but you can suggest alternatives if needed.
Make sure the glass type is one of: {_GLASS_SENTENCE}."""


def build_multiple_recipes_prompt(inventory: Iterable[Ingredient], count: int) -> str:
    return f"""You are an expert mixologist and cocktail creator. Create {count} different and diverse cocktail recipes based on the user's request.

Available ingredients in their bar: {format_inventory(inventory)}

IMPORTANT: You must respond with ONLY a valid JSON object with an array of recipes in this exact format:
{{
  "recipes": [
    {{
      "name": "Cocktail Name 1",
      "glass": "{_GLASS_CHOICES}",
      "ingredients": "Detailed ingredient list with exact measurements",
      "instructions": "Step-by-step preparation instructions"
    }}
  ]
}}

Provide {count} DIFFERENT recipes with variety in spirits, flavors, and styles.
Use ingredients from their inventory when possible.
Make sure each glass type is one of: {_GLASS_SENTENCE}."""


def build_narrative_prompt(recipes_json: str) -> str:
    return f"""You are Recip.ez AI, an expert mixologist and professional cocktail assistant.
You help users manage their bar inventory and create amazing cocktails. You handle the second part of the process: you take the cocktail recipes generated for the user and write them out in a friendly, engaging manner.

These are the user's generated cocktail recipes:
{recipes_json}

Your role:
- Write out the descriptions of the cocktail recipes in a friendly, engaging manner
- Do not just repeat the recipe back to the user
- Describe the flavor profile, history, and interesting facts about the cocktail
- Provide tips on how to best enjoy the cocktail
- Don't use markdown or code blocks
- Use proper grammar and punctuation
- Keep it concise but informative (100 words max per cocktail)
- If no recipes are listed, answer the user's bar question briefly instead

Guidelines:
- Be friendly but professional

IMPORTANT: Your cocktail suggestions must align with the recipes provided. Do not suggest anything outside of those recipes."""
