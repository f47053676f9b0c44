"""
Tests for the inventory, recipe collection and chat history services.
"""

from datetime import date

import pytest

from application.services.chat_history import WELCOME_MESSAGE
from application.services.inventory import parse_quantity
from domain.exceptions import InputValidationError, NotFoundError
from domain.models import RecipeSuggestion


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    ("700", 700.0),
    (" 25.5 ", 25.5),
    ("", 0.0),
    ("a splash", 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
    (None, 0.0),
    (True, 0.0),
    (50, 50.0),
])
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


@pytest.mark.asyncio
async def test_add_ingredient(inventory_service):
    ingredient = await inventory_service.add_ingredient("  Hendrick's Gin ", "Spirit", "700")

    assert ingredient.id is not None
    assert ingredient.name == "Hendrick's Gin"
    assert ingredient.quantity == 700.0
    assert [i.name for i in await inventory_service.list_ingredients()] == ["Hendrick's Gin"]


@pytest.mark.asyncio
async def test_add_ingredient_invalid_quantity_defaults_to_zero(inventory_service):
    ingredient = await inventory_service.add_ingredient("Mint", "Garnish", "a handful")
    assert ingredient.quantity == 0.0


@pytest.mark.asyncio
async def test_add_ingredient_defaults_category(inventory_service):
    assert (await inventory_service.add_ingredient("Rum", "")).category == "Spirit"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", None])
async def test_blank_ingredient_name_rejected(inventory_service, name):
    with pytest.raises(InputValidationError, match="ingredient name"):
        await inventory_service.add_ingredient(name, "Spirit", "100")
    assert await inventory_service.list_ingredients() == []


@pytest.mark.asyncio
async def test_remove_ingredient(inventory_service):
    ingredient = await inventory_service.add_ingredient("Vodka")
    await inventory_service.remove_ingredient(ingredient.id)
    assert await inventory_service.list_ingredients() == []


# ---------------------------------------------------------------------------
# Recipe collection
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_save_suggestion_round_trip(collection_service):
    suggestion = RecipeSuggestion(
        name="Aviation", glass="coupe",
        ingredients="60ml Gin\n15ml Maraschino", instructions="Shake and strain",
    )

    saved = await collection_service.save_suggestion(suggestion)
    stored = await collection_service.get_recipe(saved.id)

    assert stored.name == suggestion.name
    assert stored.glass == suggestion.glass
    assert stored.ingredients == suggestion.ingredients
    assert stored.instructions == suggestion.instructions
    assert stored.source == "AI Generated"
    assert stored.date_added == date.today().isoformat()


@pytest.mark.asyncio
async def test_add_manual_recipe(collection_service):
    recipe = await collection_service.add_manual_recipe(
        "House Sour", "60ml Whiskey\n30ml Lemon", "Shake hard", glass="Fishbowl",
    )
    assert recipe.source == "Manual Entry"
    assert recipe.glass == "rocks"


@pytest.mark.asyncio
async def test_manual_recipe_requires_all_fields(collection_service):
    with pytest.raises(InputValidationError, match="required fields"):
        await collection_service.add_manual_recipe("No steps", "Gin", "  ")


@pytest.mark.asyncio
async def test_collection_stats(collection_service):
    await collection_service.add_manual_recipe("A", "x", "y")
    await collection_service.save_suggestion(
        RecipeSuggestion(name="B", glass="rocks", ingredients="x", instructions="y"),
    )
    await collection_service.save_suggestion(
        RecipeSuggestion(name="C", glass="shot", ingredients="x", instructions="y"),
    )

    stats = await collection_service.get_stats()

    assert (stats.total, stats.ai_generated, stats.manual) == (3, 2, 1)


@pytest.mark.asyncio
async def test_get_missing_recipe(collection_service):
    with pytest.raises(NotFoundError):
        await collection_service.get_recipe(42)


@pytest.mark.asyncio
async def test_remove_recipe(collection_service):
    recipe = await collection_service.add_manual_recipe("A", "x", "y")
    await collection_service.remove_recipe(recipe.id)
    assert await collection_service.list_recipes() == []


# ---------------------------------------------------------------------------
# Chat history
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_empty_history_shows_unsaved_welcome(history_service, connection):
    history = await history_service.load_history()

    assert len(history) == 1
    assert history[0].sender == "agent"
    assert history[0].message == WELCOME_MESSAGE
    async with connection.acquire() as conn:
        rows = await conn.execute_fetchall("SELECT COUNT(*) FROM chat_history")
    assert rows[0][0] == 0


@pytest.mark.asyncio
async def test_history_records_both_senders(history_service):
    await history_service.record_user_message("Suggest a drink")
    await history_service.record_agent_message("Try a Negroni")

    history = await history_service.load_history()

    assert [(m.sender, m.message) for m in history] == [
        ("user", "Suggest a drink"),
        ("agent", "Try a Negroni"),
    ]
    assert [m.role for m in history] == ["user", "assistant"]
