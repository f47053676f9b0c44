"""
Tests for ChatSession: the send / save / clear flow over a real database.
"""

import json
from unittest.mock import AsyncMock

import pytest

from application.services.chat_history import WELCOME_MESSAGE
from conftest import FakeCompletionClient
from domain.exceptions import CompletionError, RepositoryError
from domain.fallbacks import load_fallback_library

FALLBACK_NAMES = {r.name for r in load_fallback_library().recipes}


def _recipes_payload(*names, glass="coupe"):
    return json.dumps({"recipes": [
        {"name": n, "glass": glass, "ingredients": "50ml Tequila", "instructions": "Shake"}
        for n in names
    ]})


@pytest.mark.asyncio
async def test_start_shows_welcome(make_session):
    session = make_session()
    await session.start()

    assert [m.message for m in session.messages] == [WELCOME_MESSAGE]
    assert session.suggestions == ()


@pytest.mark.asyncio
async def test_send_multiple_recipes(make_session, inventory_service):
    await inventory_service.add_ingredient("Tequila", "Spirit", "700")
    client = FakeCompletionClient(
        _recipes_payload("Tommy's Margarita", "Spicy Margarita", glass="salt-rimmed"),
        "Two bright takes on the Margarita.",
    )
    session = make_session(client)
    await session.start()

    reply = await session.send("Give me 2 margarita cocktails")

    assert [r.name for r in reply.recipes] == ["Tommy's Margarita", "Spicy Margarita"]
    assert all(r.glass == "rocks" for r in reply.recipes)
    assert reply.message.message == "Two bright takes on the Margarita."
    assert len(session.suggestions) == 2
    assert [m.sender for m in session.messages][-2:] == ["user", "agent"]

    generation, narrative = client.calls
    assert "Tequila (Spirit)" in generation["messages"][0]["content"]
    assert "Create 2 different" in generation["messages"][0]["content"]
    assert "Tommy's Margarita" in narrative["messages"][0]["content"]


@pytest.mark.asyncio
async def test_send_single_recipe_is_narrated(make_session):
    single = json.dumps({
        "name": "Gimlet", "glass": "coupe",
        "ingredients": "60ml Gin\n20ml Lime cordial", "instructions": "Shake",
    })
    client = FakeCompletionClient(single, "A sharp, tart gin classic.")
    session = make_session(client)
    await session.start()

    reply = await session.send("Suggest a gin drink")

    assert [r.name for r in reply.recipes] == ["Gimlet"]
    assert reply.message.message == "A sharp, tart gin classic."


@pytest.mark.asyncio
async def test_general_question_skips_generation(make_session):
    client = FakeCompletionClient("Stir spirit-forward drinks.")
    session = make_session(client)
    await session.start()

    reply = await session.send("Should I stir or shake a Manhattan?")

    assert reply.recipes == []
    assert len(client.calls) == 1
    assert '{"recipes": []}' in client.calls[0]["messages"][0]["content"]


@pytest.mark.asyncio
async def test_send_with_api_down_uses_fallbacks(make_session):
    client = FakeCompletionClient(CompletionError("HTTP 500"), CompletionError("HTTP 500"))
    session = make_session(client)
    await session.start()

    reply = await session.send("Give me several options")

    assert len(reply.recipes) == 3
    assert all(r.name in FALLBACK_NAMES for r in reply.recipes)
    assert reply.message.message


@pytest.mark.asyncio
async def test_history_persists_across_sessions(make_session):
    first = make_session()
    await first.start()
    await first.send("What should I buy for my bar?")

    second = make_session()
    await second.start()

    assert [m.sender for m in second.messages] == ["user", "agent"]
    assert second.messages[1].message.startswith("Essential bar basics")


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   "])
async def test_blank_send_is_ignored(make_session, text):
    session = make_session(FakeCompletionClient())
    await session.start()

    assert await session.send(text) is None
    assert len(session.messages) == 1


@pytest.mark.asyncio
async def test_send_while_busy_is_ignored(make_session):
    session = make_session()
    await session.start()
    session._busy = True

    assert await session.send("Suggest a drink") is None
    assert len(session.messages) == 1


@pytest.mark.asyncio
async def test_save_suggestion(make_session, collection_service):
    session = make_session()
    await session.start()
    await session.send("3 recipes please")

    saved = await session.save_suggestion(1)

    assert saved.source == "AI Generated"
    assert saved.name == session.suggestions[1].name
    assert len(session.suggestions) == 3
    assert [r.id for r in await collection_service.list_recipes()] == [saved.id]


@pytest.mark.asyncio
async def test_save_failure_keeps_suggestions(make_session, collection_service):
    session = make_session()
    await session.start()
    await session.send("2 cocktails")
    collection_service.save_suggestion = AsyncMock(side_effect=RepositoryError("disk full"))

    with pytest.raises(RepositoryError):
        await session.save_suggestion(0)

    assert len(session.suggestions) == 2


@pytest.mark.asyncio
async def test_agent_store_failure_leaves_suggestions_unchanged(make_session, history_service):
    session = make_session()
    await session.start()
    history_service.record_agent_message = AsyncMock(side_effect=RepositoryError("disk full"))

    with pytest.raises(RepositoryError):
        await session.send("3 recipes please")

    assert session.suggestions == ()
    assert not session.busy


@pytest.mark.asyncio
async def test_save_bad_index(make_session):
    session = make_session()
    await session.start()

    with pytest.raises(IndexError):
        await session.save_suggestion(0)


@pytest.mark.asyncio
async def test_clear_resets_everything(make_session, history_service):
    session = make_session()
    await session.start()
    await session.send("Give me a few recipes")
    assert session.suggestions

    await session.clear()

    assert session.suggestions == ()
    assert [m.message for m in session.messages] == [WELCOME_MESSAGE]
    assert [m.id for m in await history_service.load_history()] == [0]
