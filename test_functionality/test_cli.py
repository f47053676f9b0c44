"""
End-to-end tests for the typer CLI, offline (no API key) against a temp database.
"""

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from adapters.cli.main import __version__, app
from domain.exceptions import RepositoryError

runner = CliRunner()


@pytest.fixture(autouse=True)
def offline_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DB_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_inventory_add_list_remove():
    result = runner.invoke(app, ["inventory", "add", "Campari", "-c", "liqueur", "-q", "500"])
    assert result.exit_code == 0, result.output
    assert "Campari" in result.output

    result = runner.invoke(app, ["inventory", "list"])
    assert result.exit_code == 0
    assert "Campari" in result.output
    assert "Liqueur" in result.output

    result = runner.invoke(app, ["inventory", "remove", "1", "--yes"])
    assert result.exit_code == 0
    assert "empty" in runner.invoke(app, ["inventory", "list"]).output


def test_inventory_add_blank_name_fails():
    result = runner.invoke(app, ["inventory", "add", "  "])
    assert result.exit_code == 1
    assert "Please enter an ingredient name" in result.output


def test_recipes_add_and_show():
    result = runner.invoke(app, [
        "recipes", "add",
        "--name", "House Negroni",
        "--ingredients", "30ml Gin, 30ml Campari, 30ml Vermouth",
        "--instructions", "Stir over ice",
        "--glass", "rocks",
    ])
    assert result.exit_code == 0, result.output

    listing = runner.invoke(app, ["recipes", "list"])
    assert "House Negroni" in listing.output
    assert "Manual Entry" in listing.output

    shown = runner.invoke(app, ["recipes", "show", "1"])
    assert "Stir over ice" in shown.output


def test_recipes_show_missing():
    result = runner.invoke(app, ["recipes", "show", "99"])
    assert result.exit_code == 1
    assert "No recipe with id 99" in result.output


def test_ask_offline_and_save():
    result = runner.invoke(app, ["ask", "3 recipes please", "--save"])
    assert result.exit_code == 0, result.output
    assert "#3" in result.output
    assert result.output.count("saved to your collection") == 3

    listing = runner.invoke(app, ["recipes", "list"])
    assert "AI Generated" in listing.output


def test_chat_session_commands():
    user_input = "\n".join(["2 cocktails", "/list", "/save 1", "/save 9", "exit"]) + "\n"
    result = runner.invoke(app, ["chat"], input=user_input)

    assert result.exit_code == 0, result.output
    assert "offline fallback" in result.output
    assert "#2" in result.output
    assert "saved to your collection" in result.output
    assert "No suggestion #9" in result.output


def test_status():
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "not configured" in result.output
    assert "gpt-4o-mini" in result.output


def test_ask_save_failure_names_the_save():
    with patch(
        "application.services.recipe_collection.RecipeCollectionService.save_suggestion",
        AsyncMock(side_effect=RepositoryError("disk full")),
    ):
        result = runner.invoke(app, ["ask", "2 cocktails", "--save"])

    assert result.exit_code == 1
    assert "Failed to save recipe" in result.output
    assert "Failed to generate response" not in result.output
