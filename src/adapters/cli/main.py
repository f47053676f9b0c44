"""
adapters.cli.main - CLI adapter for the Recip.ez bar assistant.

The terminal stands in for the app's three screens: inventory, AI chat
and recipe collection. All commands go through the same ServiceFactory,
so behaviour matches whatever other adapter is wired to it.

Commands
--------
  inventory add|list|remove   Manage bar ingredients
  recipes add|list|show|remove  Manage the recipe collection
  chat                        Interactive assistant session
  ask                         One-shot request to the assistant
  status                      Show configuration and store counts

Usage
-----
  python run_cli.py inventory add "Hendrick's Gin" -c spirit -q 700
  python run_cli.py ask "Give me 2 margarita cocktails"
  python run_cli.py chat
"""

from __future__ import annotations

import asyncio
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

# ── Ensure src/ is on the path when run as a script ──
_SRC = Path(__file__).resolve().parent.parent.parent
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from application.services.chat_session import ChatSession
from application.services.inventory import CATEGORIES
from domain.entities import Recipe
from domain.exceptions import DomainError, InputValidationError, NotFoundError
from domain.models import GlassType, RecipeSuggestion
from factory import ServiceFactory
from infrastructure.config import Settings

__version__ = "1.0.0"

T = TypeVar("T")

console = Console()
app = typer.Typer(
    help="Recip.ez home bar assistant",
    add_completion=False,
    no_args_is_help=True,
)
inventory_app = typer.Typer(help="Manage your bar inventory.", no_args_is_help=True)
recipes_app = typer.Typer(help="Manage your recipe collection.", no_args_is_help=True)
app.add_typer(inventory_app, name="inventory")
app.add_typer(recipes_app, name="recipes")

Category = Enum("Category", {c.upper(): c for c in CATEGORIES}, type=str)
Glass = Enum("Glass", {g.name: g.value for g in GlassType}, type=str)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=_LOG_FORMAT,
    )


def _run(action: str, fn: Callable[[ServiceFactory], Awaitable[T]]) -> T:
    """Run *fn* against an initialized factory, closing it afterwards.

    Storage and validation errors become a one-line notice naming *action*
    and exit code 1.
    """
    async def _main() -> T:
        config = Settings.from_env()
        _configure_logging(config.log_level)
        factory = ServiceFactory(config)
        try:
            await factory.initialize()
            return await fn(factory)
        finally:
            await factory.close()

    try:
        return asyncio.run(_main())
    except (InputValidationError, NotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)
    except DomainError as e:
        console.print(f"[bold red]Failed to {action}.[/bold red] [dim]{e}[/dim]")
        raise typer.Exit(code=1)


def _suggestion_panel(index: int, recipe: RecipeSuggestion | Recipe) -> Panel:
    body = (
        f"[bold]Glass:[/bold] {recipe.glass}\n\n"
        f"[bold]Ingredients[/bold]\n{recipe.ingredients}\n\n"
        f"[bold]Instructions[/bold]\n{recipe.instructions}"
    )
    return Panel(body, title=f"#{index} {recipe.name}", border_style="magenta")


def _print_reply(text: str) -> None:
    console.print(Panel(text, title="Recip.ez AI", border_style="green"))


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"recipez v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands: Inventory
# ---------------------------------------------------------------------------

@inventory_app.command("add")
def inventory_add(
    name: str = typer.Argument(..., help="Ingredient name, e.g. \"Hendrick's Gin\"."),
    category: Category = typer.Option(
        Category.SPIRIT, "--category", "-c", case_sensitive=False,
        help="Ingredient category.",
    ),
    quantity: str = typer.Option("", "--quantity", "-q", help="Quantity in ml."),
) -> None:
    """Add an ingredient to the inventory."""
    async def _add(factory: ServiceFactory):
        return await factory.create_inventory_service().add_ingredient(
            name, category.value, quantity,
        )

    ingredient = _run("add ingredient", _add)
    console.print(
        f"[green]Added[/green] [bold]{ingredient.name}[/bold] "
        f"({ingredient.category}, {ingredient.quantity:g} ml) id={ingredient.id}"
    )


@inventory_app.command("list")
def inventory_list() -> None:
    """Show the bar inventory."""
    async def _list(factory: ServiceFactory):
        return await factory.create_inventory_service().list_ingredients()

    items = _run("load inventory", _list)
    if not items:
        console.print("[dim]Your bar is empty. Add something with 'inventory add'.[/dim]")
        return

    t = Table(title=f"Bar Inventory ({len(items)})", box=box.SIMPLE)
    t.add_column("ID", justify="right")
    t.add_column("Name", style="bold")
    t.add_column("Category")
    t.add_column("Quantity (ml)", justify="right")
    t.add_column("Added", style="dim")
    for item in items:
        t.add_row(str(item.id), item.name, item.category, f"{item.quantity:g}", item.date_added[:10])
    console.print(t)


@inventory_app.command("remove")
def inventory_remove(
    ingredient_id: int = typer.Argument(..., help="Ingredient id (see 'inventory list')."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Remove an ingredient from the inventory."""
    if not yes and not Confirm.ask(f"Remove ingredient #{ingredient_id} from inventory?"):
        return

    async def _remove(factory: ServiceFactory):
        await factory.create_inventory_service().remove_ingredient(ingredient_id)

    _run("delete ingredient", _remove)
    console.print("[green]Ingredient removed.[/green]")


# ---------------------------------------------------------------------------
# Commands: Recipe collection
# ---------------------------------------------------------------------------

@recipes_app.command("add")
def recipes_add(
    name: str = typer.Option(..., "--name", "-n", prompt="Recipe name"),
    ingredients: str = typer.Option(..., "--ingredients", "-i", prompt="Ingredients"),
    instructions: str = typer.Option(..., "--instructions", "-s", prompt="Instructions"),
    glass: Glass = typer.Option(Glass.ROCKS, "--glass", "-g", case_sensitive=False),
) -> None:
    """Add a recipe to the collection by hand."""
    async def _add(factory: ServiceFactory):
        return await factory.create_recipe_collection().add_manual_recipe(
            name, ingredients, instructions, glass.value,
        )

    recipe = _run("add recipe", _add)
    console.print(f"[green]Recipe[/green] [bold]{recipe.name}[/bold] added to collection (id={recipe.id}).")


@recipes_app.command("list")
def recipes_list() -> None:
    """Show saved recipes with collection statistics."""
    async def _list(factory: ServiceFactory):
        collection = factory.create_recipe_collection()
        return await collection.list_recipes(), await collection.get_stats()

    recipes, stats = _run("load recipes", _list)
    console.print(
        f"[bold]{stats.total}[/bold] recipes · "
        f"[bold]{stats.ai_generated}[/bold] AI generated · "
        f"[bold]{stats.manual}[/bold] manual"
    )
    if not recipes:
        console.print("[dim]No saved recipes yet.[/dim]")
        return

    t = Table(box=box.SIMPLE)
    t.add_column("ID", justify="right")
    t.add_column("Name", style="bold")
    t.add_column("Glass")
    t.add_column("Source")
    t.add_column("Added", style="dim")
    for r in recipes:
        t.add_row(str(r.id), r.name, r.glass, r.source, r.date_added)
    console.print(t)


@recipes_app.command("show")
def recipes_show(recipe_id: int = typer.Argument(..., help="Recipe id.")) -> None:
    """Show one saved recipe in full."""
    async def _show(factory: ServiceFactory):
        return await factory.create_recipe_collection().get_recipe(recipe_id)

    recipe = _run("load recipe", _show)
    console.print(_suggestion_panel(recipe.id, recipe))
    console.print(f"[dim]{recipe.source} · {recipe.date_added}[/dim]")


@recipes_app.command("remove")
def recipes_remove(
    recipe_id: int = typer.Argument(..., help="Recipe id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Remove a recipe from the collection."""
    if not yes and not Confirm.ask(f"Remove recipe #{recipe_id} from collection?"):
        return

    async def _remove(factory: ServiceFactory):
        await factory.create_recipe_collection().remove_recipe(recipe_id)

    _run("delete recipe", _remove)
    console.print("[green]Recipe removed.[/green]")


# ---------------------------------------------------------------------------
# Commands: Assistant
# ---------------------------------------------------------------------------

def _print_new_suggestions(session: ChatSession, count: int) -> None:
    start = len(session.suggestions) - count
    for offset, recipe in enumerate(session.suggestions[start:], start=start + 1):
        console.print(_suggestion_panel(offset, recipe))


async def _save_all(session: ChatSession, start: int) -> None:
    for index in range(start, len(session.suggestions)):
        recipe = await session.save_suggestion(index)
        console.print(f"[green]\"{recipe.name}\" saved to your collection.[/green]")


@app.command()
def ask(
    query: str = typer.Argument(..., help="What you'd like to drink."),
    save: bool = typer.Option(False, "--save", "-s", help="Save every suggested recipe."),
) -> None:
    """Ask the assistant once and print its answer and recipes."""
    async def _ask(factory: ServiceFactory) -> None:
        session = factory.create_chat_session()
        await session.start()
        with console.status("[bold cyan]Mixing…", spinner="dots"):
            reply = await session.send(query)
        if reply is None:
            console.print("[dim]Nothing to ask.[/dim]")
            return
        _print_reply(reply.message.message)
        _print_new_suggestions(session, len(reply.recipes))
        if not save:
            return
        try:
            await _save_all(session, len(session.suggestions) - len(reply.recipes))
        except DomainError as e:
            console.print(f"[bold red]Failed to save recipe.[/bold red] [dim]{e}[/dim]")
            raise typer.Exit(code=1)

    _run("generate response", _ask)


@app.command()
def chat() -> None:
    """Start an interactive chat with the assistant."""
    async def _chat(factory: ServiceFactory) -> None:
        session = factory.create_chat_session()
        await session.start()

        mode = "AI" if factory.config.is_api_configured else "offline fallback"
        console.print(Panel(
            "[bold]AI Recipe Assistant[/bold] "
            f"([dim]{mode}[/dim])\n"
            "Commands: [bold]/save N[/bold] save suggestion N, "
            "[bold]/list[/bold] show suggestions, [bold]/clear[/bold] clear history, "
            "[bold]exit[/bold] to stop.",
            border_style="cyan",
        ))
        for msg in session.messages:
            if msg.sender == "user":
                console.print(f"[bold cyan]You:[/bold cyan] {msg.message}")
            else:
                _print_reply(msg.message)

        while True:
            try:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]")
            except (KeyboardInterrupt, EOFError):
                console.print("\n[dim]Goodbye![/dim]")
                break

            command = user_input.strip()
            if command.lower() in ("exit", "quit", "q", "bye"):
                console.print("[dim]Goodbye![/dim]")
                break
            if not command:
                continue

            if command.startswith("/"):
                await _handle_chat_command(session, command)
                continue

            try:
                with console.status("[bold cyan]Mixing…", spinner="dots"):
                    reply = await session.send(command)
            except DomainError as e:
                console.print(f"[bold red]Failed to generate response.[/bold red] [dim]{e}[/dim]")
                continue
            if reply is None:
                continue
            console.print()
            _print_reply(reply.message.message)
            _print_new_suggestions(session, len(reply.recipes))

    _run("start chat", _chat)


async def _handle_chat_command(session: ChatSession, command: str) -> None:
    name, _, arg = command.partition(" ")
    name = name.lower()

    if name == "/list":
        if not session.suggestions:
            console.print("[dim]No suggestions yet.[/dim]")
        for i, recipe in enumerate(session.suggestions, start=1):
            console.print(_suggestion_panel(i, recipe))

    elif name == "/save":
        if not arg.strip().isdigit():
            console.print("[yellow]Usage: /save N[/yellow]")
            return
        try:
            recipe = await session.save_suggestion(int(arg) - 1)
        except IndexError as e:
            console.print(f"[yellow]{e}[/yellow]")
        except DomainError as e:
            console.print(f"[bold red]Failed to save recipe.[/bold red] [dim]{e}[/dim]")
        else:
            console.print(f"[green]\"{recipe.name}\" saved to your collection.[/green]")

    elif name == "/clear":
        if not Confirm.ask("Delete all chat messages?"):
            return
        try:
            await session.clear()
        except DomainError as e:
            console.print(f"[bold red]Failed to clear history.[/bold red] [dim]{e}[/dim]")
        else:
            console.print("[green]Chat history cleared.[/green]")

    else:
        console.print(f"[yellow]Unknown command {name}[/yellow]")


@app.command()
def status() -> None:
    """Show configuration and how much is stored."""
    async def _status(factory: ServiceFactory):
        inventory = await factory.create_inventory_service().list_ingredients()
        stats = await factory.create_recipe_collection().get_stats()
        history = await factory.create_chat_history_service().load_history()
        return factory.config, len(inventory), stats, history

    config, n_ingredients, stats, history = _run("load status", _status)
    stored_messages = sum(1 for m in history if m.id)

    t = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row("Completion API", "[green]configured[/green]" if config.is_api_configured
              else "[yellow]not configured (fallback only)[/yellow]")
    t.add_row("Model", config.openai_model)
    t.add_row("Database", config.db_path)
    t.add_row("Ingredients", str(n_ingredients))
    t.add_row("Recipes", str(stats.total))
    t.add_row("Chat messages", str(stored_messages))
    console.print(Panel(t, title="Recip.ez", border_style="blue"))


# ---------------------------------------------------------------------------
# Global version option
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Recip.ez home bar assistant"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
