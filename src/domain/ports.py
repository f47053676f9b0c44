"""
domain.ports - Abstract interfaces (Protocols) for all system boundaries.

These define WHAT the system needs without specifying HOW. Infrastructure
modules provide concrete implementations. Application services depend only
on these protocols, never on concrete classes.

Using typing.Protocol (structural typing) instead of ABC; any class that
implements the methods satisfies the port without explicit inheritance.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from domain.entities import Ingredient, Recipe, ChatMessage


# ---------------------------------------------------------------------------
# AI Component Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class CompletionClientPort(Protocol):
    """Send one chat-completion request and return the first choice's content."""

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str: ...


# ---------------------------------------------------------------------------
# Repository Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class IngredientRepository(Protocol):
    """CRUD operations for Ingredient entities."""

    async def save(self, ingredient: Ingredient) -> int: ...
    async def get_all(self) -> list[Ingredient]: ...
    async def delete(self, ingredient_id: int) -> None: ...


@runtime_checkable
class RecipeRepository(Protocol):
    """CRUD operations for Recipe entities."""

    async def save(self, recipe: Recipe) -> int: ...
    async def get_all(self) -> list[Recipe]: ...
    async def get_by_id(self, recipe_id: int) -> Optional[Recipe]: ...
    async def delete(self, recipe_id: int) -> None: ...


@runtime_checkable
class ChatMessageRepository(Protocol):
    """Append-only chat log with bulk clear."""

    async def save(self, message: ChatMessage) -> int: ...
    async def get_all(self) -> list[ChatMessage]: ...
    async def clear(self) -> None: ...
