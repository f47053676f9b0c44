"""
domain.entities - Persistence-aware types (have IDs, timestamps).

Decoupled from any persistence strategy; no SQL concerns, no DB imports.
Timestamps are set by the repository implementations or the services,
not by the entities themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Ingredient:
    """A bottle, mixer or garnish in the home bar."""
    id: Optional[int] = None
    name: str = ""
    category: str = ""
    quantity: float = 0.0  # ml
    date_added: str = ""


@dataclass
class Recipe:
    """A cocktail recipe saved to the collection."""
    id: Optional[int] = None
    name: str = ""
    ingredients: str = ""
    instructions: str = ""
    glass: str = "rocks"
    source: str = ""  # "AI Generated" or "Manual Entry"
    date_added: str = ""


@dataclass
class ChatMessage:
    """A single turn in the assistant conversation."""
    id: Optional[int] = None
    sender: str = ""  # "user" or "agent"
    message: str = ""
    timestamp: str = ""

    @property
    def role(self) -> str:
        """Role name expected by the completion API."""
        return "user" if self.sender == "user" else "assistant"
