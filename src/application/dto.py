"""
application.dto - Data Transfer Objects for service output.

These are the structured results that services return to callers
(the CLI adapter and tests).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from domain.entities import ChatMessage
from domain.models import RecipeSuggestion


@dataclass(frozen=True)
class ChatReply:
    """Result of one send action in the chat session."""
    message: ChatMessage
    recipes: list[RecipeSuggestion] = field(default_factory=list)


@dataclass(frozen=True)
class CollectionStats:
    """Recipe counts shown above the collection."""
    total: int = 0
    ai_generated: int = 0
    manual: int = 0
