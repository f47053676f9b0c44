"""
domain.exceptions - Custom exception hierarchy for the bar assistant.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed.
"""


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class CompletionError(DomainError):
    """Raised when the chat-completion endpoint is unreachable or returns an error."""


class RecipeFormatError(DomainError):
    """Raised when a completion response cannot be turned into valid recipes."""


class RepositoryError(DomainError):
    """Raised when a database operation fails."""


class InputValidationError(DomainError):
    """Raised when a required form field is missing or empty."""


class NotFoundError(DomainError):
    """Raised when a record with the requested id does not exist."""
