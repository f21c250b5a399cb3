"""
Exception hierarchy for the 10x-cards application.

Provides layered exception structure for domain-specific errors.
API-facing exceptions carry the error code and HTTP status they are rendered
with; background generation failures carry the code persisted on the session.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class TenxCardsException(Exception):
    """Base exception for all 10x-cards application errors."""

    error_code: str = "internal_server_error"
    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def response_fields(self) -> dict[str, Any]:
        """Extra top-level fields added to the error response body."""
        return {}


class ValidationError(TenxCardsException):
    """Raised when input validation fails."""

    error_code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context (current_length, max_length, ...)
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AuthenticationError(TenxCardsException):
    """Raised when the caller cannot be identified."""

    error_code = "unauthorized"
    status_code = 401


class NotFoundError(TenxCardsException):
    """Base for missing or foreign resources."""

    error_code = "not_found"
    status_code = 404


class DeckNotFoundError(NotFoundError):
    """Raised when a deck does not exist or belongs to another user."""

    error_code = "deck_not_found"

    def __init__(self, deck_id: str) -> None:
        super().__init__("Deck not found", {"deck_id": deck_id})


class GenerationSessionNotFoundError(NotFoundError):
    """Raised when a generation session does not exist or belongs to another user."""

    def __init__(self, session_id: str) -> None:
        super().__init__("Generation session not found", {"session_id": session_id})


class GenerationInProgressError(TenxCardsException):
    """Raised when the user already has an in-progress generation session."""

    error_code = "generation_in_progress"
    status_code = 400

    def __init__(self, active_session_id: str) -> None:
        """
        Initialize admission conflict.

        Args:
            active_session_id: ID of the session still running for the user
        """
        self.active_session_id = active_session_id
        super().__init__(
            "A generation is already in progress. Please wait for it to finish.",
        )

    def response_fields(self) -> dict[str, Any]:
        return {"active_session_id": self.active_session_id}


class DeckStateError(TenxCardsException):
    """Base for operations not allowed in the deck's current lifecycle state."""

    status_code = 400

    def __init__(self, message: str, deck_id: str, status: str) -> None:
        super().__init__(message, {"deck_id": deck_id, "status": status})


class DeckNotEditableError(DeckStateError):
    """Raised when mutating a deck that is no longer a draft."""

    error_code = "deck_not_editable"

    def __init__(self, deck_id: str, status: str) -> None:
        super().__init__("Only draft decks can be edited", deck_id, status)


class DeckNotDraftError(DeckStateError):
    """Raised when publishing or rejecting a deck that is no longer a draft."""

    error_code = "deck_not_draft"

    def __init__(self, deck_id: str, status: str) -> None:
        super().__init__("Only draft decks can be published or rejected", deck_id, status)


class DeckNameConflictError(TenxCardsException):
    """Raised when the user already owns a deck with the requested name."""

    error_code = "name_not_unique"
    status_code = 409

    def __init__(self, name: str) -> None:
        super().__init__("A deck with this name already exists", {"name": name})


class InvalidCardCountError(TenxCardsException):
    """Raised when publishing a deck whose card count is outside 1-20."""

    error_code = "invalid_card_count"
    status_code = 400

    def __init__(self, card_count: int, min_count: int = 1, max_count: int = 20) -> None:
        self.card_count = card_count
        super().__init__(
            f"Deck must contain between {min_count} and {max_count} cards to be published",
            {"min_count": min_count, "max_count": max_count},
        )

    def response_fields(self) -> dict[str, Any]:
        return {"card_count": self.card_count}


class PublishValidationError(TenxCardsException):
    """Raised when a deck holds cards that violate the length limits."""

    error_code = "card_validation_failed"
    status_code = 400


class CardLimitReachedError(TenxCardsException):
    """Raised when adding a card to a deck that already holds the maximum."""

    error_code = "card_limit_reached"
    status_code = 400

    def __init__(self, current_count: int, max_count: int) -> None:
        super().__init__(
            f"Deck already contains the maximum of {max_count} cards",
            {"current_count": current_count, "max_count": max_count},
        )


class PositionConflictError(TenxCardsException):
    """Raised when a card position is already taken in the deck."""

    error_code = "position_conflict"
    status_code = 409

    def __init__(self, position: int) -> None:
        super().__init__(
            f"A card already exists at position {position}",
            {"position": position},
        )


class GenerationError(TenxCardsException):
    """
    Base for background generation failures.

    error_code is the classification persisted on the failed session.
    """

    error_code = "unknown_error"


class GenerationTimeoutError(GenerationError):
    """Raised when the card provider does not answer within the time limit."""

    error_code = "timeout_exceeded"


class CardProviderError(GenerationError):
    """Raised when the completion API call fails."""

    error_code = "openrouter_error"


class ResponseParseError(GenerationError):
    """Raised when the completion text holds no usable cards."""

    error_code = "parse_error"


class CardValidationError(GenerationError):
    """Raised when a generated card violates the card length limits."""

    error_code = "validation_error"
