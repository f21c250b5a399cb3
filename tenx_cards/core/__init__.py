"""
Core business logic module.

Contains the exception hierarchy, text helpers and flashcard generation.
"""

from tenx_cards.core.exceptions import (
    TenxCardsException,
    ValidationError,
    GenerationError,
)

__all__ = [
    "TenxCardsException",
    "ValidationError",
    "GenerationError",
]
