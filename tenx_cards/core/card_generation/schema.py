"""
Card generation schemas.

Defines the provider-neutral result of one generation call and the
all-or-nothing length validation applied before cards are persisted.

Dependencies: pydantic
System role: Card generation data contracts
"""

from pydantic import BaseModel, Field

from tenx_cards.boundary.db.models.card_model import (
    MAX_BACK_LENGTH,
    MAX_FRONT_LENGTH,
    MAX_HINT_LENGTH,
)
from tenx_cards.core.exceptions import CardValidationError


class GeneratedCard(BaseModel):
    """
    One card candidate produced by a card generator.

    Lengths are deliberately unconstrained here so that oversized candidates
    reach validate_generated_cards and fail the batch with a clear message.
    """

    front: str = Field(description="Question or prompt")
    back: str = Field(description="Complete answer")
    hint: str | None = Field(default=None, description="Optional clue")


class GenerationResult(BaseModel):
    """Cards returned by a single generation call plus provider metadata."""

    cards: list[GeneratedCard] = Field(default_factory=list)
    model: str | None = Field(default=None, description="Model that produced the cards")
    tokens_used: int | None = Field(default=None, description="Total tokens billed")


def validate_generated_cards(cards: list[GeneratedCard]) -> None:
    """
    Validate a batch of generated cards against the card limits.

    A single offending card rejects the whole batch.

    Args:
        cards: Candidates in final order

    Raises:
        CardValidationError: First violation found, with 1-based card index
    """
    limits = (
        ("front", MAX_FRONT_LENGTH),
        ("back", MAX_BACK_LENGTH),
        ("hint", MAX_HINT_LENGTH),
    )
    for index, card in enumerate(cards, start=1):
        if not card.front.strip():
            raise CardValidationError(
                f"Card {index}: front must not be empty",
                {"card_index": index, "field": "front"},
            )
        if not card.back.strip():
            raise CardValidationError(
                f"Card {index}: back must not be empty",
                {"card_index": index, "field": "back"},
            )
        for field, max_length in limits:
            value = getattr(card, field)
            if value is not None and len(value) > max_length:
                raise CardValidationError(
                    f"Card {index}: {field} exceeds {max_length} characters ({len(value)})",
                    {
                        "card_index": index,
                        "field": field,
                        "current_length": len(value),
                        "max_length": max_length,
                    },
                )
