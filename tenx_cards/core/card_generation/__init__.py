"""
Flashcard generation: generator interface, implementations and schemas.

Exports:
  - CardGenerator: Protocol consumed by the generation service
  - OpenRouterCardGenerator: Completion API implementation
  - MockCardGenerator: Deterministic offline implementation
  - parse_generated_cards: Completion text -> GenerationResult
  - GeneratedCard, GenerationResult, validate_generated_cards: Data contracts
"""

from tenx_cards.core.card_generation.card_generator import (
    CardGenerator,
    OpenRouterCardGenerator,
    parse_generated_cards,
)
from tenx_cards.core.card_generation.mock_generator import MockCardGenerator
from tenx_cards.core.card_generation.schema import (
    GeneratedCard,
    GenerationResult,
    validate_generated_cards,
)

__all__ = [
    "CardGenerator",
    "GeneratedCard",
    "GenerationResult",
    "MockCardGenerator",
    "OpenRouterCardGenerator",
    "parse_generated_cards",
    "validate_generated_cards",
]
