"""
Deterministic card generator for development and tests.

Dependencies: tenx_cards.core.card_generation.schema
System role: Offline stand-in for the completion API
"""

from tenx_cards.core.card_generation.schema import GeneratedCard, GenerationResult

MOCK_MODEL_NAME = "mock-model"


class MockCardGenerator:
    """
    Produces a fixed batch of cards derived from the first 50 characters of
    the source text. Every third card carries a hint.
    """

    def __init__(self, card_count: int = 20) -> None:
        self._card_count = card_count

    async def generate(self, source_text: str) -> GenerationResult:
        preview = source_text[:50]
        cards = [
            GeneratedCard(
                front=f"Question {i} about: {preview}...",
                back=(
                    f"Answer {i}: This is a mock answer generated from the source text. "
                    "In production, this would be an AI-generated answer based on the actual content."
                ),
                hint=f"Hint {i}: Think about the key concepts" if i % 3 == 0 else None,
            )
            for i in range(1, self._card_count + 1)
        ]
        return GenerationResult(cards=cards, model=MOCK_MODEL_NAME, tokens_used=0)
