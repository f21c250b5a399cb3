"""
Test suite for card generation: response parsing, validation, generators.

System role: Verification of the completion API adapter and mock generator
"""

from unittest.mock import AsyncMock

import httpx
import openai
import pytest
from langchain_core.messages import AIMessage

from tenx_cards.configs.generation import GenerationSettings, OpenRouterSettings
from tenx_cards.core.card_generation import (
    GeneratedCard,
    MockCardGenerator,
    OpenRouterCardGenerator,
    parse_generated_cards,
    validate_generated_cards,
)
from tenx_cards.core.card_generation.prompt import CARD_GENERATION_PROMPT
from tenx_cards.core.exceptions import (
    CardProviderError,
    CardValidationError,
    GenerationTimeoutError,
    ResponseParseError,
)

VALID_RESPONSE = '{"cards": [{"front": " What is ATP? ", "back": "Energy carrier", "hint": " cells "}]}'


class TestParseGeneratedCards:
    """Test suite for parse_generated_cards()."""

    def test_should_parse_plain_json_and_trim_fields(self) -> None:
        # Act
        result = parse_generated_cards(VALID_RESPONSE)

        # Assert
        assert result.cards == [GeneratedCard(front="What is ATP?", back="Energy carrier", hint="cells")]

    def test_should_extract_fenced_json_block(self) -> None:
        text = f"Here are your cards:\n```json\n{VALID_RESPONSE}\n```\nEnjoy!"

        result = parse_generated_cards(text)

        assert len(result.cards) == 1

    def test_should_skip_cards_missing_front_or_back(self) -> None:
        text = '{"cards": [{"front": "Q1"}, {"back": "A2"}, {"front": "Q3", "back": "A3"}, "junk"]}'

        result = parse_generated_cards(text)

        assert [card.front for card in result.cards] == ["Q3"]
        assert result.cards[0].hint is None

    def test_should_raise_when_no_valid_card_remains(self) -> None:
        with pytest.raises(ResponseParseError, match="No valid cards"):
            parse_generated_cards('{"cards": [{"front": "", "back": "A"}]}')

    def test_should_raise_when_cards_array_missing(self) -> None:
        with pytest.raises(ResponseParseError, match="missing 'cards'"):
            parse_generated_cards('{"flashcards": []}')

    def test_should_raise_when_text_is_not_json(self) -> None:
        with pytest.raises(ResponseParseError, match="Failed to parse"):
            parse_generated_cards("Sorry, I cannot help with that.")


class TestValidateGeneratedCards:
    """Test suite for validate_generated_cards()."""

    def test_should_accept_cards_at_the_limits(self) -> None:
        validate_generated_cards([GeneratedCard(front="f" * 200, back="b" * 500, hint="h" * 200)])

    def test_should_reject_batch_with_one_oversized_front(self) -> None:
        cards = [GeneratedCard(front=f"Q{i}", back=f"A{i}") for i in range(20)]
        cards[7] = GeneratedCard(front="x" * 250, back="A")

        with pytest.raises(CardValidationError) as exc_info:
            validate_generated_cards(cards)

        assert exc_info.value.error_code == "validation_error"
        assert exc_info.value.details["card_index"] == 8
        assert exc_info.value.details["current_length"] == 250

    def test_should_reject_oversized_back_and_hint(self) -> None:
        with pytest.raises(CardValidationError, match="back"):
            validate_generated_cards([GeneratedCard(front="Q", back="b" * 501)])
        with pytest.raises(CardValidationError, match="hint"):
            validate_generated_cards([GeneratedCard(front="Q", back="A", hint="h" * 201)])

    def test_should_reject_blank_sides(self) -> None:
        with pytest.raises(CardValidationError, match="front"):
            validate_generated_cards([GeneratedCard(front="  ", back="A")])


class TestMockCardGenerator:
    """Test suite for MockCardGenerator."""

    async def test_should_produce_twenty_deterministic_cards(self) -> None:
        text = "Photosynthesis is the process by which green plants use sunlight to synthesize foods."

        result = await MockCardGenerator().generate(text)

        assert len(result.cards) == 20
        assert result.model == "mock-model"
        assert result.cards[0].front == f"Question 1 about: {text[:50]}..."
        assert result.cards[0].back.startswith("Answer 1: This is a mock answer")
        assert [i for i, card in enumerate(result.cards, start=1) if card.hint] == [3, 6, 9, 12, 15, 18]
        validate_generated_cards(result.cards)


class TestCardGenerationPrompt:
    """Test suite for the generation prompt."""

    def test_should_embed_source_text_and_json_shape(self) -> None:
        messages = CARD_GENERATION_PROMPT.format_messages(source_text="Mitochondria")

        assert '"cards": [' in messages[0].content
        assert "EXACTLY 20 flashcards" in messages[0].content
        assert "<source-text>\nMitochondria\n</source-text>" in messages[1].content


def _generator(api_key: str | None = "sk-test") -> OpenRouterCardGenerator:
    return OpenRouterCardGenerator(
        openrouter=OpenRouterSettings(api_key=api_key),
        generation=GenerationSettings(timeout_seconds=30),
    )


class TestOpenRouterCardGenerator:
    """Test suite for OpenRouterCardGenerator with the model chain mocked."""

    async def test_should_raise_provider_error_without_api_key(self) -> None:
        with pytest.raises(CardProviderError, match="OPENROUTER_API_KEY"):
            await _generator(api_key=None).generate("text")

    async def test_should_parse_completion_and_attach_metadata(self) -> None:
        # Arrange
        generator = _generator()
        generator._chain = AsyncMock()
        generator._chain.ainvoke = AsyncMock(return_value=AIMessage(
            content=VALID_RESPONSE,
            response_metadata={"model_name": "openai/gpt-4o-mini"},
            usage_metadata={"input_tokens": 10, "output_tokens": 20, "total_tokens": 30},
        ))

        # Act
        result = await generator.generate("ATP text")

        # Assert
        assert len(result.cards) == 1
        assert result.model == "openai/gpt-4o-mini"
        assert result.tokens_used == 30
        generator._chain.ainvoke.assert_awaited_once_with({"source_text": "ATP text"})

    async def test_should_map_request_timeout(self) -> None:
        generator = _generator()
        request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
        generator._chain = AsyncMock()
        generator._chain.ainvoke = AsyncMock(side_effect=openai.APITimeoutError(request=request))

        with pytest.raises(GenerationTimeoutError):
            await generator.generate("text")

    async def test_should_map_api_status_error(self) -> None:
        generator = _generator()
        request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
        response = httpx.Response(429, request=request)
        generator._chain = AsyncMock()
        generator._chain.ainvoke = AsyncMock(
            side_effect=openai.APIStatusError("rate limited", response=response, body=None),
        )

        with pytest.raises(CardProviderError) as exc_info:
            await generator.generate("text")

        assert exc_info.value.error_code == "openrouter_error"
        assert exc_info.value.details["status_code"] == 429

    async def test_should_raise_provider_error_on_empty_content(self) -> None:
        generator = _generator()
        generator._chain = AsyncMock()
        generator._chain.ainvoke = AsyncMock(return_value=AIMessage(content=""))

        with pytest.raises(CardProviderError, match="No content"):
            await generator.generate("text")
