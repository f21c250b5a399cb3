"""
Card generator interface and the OpenRouter implementation.

The generation service depends only on the CardGenerator protocol; which
implementation it receives is decided in the dependency container.

Dependencies: langchain_openai, langchain_core, openai
System role: Completion API adapter for flashcard generation
"""

import json
import logging
import re
from typing import Any, Protocol

import openai
from langchain_openai import ChatOpenAI

from tenx_cards.configs.generation import GenerationSettings, OpenRouterSettings
from tenx_cards.core.card_generation.prompt import CARD_GENERATION_PROMPT
from tenx_cards.core.card_generation.schema import GeneratedCard, GenerationResult
from tenx_cards.core.exceptions import (
    CardProviderError,
    GenerationTimeoutError,
    ResponseParseError,
)

logger = logging.getLogger(__name__)

_CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)


class CardGenerator(Protocol):
    """Anything that turns sanitized source text into card candidates."""

    async def generate(self, source_text: str) -> GenerationResult: ...


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_generated_cards(response_text: str) -> GenerationResult:
    """
    Parse completion text into card candidates.

    The JSON object may be wrapped in a fenced ```json block. Entries
    without a front or back are skipped; remaining fields are trimmed.

    Args:
        response_text: Raw completion text

    Returns:
        GenerationResult with at least one card

    Raises:
        ResponseParseError: Text is not JSON, lacks a cards array, or holds no valid card
    """
    json_text = response_text.strip()
    match = _CODE_BLOCK_RE.search(json_text)
    if match:
        json_text = match.group(1)

    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Failed to parse AI response as JSON: {e}") from e

    if not isinstance(parsed, dict) or not isinstance(parsed.get("cards"), list):
        raise ResponseParseError("Response missing 'cards' array")

    cards: list[GeneratedCard] = []
    for raw in parsed["cards"]:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object card entry", extra={"entry": repr(raw)[:200]})
            continue
        front = _clean(raw.get("front"))
        back = _clean(raw.get("back"))
        if not front or not back:
            logger.warning("Skipping card missing front or back", extra={"entry": repr(raw)[:200]})
            continue
        cards.append(GeneratedCard(front=front, back=back, hint=_clean(raw.get("hint"))))

    if not cards:
        raise ResponseParseError("No valid cards found in AI response")

    return GenerationResult(cards=cards)


class OpenRouterCardGenerator:
    """
    Card generator backed by an OpenRouter chat model.

    Uses ChatOpenAI against the OpenAI-compatible OpenRouter endpoint and
    parses the JSON object the system prompt asks for.
    """

    def __init__(
        self,
        openrouter: OpenRouterSettings,
        generation: GenerationSettings,
    ) -> None:
        """
        Initialize the generator.

        Args:
            openrouter: Endpoint, model and attribution headers
            generation: Provides the request timeout
        """
        self._model_name = openrouter.model
        self._api_key = openrouter.api_key
        self._chain = None
        if self._api_key:
            llm = ChatOpenAI(
                model=openrouter.model,
                api_key=self._api_key,
                base_url=openrouter.base_url,
                temperature=openrouter.temperature,
                max_tokens=openrouter.max_tokens,
                timeout=generation.timeout_seconds,
                max_retries=0,
                default_headers={
                    "HTTP-Referer": openrouter.site_url,
                    "X-Title": openrouter.app_title,
                },
            )
            self._chain = CARD_GENERATION_PROMPT | llm

    async def generate(self, source_text: str) -> GenerationResult:
        """
        Generate card candidates for the source text.

        Raises:
            CardProviderError: API key missing, API error or empty completion
            GenerationTimeoutError: Request exceeded the configured timeout
            ResponseParseError: Completion could not be parsed into cards
        """
        if self._chain is None:
            raise CardProviderError("OPENROUTER_API_KEY not configured")

        logger.info(f"{__name__}:generate - START model={self._model_name}, text_len={len(source_text)}")

        try:
            response = await self._chain.ainvoke({"source_text": source_text})
        except openai.APITimeoutError as e:
            raise GenerationTimeoutError("OpenRouter API call timed out") from e
        except openai.APIStatusError as e:
            raise CardProviderError(
                f"OpenRouter API error ({e.status_code}): {e.message}",
                {"status_code": e.status_code},
            ) from e
        except openai.APIError as e:
            raise CardProviderError(f"OpenRouter API error: {e.message}") from e

        content = response.content if isinstance(response.content, str) else ""
        if not content:
            raise CardProviderError("No content in OpenRouter response")

        result = parse_generated_cards(content)
        result.model = response.response_metadata.get("model_name", self._model_name)
        if response.usage_metadata:
            result.tokens_used = response.usage_metadata.get("total_tokens")

        logger.info(
            f"{__name__}:generate - END cards={len(result.cards)}",
            extra={"model": result.model, "tokens_used": result.tokens_used},
        )
        return result
