"""
Flashcard generation settings.

OpenRouter completion parameters and background generation limits.

Dependencies: pydantic, pydantic_settings
System role: AI generation configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from tenx_cards.configs.base import BaseSettings


class OpenRouterSettings(BaseSettings):
    """OpenRouter (OpenAI-compatible) completion API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENROUTER_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="OpenRouter API key")
    base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenRouter API base URL",
    )
    model: str = Field(default="openai/gpt-4o-mini", description="Completion model")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    max_tokens: int = Field(default=4000, description="Completion token limit")
    site_url: str = Field(
        default="http://localhost:8000",
        description="Sent as HTTP-Referer for OpenRouter attribution",
    )
    app_title: str = Field(default="10x-cards", description="Sent as X-Title")


class GenerationSettings(BaseSettings):
    """Background generation behaviour."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GENERATION_",
        case_sensitive=False,
        extra="ignore",
    )

    use_mock_ai: bool = Field(
        default=False,
        description="Generate deterministic cards instead of calling OpenRouter",
    )
    timeout_seconds: float = Field(
        default=300.0,
        description="Hard timeout for one completion call",
    )
    max_cards: int = Field(default=20, description="Per-deck card cap")
    max_concurrent: int = Field(
        default=4,
        description="Generations allowed to run at once in this process",
    )
