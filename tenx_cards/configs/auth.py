"""
Authentication settings.

Bearer token verification for tokens issued by the hosted auth provider.

Dependencies: pydantic, pydantic_settings
System role: Auth configuration
"""

from uuid import UUID

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from tenx_cards.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT verification configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str | None = Field(default=None, description="JWT signing secret")
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    jwt_audience: str = Field(default="authenticated", description="Expected aud claim")
    default_user_id: UUID | None = Field(
        default=None,
        description="User assumed for requests without a token (development only)",
    )
