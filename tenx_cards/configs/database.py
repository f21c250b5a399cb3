"""
Database configuration settings.

PostgreSQL connection for the asyncpg driver. Either a full DSN
(POSTGRES_URL, as handed out by hosted Postgres providers) or the individual
host/port/user parts.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from tenx_cards.configs.base import BaseSettings

ASYNC_DRIVER_SCHEME = "postgresql+asyncpg://"


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Full DSN; overrides the parts below")
    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="tenx_cards", description="PostgreSQL database name")
    sslmode: str = Field(default="prefer", description="'require' enforces TLS")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def async_database_url(self) -> str:
        """
        SQLAlchemy URL for the asyncpg driver.

        A configured DSN is rewritten to the asyncpg scheme; asyncpg takes
        ``ssl=require`` rather than libpq's ``sslmode``.
        """
        if self.url:
            _, _, rest = self.url.partition("://")
            return ASYNC_DRIVER_SCHEME + rest.replace("sslmode=", "ssl=")

        ssl_param = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"{ASYNC_DRIVER_SCHEME}{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{ssl_param}"
        )
