"""
Dependency injection container.

Factory functions for FastAPI dependencies. The card generator
implementation (OpenRouter or mock) is chosen here and nowhere else.

Dependencies: tenx_cards.configs, tenx_cards.application, tenx_cards.boundary, jose
System role: DI container for service injection
"""

import logging
from functools import lru_cache
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.application.generation_runner import GenerationRunner
from tenx_cards.application.services import (
    CardService,
    DeckService,
    GenerationService,
    GenerationSessionService,
)
from tenx_cards.boundary.db import get_async_db, get_async_session_factory
from tenx_cards.configs import Settings, get_settings
from tenx_cards.core.card_generation import (
    CardGenerator,
    MockCardGenerator,
    OpenRouterCardGenerator,
)
from tenx_cards.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class ServiceCache:
    """Container for process-wide service instances."""

    def __init__(self):
        self._card_generator = None
        self._generation_runner = None

    @property
    def card_generator(self) -> CardGenerator:
        """Get cached card generator, mock or OpenRouter per settings."""
        if self._card_generator is None:
            settings = get_settings()
            if settings.generation.use_mock_ai:
                logger.info("Using mock card generator")
                self._card_generator = MockCardGenerator(card_count=settings.generation.max_cards)
            else:
                self._card_generator = OpenRouterCardGenerator(
                    openrouter=settings.openrouter,
                    generation=settings.generation,
                )
        return self._card_generator

    @property
    def generation_runner(self) -> GenerationRunner:
        """Get cached generation runner."""
        if self._generation_runner is None:
            self._generation_runner = GenerationRunner(
                session_factory=get_async_session_factory(),
                card_generator=self.card_generator,
                settings=get_settings(),
            )
        return self._generation_runner

    def clear(self) -> None:
        """Clear all cached instances."""
        self._card_generator = None
        self._generation_runner = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_dependency),
) -> UUID:
    """
    Resolve the calling user from the bearer token.

    The token's ``sub`` claim is the user id. Without a token the configured
    default user is used; when none is configured the request is rejected.

    Raises:
        AuthenticationError: Missing, invalid or unverifiable token
    """
    auth = settings.auth

    if credentials is None:
        if auth.default_user_id is not None:
            return auth.default_user_id
        raise AuthenticationError("Authentication required")

    if not auth.jwt_secret:
        raise AuthenticationError("Token verification is not configured")

    try:
        payload = jwt.decode(
            credentials.credentials,
            auth.jwt_secret,
            algorithms=[auth.jwt_algorithm],
            audience=auth.jwt_audience,
        )
        return UUID(payload["sub"])
    except (JWTError, KeyError, ValueError, TypeError) as e:
        raise AuthenticationError("Invalid token") from e


def get_card_generator() -> CardGenerator:
    """Get the configured card generator."""
    return get_service_cache().card_generator


def get_generation_runner() -> GenerationRunner:
    """Get the background generation runner."""
    return get_service_cache().generation_runner


def get_generation_service(
    db: AsyncSession = Depends(get_async_db),
    card_generator: CardGenerator = Depends(get_card_generator),
    settings: Settings = Depends(get_settings_dependency),
) -> GenerationService:
    """
    Get generation service instance.

    Args:
        db: Async database session (injected via Depends)
        card_generator: Configured card generator
        settings: Application settings

    Returns:
        GenerationService: Generation service instance
    """
    return GenerationService(db=db, card_generator=card_generator, settings=settings)


def get_generation_session_service(
    db: AsyncSession = Depends(get_async_db),
) -> GenerationSessionService:
    """Get generation session service instance."""
    return GenerationSessionService(db=db)


def get_deck_service(db: AsyncSession = Depends(get_async_db)) -> DeckService:
    """
    Get deck service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DeckService: Deck service instance
    """
    return DeckService(db=db)


def get_card_service(db: AsyncSession = Depends(get_async_db)) -> CardService:
    """Get card service instance."""
    return CardService(db=db)
