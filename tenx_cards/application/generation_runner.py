"""
Background generation runner.

Executes GenerationService.process_generation outside the request cycle.
Each run opens its own database session; a semaphore bounds how many
generations talk to the card provider at once.

Dependencies: sqlalchemy, tenx_cards.application.services
System role: Background task execution for generation sessions
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenx_cards.application.services.generation_service import GenerationService
from tenx_cards.boundary.db.models.generation_session_model import GenerationStatus
from tenx_cards.configs import Settings
from tenx_cards.core.card_generation import CardGenerator
from tenx_cards.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class GenerationRunner:
    """
    Runs generations submitted from the API.

    Scheduled with FastAPI BackgroundTasks: the HTTP response is sent first,
    then run() executes in the same process. There is no recovery for runs
    lost to a process crash; their sessions stay IN_PROGRESS.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        card_generator: CardGenerator,
        settings: Settings,
    ) -> None:
        """
        Initialize runner.

        Args:
            session_factory: Factory for per-run database sessions
            card_generator: Implementation producing card candidates
            settings: Application settings (max_concurrent, timeouts)
        """
        self._session_factory = session_factory
        self._card_generator = card_generator
        self._settings = settings
        self._semaphore = asyncio.Semaphore(settings.generation.max_concurrent)

    async def run(self, session_id: UUID, sanitized_text: str) -> GenerationStatus | None:
        """
        Process one generation session to a terminal state.

        Args:
            session_id: Generation session UUID
            sanitized_text: Sanitized source text

        Returns:
            Final status written, or None if nothing could be written
        """
        logger.info("Starting background generation", extra={"session_id": str(session_id)})

        async with self._semaphore:
            try:
                async with self._session_factory() as db:
                    service = GenerationService(db, self._card_generator, self._settings)
                    return await service.process_generation(session_id, sanitized_text)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    "Background generation crashed",
                    e,
                    session_id=session_id,
                )
                return None
