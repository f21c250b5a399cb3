"""
Generation service orchestrator.

Admits at most one in-progress generation per user, creates the draft deck
and the tracking session, and runs the background part of a generation:
call the card generator, validate, persist cards, record the outcome.

Dependencies: tenx_cards.boundary.db.CRUD, tenx_cards.core.card_generation
System role: Generation lifecycle orchestration
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.boundary.db.CRUD.card_crud import card_crud
from tenx_cards.boundary.db.CRUD.deck_crud import deck_crud
from tenx_cards.boundary.db.CRUD.generation_session_crud import generation_session_crud
from tenx_cards.boundary.db.models.deck_model import DeckStatus
from tenx_cards.boundary.db.models.generation_session_model import GenerationStatus
from tenx_cards.configs import Settings
from tenx_cards.core.card_generation import CardGenerator, validate_generated_cards
from tenx_cards.core.exceptions import (
    CardValidationError,
    DeckNameConflictError,
    GenerationError,
    GenerationInProgressError,
    GenerationTimeoutError,
    ValidationError,
)
from tenx_cards.core.text import generate_deck_name, sanitize_source_text, slugify
from tenx_cards.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

MAX_SOURCE_TEXT_LENGTH = 10000
MAX_DECK_NAME_LENGTH = 100


def _check_length(field: str, value: str, max_length: int) -> None:
    length = len(value)
    if length < 1 or length > max_length:
        raise ValidationError(
            f"{field} must be between 1 and {max_length} characters",
            field=field,
            details={"current_length": length, "max_length": max_length},
        )


class GenerationService:
    """
    Generation service orchestrator.

    The request path (submit_generation) only writes the deck and session
    rows; process_generation is executed later by GenerationRunner on its
    own database session.
    """

    def __init__(
        self,
        db: AsyncSession,
        card_generator: CardGenerator,
        settings: Settings,
    ) -> None:
        """
        Initialize generation service.

        Args:
            db: AsyncSession for database operations
            card_generator: Implementation producing card candidates
            settings: Application settings (generation and model parameters)
        """
        self.db = db
        self.card_generator = card_generator
        self.settings = settings

    async def check_active_generation(self, user_id: UUID) -> UUID | None:
        """
        Return the id of the user's in-progress session, if any.

        Args:
            user_id: Requesting user's UUID

        Returns:
            UUID of the active session or None
        """
        active = await generation_session_crud.get_active_for_user(self.db, user_id)
        return active.id if active else None

    async def _resolve_deck_name(self, user_id: UUID, deck_name: str | None) -> str:
        if deck_name is not None:
            if await deck_crud.name_exists(self.db, user_id, deck_name):
                raise DeckNameConflictError(deck_name)
            return deck_name

        base_name = generate_deck_name()
        name = base_name
        suffix = 2
        while await deck_crud.name_exists(self.db, user_id, name):
            name = f"{base_name} ({suffix})"
            suffix += 1
        return name

    async def submit_generation(
        self,
        user_id: UUID,
        source_text: str,
        deck_name: str | None = None,
    ) -> dict:
        """
        Admit a generation request and persist its deck and session.

        Args:
            user_id: Requesting user's UUID
            source_text: Raw source text (trimmed length 1-10000)
            deck_name: Optional deck name (trimmed length 1-100)

        Returns:
            dict: generation_session_id, deck_id, deck_name, status, started_at
                and the sanitized_text the background task must use

        Raises:
            ValidationError: Input lengths out of range or nothing left after sanitizing
            GenerationInProgressError: User already has an in-progress session
            DeckNameConflictError: Explicit deck name already used by the user
        """
        _check_length("source_text", source_text.strip(), MAX_SOURCE_TEXT_LENGTH)
        if deck_name is not None:
            deck_name = deck_name.strip()
            _check_length("deck_name", deck_name, MAX_DECK_NAME_LENGTH)

        # Check-then-insert; two concurrent submissions can both pass.
        active_session_id = await self.check_active_generation(user_id)
        if active_session_id is not None:
            logger.info(
                "Generation rejected: session already in progress",
                extra={"user_id": str(user_id), "active_session_id": str(active_session_id)},
            )
            raise GenerationInProgressError(str(active_session_id))

        sanitized_text = sanitize_source_text(source_text)
        if not sanitized_text:
            raise ValidationError(
                "source_text contains no text after removing markup",
                field="source_text",
                details={"current_length": 0, "max_length": MAX_SOURCE_TEXT_LENGTH},
            )

        name = await self._resolve_deck_name(user_id, deck_name)
        deck = await deck_crud.create(
            self.db,
            user_id=user_id,
            name=name,
            slug=slugify(name),
            status=DeckStatus.DRAFT,
        )

        openrouter = self.settings.openrouter
        generation = await generation_session_crud.create(
            self.db,
            user_id=user_id,
            deck_id=deck.id,
            status=GenerationStatus.IN_PROGRESS,
            sanitized_source_text=sanitized_text,
            params={
                "model": openrouter.model,
                "temperature": openrouter.temperature,
                "max_cards": self.settings.generation.max_cards,
            },
        )
        await self.db.commit()

        logger.info(
            "Generation session created",
            extra={
                "user_id": str(user_id),
                "session_id": str(generation.id),
                "deck_id": str(deck.id),
                "text_length": len(sanitized_text),
            },
        )

        return {
            "generation_session_id": generation.id,
            "deck_id": deck.id,
            "deck_name": deck.name,
            "status": generation.status.value,
            "started_at": generation.started_at,
            "sanitized_text": sanitized_text,
        }

    async def process_generation(self, session_id: UUID, sanitized_text: str) -> GenerationStatus | None:
        """
        Generate, validate and persist cards for a session, then record the outcome.

        Every failure is rolled back and stored on the session as FAILED with
        the error code of the raised GenerationError (unknown_error otherwise).
        A session that is already terminal is never rewritten.

        Args:
            session_id: Generation session UUID
            sanitized_text: Sanitized source text

        Returns:
            Final status written, or None when nothing was written
        """
        generation = await generation_session_crud.get_by_id(self.db, session_id)
        if generation is None:
            logger.warning("Generation session not found", extra={"session_id": str(session_id)})
            return None
        if generation.status is not GenerationStatus.IN_PROGRESS:
            logger.warning(
                "Generation session already finished",
                extra={"session_id": str(session_id), "status": generation.status.value},
            )
            return None

        deck_id = generation.deck_id
        max_cards = self.settings.generation.max_cards
        timeout = self.settings.generation.timeout_seconds

        try:
            try:
                result = await asyncio.wait_for(
                    self.card_generator.generate(sanitized_text),
                    timeout=timeout,
                )
            except asyncio.TimeoutError as e:
                raise GenerationTimeoutError(f"Card generation timed out after {timeout:g}s") from e

            if not result.cards:
                raise CardValidationError("No cards generated")
            cards = result.cards[:max_cards]
            truncated_count = len(result.cards) - len(cards)
            validate_generated_cards(cards)

            await card_crud.create_many(
                self.db,
                deck_id,
                [card.model_dump() for card in cards],
            )
            if not await generation_session_crud.mark_completed(self.db, session_id, truncated_count):
                await self.db.rollback()
                logger.warning(
                    "Generation session finished elsewhere; discarding cards",
                    extra={"session_id": str(session_id)},
                )
                return None
            await self.db.commit()

        except Exception as e:
            await self.db.rollback()
            return await self._record_failure(session_id, e)

        logger.info(
            "Generation completed",
            extra={
                "session_id": str(session_id),
                "deck_id": str(deck_id),
                "card_count": len(cards),
                "truncated_count": truncated_count,
                "model": result.model,
            },
        )
        return GenerationStatus.COMPLETED

    async def _record_failure(self, session_id: UUID, exc: Exception) -> GenerationStatus | None:
        if isinstance(exc, GenerationError):
            error_code, error_message = exc.error_code, exc.message
        else:
            error_code, error_message = GenerationError.error_code, str(exc) or type(exc).__name__

        log_exception_with_context(
            logger,
            "Generation failed",
            exc,
            session_id=session_id,
            error_code=error_code,
        )

        try:
            written = await generation_session_crud.mark_failed(
                self.db,
                session_id,
                error_code=error_code,
                error_message=error_message,
            )
            await self.db.commit()
        except Exception as inner_e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                "Failed to record generation failure",
                inner_e,
                session_id=session_id,
                error_code=error_code,
            )
            return None

        return GenerationStatus.FAILED if written else None
