"""
Generation session CRUD operations.

Besides plain lookups this module owns the two queries the generation
lifecycle depends on: the per-user admission query and the conditional
terminal write that moves a session out of IN_PROGRESS at most once.

Dependencies: sqlalchemy, tenx_cards.boundary.db.models
System role: Generation session persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.boundary.db.base import utcnow
from tenx_cards.boundary.db.CRUD.base_crud import BaseCRUD
from tenx_cards.boundary.db.models.deck_model import DeckModel
from tenx_cards.boundary.db.models.generation_session_model import (
    MAX_ERROR_MESSAGE_LENGTH,
    GenerationSessionModel,
    GenerationStatus,
)


class GenerationSessionCRUD(BaseCRUD[GenerationSessionModel]):
    """CRUD operations for GenerationSessionModel."""

    def __init__(self) -> None:
        super().__init__(GenerationSessionModel)

    async def get_owned(
        self,
        session: AsyncSession,
        session_id: UUID,
        user_id: UUID,
    ) -> GenerationSessionModel | None:
        stmt = select(GenerationSessionModel).where(
            GenerationSessionModel.id == session_id,
            GenerationSessionModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> GenerationSessionModel | None:
        """
        Find the user's IN_PROGRESS session, if any.

        Args:
            session: Async database session
            user_id: Owner UUID

        Returns:
            Oldest IN_PROGRESS session of the user, None if there is none
        """
        stmt = (
            select(GenerationSessionModel)
            .where(
                GenerationSessionModel.user_id == user_id,
                GenerationSessionModel.status == GenerationStatus.IN_PROGRESS,
            )
            .order_by(GenerationSessionModel.started_at)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        status: GenerationStatus | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[Sequence[tuple[GenerationSessionModel, str | None]], int]:
        """
        List the user's sessions newest first, each with its deck name.

        Returns:
            Tuple of ((session, deck_name) rows for the page, total matching sessions)
        """
        filters = [GenerationSessionModel.user_id == user_id]
        if status is not None:
            filters.append(GenerationSessionModel.status == status)

        total_stmt = select(func.count()).select_from(GenerationSessionModel).where(*filters)
        total = (await session.execute(total_stmt)).scalar_one()

        stmt = (
            select(GenerationSessionModel, DeckModel.name)
            .outerjoin(DeckModel, DeckModel.id == GenerationSessionModel.deck_id)
            .where(*filters)
            .order_by(GenerationSessionModel.created_at.desc(), GenerationSessionModel.id)
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()], total

    async def _finish(
        self,
        session: AsyncSession,
        session_id: UUID,
        **values,
    ) -> bool:
        stmt = (
            update(GenerationSessionModel)
            .where(
                GenerationSessionModel.id == session_id,
                GenerationSessionModel.status == GenerationStatus.IN_PROGRESS,
            )
            .values(finished_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def mark_completed(
        self,
        session: AsyncSession,
        session_id: UUID,
        truncated_count: int,
    ) -> bool:
        """
        Move an IN_PROGRESS session to COMPLETED.

        Args:
            session: Async database session
            session_id: Session UUID
            truncated_count: Cards dropped for exceeding the per-deck cap

        Returns:
            True if the row transitioned, False if it was already terminal or missing
        """
        return await self._finish(
            session,
            session_id,
            status=GenerationStatus.COMPLETED,
            truncated_count=truncated_count,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        session_id: UUID,
        error_code: str,
        error_message: str,
        status: GenerationStatus = GenerationStatus.FAILED,
    ) -> bool:
        """
        Move an IN_PROGRESS session to FAILED (or TIMEOUT).

        error_message is truncated to 1000 characters.

        Returns:
            True if the row transitioned, False if it was already terminal or missing
        """
        return await self._finish(
            session,
            session_id,
            status=status,
            error_code=error_code,
            error_message=error_message[:MAX_ERROR_MESSAGE_LENGTH],
        )


generation_session_crud = GenerationSessionCRUD()
