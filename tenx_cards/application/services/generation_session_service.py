"""
Generation session read service.

Dependencies: tenx_cards.boundary.db.CRUD
System role: Generation session status and history queries
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.boundary.db.CRUD.generation_session_crud import generation_session_crud
from tenx_cards.boundary.db.models.generation_session_model import (
    GenerationSessionModel,
    GenerationStatus,
)
from tenx_cards.core.exceptions import GenerationSessionNotFoundError


def session_to_dict(generation: GenerationSessionModel) -> dict:
    """Public view of a session; the source text is never exposed."""
    return {
        "id": generation.id,
        "user_id": generation.user_id,
        "deck_id": generation.deck_id,
        "status": generation.status.value,
        "started_at": generation.started_at,
        "finished_at": generation.finished_at,
        "params": generation.params,
        "truncated_count": generation.truncated_count,
        "error_code": generation.error_code,
        "error_message": generation.error_message,
    }


class GenerationSessionService:
    """Read access to the caller's generation sessions."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_session(self, user_id: UUID, session_id: UUID) -> dict:
        """
        Get one session for status polling.

        Raises:
            GenerationSessionNotFoundError: Missing or owned by another user
        """
        generation = await generation_session_crud.get_owned(self.db, session_id, user_id)
        if generation is None:
            raise GenerationSessionNotFoundError(str(session_id))
        return session_to_dict(generation)

    async def list_sessions(
        self,
        user_id: UUID,
        status: GenerationStatus | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> dict:
        """
        List the caller's sessions, newest first.

        Returns:
            dict: data (sessions with deck_name) and pagination
        """
        rows, total = await generation_session_crud.list_for_user(
            self.db,
            user_id,
            status=status,
            limit=limit,
            offset=offset,
        )
        return {
            "data": [
                {**session_to_dict(generation), "deck_name": deck_name}
                for generation, deck_name in rows
            ],
            "pagination": {"limit": limit, "offset": offset, "total": total},
        }
