"""
Generation session endpoints.

Routes: GET /generation-sessions, GET /generation-sessions/{id}

Dependencies: tenx_cards.application.services
System role: Generation status HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from tenx_cards.api.deps import get_current_user_id, get_generation_session_service
from tenx_cards.application.services import GenerationSessionService
from tenx_cards.boundary.db.models.generation_session_model import GenerationStatus
from tenx_cards.models.common import ErrorResponse, PaginatedResponse
from tenx_cards.models.generation_session import (
    GenerationSessionListItem,
    GenerationSessionResponse,
)

router = APIRouter(prefix="/generation-sessions", tags=["generation-sessions"])


@router.get("", response_model=PaginatedResponse[GenerationSessionListItem])
async def list_generation_sessions(
    status: GenerationStatus | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: UUID = Depends(get_current_user_id),
    service: GenerationSessionService = Depends(get_generation_session_service),
) -> PaginatedResponse[GenerationSessionListItem]:
    """List the caller's generation sessions, newest first."""
    result = await service.list_sessions(user_id, status=status, limit=limit, offset=offset)
    return PaginatedResponse[GenerationSessionListItem](**result)


@router.get(
    "/{session_id}",
    response_model=GenerationSessionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_generation_session(
    session_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: GenerationSessionService = Depends(get_generation_session_service),
) -> GenerationSessionResponse:
    """
    Get a generation session's status for polling.

    Returns 404 not_found for missing sessions and sessions of other users.
    """
    return GenerationSessionResponse(**await service.get_session(user_id, session_id))
