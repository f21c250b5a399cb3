"""
Deck endpoints.

Routes: GET /decks, GET /decks/{id}, PATCH /decks/{id},
POST /decks/{id}/publish, POST /decks/{id}/reject

Dependencies: tenx_cards.application.services
System role: Deck HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query

from tenx_cards.api.deps import get_current_user_id, get_deck_service
from tenx_cards.application.services import DeckService
from tenx_cards.boundary.db.CRUD.deck_crud import DeckSort
from tenx_cards.boundary.db.models.deck_model import DeckStatus
from tenx_cards.models.common import ErrorResponse, PaginatedResponse
from tenx_cards.models.deck import DeckResponse, RejectDeckRequest, UpdateDeckRequest

router = APIRouter(prefix="/decks", tags=["decks"])

_DECK_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("", response_model=PaginatedResponse[DeckResponse])
async def list_decks(
    status: DeckStatus | None = None,
    sort: DeckSort = DeckSort.UPDATED_AT_DESC,
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: UUID = Depends(get_current_user_id),
    deck_service: DeckService = Depends(get_deck_service),
) -> PaginatedResponse[DeckResponse]:
    """
    List the caller's decks.

    Args:
        status: Optional lifecycle filter
        sort: updated_at_desc (default), updated_at_asc, created_at_desc, created_at_asc
        limit: Page size (1-100)
        offset: Rows to skip
    """
    result = await deck_service.list_decks(
        user_id,
        status=status,
        sort=sort,
        limit=limit,
        offset=offset,
    )
    return PaginatedResponse[DeckResponse](**result)


@router.get("/{deck_id}", response_model=DeckResponse, responses=_DECK_ERRORS)
async def get_deck(
    deck_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    deck_service: DeckService = Depends(get_deck_service),
) -> DeckResponse:
    """Get a deck with its card count."""
    return DeckResponse(**await deck_service.get_deck(user_id, deck_id))


@router.patch(
    "/{deck_id}",
    response_model=DeckResponse,
    responses={**_DECK_ERRORS, 409: {"model": ErrorResponse}},
)
async def update_deck(
    deck_id: UUID,
    request: UpdateDeckRequest,
    user_id: UUID = Depends(get_current_user_id),
    deck_service: DeckService = Depends(get_deck_service),
) -> DeckResponse:
    """Rename a draft deck. Names are unique per user."""
    return DeckResponse(**await deck_service.update_deck_name(user_id, deck_id, request.name))


@router.post("/{deck_id}/publish", response_model=DeckResponse, responses=_DECK_ERRORS)
async def publish_deck(
    deck_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    deck_service: DeckService = Depends(get_deck_service),
) -> DeckResponse:
    """Publish a draft deck holding 1-20 valid cards. Irreversible."""
    return DeckResponse(**await deck_service.publish_deck(user_id, deck_id))


@router.post("/{deck_id}/reject", response_model=DeckResponse, responses=_DECK_ERRORS)
async def reject_deck(
    deck_id: UUID,
    request: RejectDeckRequest | None = Body(default=None),
    user_id: UUID = Depends(get_current_user_id),
    deck_service: DeckService = Depends(get_deck_service),
) -> DeckResponse:
    """Reject a draft deck with an optional reason. Irreversible."""
    reason = request.reason if request else None
    return DeckResponse(**await deck_service.reject_deck(user_id, deck_id, reason or None))
