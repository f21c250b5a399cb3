"""
Card endpoints.

Routes: GET /decks/{id}/cards, POST /decks/{id}/cards

Dependencies: tenx_cards.application.services
System role: Card HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from tenx_cards.api.deps import get_card_service, get_current_user_id
from tenx_cards.application.services import CardService
from tenx_cards.models.card import CardResponse, CreateCardRequest
from tenx_cards.models.common import ErrorResponse, PaginatedResponse

router = APIRouter(prefix="/decks/{deck_id}/cards", tags=["cards"])


@router.get(
    "",
    response_model=PaginatedResponse[CardResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_cards(
    deck_id: UUID,
    limit: int = Query(default=100, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: UUID = Depends(get_current_user_id),
    card_service: CardService = Depends(get_card_service),
) -> PaginatedResponse[CardResponse]:
    """List a deck's cards ordered by position."""
    result = await card_service.list_cards(user_id, deck_id, limit=limit, offset=offset)
    return PaginatedResponse[CardResponse](**result)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CardResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_card(
    deck_id: UUID,
    request: CreateCardRequest,
    user_id: UUID = Depends(get_current_user_id),
    card_service: CardService = Depends(get_card_service),
) -> CardResponse:
    """
    Add a card to a draft deck.

    Errors: deck_not_found (404), deck_not_editable (400),
    card_limit_reached (400), position_conflict (409).
    """
    card = await card_service.create_card(
        user_id,
        deck_id,
        front=request.front,
        back=request.back,
        hint=request.hint or None,
        position=request.position,
    )
    return CardResponse(**card)
