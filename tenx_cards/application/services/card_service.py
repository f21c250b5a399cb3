"""
Card service orchestrator.

Dependencies: tenx_cards.boundary.db.CRUD
System role: Card listing and manual card creation
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.boundary.db.CRUD.card_crud import card_crud
from tenx_cards.boundary.db.CRUD.deck_crud import deck_crud
from tenx_cards.boundary.db.models.card_model import MAX_CARDS_PER_DECK, CardModel
from tenx_cards.boundary.db.models.deck_model import DeckStatus
from tenx_cards.core.exceptions import (
    CardLimitReachedError,
    DeckNotEditableError,
    DeckNotFoundError,
    PositionConflictError,
)

logger = logging.getLogger(__name__)


def card_to_dict(card: CardModel) -> dict:
    return {
        "id": card.id,
        "deck_id": card.deck_id,
        "front": card.front,
        "back": card.back,
        "hint": card.hint,
        "position": card.position,
        "is_active": card.is_active,
        "created_at": card.created_at,
        "updated_at": card.updated_at,
    }


class CardService:
    """Cards of the caller's decks."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_cards(
        self,
        user_id: UUID,
        deck_id: UUID,
        limit: int = 100,
        offset: int = 0,
    ) -> dict:
        """
        List a deck's cards ordered by position.

        Raises:
            DeckNotFoundError: Missing or owned by another user
        """
        deck = await deck_crud.get_owned(self.db, deck_id, user_id)
        if deck is None:
            raise DeckNotFoundError(str(deck_id))

        total = await card_crud.count_by_deck(self.db, deck_id)
        cards = await card_crud.list_by_deck(self.db, deck_id, limit=limit, offset=offset)
        return {
            "data": [card_to_dict(card) for card in cards],
            "pagination": {"limit": limit, "offset": offset, "total": total},
        }

    async def create_card(
        self,
        user_id: UUID,
        deck_id: UUID,
        front: str,
        back: str,
        position: int,
        hint: str | None = None,
    ) -> dict:
        """
        Add a card to a draft deck.

        Args:
            user_id: Requesting user's UUID
            deck_id: Deck UUID
            front: Question side
            back: Answer side
            position: 1-based position, must be free in the deck
            hint: Optional hint

        Raises:
            DeckNotFoundError: Missing or owned by another user
            DeckNotEditableError: Deck is not a draft
            CardLimitReachedError: Deck already holds 20 cards
            PositionConflictError: Position already taken
        """
        deck = await deck_crud.get_owned(self.db, deck_id, user_id, for_update=True)
        if deck is None:
            raise DeckNotFoundError(str(deck_id))
        if deck.status is not DeckStatus.DRAFT:
            raise DeckNotEditableError(str(deck_id), deck.status.value)

        current_count = await card_crud.count_by_deck(self.db, deck_id)
        if current_count >= MAX_CARDS_PER_DECK:
            raise CardLimitReachedError(current_count, MAX_CARDS_PER_DECK)
        if await card_crud.position_taken(self.db, deck_id, position):
            raise PositionConflictError(position)

        try:
            card = await card_crud.create(
                self.db,
                deck_id=deck_id,
                front=front,
                back=back,
                hint=hint,
                position=position,
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise PositionConflictError(position) from e

        logger.info(
            "Card created",
            extra={"deck_id": str(deck_id), "card_id": str(card.id), "position": position},
        )
        return card_to_dict(card)
