"""
Deck service orchestrator.

Listing, renaming and the two one-way lifecycle transitions of a deck
(publish and reject). Transitions lock the deck row and run in a single
transaction.

Dependencies: tenx_cards.boundary.db.CRUD, tenx_cards.core
System role: Deck management orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.boundary.db.base import utcnow
from tenx_cards.boundary.db.CRUD.card_crud import card_crud
from tenx_cards.boundary.db.CRUD.deck_crud import DeckSort, deck_crud
from tenx_cards.boundary.db.models.card_model import MAX_CARDS_PER_DECK
from tenx_cards.boundary.db.models.deck_model import DeckModel, DeckStatus
from tenx_cards.core.card_generation import GeneratedCard, validate_generated_cards
from tenx_cards.core.exceptions import (
    CardValidationError,
    DeckNameConflictError,
    DeckNotDraftError,
    DeckNotEditableError,
    DeckNotFoundError,
    InvalidCardCountError,
    PublishValidationError,
)
from tenx_cards.core.text import slugify

logger = logging.getLogger(__name__)


def deck_to_dict(deck: DeckModel, card_count: int) -> dict:
    return {
        "id": deck.id,
        "name": deck.name,
        "slug": deck.slug,
        "status": deck.status.value,
        "card_count": card_count,
        "created_at": deck.created_at,
        "updated_at": deck.updated_at,
        "published_at": deck.published_at,
        "rejected_at": deck.rejected_at,
        "rejected_reason": deck.rejected_reason,
    }


class DeckService:
    """
    Deck service orchestrator.

    All operations are scoped to the calling user; a foreign deck is reported
    as not found.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize deck service.

        Args:
            db: AsyncSession for database operations
        """
        self.db = db

    async def list_decks(
        self,
        user_id: UUID,
        status: DeckStatus | None = None,
        sort: DeckSort = DeckSort.UPDATED_AT_DESC,
        limit: int = 50,
        offset: int = 0,
    ) -> dict:
        """
        List the caller's decks with card counts.

        Returns:
            dict: data and pagination {limit, offset, total}
        """
        rows, total = await deck_crud.list_for_user(
            self.db,
            user_id,
            status=status,
            sort=sort,
            limit=limit,
            offset=offset,
        )
        return {
            "data": [deck_to_dict(deck, card_count) for deck, card_count in rows],
            "pagination": {"limit": limit, "offset": offset, "total": total},
        }

    async def get_deck(self, user_id: UUID, deck_id: UUID) -> dict:
        """
        Get deck details with card count.

        Raises:
            DeckNotFoundError: Missing or owned by another user
        """
        found = await deck_crud.get_owned_with_card_count(self.db, deck_id, user_id)
        if found is None:
            raise DeckNotFoundError(str(deck_id))
        deck, card_count = found
        return deck_to_dict(deck, card_count)

    async def _get_locked(self, user_id: UUID, deck_id: UUID) -> DeckModel:
        deck = await deck_crud.get_owned(self.db, deck_id, user_id, for_update=True)
        if deck is None:
            raise DeckNotFoundError(str(deck_id))
        return deck

    async def update_deck_name(self, user_id: UUID, deck_id: UUID, name: str) -> dict:
        """
        Rename a draft deck.

        Args:
            user_id: Requesting user's UUID
            deck_id: Deck UUID
            name: New name (trimmed, 1-100 chars)

        Raises:
            DeckNotFoundError: Missing or owned by another user
            DeckNotEditableError: Deck is not a draft
            DeckNameConflictError: Another deck of the user has the name
        """
        name = name.strip()
        deck = await self._get_locked(user_id, deck_id)
        if deck.status is not DeckStatus.DRAFT:
            raise DeckNotEditableError(str(deck_id), deck.status.value)
        if await deck_crud.name_exists(self.db, user_id, name, exclude_id=deck_id):
            raise DeckNameConflictError(name)

        try:
            await deck_crud.update_by_id(self.db, deck_id, name=name, slug=slugify(name))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DeckNameConflictError(name) from e

        logger.info("Deck renamed", extra={"deck_id": str(deck_id), "user_id": str(user_id)})
        return await self.get_deck(user_id, deck_id)

    async def publish_deck(self, user_id: UUID, deck_id: UUID) -> dict:
        """
        Publish a draft deck holding 1-20 valid cards.

        Raises:
            DeckNotFoundError: Missing or owned by another user
            DeckNotDraftError: Deck already published or rejected
            InvalidCardCountError: Card count outside 1-20
            PublishValidationError: A card violates the length limits
        """
        deck = await self._get_locked(user_id, deck_id)
        if deck.status is not DeckStatus.DRAFT:
            raise DeckNotDraftError(str(deck_id), deck.status.value)

        cards = await card_crud.list_by_deck(self.db, deck_id)
        if not 1 <= len(cards) <= MAX_CARDS_PER_DECK:
            raise InvalidCardCountError(len(cards), 1, MAX_CARDS_PER_DECK)

        try:
            validate_generated_cards(
                [GeneratedCard(front=c.front, back=c.back, hint=c.hint) for c in cards]
            )
        except CardValidationError as e:
            raise PublishValidationError(e.message, e.details) from e

        await deck_crud.update_by_id(
            self.db,
            deck_id,
            status=DeckStatus.PUBLISHED,
            published_at=utcnow(),
        )
        await self.db.commit()

        logger.info(
            "Deck published",
            extra={"deck_id": str(deck_id), "user_id": str(user_id), "card_count": len(cards)},
        )
        return await self.get_deck(user_id, deck_id)

    async def reject_deck(self, user_id: UUID, deck_id: UUID, reason: str | None = None) -> dict:
        """
        Reject a draft deck with an optional reason (<=500 chars).

        Raises:
            DeckNotFoundError: Missing or owned by another user
            DeckNotDraftError: Deck already published or rejected
        """
        deck = await self._get_locked(user_id, deck_id)
        if deck.status is not DeckStatus.DRAFT:
            raise DeckNotDraftError(str(deck_id), deck.status.value)

        await deck_crud.update_by_id(
            self.db,
            deck_id,
            status=DeckStatus.REJECTED,
            rejected_at=utcnow(),
            rejected_reason=reason,
        )
        await self.db.commit()

        logger.info("Deck rejected", extra={"deck_id": str(deck_id), "user_id": str(user_id)})
        return await self.get_deck(user_id, deck_id)
