"""
Card CRUD operations.

Dependencies: sqlalchemy, tenx_cards.boundary.db.models
System role: Card persistence operations
"""

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.boundary.db.CRUD.base_crud import BaseCRUD
from tenx_cards.boundary.db.models.card_model import CardModel


class CardCRUD(BaseCRUD[CardModel]):
    """CRUD operations for CardModel with deck-scoped queries."""

    def __init__(self) -> None:
        super().__init__(CardModel)

    async def count_by_deck(self, session: AsyncSession, deck_id: UUID) -> int:
        stmt = select(func.count()).select_from(CardModel).where(CardModel.deck_id == deck_id)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def list_by_deck(
        self,
        session: AsyncSession,
        deck_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[CardModel]:
        """
        List a deck's cards ordered by position.

        Args:
            session: Async database session
            deck_id: Parent deck UUID
            limit: Maximum cards to return (None for all)
            offset: Cards to skip

        Returns:
            Sequence of CardModel ordered by position ascending
        """
        stmt = (
            select(CardModel)
            .where(CardModel.deck_id == deck_id)
            .order_by(CardModel.position)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def position_taken(
        self,
        session: AsyncSession,
        deck_id: UUID,
        position: int,
    ) -> bool:
        stmt = select(CardModel.id).where(
            CardModel.deck_id == deck_id,
            CardModel.position == position,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def create_many(
        self,
        session: AsyncSession,
        deck_id: UUID,
        cards: Iterable[dict],
    ) -> list[CardModel]:
        """
        Insert a batch of cards with sequential 1-based positions.

        Args:
            session: Async database session
            deck_id: Parent deck UUID
            cards: Dicts with front, back and optional hint, in final order

        Returns:
            Created CardModel instances
        """
        instances = [
            CardModel(
                deck_id=deck_id,
                front=card["front"],
                back=card["back"],
                hint=card.get("hint"),
                position=position,
            )
            for position, card in enumerate(cards, start=1)
        ]
        session.add_all(instances)
        await session.flush()
        return instances


card_crud = CardCRUD()
