"""
Deck CRUD operations.

Provides user-scoped deck lookups, name uniqueness checks and the
filtered/sorted listing with per-deck card counts.

Dependencies: sqlalchemy, tenx_cards.boundary.db.models
System role: Deck persistence operations
"""

import enum
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenx_cards.boundary.db.CRUD.base_crud import BaseCRUD
from tenx_cards.boundary.db.models.card_model import CardModel
from tenx_cards.boundary.db.models.deck_model import DeckModel, DeckStatus


class DeckSort(str, enum.Enum):
    """Supported orderings for deck listings."""

    UPDATED_AT_DESC = "updated_at_desc"
    UPDATED_AT_ASC = "updated_at_asc"
    CREATED_AT_DESC = "created_at_desc"
    CREATED_AT_ASC = "created_at_asc"


_SORT_COLUMNS = {
    DeckSort.UPDATED_AT_DESC: DeckModel.updated_at.desc(),
    DeckSort.UPDATED_AT_ASC: DeckModel.updated_at.asc(),
    DeckSort.CREATED_AT_DESC: DeckModel.created_at.desc(),
    DeckSort.CREATED_AT_ASC: DeckModel.created_at.asc(),
}


def _card_count_subquery():
    return (
        select(CardModel.deck_id, func.count(CardModel.id).label("card_count"))
        .group_by(CardModel.deck_id)
        .subquery()
    )


class DeckCRUD(BaseCRUD[DeckModel]):
    """CRUD operations for DeckModel."""

    def __init__(self) -> None:
        super().__init__(DeckModel)

    async def get_owned(
        self,
        session: AsyncSession,
        deck_id: UUID,
        user_id: UUID,
        for_update: bool = False,
    ) -> DeckModel | None:
        """
        Retrieve a deck only if it belongs to the user.

        Decks owned by someone else are indistinguishable from missing ones.

        Args:
            session: Async database session
            deck_id: Deck UUID
            user_id: Requesting user's UUID
            for_update: Lock the row for a status transition

        Returns:
            DeckModel if found and owned, None otherwise
        """
        stmt = select(DeckModel).where(
            DeckModel.id == deck_id,
            DeckModel.user_id == user_id,
        ).execution_options(populate_existing=True)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned_with_card_count(
        self,
        session: AsyncSession,
        deck_id: UUID,
        user_id: UUID,
    ) -> tuple[DeckModel, int] | None:
        """Retrieve an owned deck together with its card count."""
        counts = _card_count_subquery()
        stmt = (
            select(DeckModel, func.coalesce(counts.c.card_count, 0))
            .outerjoin(counts, counts.c.deck_id == DeckModel.id)
            .where(DeckModel.id == deck_id, DeckModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], int(row[1])

    async def name_exists(
        self,
        session: AsyncSession,
        user_id: UUID,
        name: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check whether the user already owns a deck with this name.

        Args:
            session: Async database session
            user_id: Owner UUID
            name: Candidate deck name (already trimmed)
            exclude_id: Deck to ignore, used when renaming

        Returns:
            True if another deck of the user has the name
        """
        stmt = select(DeckModel.id).where(
            DeckModel.user_id == user_id,
            DeckModel.name == name,
        )
        if exclude_id is not None:
            stmt = stmt.where(DeckModel.id != exclude_id)
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        status: DeckStatus | None = None,
        sort: DeckSort = DeckSort.UPDATED_AT_DESC,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[Sequence[tuple[DeckModel, int]], int]:
        """
        List the user's decks with card counts.

        Args:
            session: Async database session
            user_id: Owner UUID
            status: Optional lifecycle filter
            sort: Ordering (id breaks ties)
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of ((deck, card_count) rows for the page, total matching decks)
        """
        filters = [DeckModel.user_id == user_id]
        if status is not None:
            filters.append(DeckModel.status == status)

        total_stmt = select(func.count()).select_from(DeckModel).where(*filters)
        total = (await session.execute(total_stmt)).scalar_one()

        counts = _card_count_subquery()
        stmt = (
            select(DeckModel, func.coalesce(counts.c.card_count, 0))
            .outerjoin(counts, counts.c.deck_id == DeckModel.id)
            .where(*filters)
            .order_by(_SORT_COLUMNS[sort], DeckModel.id)
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        rows = [(deck, int(card_count)) for deck, card_count in result.all()]
        return rows, total


deck_crud = DeckCRUD()
