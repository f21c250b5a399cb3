"""
Card ORM model.

Dependencies: sqlalchemy, tenx_cards.boundary.db.base
System role: Single flashcard belonging to a deck
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenx_cards.boundary.db.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from tenx_cards.boundary.db.models.deck_model import DeckModel

MAX_FRONT_LENGTH = 200
MAX_BACK_LENGTH = 500
MAX_HINT_LENGTH = 200
MAX_CARDS_PER_DECK = 20


class CardModel(Base, UUIDMixin, TimestampMixin):
    """
    Card ORM model.

    Attributes:
        deck_id: Parent deck (CASCADE delete)
        front: Question side (<=200 chars)
        back: Answer side (<=500 chars)
        hint: Optional hint (<=200 chars)
        position: 1-based position, unique within the deck
        is_active: Whether the card takes part in study sessions

    Constraints:
        (deck_id, position): UNIQUE; duplicates surface as position conflicts
    """

    __tablename__ = "cards"
    __table_args__ = (
        UniqueConstraint("deck_id", "position", name="uq_cards_deck_id_position"),
    )

    deck_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("decks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    front: Mapped[str] = mapped_column(String(MAX_FRONT_LENGTH), nullable=False)

    back: Mapped[str] = mapped_column(String(MAX_BACK_LENGTH), nullable=False)

    hint: Mapped[str | None] = mapped_column(String(MAX_HINT_LENGTH), nullable=True)

    position: Mapped[int] = mapped_column(Integer, nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    deck: Mapped["DeckModel"] = relationship("DeckModel", back_populates="cards")
