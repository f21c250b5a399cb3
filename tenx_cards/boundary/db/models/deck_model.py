"""
Deck ORM model.

A deck is a named, user-owned collection of flashcards with a one-way
lifecycle: draft -> published | rejected.

Dependencies: sqlalchemy, tenx_cards.boundary.db.base
System role: Owner of cards and target of generation sessions
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenx_cards.boundary.db.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from tenx_cards.boundary.db.models.card_model import CardModel


class DeckStatus(str, enum.Enum):
    """
    Deck lifecycle states.

    DRAFT: Editable; cards can be added and the deck renamed
    PUBLISHED: Final, visible for study
    REJECTED: Final, discarded by the owner
    """

    DRAFT = "draft"
    PUBLISHED = "published"
    REJECTED = "rejected"


class DeckModel(Base, UUIDMixin, TimestampMixin):
    """
    Deck ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owning user (subject of the bearer token)
        name: Display name, unique per user (1-100 chars)
        slug: URL-friendly form of the name
        status: Lifecycle state (DRAFT/PUBLISHED/REJECTED)
        published_at: Set when the deck leaves draft via publish
        rejected_at: Set when the deck leaves draft via reject
        rejected_reason: Optional reason given on reject (<=500 chars)
        cards: Cards ordered by position
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Constraints:
        (user_id, name): UNIQUE
    """

    __tablename__ = "decks"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_decks_user_id_name"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    slug: Mapped[str] = mapped_column(String(120), nullable=False)

    status: Mapped[DeckStatus] = mapped_column(
        Enum(DeckStatus, native_enum=False),
        nullable=False,
        default=DeckStatus.DRAFT,
    )

    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    rejected_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    rejected_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    cards: Mapped[list["CardModel"]] = relationship(
        "CardModel",
        back_populates="deck",
        cascade="all, delete-orphan",
        order_by="CardModel.position",
        lazy="noload",
    )
