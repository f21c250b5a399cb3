"""
Generation session ORM model.

Tracks one attempt to turn source text into a deck of flashcards. The row is
the only durable record of a background generation; clients poll it through
/generation-sessions/{id}.

Dependencies: sqlalchemy, tenx_cards.boundary.db.base
System role: Background generation tracking
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from tenx_cards.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow

MAX_ERROR_MESSAGE_LENGTH = 1000


class GenerationStatus(str, enum.Enum):
    """
    Generation session states.

    IN_PROGRESS: Background task running or about to run
    COMPLETED: Cards persisted; truncated_count set
    FAILED: Processing error; error_code/error_message set
    TIMEOUT: Exceeded the time limit
    """

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMEOUT = "timeout"

    @property
    def is_terminal(self) -> bool:
        return self is not GenerationStatus.IN_PROGRESS


class GenerationSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Generation session ORM model.

    Attributes:
        user_id: Owner; at most one IN_PROGRESS session per user is admitted
        deck_id: Draft deck receiving the generated cards
        status: IN_PROGRESS until exactly one terminal transition
        started_at: Set at creation
        finished_at: Set in the same write as the terminal transition
        sanitized_source_text: Input used for generation, never exposed by the API
        params: Generation configuration (model, temperature, max_cards)
        truncated_count: Cards dropped for exceeding the per-deck cap (on COMPLETED)
        error_code: Failure classification (on FAILED/TIMEOUT)
        error_message: Failure detail, truncated to 1000 chars
    """

    __tablename__ = "generation_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    deck_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("decks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[GenerationStatus] = mapped_column(
        Enum(GenerationStatus, native_enum=False),
        nullable=False,
        default=GenerationStatus.IN_PROGRESS,
        index=True,
    )

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    finished_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    sanitized_source_text: Mapped[str] = mapped_column(Text, nullable=False)

    params: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    truncated_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    error_code: Mapped[str | None] = mapped_column(String(50), nullable=True)

    error_message: Mapped[str | None] = mapped_column(
        String(MAX_ERROR_MESSAGE_LENGTH),
        nullable=True,
    )
