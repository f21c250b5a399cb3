"""
Deck request/response schemas.

Dependencies: pydantic
System role: Deck API contracts
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from tenx_cards.models.generation import DeckName

MAX_REJECT_REASON_LENGTH = 500


class DeckResponse(BaseModel):
    """Deck with its card count."""

    id: uuid.UUID
    name: str
    slug: str
    status: str = Field(description="draft | published | rejected")
    card_count: int
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None
    rejected_at: datetime | None = None
    rejected_reason: str | None = None


class UpdateDeckRequest(BaseModel):
    """Request schema for renaming a draft deck."""

    name: DeckName


class RejectDeckRequest(BaseModel):
    """Optional reason recorded when rejecting a deck."""

    reason: Annotated[str, StringConstraints(strip_whitespace=True, max_length=MAX_REJECT_REASON_LENGTH)] | None = None
