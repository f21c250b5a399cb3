"""
Card request/response schemas.

Dependencies: pydantic
System role: Card API contracts
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

MAX_CARD_SIDE_LENGTH = 200
MAX_CARD_HINT_LENGTH = 200

CardSide = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_CARD_SIDE_LENGTH)]


class CardResponse(BaseModel):
    """Card as stored in a deck."""

    id: uuid.UUID
    deck_id: uuid.UUID
    front: str
    back: str
    hint: str | None = None
    position: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CreateCardRequest(BaseModel):
    """Request schema for adding a card to a draft deck."""

    front: CardSide
    back: CardSide
    hint: Annotated[str, StringConstraints(strip_whitespace=True, max_length=MAX_CARD_HINT_LENGTH)] | None = None
    position: int = Field(ge=1, strict=True, description="1-based position within the deck")
