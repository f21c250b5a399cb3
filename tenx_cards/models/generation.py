"""
Generation request/response schemas.

Dependencies: pydantic
System role: Generation submission API contracts
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

MAX_SOURCE_TEXT_LENGTH = 10000
MAX_DECK_NAME_LENGTH = 100

SourceText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_SOURCE_TEXT_LENGTH)
]
DeckName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_DECK_NAME_LENGTH)
]


class GenerationRequest(BaseModel):
    """Request schema for submitting source text."""

    source_text: SourceText = Field(description="Text to generate flashcards from")
    deck_name: DeckName | None = Field(default=None, description="Optional deck name")


class GenerationAcceptedResponse(BaseModel):
    """Immediate response for an admitted generation; poll the session for progress."""

    generation_session_id: uuid.UUID
    deck_id: uuid.UUID
    deck_name: str
    status: str = Field(description="Always in_progress")
    started_at: datetime
