"""
Generation session response schemas.

Dependencies: pydantic
System role: Generation status API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class GenerationSessionResponse(BaseModel):
    """Generation session as returned to its owner (no source text)."""

    id: uuid.UUID
    user_id: uuid.UUID
    deck_id: uuid.UUID
    status: str = Field(description="in_progress | completed | failed | timeout")
    started_at: datetime
    finished_at: datetime | None = None
    params: dict = Field(default_factory=dict, description="model, temperature, max_cards")
    truncated_count: int | None = None
    error_code: str | None = None
    error_message: str | None = None


class GenerationSessionListItem(GenerationSessionResponse):
    """Session with the name of its deck, for history listings."""

    deck_name: str | None = None
