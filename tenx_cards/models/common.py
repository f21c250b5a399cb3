"""
Common response models and utilities.

Generic pagination wrapper and the error body shared by every endpoint.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """
    Error response schema.

    Some errors add top-level fields (active_session_id, card_count).
    """

    model_config = ConfigDict(extra="allow")

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: dict | None = Field(default=None, description="Additional error context")


class Pagination(BaseModel):
    """Page window and total number of matching rows."""

    limit: int
    offset: int
    total: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response wrapper."""

    data: list[T]
    pagination: Pagination
