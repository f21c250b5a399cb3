"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    cards_router,
    decks_router,
    generation_sessions_router,
    generations_router,
    health_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(generations_router)
api_router.include_router(generation_sessions_router)
api_router.include_router(decks_router)
api_router.include_router(cards_router)

__all__ = ["api_router"]
