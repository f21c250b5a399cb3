"""API routers."""

from .cards import router as cards_router
from .decks import router as decks_router
from .generation_sessions import router as generation_sessions_router
from .generations import router as generations_router
from .health import router as health_router

__all__ = [
    "cards_router",
    "decks_router",
    "generation_sessions_router",
    "generations_router",
    "health_router",
]
