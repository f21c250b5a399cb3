"""Service orchestrators."""

from .card_service import CardService
from .deck_service import DeckService
from .generation_service import GenerationService
from .generation_session_service import GenerationSessionService

__all__ = [
    "CardService",
    "DeckService",
    "GenerationService",
    "GenerationSessionService",
]
