"""
Database models package.

Exports:
  - DeckModel, DeckStatus: Deck ORM model and lifecycle enum
  - CardModel: Card ORM model
  - GenerationSessionModel, GenerationStatus: Generation session ORM model and status enum

Dependencies: sqlalchemy, tenx_cards.boundary.db.base
System role: Database model definitions for domain entities
"""

from tenx_cards.boundary.db.models.deck_model import DeckModel, DeckStatus
from tenx_cards.boundary.db.models.card_model import CardModel
from tenx_cards.boundary.db.models.generation_session_model import (
    GenerationSessionModel,
    GenerationStatus,
)

__all__ = [
    "CardModel",
    "DeckModel",
    "DeckStatus",
    "GenerationSessionModel",
    "GenerationStatus",
]
