"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, utcnow: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - DeckModel, CardModel, GenerationSessionModel: Domain entities
  - DeckStatus, GenerationStatus: Lifecycle enums
  - deck_crud, card_crud, generation_session_crud: CRUD operation singletons

Dependencies: sqlalchemy, tenx_cards.configs
System role: Persistent storage for decks, cards and generation sessions
"""

from tenx_cards.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow
from tenx_cards.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from tenx_cards.boundary.db.models import (
    CardModel,
    DeckModel,
    DeckStatus,
    GenerationSessionModel,
    GenerationStatus,
)
from tenx_cards.boundary.db.CRUD import (
    BaseCRUD,
    CardCRUD,
    DeckCRUD,
    DeckSort,
    GenerationSessionCRUD,
    card_crud,
    deck_crud,
    generation_session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "utcnow",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "CardModel",
    "DeckModel",
    "DeckStatus",
    "GenerationSessionModel",
    "GenerationStatus",
    # CRUD classes
    "BaseCRUD",
    "CardCRUD",
    "DeckCRUD",
    "DeckSort",
    "GenerationSessionCRUD",
    # CRUD singletons
    "card_crud",
    "deck_crud",
    "generation_session_crud",
]
