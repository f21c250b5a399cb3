"""
CRUD operations package.

Exports:
  - BaseCRUD: Generic CRUD base class
  - DeckCRUD, deck_crud, DeckSort: Deck operations and listing order
  - CardCRUD, card_crud: Card operations
  - GenerationSessionCRUD, generation_session_crud: Generation session operations

Dependencies: sqlalchemy, tenx_cards.boundary.db.models
System role: Data access layer for all domain entities
"""

from tenx_cards.boundary.db.CRUD.base_crud import BaseCRUD
from tenx_cards.boundary.db.CRUD.card_crud import CardCRUD, card_crud
from tenx_cards.boundary.db.CRUD.deck_crud import DeckCRUD, DeckSort, deck_crud
from tenx_cards.boundary.db.CRUD.generation_session_crud import (
    GenerationSessionCRUD,
    generation_session_crud,
)

__all__ = [
    "BaseCRUD",
    "CardCRUD",
    "DeckCRUD",
    "DeckSort",
    "GenerationSessionCRUD",
    "card_crud",
    "deck_crud",
    "generation_session_crud",
]
