"""
Database table creation script.

Creates the decks, cards and generation_sessions tables from the ORM
metadata.

Dependencies: sqlalchemy, tenx_cards.configs
System role: Database schema initialization

Usage:
    python -m tenx_cards.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from tenx_cards.boundary.db.base import Base
from tenx_cards.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from tenx_cards.boundary.db.models import (  # noqa: F401
    CardModel,
    DeckModel,
    GenerationSessionModel,
)

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Engine to use; defaults to the configured application engine

    Raises:
        SQLAlchemyError: If the connection or a CREATE statement fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


async def _main() -> None:
    try:
        await create_all_tables()
    finally:
        await get_async_engine().dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())
