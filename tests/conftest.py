"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite-backed async database, session factory, settings, deck/card
builders, user ids
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tenx_cards.boundary.db.base import Base
from tenx_cards.boundary.db.models import CardModel, DeckModel, DeckStatus
from tenx_cards.configs import Settings
from tenx_cards.configs.generation import GenerationSettings


@pytest.fixture
async def test_engine(tmp_path):
    """
    Create a file-backed SQLite async engine with all tables.

    A file (rather than :memory:) lets several sessions hold independent
    connections, like the API and background runner do in production.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(test_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Provide an AsyncSession on the test database.

    Yields:
        AsyncSession: Test database session, rolled back on teardown
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_id() -> uuid.UUID:
    """Generate a test user ID."""
    return uuid.uuid4()


@pytest.fixture
def other_user_id() -> uuid.UUID:
    """Generate a second user's ID."""
    return uuid.uuid4()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with mock generation and a short timeout."""
    return Settings(
        generation=GenerationSettings(
            use_mock_ai=True,
            timeout_seconds=2.0,
            max_cards=20,
            max_concurrent=2,
        ),
    )


@pytest.fixture
def make_deck(session_factory):
    """
    Build a committed deck with optional cards.

    Returns:
        Callable: async (user_id, name=..., status=..., cards=N) -> DeckModel
    """

    async def _make_deck(
        owner_id: uuid.UUID,
        name: str = "Biology",
        status: DeckStatus = DeckStatus.DRAFT,
        cards: int = 0,
        **card_overrides,
    ) -> DeckModel:
        async with session_factory() as session:
            deck = DeckModel(user_id=owner_id, name=name, slug=name.lower(), status=status)
            session.add(deck)
            await session.flush()
            for position in range(1, cards + 1):
                session.add(
                    CardModel(
                        deck_id=deck.id,
                        front=card_overrides.get("front", f"Question {position}"),
                        back=card_overrides.get("back", f"Answer {position}"),
                        hint=card_overrides.get("hint"),
                        position=position,
                    )
                )
            await session.commit()
            return deck

    return _make_deck
