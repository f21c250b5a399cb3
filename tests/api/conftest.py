"""
API test fixtures.

Provides: TestClient on a fresh app with the caller's identity and the
background runner overridden, plus AsyncMock services.
Dependencies: pytest, fastapi
System role: HTTP layer test infrastructure
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from tenx_cards.api.deps import get_current_user_id, get_generation_runner
from tenx_cards.main import create_app


@pytest.fixture
def api_user_id() -> uuid.UUID:
    """Identity of the authenticated caller."""
    return uuid.uuid4()


@pytest.fixture
def mock_runner() -> AsyncMock:
    """Generation runner whose run() is recorded but does nothing."""
    runner = AsyncMock()
    runner.run = AsyncMock(return_value=None)
    return runner


@pytest.fixture
def app(api_user_id, mock_runner):
    app = create_app()
    app.dependency_overrides[get_current_user_id] = lambda: api_user_id
    app.dependency_overrides[get_generation_runner] = lambda: mock_runner
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Client that renders server errors as responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def deck_payload(now) -> dict:
    """Service-level deck dict."""
    return {
        "id": uuid.uuid4(),
        "name": "Biology",
        "slug": "biology",
        "status": "draft",
        "card_count": 3,
        "created_at": now,
        "updated_at": now,
        "published_at": None,
        "rejected_at": None,
        "rejected_reason": None,
    }
