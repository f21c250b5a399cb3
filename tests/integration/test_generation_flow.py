"""
End-to-end generation flow over the ASGI app with a real database.

Submits source text, observes the session with the status poller, runs the
background generation and walks the resulting draft deck to publication.
Dependencies: pytest, httpx, sqlalchemy, aiosqlite
System role: Full request/background/poll cycle validation
"""

import re
import uuid

import httpx
import pytest

from tenx_cards.api.deps import (
    get_card_generator,
    get_current_user_id,
    get_generation_runner,
    get_settings_dependency,
)
from tenx_cards.application.generation_runner import GenerationRunner
from tenx_cards.boundary.db import get_async_db
from tenx_cards.client import GenerationStatusPoller
from tenx_cards.core.card_generation import MockCardGenerator
from tenx_cards.core.exceptions import CardProviderError
from tenx_cards.main import create_app

SOURCE_TEXT = "<p>Photosynthesis converts   light energy into chemical energy.</p>"


class RecordingRunner:
    """Stands in for the background runner; the test triggers runs itself."""

    def __init__(self):
        self.calls = []

    async def run(self, session_id, sanitized_text):
        self.calls.append((session_id, sanitized_text))


class FailingGenerator:
    async def generate(self, source_text):
        raise CardProviderError("OpenRouter API error: 503", {"status_code": 503})


@pytest.fixture
def recording_runner():
    return RecordingRunner()


@pytest.fixture
def flow_app(session_factory, user_id, test_settings, recording_runner):
    app = create_app()

    async def override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_current_user_id] = lambda: user_id
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    app.dependency_overrides[get_card_generator] = lambda: MockCardGenerator()
    app.dependency_overrides[get_generation_runner] = lambda: recording_runner
    return app


@pytest.fixture
async def http_client(flow_app):
    transport = httpx.ASGITransport(app=flow_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def test_generation_completes_and_deck_is_published(
    http_client, session_factory, test_settings, recording_runner
):
    # Submit
    response = await http_client.post("/api/v1/generations", json={"source_text": SOURCE_TEXT})
    assert response.status_code == 202
    accepted = response.json()
    assert accepted["status"] == "in_progress"
    assert re.fullmatch(r"Deck \d{4}-\d{2}-\d{2} \d{2}:\d{2}", accepted["deck_name"])

    session_id = uuid.UUID(accepted["generation_session_id"])
    assert recording_runner.calls == [
        (session_id, "Photosynthesis converts light energy into chemical energy.")
    ]

    # Poll before the run: still in progress
    poller = GenerationStatusPoller(http_client)
    view = await poller.fetch(session_id)
    assert view.state == "in_progress"
    assert view.message == "generation in progress, may take up to 5 minutes"

    # A second submission is refused while the first is running
    busy = await http_client.post("/api/v1/generations", json={"source_text": "Other text"})
    assert busy.status_code == 400
    assert busy.json()["error"] == "generation_in_progress"
    assert busy.json()["active_session_id"] == str(session_id)

    # Background run
    runner = GenerationRunner(session_factory, MockCardGenerator(), test_settings)
    _, sanitized = recording_runner.calls[0]
    final_status = await runner.run(session_id, sanitized)
    assert final_status == "completed"

    # Poll after the run: completed, callback fires once
    completed_views = []
    final = await poller.wait(session_id, on_completed=completed_views.append)
    assert final.state == "completed"
    assert final.message == "generation completed, redirecting"
    assert completed_views == [final]

    session = (await http_client.get(f"/api/v1/generation-sessions/{session_id}")).json()
    assert session["truncated_count"] == 0
    assert session["finished_at"] is not None

    # The draft deck holds the generated cards
    deck_id = accepted["deck_id"]
    deck = (await http_client.get(f"/api/v1/decks/{deck_id}")).json()
    assert deck["status"] == "draft"
    assert deck["card_count"] == 20

    cards = (await http_client.get(f"/api/v1/decks/{deck_id}/cards")).json()
    assert [card["position"] for card in cards["data"]] == list(range(1, 21))
    assert cards["data"][2]["hint"] is not None

    # Publish, after which the deck is frozen
    published = await http_client.post(f"/api/v1/decks/{deck_id}/publish")
    assert published.status_code == 200
    assert published.json()["status"] == "published"

    frozen = await http_client.patch(f"/api/v1/decks/{deck_id}", json={"name": "Renamed"})
    assert frozen.status_code == 400
    assert frozen.json()["error"] == "deck_not_editable"

    # The user may generate again
    again = await http_client.post("/api/v1/generations", json={"source_text": "Cell biology"})
    assert again.status_code == 202


async def test_failed_generation_is_reported_to_poller(
    http_client, session_factory, test_settings, recording_runner
):
    response = await http_client.post(
        "/api/v1/generations",
        json={"source_text": "Mitochondria", "deck_name": "Cells"},
    )
    session_id = uuid.UUID(response.json()["generation_session_id"])

    runner = GenerationRunner(session_factory, FailingGenerator(), test_settings)
    assert await runner.run(session_id, "Mitochondria") == "failed"

    completed_views = []
    final = await GenerationStatusPoller(http_client).wait(session_id, on_completed=completed_views.append)

    assert final.state == "failed"
    assert final.message == "an error occurred during generation"
    assert final.error_code == "openrouter_error"
    assert completed_views == []

    deck = (await http_client.get(f"/api/v1/decks/{response.json()['deck_id']}")).json()
    assert deck["name"] == "Cells"
    assert deck["card_count"] == 0


async def test_sessions_are_private(http_client, flow_app, other_user_id):
    response = await http_client.post("/api/v1/generations", json={"source_text": "Enzymes"})
    session_id = response.json()["generation_session_id"]
    deck_id = response.json()["deck_id"]

    flow_app.dependency_overrides[get_current_user_id] = lambda: other_user_id

    session = await http_client.get(f"/api/v1/generation-sessions/{session_id}")
    deck = await http_client.get(f"/api/v1/decks/{deck_id}")
    history = await http_client.get("/api/v1/generation-sessions")

    assert session.status_code == 404
    assert deck.status_code == 404
    assert history.json()["pagination"]["total"] == 0
