"""
Test suite for DeckService against SQLite.

System role: Verification of deck listing, renaming and lifecycle transitions
"""

import uuid

import pytest

from tenx_cards.application.services import DeckService
from tenx_cards.boundary.db.CRUD import deck_crud
from tenx_cards.boundary.db.models import DeckStatus
from tenx_cards.core.exceptions import (
    DeckNameConflictError,
    DeckNotDraftError,
    DeckNotEditableError,
    DeckNotFoundError,
    InvalidCardCountError,
    PublishValidationError,
)


@pytest.fixture
async def deck_service(session_factory):
    """DeckService on its own session."""
    async with session_factory() as session:
        yield DeckService(session)


async def load_deck(session_factory, deck_id, owner_id):
    async with session_factory() as session:
        return await deck_crud.get_owned(session, deck_id, owner_id)


class TestGetAndList:
    """Test suite for get_deck() / list_decks()."""

    async def test_get_deck_returns_card_count(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, cards=3)

        result = await deck_service.get_deck(user_id, deck.id)

        assert result["id"] == deck.id
        assert result["status"] == "draft"
        assert result["card_count"] == 3

    async def test_get_foreign_deck_is_not_found(self, deck_service, make_deck, user_id, other_user_id) -> None:
        deck = await make_deck(other_user_id)

        with pytest.raises(DeckNotFoundError):
            await deck_service.get_deck(user_id, deck.id)

    async def test_list_decks_returns_pagination(self, deck_service, make_deck, user_id) -> None:
        await make_deck(user_id, name="One")
        await make_deck(user_id, name="Two", status=DeckStatus.REJECTED)

        result = await deck_service.list_decks(user_id, status=DeckStatus.DRAFT, limit=10)

        assert [deck["name"] for deck in result["data"]] == ["One"]
        assert result["pagination"] == {"limit": 10, "offset": 0, "total": 1}


class TestUpdateDeckName:
    """Test suite for update_deck_name()."""

    async def test_should_rename_draft_and_update_slug(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, name="Old")

        result = await deck_service.update_deck_name(user_id, deck.id, "  New Name  ")

        assert result["name"] == "New Name"
        assert result["slug"] == "new-name"

    async def test_published_deck_is_not_editable(self, session_factory, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, name="Final", status=DeckStatus.PUBLISHED)

        with pytest.raises(DeckNotEditableError):
            await deck_service.update_deck_name(user_id, deck.id, "Changed")

        stored = await load_deck(session_factory, deck.id, user_id)
        assert stored.name == "Final"

    async def test_duplicate_name_conflicts(self, deck_service, make_deck, user_id) -> None:
        await make_deck(user_id, name="Taken")
        deck = await make_deck(user_id, name="Mine")

        with pytest.raises(DeckNameConflictError):
            await deck_service.update_deck_name(user_id, deck.id, "Taken")

    async def test_renaming_to_same_name_is_allowed(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, name="Same")

        result = await deck_service.update_deck_name(user_id, deck.id, "Same")

        assert result["name"] == "Same"


class TestPublishDeck:
    """Test suite for publish_deck()."""

    async def test_should_publish_draft_with_cards(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, cards=5)

        result = await deck_service.publish_deck(user_id, deck.id)

        assert result["status"] == "published"
        assert result["published_at"] is not None
        assert result["card_count"] == 5

    async def test_empty_deck_is_rejected_and_stays_draft(
        self, session_factory, deck_service, make_deck, user_id
    ) -> None:
        deck = await make_deck(user_id, cards=0)

        with pytest.raises(InvalidCardCountError) as exc_info:
            await deck_service.publish_deck(user_id, deck.id)

        assert exc_info.value.card_count == 0
        stored = await load_deck(session_factory, deck.id, user_id)
        assert stored.status is DeckStatus.DRAFT
        assert stored.published_at is None

    async def test_more_than_twenty_cards_is_rejected(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, cards=21)

        with pytest.raises(InvalidCardCountError) as exc_info:
            await deck_service.publish_deck(user_id, deck.id)

        assert exc_info.value.card_count == 21

    async def test_invalid_card_blocks_publish(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, cards=2, front="q" * 201)

        with pytest.raises(PublishValidationError) as exc_info:
            await deck_service.publish_deck(user_id, deck.id)

        assert exc_info.value.error_code == "card_validation_failed"
        assert exc_info.value.details["field"] == "front"

    async def test_non_draft_deck_cannot_be_published(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, status=DeckStatus.REJECTED, cards=3)

        with pytest.raises(DeckNotDraftError):
            await deck_service.publish_deck(user_id, deck.id)

    async def test_missing_deck(self, deck_service, user_id) -> None:
        with pytest.raises(DeckNotFoundError):
            await deck_service.publish_deck(user_id, uuid.uuid4())


class TestRejectDeck:
    """Test suite for reject_deck()."""

    async def test_should_reject_with_reason(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id, cards=1)

        result = await deck_service.reject_deck(user_id, deck.id, "Too shallow")

        assert result["status"] == "rejected"
        assert result["rejected_reason"] == "Too shallow"
        assert result["rejected_at"] is not None

    async def test_rejection_is_irreversible(self, deck_service, make_deck, user_id) -> None:
        deck = await make_deck(user_id)
        await deck_service.reject_deck(user_id, deck.id)

        with pytest.raises(DeckNotDraftError):
            await deck_service.reject_deck(user_id, deck.id)
        with pytest.raises(DeckNotDraftError):
            await deck_service.publish_deck(user_id, deck.id)
