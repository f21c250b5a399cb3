"""Tests for correlation ids and logging helpers."""

import logging
import uuid

from tenx_cards.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from tenx_cards.observability.log_utils import log_exception_with_context, safe_log_value
from tenx_cards.observability.logger import CorrelationIdFilter


class TestCorrelationId:
    """Tests for the correlation id context."""

    def test_uses_given_id(self) -> None:
        correlation_id, token = set_correlation_id("req-1")
        try:
            assert correlation_id == "req-1"
            assert get_correlation_id() == "req-1"
        finally:
            clear_correlation_id(token)

    def test_generates_id_for_blank_value(self) -> None:
        correlation_id, token = set_correlation_id("   ")
        try:
            uuid.UUID(correlation_id)
        finally:
            clear_correlation_id(token)

    def test_reset_restores_previous_id(self) -> None:
        _, outer = set_correlation_id("outer")
        _, inner = set_correlation_id("inner")

        clear_correlation_id(inner)
        assert get_correlation_id() == "outer"

        clear_correlation_id(outer)
        assert get_correlation_id() == ""


class TestCorrelationIdFilter:
    """Tests for CorrelationIdFilter."""

    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

    def test_stamps_current_id(self) -> None:
        _, token = set_correlation_id("req-7")
        try:
            record = self._record()
            assert CorrelationIdFilter().filter(record) is True
            assert record.correlation_id == "req-7"
        finally:
            clear_correlation_id(token)

    def test_placeholder_outside_request(self) -> None:
        record = self._record()
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"


class TestSafeLogValue:
    """Tests for safe_log_value."""

    def test_uuid(self) -> None:
        value = uuid.uuid4()
        assert safe_log_value(value) == str(value)

    def test_collections_are_summarized(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"

    def test_long_strings_are_truncated(self) -> None:
        result = safe_log_value("x" * 600)
        assert result.startswith("x" * 500)
        assert result.endswith("(truncated, 600 total)")


def test_log_exception_with_context(caplog) -> None:
    logger = logging.getLogger("tests.observability")
    session_id = uuid.uuid4()

    with caplog.at_level(logging.ERROR, logger="tests.observability"):
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            log_exception_with_context(logger, "Generation crashed", e, session_id=session_id)

    record = caplog.records[-1]
    assert record.getMessage() == "Generation crashed"
    assert record.session_id == str(session_id)
    assert record.error_type == "RuntimeError"
    assert record.error_msg == "boom"
    assert record.exc_info is not None
