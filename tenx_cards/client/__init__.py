"""
HTTP client helpers for consumers of the API.

Exports:
  - GenerationStatusPoller: Poll a generation session until it finishes
  - GenerationStatusView, STATUS_MESSAGES: Presentation of session status
  - PollingError, PollingTimeoutError, PollingFetchError: Poller failures
"""

from tenx_cards.client.poller import (
    STATUS_MESSAGES,
    GenerationStatusPoller,
    GenerationStatusView,
    PollingError,
    PollingFetchError,
    PollingTimeoutError,
)

__all__ = [
    "STATUS_MESSAGES",
    "GenerationStatusPoller",
    "GenerationStatusView",
    "PollingError",
    "PollingFetchError",
    "PollingTimeoutError",
]
