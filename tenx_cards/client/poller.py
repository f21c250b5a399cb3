"""
Generation status poller.

Client-side observer for a generation session: fetches the session resource
immediately and then on a fixed interval until a terminal status is seen or
the client-side timeout elapses. The timeout is local only; it never cancels
the server-side generation.

Dependencies: httpx, pydantic
System role: Polling client for generation progress
"""

import asyncio
import inspect
import logging
import math
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import datetime
from uuid import UUID

import httpx
from pydantic import BaseModel

from tenx_cards.core.exceptions import TenxCardsException

logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[str, str] = {
    "in_progress": "generation in progress, may take up to 5 minutes",
    "completed": "generation completed, redirecting",
    "failed": "an error occurred during generation",
    "timeout": "generation exceeded the time limit",
}

TERMINAL_STATES = frozenset({"completed", "failed", "timeout"})

DEFAULT_INTERVAL_SECONDS = 2.0
DEFAULT_TIMEOUT_SECONDS = 300.0
SESSION_PATH = "/api/v1/generation-sessions/{session_id}"


class PollingError(TenxCardsException):
    """Base for poller-local failures."""


class PollingTimeoutError(PollingError):
    """The session did not reach a terminal state within the client-side timeout."""

    error_code = "timeout"


class PollingFetchError(PollingError):
    """Fetching the session failed (transport error or non-2xx response)."""

    error_code = "network_error"


class GenerationStatusView(BaseModel):
    """Presentation snapshot of a generation session."""

    state: str
    message: str
    started_at: datetime | None = None
    finished_at: datetime | None = None
    error_code: str | None = None
    error_message: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


def to_status_view(payload: dict) -> GenerationStatusView:
    """
    Map a session resource body to a status view.

    Raises:
        PollingFetchError: Body is not an object or carries no known status
    """
    if not isinstance(payload, dict):
        raise PollingFetchError("Generation status response is not an object")
    state = payload.get("status")
    if state not in STATUS_MESSAGES:
        raise PollingFetchError(f"Unexpected generation status: {state!r}")
    return GenerationStatusView(
        state=state,
        message=STATUS_MESSAGES[state],
        started_at=payload.get("started_at"),
        finished_at=payload.get("finished_at"),
        error_code=payload.get("error_code"),
        error_message=payload.get("error_message"),
    )


class GenerationStatusPoller:
    """
    Observe a generation session until it finishes.

    Fetches are sequential: a tick's request completes before the next
    sleep starts. Ticks are scheduled on the grid start + n * interval;
    grid points already passed during a slow fetch are skipped.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        path_template: str = SESSION_PATH,
    ) -> None:
        """
        Initialize poller.

        Args:
            client: HTTP client configured with base_url and auth headers
            interval: Seconds between ticks
            timeout: Client-side limit in seconds, measured from observation start
            clock: Monotonic time source
            sleep: Coroutine used to wait between ticks
            path_template: Session resource path with a {session_id} placeholder
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._client = client
        self._interval = interval
        self._timeout = timeout
        self._clock = clock
        self._sleep = sleep
        self._path_template = path_template

    async def fetch(self, session_id: UUID | str) -> GenerationStatusView:
        """
        Fetch the session once.

        Raises:
            PollingFetchError: Transport error, non-2xx response or unreadable body
        """
        path = self._path_template.format(session_id=session_id)
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            raise PollingFetchError(
                f"Failed to fetch generation status: {e}",
                {"session_id": str(session_id)},
            ) from e

        if not response.is_success:
            raise PollingFetchError(
                f"Failed to fetch generation status (HTTP {response.status_code})",
                {"session_id": str(session_id), "status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise PollingFetchError("Generation status response is not JSON") from e
        return to_status_view(payload)

    async def observe(self, session_id: UUID | str) -> AsyncIterator[GenerationStatusView]:
        """
        Yield status snapshots until the session is terminal.

        The first fetch is immediate. A terminal snapshot is yielded once and
        no further fetch happens. Closing the generator or cancelling the
        consuming task stops polling.

        Raises:
            PollingTimeoutError: Elapsed time exceeded the timeout before a tick
            PollingFetchError: A fetch failed
        """
        start = self._clock()
        tick = 0
        while True:
            elapsed = self._clock() - start
            if elapsed > self._timeout:
                logger.info(
                    "Generation polling timed out",
                    extra={"session_id": str(session_id), "elapsed_s": round(elapsed, 3)},
                )
                raise PollingTimeoutError(
                    "Generation status polling timed out",
                    {"session_id": str(session_id), "timeout_s": self._timeout},
                )

            view = await self.fetch(session_id)
            yield view
            if view.is_terminal:
                return

            now = self._clock()
            tick = max(tick + 1, math.floor((now - start) / self._interval) + 1)
            await self._sleep(max(0.0, start + tick * self._interval - now))

    async def wait(
        self,
        session_id: UUID | str,
        on_completed: Callable[[GenerationStatusView], object] | None = None,
    ) -> GenerationStatusView:
        """
        Poll until terminal and return the final snapshot.

        Args:
            session_id: Generation session id
            on_completed: Called once with the final view when the state is
                completed; may be a coroutine function

        Returns:
            GenerationStatusView: Terminal snapshot

        Raises:
            PollingTimeoutError: Client-side timeout elapsed
            PollingFetchError: A fetch failed
        """
        final: GenerationStatusView | None = None
        async for view in self.observe(session_id):
            final = view

        if final.state == "completed" and on_completed is not None:
            outcome = on_completed(final)
            if inspect.isawaitable(outcome):
                await outcome
        return final
