"""
Correlation ID context manager.

Manages correlation ID propagation across async boundaries using contextvars.
Background tasks scheduled during a request inherit the request's id.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

from contextvars import ContextVar, Token
import uuid

CORRELATION_ID_HEADER = "X-Correlation-ID"

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> tuple[str, Token]:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None or blank)

    Returns:
        tuple: The correlation ID that was set and the token to reset it with
    """
    correlation_id = (correlation_id or "").strip() or str(uuid.uuid4())
    token = correlation_id_ctx.set(correlation_id)
    return correlation_id, token


def get_correlation_id() -> str:
    """
    Get current correlation ID from context.

    Returns:
        str: Current correlation ID, empty string outside a request
    """
    return correlation_id_ctx.get()


def clear_correlation_id(token: Token | None = None) -> None:
    """Restore the previous correlation ID, or blank it when no token is given."""
    if token is not None:
        correlation_id_ctx.reset(token)
    else:
        correlation_id_ctx.set("")
