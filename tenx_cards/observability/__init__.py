"""
Observability module.

Provides structured logging, correlation ID tracking and request logging
middleware.
"""

from tenx_cards.observability.correlation import get_correlation_id, set_correlation_id
from tenx_cards.observability.logger import configure_logging, get_logger
from tenx_cards.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]
