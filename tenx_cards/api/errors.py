"""
Exception handlers.

Render every error as {"error": code, "message": text, "details"?: {...}}.
Unexpected exceptions become a generic 500 and are logged with their
traceback; internals never reach the response body.

Dependencies: fastapi, tenx_cards.core.exceptions, tenx_cards.models
System role: HTTP error translation
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tenx_cards.core.exceptions import TenxCardsException
from tenx_cards.models.card import MAX_CARD_HINT_LENGTH, MAX_CARD_SIDE_LENGTH
from tenx_cards.models.deck import MAX_REJECT_REASON_LENGTH
from tenx_cards.models.generation import MAX_DECK_NAME_LENGTH, MAX_SOURCE_TEXT_LENGTH
from tenx_cards.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Upper bounds of length-constrained request fields; pydantic only reports
# the bound that was crossed.
FIELD_MAX_LENGTHS: dict[str, int] = {
    "source_text": MAX_SOURCE_TEXT_LENGTH,
    "deck_name": MAX_DECK_NAME_LENGTH,
    "name": MAX_DECK_NAME_LENGTH,
    "reason": MAX_REJECT_REASON_LENGTH,
    "front": MAX_CARD_SIDE_LENGTH,
    "back": MAX_CARD_SIDE_LENGTH,
    "hint": MAX_CARD_HINT_LENGTH,
}


def error_body(
    error: str,
    message: str,
    details: dict[str, Any] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error, "message": message}
    if details:
        body["details"] = details
    body.update(extra)
    return body


def _validation_details(err: dict[str, Any]) -> dict[str, Any]:
    loc = [part for part in err.get("loc", ()) if part not in ("body", "query", "path")]
    details: dict[str, Any] = {"field": ".".join(str(part) for part in loc) or None}

    ctx = err.get("ctx") or {}
    value = err.get("input")
    if "max_length" in ctx or "min_length" in ctx:
        if isinstance(value, str):
            details["current_length"] = len(value.strip())
        max_length = ctx.get("max_length", FIELD_MAX_LENGTHS.get(details["field"]))
        if max_length is not None:
            details["max_length"] = max_length
        else:
            details["min_length"] = ctx["min_length"]
    return details


async def tenx_cards_exception_handler(request: Request, exc: TenxCardsException) -> JSONResponse:
    if exc.status_code >= 500:
        log_exception_with_context(logger, "Unhandled application error", exc, path=request.url.path)
    else:
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "error_code": exc.error_code},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message, exc.details, **exc.response_fields()),
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return JSONResponse(
            status_code=400,
            content=error_body("invalid_json", "Request body is not valid JSON"),
        )

    first = errors[0] if errors else {}
    details = _validation_details(first)
    field = details.get("field")
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    return JSONResponse(
        status_code=400,
        content=error_body("validation_error", message, details),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(
        logger,
        "Unhandled exception",
        exc,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content=error_body("internal_server_error", "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on the application."""
    app.add_exception_handler(TenxCardsException, tenx_cards_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
