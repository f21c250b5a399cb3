"""
Text helpers for generation input and deck naming.

Dependencies: None (pure domain layer)
System role: Source text sanitization, default deck names, slugs
"""

import re
import unicodedata
from datetime import datetime

_MARKUP_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")

MAX_SLUG_LENGTH = 120


def sanitize_source_text(text: str) -> str:
    """
    Strip markup and normalize whitespace in user supplied source text.

    Tags (anything between ``<`` and ``>``) are removed, every run of
    whitespace becomes a single space, and the result is trimmed.

    Args:
        text: Raw source text from the request

    Returns:
        Sanitized text, possibly empty
    """
    sanitized = _MARKUP_RE.sub("", text)
    sanitized = _WHITESPACE_RE.sub(" ", sanitized)
    return sanitized.strip()


def generate_deck_name(now: datetime | None = None) -> str:
    """
    Build the default deck name, ``Deck YYYY-MM-DD HH:mm`` in local time.

    Args:
        now: Timestamp to format; defaults to the current local time

    Returns:
        Default deck name
    """
    now = now or datetime.now()
    return f"Deck {now:%Y-%m-%d %H:%M}"


def slugify(name: str) -> str:
    """ASCII, lowercase, hyphen separated form of a deck name."""
    normalized = unicodedata.normalize("NFKD", name)
    ascii_name = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = _NON_SLUG_RE.sub("-", ascii_name).strip("-")
    return slug[:MAX_SLUG_LENGTH].rstrip("-") or "deck"
