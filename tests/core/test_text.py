"""
Test suite for text helpers.

System role: Verification of source text sanitization and deck naming
"""

import re
from datetime import datetime

from tenx_cards.core.text import generate_deck_name, sanitize_source_text, slugify


class TestSanitizeSourceText:
    """Test suite for sanitize_source_text()."""

    def test_should_strip_markup_tags(self) -> None:
        assert sanitize_source_text("<p>Photosynthesis <b>is</b> a process</p>") == (
            "Photosynthesis is a process"
        )

    def test_should_collapse_whitespace_and_trim(self) -> None:
        assert sanitize_source_text("  line one\n\n\tline   two  ") == "line one line two"

    def test_should_return_empty_string_for_markup_only_text(self) -> None:
        assert sanitize_source_text("<div>  </div><br/>") == ""

    def test_should_treat_angle_bracket_span_as_markup(self) -> None:
        assert sanitize_source_text("a < b and c > d") == "a d"


class TestGenerateDeckName:
    """Test suite for generate_deck_name()."""

    def test_should_format_given_timestamp(self) -> None:
        assert generate_deck_name(datetime(2024, 3, 7, 9, 5)) == "Deck 2024-03-07 09:05"

    def test_should_default_to_current_time(self) -> None:
        assert re.fullmatch(r"Deck \d{4}-\d{2}-\d{2} \d{2}:\d{2}", generate_deck_name())


class TestSlugify:
    """Test suite for slugify()."""

    def test_should_lowercase_and_hyphenate(self) -> None:
        assert slugify("Deck 2024-03-07 09:05") == "deck-2024-03-07-09-05"

    def test_should_fold_accents(self) -> None:
        assert slugify("Historia Polski – Średniowiecze") == "historia-polski-sredniowiecze"

    def test_should_fall_back_when_nothing_is_left(self) -> None:
        assert slugify("!!!") == "deck"
