"""
Tests for Utility Functions
"""

from datetime import date, datetime, timezone

import pytest

from arcsite.utils import (
    date_to_rfc822,
    escape_xml,
    format_display_date,
    format_rfc822,
    ordinal_suffix,
    parse_iso_date,
    strip_tags,
    truncate_html,
)


class TestDates:
    """Test date parsing and formatting."""

    def test_parse_iso_date(self):
        """Test ISO calendar dates are parsed."""
        assert parse_iso_date("2025-05-28") == date(2025, 5, 28)
        assert parse_iso_date(" 2025-05-28 ") == date(2025, 5, 28)

    @pytest.mark.parametrize("value", [None, "", "May 28", "2025-13-01"])
    def test_parse_invalid(self, value):
        """Test malformed or missing dates give None."""
        assert parse_iso_date(value) is None

    @pytest.mark.parametrize("day,suffix", [
        (1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"),
        (12, "th"), (13, "th"), (21, "st"), (22, "nd"), (23, "rd"), (31, "st"),
    ])
    def test_ordinal_suffix(self, day, suffix):
        """Test English ordinal suffixes."""
        assert ordinal_suffix(day) == suffix

    def test_format_display_date(self):
        """Test the display format used for formatted_date."""
        assert format_display_date(date(2025, 5, 28)) == "May 28th, 2025"
        assert format_display_date(date(2024, 2, 1)) == "February 1st, 2024"

    def test_format_rfc822(self):
        """Test RFC 822 formatting; naive datetimes are taken as UTC."""
        assert format_rfc822(datetime(2025, 5, 28, 9, 5)) == "Wed, 28 May 2025 09:05:00 +0000"
        assert format_rfc822(datetime(2025, 5, 28, tzinfo=timezone.utc)) == "Wed, 28 May 2025 00:00:00 +0000"

    def test_date_to_rfc822(self):
        """Test ISO dates become midnight UTC."""
        assert date_to_rfc822("2025-01-02") == "Thu, 02 Jan 2025 00:00:00 +0000"

    def test_date_to_rfc822_fallback(self):
        """Test an unparsable date falls back to the current time."""
        assert date_to_rfc822("someday").endswith("+0000")


class TestText:
    """Test XML and HTML text helpers."""

    def test_escape_xml(self):
        """Test the five special characters are escaped."""
        assert escape_xml("<a href=\"x\">Tom & Jerry's</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&apos;s&lt;/a&gt;"
        )
        assert escape_xml(None) == ""

    def test_escape_xml_escapes_existing_entities(self):
        """Test ampersands in entity-like text are escaped once."""
        assert escape_xml("&lt;b&gt; &quot;") == "&amp;lt;b&amp;gt; &amp;quot;"

    def test_strip_tags(self):
        """Test tags are removed and text kept."""
        assert strip_tags("<p>Hello <em>there</em></p>") == "Hello there"

    def test_truncate_short_text(self):
        """Test text within the limit is returned whole."""
        assert truncate_html("<p>Short</p>", 200) == "Short"

    def test_truncate_at_word(self):
        """Test truncation at the last word boundary."""
        assert truncate_html("<p>Hello world again</p>", 13) == "Hello world..."

    def test_truncate_without_spaces(self):
        """Test a single long word is cut at the limit."""
        assert truncate_html("abcdefghij", 4) == "abcd..."
