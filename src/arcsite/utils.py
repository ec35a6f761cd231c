"""
Utility functions for arcsite.

Date formatting and text helpers shared by the content pipeline and the
RSS exporter.
"""

import re
from datetime import date, datetime, timezone
from email.utils import format_datetime
from typing import Optional
from xml.sax.saxutils import escape


XML_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse an ISO 8601 calendar date such as ``2025-05-28``.
    
    Returns:
        The parsed date, or None when the value is missing or malformed
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def ordinal_suffix(day: int) -> str:
    """
    English ordinal suffix for a day of the month.
    
    Examples:
        >>> ordinal_suffix(1), ordinal_suffix(12), ordinal_suffix(23)
        ('st', 'th', 'rd')
    """
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_display_date(value: date) -> str:
    """
    Format a date for display, e.g. ``May 28th, 2025``.
    
    Month names are always English regardless of the process locale.
    """
    months = (
        "January", "February", "March", "April", "May", "June", "July",
        "August", "September", "October", "November", "December"
    )
    return f"{months[value.month - 1]} {value.day}{ordinal_suffix(value.day)}, {value.year}"


def format_rfc822(value: datetime) -> str:
    """Format a datetime the way RSS ``pubDate`` expects (RFC 822)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value)


def date_to_rfc822(value: Optional[str]) -> str:
    """
    Convert an ISO date string to an RFC 822 timestamp at UTC midnight.
    
    Falls back to the current time when the value cannot be parsed.
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        return format_rfc822(datetime.now(timezone.utc))
    return format_rfc822(datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc))


def escape_xml(text: Optional[str]) -> str:
    """Escape the five XML special characters."""
    if text is None:
        return ""
    return escape(text, XML_QUOTE_ENTITIES)


def strip_tags(html: str) -> str:
    """Remove HTML tags from text."""
    return re.sub(r'<[^>]+>', '', html)


def truncate_html(html: str, max_length: int = 200) -> str:
    """
    Strip tags and truncate to ``max_length`` characters.
    
    Truncation happens at the last word boundary within the limit and
    appends ``...``.
    
    Examples:
        >>> truncate_html("<p>Hello world</p>", 8)
        'Hello...'
    """
    text = strip_tags(html).strip()
    if len(text) <= max_length:
        return text
    
    last_space = text.rfind(' ', 0, max_length + 1)
    if last_space > 0:
        return text[:last_space] + "..."
    
    return text[:max_length] + "..."
