"""
Utility functions for formatting worklog report elements.
"""

from datetime import date, timedelta
from typing import Optional


def format_duration(duration: timedelta) -> str:
    """
    Format a timedelta as a Jira-style duration string.

    Args:
        duration: The timedelta to format

    Returns:
        Formatted duration string (e.g., "2h 30m", "45m")
    """
    total_seconds = int(duration.total_seconds())

    if total_seconds <= 0:
        return "0m"

    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0 or not parts:
        parts.append(f"{minutes}m")

    return " ".join(parts)


def format_seconds(seconds: Optional[int]) -> str:
    """Format a number of seconds, treating a missing value as zero."""
    return format_duration(timedelta(seconds=seconds or 0))


def format_iso_date(day: date) -> str:
    """Format a calendar date as ``YYYY-MM-DD``."""
    return day.isoformat()


def truncate_text(text: str, max_length: int = 60) -> str:
    """
    Truncate text to a maximum length with ellipsis.

    Args:
        text: Text to potentially truncate
        max_length: Maximum length

    Returns:
        Truncated text with ellipsis if needed
    """
    if len(text) <= max_length:
        return text

    return text[: max_length - 3] + "..."


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """Return singular or plural form based on count."""
    if plural is None:
        plural = singular + "s"

    return singular if count == 1 else plural
