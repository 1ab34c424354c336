"""Utility functions for bookbound."""

from datetime import date
from typing import Optional, Union


def coerce_page_input(value: Union[int, float, str, None]) -> int:
    """
    Convert a user-entered page count into a non-negative integer.

    Mirrors how the planner form treats numeric fields: a blank entry
    means zero, negatives are clamped to zero, and anything that does
    not parse as a number is treated as zero.

    Args:
        value: Raw input (int, float, numeric string, blank or None)

    Returns:
        A non-negative integer

    Example:
        >>> coerce_page_input("120")
        120
        >>> coerce_page_input("")
        0
        >>> coerce_page_input(-4)
        0
        >>> coerce_page_input("abc")
        0
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
        try:
            number = int(value)
        except ValueError:
            try:
                number = int(float(value))
            except (ValueError, OverflowError):
                return 0
    else:
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            return 0

    return max(0, number)


def parse_iso_date(value: Union[date, str, None]) -> Optional[date]:
    """
    Parse a calendar date from a ``YYYY-MM-DD`` string.

    Args:
        value: A date, an ISO date string, or None

    Returns:
        The parsed date, or None if the value is missing or malformed

    Example:
        >>> parse_iso_date("2026-03-01")
        datetime.date(2026, 3, 1)
        >>> parse_iso_date("next tuesday") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def format_plan_date(value: date) -> str:
    """Format a date the way roadmap rows show it, e.g. 'Monday, Jan 5'."""
    return f"{value.strftime('%A, %b')} {value.day}"


def format_long_date(value: date) -> str:
    """Format a date with its year, e.g. 'Jan 5, 2026'."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"
