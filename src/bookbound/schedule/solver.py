"""Derive the daily pace needed to finish by a target date."""

import math
from datetime import date
from typing import Optional, Union

from ..utils import parse_iso_date


def days_available(reference_date: date, target_date: date, starts_today: bool) -> int:
    """Count reading days from the start day through the target date.

    Args:
        reference_date: "Today"
        target_date: Desired completion day
        starts_today: Whether today counts as a reading day

    Returns:
        Number of reading days (zero or negative when the date has passed)
    """
    return (target_date - reference_date).days + (1 if starts_today else 0)


def derive_pace(
    target_date: Union[date, str, None],
    total_pages: int,
    pages_read: int,
    starts_today: bool,
    reference_date: date,
) -> Optional[int]:
    """Suggest the pages per day needed to finish by ``target_date``.

    The pace is rounded up so the deadline is met or beaten.

    Args:
        target_date: Completion date (date or ISO string)
        total_pages: Book length
        pages_read: Pages already read
        starts_today: Whether today counts as a reading day
        reference_date: "Today", supplied by the caller

    Returns:
        Suggested pace, or None when no suggestion can be made
        (malformed or past date, nothing left to read)
    """
    target = parse_iso_date(target_date)
    if target is None:
        return None

    days = days_available(reference_date, target, starts_today)
    pages_remaining = max(0, total_pages - pages_read)

    if days <= 0 or pages_remaining <= 0:
        return None

    return math.ceil(pages_remaining / days)
