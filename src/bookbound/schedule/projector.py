"""Day-by-day reading schedule projection.

Turns the current reading state into an ordered list of daily targets,
one entry per calendar day, until the book is finished. Every day is a
reading day; weekends and holidays are not treated specially.
"""

from datetime import date, timedelta

from .schemas import ScheduleEntry

# Upper bound on emitted entries (one year of daily reading). Guarantees
# termination for inputs like a pace of 1 on a very long book.
MAX_SCHEDULE_DAYS = 365


def percent_complete(pages_read: int, total_pages: int) -> int:
    """Percentage of the book read, rounded half up to a whole number.

    Args:
        pages_read: Cumulative pages read
        total_pages: Book length

    Returns:
        Integer percentage, 0 when there is no book length
    """
    if total_pages <= 0:
        return 0
    # Integer form of floor(read / total * 100 + 0.5), exact for all inputs
    return (pages_read * 200 + total_pages) // (total_pages * 2)


def project_schedule(
    pages_read: int,
    total_pages: int,
    daily_pace: int,
    starts_today: bool,
    reference_date: date,
) -> list[ScheduleEntry]:
    """Project a daily reading schedule.

    Args:
        pages_read: Pages already read
        total_pages: Book length
        daily_pace: Pages to read per day
        starts_today: Whether day one is ``reference_date`` or the day after
        reference_date: "Today", supplied by the caller

    Returns:
        Schedule entries in date order; empty when nothing is left to read
        or no positive pace is set, and at most ``MAX_SCHEDULE_DAYS`` long
    """
    entries: list[ScheduleEntry] = []
    if max(0, total_pages - pages_read) <= 0 or daily_pace <= 0:
        return entries

    current_date = reference_date if starts_today else reference_date + timedelta(days=1)
    cumulative = pages_read

    while cumulative < total_pages and len(entries) < MAX_SCHEDULE_DAYS:
        read_today = min(daily_pace, total_pages - cumulative)
        start_page = cumulative + 1
        cumulative += read_today

        entries.append(
            ScheduleEntry(
                date=current_date,
                pages_planned_today=read_today,
                start_page=start_page,
                end_page=cumulative,
                cumulative_pages_read=cumulative,
                percent_complete=percent_complete(cumulative, total_pages),
            )
        )
        current_date += timedelta(days=1)

    return entries
