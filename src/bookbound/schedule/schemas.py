"""Pydantic schemas for reading plans and projected schedules."""

from datetime import date, timedelta
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..utils import coerce_page_input, parse_iso_date

DEFAULT_DAILY_PACE = 20
DEFAULT_HORIZON_DAYS = 14

# Version 1 records used camelCase field names.
PLAN_RECORD_VERSION = 2
LEGACY_FIELD_NAMES = {
    "bookTitle": "title",
    "totalPages": "total_pages",
    "pagesRead": "pages_read",
    "targetFinishDate": "target_date",
    "pagesPerDay": "daily_pace",
    "startsToday": "starts_today",
}


# ============================================================================
# Plan State
# ============================================================================


class ReadingPlanState(BaseModel):
    """The editable inputs of a reading plan.

    A ``total_pages`` of 0 means no book is configured yet. ``pages_read``
    may exceed ``total_pages``; the projector treats that as nothing left
    to read. A ``daily_pace`` of 0 or less disables projection.
    """

    title: str = ""
    total_pages: int = Field(default=0, ge=0)
    pages_read: int = Field(default=0, ge=0)
    target_date: date
    daily_pace: int = DEFAULT_DAILY_PACE
    starts_today: bool = False

    model_config = {"validate_assignment": True}

    @classmethod
    def default(cls, today: date) -> "ReadingPlanState":
        """Create a fresh plan with a two-week horizon and the default pace."""
        return cls(target_date=today + timedelta(days=DEFAULT_HORIZON_DAYS))

    @property
    def pages_left(self) -> int:
        """Pages still to read, never negative."""
        return max(0, self.total_pages - self.pages_read)

    def to_record(self) -> dict[str, Any]:
        """Serialize to a flat, versioned, JSON-safe record."""
        return {
            "version": PLAN_RECORD_VERSION,
            "title": self.title,
            "total_pages": self.total_pages,
            "pages_read": self.pages_read,
            "target_date": self.target_date.isoformat(),
            "daily_pace": self.daily_pace,
            "starts_today": self.starts_today,
        }

    @classmethod
    def from_record(cls, record: Any, today: date) -> "ReadingPlanState":
        """Load a saved record, defaulting anything missing or unreadable.

        Args:
            record: Saved record (current or legacy field names)
            today: Reference date used for the default target date

        Returns:
            A valid plan state
        """
        state = cls.default(today)
        if not isinstance(record, dict):
            return state

        fields = {}
        for key, value in record.items():
            fields[LEGACY_FIELD_NAMES.get(key, key)] = value

        title = fields.get("title")
        if isinstance(title, str):
            state.title = title

        for name in ("total_pages", "pages_read"):
            if name in fields:
                setattr(state, name, coerce_page_input(fields[name]))

        if "daily_pace" in fields:
            pace = fields["daily_pace"]
            if isinstance(pace, int) and not isinstance(pace, bool):
                state.daily_pace = pace
            else:
                state.daily_pace = coerce_page_input(pace)

        target = parse_iso_date(fields.get("target_date"))
        if target is not None:
            state.target_date = target

        starts_today = fields.get("starts_today")
        if isinstance(starts_today, bool):
            state.starts_today = starts_today

        return state


# ============================================================================
# Schedule Entries
# ============================================================================


class ScheduleEntry(BaseModel):
    """One planned reading day."""

    date: date
    pages_planned_today: int
    start_page: int
    end_page: int
    cumulative_pages_read: int
    percent_complete: int

    model_config = {"frozen": True}


class PlanSummary(BaseModel):
    """Dashboard view of a projected plan."""

    title: str
    total_pages: int
    pages_read: int
    pages_left: int
    daily_pace: int
    progress_percent: float
    is_finished: bool
    days_to_finish: Optional[int]
    estimated_finish_date: Optional[date]
    target_date: date
    entries: list[ScheduleEntry]
    truncated: bool
