"""Manager for the active reading plan.

Owns the plan state, applies user edits, and recomputes the schedule.
Date and page edits can change the pace through the solver; editing the
pace never feeds back into the date.
"""

import math
from datetime import date
from typing import Any, Optional

from loguru import logger

from ..utils import coerce_page_input, parse_iso_date
from .projector import MAX_SCHEDULE_DAYS, project_schedule
from .schemas import PlanSummary, ReadingPlanState, ScheduleEntry
from .solver import derive_pace

# Edits that trigger a pace suggestion.
SOLVER_TRIGGER_FIELDS = frozenset({"target_date", "total_pages", "pages_read"})
EDITABLE_FIELDS = frozenset(
    {"title", "total_pages", "pages_read", "target_date", "daily_pace", "starts_today"}
)


class PlanManager:
    """Manager for a single reading plan."""

    def __init__(
        self,
        state: Optional[ReadingPlanState] = None,
        today: Optional[date] = None,
    ):
        """Initialize the plan manager.

        Args:
            state: Existing plan state (defaults to a fresh plan)
            today: Reference date for projections (defaults to the system date)
        """
        self.today = today or date.today()
        self.state = state or ReadingPlanState.default(self.today)
        self._cache_key: Optional[tuple] = None
        self._cache: list[ScheduleEntry] = []

    # ========================================================================
    # Editing
    # ========================================================================

    def apply_edits(self, **changes: Any) -> Optional[int]:
        """Apply user edits to the plan state.

        Args:
            **changes: Field values keyed by ``ReadingPlanState`` field name

        Returns:
            The pace suggested by the solver and applied, or None

        Raises:
            ValueError: If an unknown field is given or the date is malformed
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown plan fields: {', '.join(sorted(unknown))}")

        updates: dict[str, Any] = {}
        if "title" in changes:
            updates["title"] = str(changes["title"] or "")
        if "total_pages" in changes:
            updates["total_pages"] = coerce_page_input(changes["total_pages"])
        if "pages_read" in changes:
            updates["pages_read"] = coerce_page_input(changes["pages_read"])
        if "target_date" in changes:
            target = parse_iso_date(changes["target_date"])
            if target is None:
                raise ValueError(f"Invalid target date: {changes['target_date']!r}")
            updates["target_date"] = target
        if "starts_today" in changes:
            updates["starts_today"] = bool(changes["starts_today"])
        if "daily_pace" in changes:
            updates["daily_pace"] = coerce_page_input(changes["daily_pace"])

        # Nothing is written until every value has been accepted.
        for name, value in updates.items():
            setattr(self.state, name, value)

        if "daily_pace" in changes:
            return None

        if not SOLVER_TRIGGER_FIELDS.intersection(changes):
            return None

        suggestion = derive_pace(
            self.state.target_date,
            self.state.total_pages,
            self.state.pages_read,
            self.state.starts_today,
            self.today,
        )
        if suggestion is not None:
            logger.debug(
                "Pace suggestion {} pages/day for target {}",
                suggestion,
                self.state.target_date,
            )
            self.state.daily_pace = suggestion
        return suggestion

    def reset(self) -> None:
        """Restore the default plan."""
        self.state = ReadingPlanState.default(self.today)

    # ========================================================================
    # Projection
    # ========================================================================

    def schedule(self) -> list[ScheduleEntry]:
        """Get the projected schedule, recomputing when inputs changed."""
        key = (
            self.state.pages_read,
            self.state.total_pages,
            self.state.daily_pace,
            self.state.starts_today,
            self.today,
        )
        if key != self._cache_key:
            self._cache = project_schedule(*key)
            self._cache_key = key
            logger.debug("Projected {} schedule entries", len(self._cache))
        return list(self._cache)

    def summary(self) -> PlanSummary:
        """Build the dashboard summary for the current plan."""
        state = self.state
        entries = self.schedule()
        pages_left = state.pages_left

        days_to_finish = None
        if state.daily_pace > 0:
            days_to_finish = math.ceil(pages_left / state.daily_pace)

        progress = 0.0
        if state.total_pages > 0:
            progress = min(100.0, state.pages_read / state.total_pages * 100)

        truncated = (
            len(entries) == MAX_SCHEDULE_DAYS
            and entries[-1].cumulative_pages_read < state.total_pages
        )

        return PlanSummary(
            title=state.title,
            total_pages=state.total_pages,
            pages_read=state.pages_read,
            pages_left=pages_left,
            daily_pace=state.daily_pace,
            progress_percent=round(progress, 1),
            is_finished=state.total_pages > 0 and pages_left == 0,
            days_to_finish=days_to_finish,
            estimated_finish_date=entries[-1].date if entries else None,
            target_date=state.target_date,
            entries=entries,
            truncated=truncated,
        )

    def advice_snapshot(self) -> tuple[str, int, int]:
        """Read-only (title, pages remaining, pace) for the advice provider."""
        return (self.state.title, self.state.pages_left, self.state.daily_pace)
