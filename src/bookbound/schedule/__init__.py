"""Schedule module for reading-pace projection and pace solving."""

from bookbound.schedule.manager import PlanManager
from bookbound.schedule.projector import (
    MAX_SCHEDULE_DAYS,
    percent_complete,
    project_schedule,
)
from bookbound.schedule.schemas import (
    DEFAULT_DAILY_PACE,
    DEFAULT_HORIZON_DAYS,
    PLAN_RECORD_VERSION,
    PlanSummary,
    ReadingPlanState,
    ScheduleEntry,
)
from bookbound.schedule.solver import days_available, derive_pace

__all__ = [
    # Manager
    "PlanManager",
    # Projection
    "MAX_SCHEDULE_DAYS",
    "percent_complete",
    "project_schedule",
    # Pace solving
    "days_available",
    "derive_pace",
    # Schemas
    "DEFAULT_DAILY_PACE",
    "DEFAULT_HORIZON_DAYS",
    "PLAN_RECORD_VERSION",
    "PlanSummary",
    "ReadingPlanState",
    "ScheduleEntry",
]
