"""
ZoneShift Plan Computation

Computes a day-by-day sleep/wake/bright-light schedule that moves a traveler
from a start timezone to an end timezone, and projects it, together with
manual calendar events, into a display timezone.

Main entry point: compute_plan (ZonePlanner)
"""

from .planner import ZonePlanner, compute_plan
from .serialization import normalize_plan, plan_from_dict, view_to_dict
from .types import (
    Anchor,
    ComputedView,
    DisplayDay,
    DisplayEvent,
    ManualEvent,
    Plan,
    PlanMeta,
    PlanParams,
    PlanPrefs,
    ProjectedAnchor,
    ScheduleEvent,
    SkippedRecord,
    WakeScheduleEntry,
)

__all__ = [
    # Types
    "Plan",
    "PlanParams",
    "PlanPrefs",
    "Anchor",
    "ManualEvent",
    "ScheduleEvent",
    "WakeScheduleEntry",
    "DisplayEvent",
    "DisplayDay",
    "ProjectedAnchor",
    "PlanMeta",
    "ComputedView",
    "SkippedRecord",
    # Planner
    "ZonePlanner",
    "compute_plan",
    # Serialization
    "plan_from_dict",
    "normalize_plan",
    "view_to_dict",
]
