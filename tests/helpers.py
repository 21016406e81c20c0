"""
Test helper functions for computed plan validation.

These functions can be imported by test modules for view analysis.
"""

import sys
from datetime import UTC, datetime
from pathlib import Path

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from zoneshift.types import Anchor, ComputedView, DisplayEvent, ManualEvent, Plan, PlanParams, PlanPrefs


def make_params(**overrides) -> PlanParams:
    """LA -> Taipei trip in October 2024, overridable per test."""
    values = {
        "start_time_zone": "America/Los_Angeles",
        "end_time_zone": "Asia/Taipei",
        "start_sleep_instant": "2024-10-17T08:30:00Z",
        "end_wake_instant": "2024-10-26T01:00:00Z",
        "sleep_hours": 8,
        "max_shift_later_per_day_hours": 1.5,
        "max_shift_earlier_per_day_hours": 1.0,
    }
    values.update(overrides)
    return PlanParams(**values)


def make_plan(
    anchors: list[Anchor] | None = None,
    events: list[ManualEvent] | None = None,
    display_zone: str = "end",
    **param_overrides,
) -> Plan:
    """Build a plan around make_params()."""
    return Plan(
        id="plan",
        params=make_params(**param_overrides),
        anchors=anchors or [],
        events=events or [],
        prefs=PlanPrefs(display_zone=display_zone),
    )


def all_display_events(view: ComputedView) -> list[DisplayEvent]:
    """Flatten display days into one list."""
    return [event for day in view.display_days for event in day.events]


def group_pieces(events: list[DisplayEvent]) -> dict[str, list[DisplayEvent]]:
    """
    Group split pieces by the event they were split from.

    Returns:
        {split_from: pieces ordered by split_index}
    """
    groups: dict[str, list[DisplayEvent]] = {}
    for event in events:
        if event.split_from is None:
            continue
        groups.setdefault(event.split_from, []).append(event)
    for pieces in groups.values():
        pieces.sort(key=lambda e: e.split_index)
    return groups


def absolute_intervals(events: list[DisplayEvent]) -> list[tuple[str, datetime, datetime | None]]:
    """
    Pre-split (id, start, end) intervals in UTC, sorted.

    Split pieces are re-joined so views in different display zones can be
    compared instant-for-instant.
    """
    intervals = []
    for event in events:
        if event.split_from is None:
            end = event.end_zoned.astimezone(UTC) if event.end_zoned else None
            intervals.append((event.id, event.start_zoned.astimezone(UTC), end))
    for origin, pieces in group_pieces(events).items():
        intervals.append(
            (
                origin,
                pieces[0].start_zoned.astimezone(UTC),
                pieces[-1].end_zoned.astimezone(UTC),
            )
        )
    return sorted(intervals, key=lambda item: (item[1], item[0]))


def is_local_midnight(value: datetime) -> bool:
    return value.hour == 0 and value.minute == 0 and value.second == 0
