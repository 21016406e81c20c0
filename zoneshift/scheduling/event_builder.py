"""
Schedule events derived from wake instants.

Each wake instant yields a sleep block ending at the wake, a point-in-time
wake marker and a bright-light window starting at the wake. Instants stay
absolute; nothing is clamped to calendar days here.
"""

from ..calendar_math import add_hours, format_instant
from ..types import ScheduleEvent, WakeInstant, WakeScheduleEntry

BRIGHT_WINDOW_HOURS = 5.0  # Light exposure window after each wake


def event_base_id(wake: WakeInstant) -> str:
    """Anchor id when the wake is anchored, else the canonical wake instant."""
    if wake.anchor is not None:
        return wake.anchor.id
    return format_instant(wake.instant)


def build_schedule_entry(wake: WakeInstant, sleep_hours: float) -> WakeScheduleEntry:
    """
    Build the sleep, wake and bright events for one wake instant.

    Args:
        wake: Interpolated wake instant
        sleep_hours: Planned sleep duration

    Returns:
        WakeScheduleEntry sharing a base id across its three events
    """
    base_id = event_base_id(wake)
    anchor_id = wake.anchor.id if wake.anchor is not None else None

    sleep_event = ScheduleEvent(
        id=f"{base_id}-sleep",
        kind="sleep",
        start_instant=add_hours(wake.instant, -sleep_hours),
        end_instant=wake.instant,
        anchor_id=anchor_id,
    )
    wake_event = ScheduleEvent(
        id=f"{base_id}-wake",
        kind="wake",
        start_instant=wake.instant,
        anchor_id=anchor_id,
    )
    bright_event = ScheduleEvent(
        id=f"{base_id}-bright",
        kind="bright",
        start_instant=wake.instant,
        end_instant=add_hours(wake.instant, BRIGHT_WINDOW_HOURS),
        anchor_id=anchor_id,
    )

    return WakeScheduleEntry(
        wake_event=wake_event,
        sleep_event=sleep_event,
        bright_event=bright_event,
        anchor=wake.anchor,
        shift_from_previous_wake_hours=wake.shift_from_previous_wake_hours,
    )


def build_schedule(wakes: list[WakeInstant], sleep_hours: float) -> list[WakeScheduleEntry]:
    return [build_schedule_entry(wake, sleep_hours) for wake in wakes]
