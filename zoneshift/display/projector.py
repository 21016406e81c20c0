"""
Projection of schedule and manual events into the display zone.

Events whose local start and end fall on different dates are split at every
local midnight they cross. Pieces partition the original [start, end)
interval exactly: the first is labelled "start", every later piece "end",
and each carries its position (split_index / split_count).
"""

import logging
from dataclasses import replace
from datetime import UTC, date, datetime, timedelta

from ..calendar_math import enumerate_dates, get_zone, local_midnight, parse_instant, to_zoned
from ..types import DisplayEvent, ManualEvent, ScheduleEvent, SkippedRecord

logger = logging.getLogger(__name__)


def _effective_end_date(start_zoned: datetime, end_zoned: datetime, tz_name: str) -> date:
    """
    Local date the event ends on.

    An end exactly at local midnight belongs to the previous date so no
    zero-length trailing piece is produced.
    """
    end_date = end_zoned.date()
    midnight = local_midnight(end_date, tz_name)
    # Compare in UTC; same-zone equality ignores fold
    if end_date > start_zoned.date() and end_zoned.astimezone(UTC) == midnight.astimezone(UTC):
        end_date -= timedelta(days=1)
    return end_date


def split_at_midnight(event: DisplayEvent, tz_name: str) -> list[DisplayEvent]:
    """
    Split a projected event at each local midnight it crosses.

    Args:
        event: Unsplit event with start_zoned/end_zoned in `tz_name`
        tz_name: Display zone

    Returns:
        [event] when no split is needed, otherwise one piece per local date
    """
    if event.end_zoned is None:
        return [event]

    start_date = event.start_zoned.date()
    end_date = _effective_end_date(event.start_zoned, event.end_zoned, tz_name)
    if end_date <= start_date:
        return [event]

    dates = enumerate_dates(start_date, end_date)
    count = len(dates)
    pieces = []
    for index, day in enumerate(dates):
        piece_start = event.start_zoned if index == 0 else local_midnight(day, tz_name)
        if index == count - 1:
            piece_end = event.end_zoned
        else:
            piece_end = local_midnight(day + timedelta(days=1), tz_name)

        part = "start" if index == 0 else "end"
        pieces.append(
            DisplayEvent(
                id=f"{event.id}-{part}",
                kind=event.kind,
                start_zoned=piece_start,
                end_zoned=piece_end,
                split_from=event.id,
                split_part=part,
                split_index=index,
                split_count=count,
                anchor_id=event.anchor_id,
                shift_from_previous_wake_hours=event.shift_from_previous_wake_hours,
                title=event.title,
                color_hint=event.color_hint,
                original_zone=event.original_zone,
            )
        )
    return pieces


def project_schedule_event(
    event: ScheduleEvent,
    tz_name: str,
    shift_from_previous_wake_hours: float | None = None,
) -> list[DisplayEvent]:
    """Project a sleep, wake or bright event into the display zone."""
    projected = DisplayEvent(
        id=event.id,
        kind=event.kind,
        start_zoned=to_zoned(event.start_instant, tz_name),
        end_zoned=to_zoned(event.end_instant, tz_name) if event.end_instant else None,
        anchor_id=event.anchor_id,
        shift_from_previous_wake_hours=shift_from_previous_wake_hours,
    )
    return split_at_midnight(projected, tz_name)


def project_manual_event(event: ManualEvent, tz_name: str) -> list[DisplayEvent] | SkippedRecord:
    """
    Project a manual event from its own origin zone into the display zone.

    Returns:
        Projected (possibly split) pieces, or a SkippedRecord if the event's
        instants or zone cannot be resolved
    """
    try:
        get_zone(event.zone)
        start = parse_instant(event.start)
        end = parse_instant(event.end) if event.end else None
        if end is not None and end < start:
            raise ValueError(f"Event ends before it starts: {event.start} > {event.end}")
    except ValueError as e:
        logger.warning("Skipping event %r: %s", event.id, e)
        return SkippedRecord(record_type="event", record_id=event.id, reason=str(e))

    projected = DisplayEvent(
        id=event.id,
        kind="manual",
        start_zoned=to_zoned(start, tz_name),
        end_zoned=to_zoned(end, tz_name) if end is not None else None,
        title=event.title,
        color_hint=event.color_hint,
        original_zone=event.zone,
    )
    return split_at_midnight(projected, tz_name)


def project_event(
    event: ScheduleEvent | ManualEvent, tz_name: str
) -> list[DisplayEvent] | SkippedRecord:
    """Project either kind of event; dispatches on type."""
    if isinstance(event, ManualEvent):
        return project_manual_event(event, tz_name)
    return project_schedule_event(event, tz_name)


def _rejoin_pieces(events: list[DisplayEvent]) -> list[DisplayEvent]:
    """Merge split pieces back into their pre-split events, keeping order."""
    merged: list[DisplayEvent] = []
    by_origin: dict[str, DisplayEvent] = {}
    for event in events:
        if event.split_from is None:
            merged.append(replace(event))
            continue
        whole = by_origin.get(event.split_from)
        if whole is None:
            whole = DisplayEvent(
                id=event.split_from,
                kind=event.kind,
                start_zoned=event.start_zoned,
                end_zoned=event.end_zoned,
                anchor_id=event.anchor_id,
                shift_from_previous_wake_hours=event.shift_from_previous_wake_hours,
                title=event.title,
                color_hint=event.color_hint,
                original_zone=event.original_zone,
            )
            by_origin[event.split_from] = whole
            merged.append(whole)
            continue
        if event.start_zoned < whole.start_zoned:
            whole.start_zoned = event.start_zoned
        if event.end_zoned is not None and (
            whole.end_zoned is None or event.end_zoned > whole.end_zoned
        ):
            whole.end_zoned = event.end_zoned
    return merged


def reproject_display_events(events: list[DisplayEvent], tz_name: str) -> list[DisplayEvent]:
    """
    Move already-projected events into another display zone.

    Split pieces are re-joined first, so projecting A -> B -> A yields the
    same pieces as projecting into A directly.
    """
    get_zone(tz_name)
    result = []
    for whole in _rejoin_pieces(events):
        whole.start_zoned = to_zoned(whole.start_zoned, tz_name)
        if whole.end_zoned is not None:
            whole.end_zoned = to_zoned(whole.end_zoned, tz_name)
        result.extend(split_at_midnight(whole, tz_name))
    return result
