"""
Grouping of display events into calendar days.
"""

from collections import defaultdict
from datetime import UTC, date

from ..types import DisplayDay, DisplayEvent


def _absolute_start(event: DisplayEvent):
    # Wall-clock comparison is ambiguous during a repeated DST hour
    return event.start_zoned.astimezone(UTC)


def bucketize(events: list[DisplayEvent]) -> list[DisplayDay]:
    """
    Group events by the local date of their start.

    Only dates that contain at least one event start get a bucket. Events
    within a day are ordered by start; ties keep their input order.

    Args:
        events: Projected (and possibly split) events, all in one display zone

    Returns:
        DisplayDays sorted ascending by date
    """
    by_date: dict[date, list[DisplayEvent]] = defaultdict(list)
    for event in events:
        by_date[event.start_zoned.date()].append(event)

    return [
        DisplayDay(date=day, events=sorted(by_date[day], key=_absolute_start))
        for day in sorted(by_date)
    ]
