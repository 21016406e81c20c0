"""
Tests for DST (Daylight Saving Time) transition handling.

Wake instants are stepped in absolute time, so wall-clock times move by the
DST offset change. Local days around a transition are 23h or 25h long and
split pieces must follow them.
"""

from datetime import UTC

import time_machine

from zoneshift.calendar_math import hours_between, parse_instant
from zoneshift.display.projector import project_manual_event
from zoneshift.planner import compute_plan
from zoneshift.types import ManualEvent

from helpers import all_display_events, is_local_midnight, make_plan

LA = "America/Los_Angeles"


def elapsed_hours(piece) -> float:
    """Absolute duration; same-zone datetime subtraction would use wall-clock."""
    return hours_between(piece.start_zoned.astimezone(UTC), piece.end_zoned.astimezone(UTC))


def la_event(event_id: str, start: str, end: str) -> ManualEvent:
    return ManualEvent(id=event_id, title="Overnight", start=start, end=end, zone=LA)


def taipei_to_la_plan():
    """Taipei -> LA trip crossing US fall back (Nov 3, 2024), displayed in LA."""
    return make_plan(
        start_time_zone="Asia/Taipei",
        end_time_zone=LA,
        start_sleep_instant="2024-10-30T15:00:00Z",
        end_wake_instant="2024-11-05T15:00:00Z",
    )


class TestDSTTransitions:
    """Test plan computation across DST transitions."""

    @time_machine.travel("2024-10-01T12:00:00Z", tick=False)
    def test_wall_clock_wake_moves_with_fall_back(self):
        """
        Fills stay 24h apart in absolute time.

        16:00 PDT before Nov 3 becomes 15:00 PST after it.
        """
        view = compute_plan(taipei_to_la_plan())

        wake_events = [e for e in all_display_events(view) if e.kind == "wake"]
        assert [e.start_zoned.hour for e in wake_events] == [16, 16, 16, 16, 15, 15, 7]
        assert [e.shift_from_previous_wake_hours for e in wake_events] == [
            0.0,
            0.0,
            0.0,
            0.0,
            0.0,
            0.0,
            -8.0,
        ]

    @time_machine.travel("2024-11-03T09:30:00Z", tick=False)
    def test_manual_event_over_repeated_hour(self):
        """
        LA 22:00 PDT Nov 2 -> 02:00 PST Nov 3.

        The 01:00 hour repeats, so the piece after midnight lasts 3 hours.
        """
        pieces = project_manual_event(
            la_event("overnight", "2024-11-03T05:00:00Z", "2024-11-03T10:00:00Z"), LA
        )

        assert [p.id for p in pieces] == ["overnight-start", "overnight-end"]
        assert elapsed_hours(pieces[0]) == 2
        assert elapsed_hours(pieces[1]) == 3
        assert pieces[1].end_zoned.hour == 2

    def test_full_fall_back_day_is_25_hours(self):
        """Noon Nov 2 -> noon Nov 4: the middle piece spans all of Nov 3."""
        pieces = project_manual_event(
            la_event("conference", "2024-11-02T19:00:00Z", "2024-11-04T20:00:00Z"), LA
        )

        durations = [elapsed_hours(p) for p in pieces]
        assert durations == [12, 25, 12]
        assert all(is_local_midnight(p.start_zoned) for p in pieces[1:])

    @time_machine.travel("2024-03-01T12:00:00Z", tick=False)
    def test_manual_event_over_spring_forward(self):
        """LA 22:00 PST Mar 9 -> 04:00 PDT Mar 10: 02:00 is skipped."""
        pieces = project_manual_event(
            la_event("red-eye", "2024-03-10T06:00:00Z", "2024-03-10T11:00:00Z"), LA
        )

        assert elapsed_hours(pieces[0]) == 2
        assert elapsed_hours(pieces[1]) == 3
        assert pieces[1].start_zoned == parse_instant("2024-03-10T08:00:00Z")

    def test_end_at_repeated_midnight_is_split(self):
        """
        Havana falls back from 01:00 to 00:00 on Nov 3, 2024.

        An event ending at the second 00:00 ends an hour after the first
        midnight, so it still owns a piece on Nov 3.
        """
        pieces = project_manual_event(
            ManualEvent(
                id="late-show",
                title="Show",
                start="2024-11-03T02:00:00Z",
                end="2024-11-03T05:00:00Z",
                zone="America/Havana",
            ),
            "America/Havana",
        )

        assert [p.id for p in pieces] == ["late-show-start", "late-show-end"]
        assert elapsed_hours(pieces[0]) == 2
        assert elapsed_hours(pieces[1]) == 1
        assert pieces[1].end_zoned.fold == 1

    def test_end_at_first_midnight_is_not_split(self):
        pieces = project_manual_event(
            ManualEvent(
                id="early-show",
                title="Show",
                start="2024-11-03T02:00:00Z",
                end="2024-11-03T04:00:00Z",
                zone="America/Havana",
            ),
            "America/Havana",
        )

        assert [p.id for p in pieces] == ["early-show"]

    def test_split_pieces_land_on_local_midnight(self):
        view = compute_plan(taipei_to_la_plan())

        for event in all_display_events(view):
            if event.split_part == "end":
                assert is_local_midnight(event.start_zoned)


class TestNoClockDependency:
    """Results depend only on the plan, never on the current time."""

    def test_same_view_at_different_times(self):
        with time_machine.travel("2024-10-01T00:00:00Z", tick=False):
            before_trip = compute_plan(taipei_to_la_plan())
        with time_machine.travel("2031-06-15T18:45:00Z", tick=False):
            years_later = compute_plan(taipei_to_la_plan())

        assert before_trip == years_later
