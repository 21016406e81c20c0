"""
Wake-time interpolation between anchors.

Two strategies sit behind the same interface, selected by InterpPolicy.mode:

fixed_cadence (default):
    Step forward from each anchor in exact 24h increments and stop before the
    candidate would land within 6h of the next anchor's sleep onset. Shift
    limits are not applied to the step; the buffer rule takes precedence.

proportional:
    Spread the segment's net deviation from a 24h cadence evenly over its
    calendar days, clamping the per-day step to the policy limits.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..calendar_math import MINUTES_PER_DAY, add_hours, enumerate_dates, local_date, minutes_between
from ..types import InterpolationMode, PlanParams, ResolvedAnchor, WakeInstant

PRE_SLEEP_AWAKE_BUFFER_HOURS = 6.0  # Minimum planned wakefulness before the next anchor's sleep
DEFAULT_INTERPOLATION_MODE: InterpolationMode = "fixed_cadence"

DAY = timedelta(hours=24)


@dataclass
class InterpPolicy:
    """Shift-rate policy for interpolation."""

    max_later_per_day: float  # Hours per day the wake time may move later
    max_earlier_per_day: float  # Hours per day the wake time may move earlier
    mode: InterpolationMode = DEFAULT_INTERPOLATION_MODE

    @classmethod
    def from_params(
        cls, params: PlanParams, mode: InterpolationMode | None = None
    ) -> "InterpPolicy":
        return cls(
            max_later_per_day=params.max_shift_later_per_day_hours or 0.0,
            max_earlier_per_day=params.max_shift_earlier_per_day_hours or 0.0,
            mode=mode or DEFAULT_INTERPOLATION_MODE,
        )


class WakeInterpolator:
    """
    Produce one wake instant per elapsed day between sorted anchors.

    Output instants are strictly increasing; anchors sharing an instant with
    an earlier one are dropped.
    """

    def __init__(self, policy: InterpPolicy, sleep_hours: float, day_zone: str):
        """
        Initialize interpolator.

        Args:
            policy: Shift-rate policy and strategy
            sleep_hours: Planned sleep duration (for the pre-sleep buffer)
            day_zone: Zone whose calendar counts days in proportional mode
        """
        if policy.mode not in ("fixed_cadence", "proportional"):
            raise ValueError(f"Unknown interpolation mode: {policy.mode}")
        self.policy = policy
        self.sleep_hours = sleep_hours
        self.day_zone = day_zone

    def interpolate(self, anchors: list[ResolvedAnchor]) -> list[WakeInstant]:
        """
        Fill wake instants between consecutive anchors.

        Args:
            anchors: Anchors sorted ascending by instant

        Returns:
            WakeInstants with shift_from_previous_wake_hours populated
        """
        if not anchors:
            return []

        raw: list[WakeInstant] = []
        for left, right in zip(anchors, anchors[1:]):
            raw.append(WakeInstant(instant=left.instant, anchor=left.anchor))
            for instant in self._fill_segment(left.instant, right.instant):
                raw.append(WakeInstant(instant=instant))
        last = anchors[-1]
        raw.append(WakeInstant(instant=last.instant, anchor=last.anchor))

        wakes = self._drop_non_increasing(raw)
        self._apply_shifts(wakes)
        return wakes

    def _fill_segment(self, left: datetime, right: datetime) -> list[datetime]:
        if self.policy.mode == "proportional":
            return self._fill_proportional(left, right)
        return self._fill_fixed_cadence(left, right)

    def _fill_fixed_cadence(self, left: datetime, right: datetime) -> list[datetime]:
        next_sleep_start = add_hours(right, -self.sleep_hours)
        stop_before = add_hours(next_sleep_start, -PRE_SLEEP_AWAKE_BUFFER_HOURS)

        fill = []
        candidate = left + DAY
        while candidate < stop_before:
            fill.append(candidate)
            candidate += DAY
        return fill

    def _fill_proportional(self, left: datetime, right: datetime) -> list[datetime]:
        segment_dates = enumerate_dates(
            local_date(left, self.day_zone), local_date(right, self.day_zone)
        )
        intervals = len(segment_dates) - 1
        if intervals < 2:
            return []

        total_minutes = minutes_between(left, right)
        raw_per_day = (total_minutes - intervals * MINUTES_PER_DAY) / intervals
        step_minutes = _clamp(
            raw_per_day,
            -round(self.policy.max_earlier_per_day * 60),
            round(self.policy.max_later_per_day * 60),
        )

        fill = []
        current = left
        for _ in range(1, intervals):
            current = current + DAY + timedelta(minutes=step_minutes)
            fill.append(current)
        return fill

    def _drop_non_increasing(self, wakes: list[WakeInstant]) -> list[WakeInstant]:
        result: list[WakeInstant] = []
        for wake in wakes:
            if result and wake.instant <= result[-1].instant:
                continue
            result.append(wake)
        return result

    def _apply_shifts(self, wakes: list[WakeInstant]) -> None:
        previous = None
        for wake in wakes:
            if previous is None:
                wake.shift_from_previous_wake_hours = 0.0
            else:
                wake.shift_from_previous_wake_hours = shift_hours(previous.instant, wake.instant)
            previous = wake


def shift_hours(previous: datetime, current: datetime) -> float:
    """Deviation from an exact 24h cadence, in hours (negative = earlier)."""
    shift = (minutes_between(previous, current) - MINUTES_PER_DAY) / 60
    # Avoid -0.0 in output
    return 0.0 if math.isclose(shift, 0.0, abs_tol=1e-9) else shift


def _clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def interpolate_wakes(
    anchors: list[ResolvedAnchor],
    policy: InterpPolicy,
    sleep_hours: float,
    day_zone: str,
) -> list[WakeInstant]:
    """Convenience function around WakeInterpolator."""
    return WakeInterpolator(policy, sleep_hours, day_zone).interpolate(anchors)
