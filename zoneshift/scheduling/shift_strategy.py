"""
Shift direction and duration estimates.

The wake schedule itself is driven by anchors; these numbers are the summary
shown next to it:
- total_delta_hours: how far the end zone's clock is ahead of the start zone's
- direction: whether moving the wake time later or earlier aligns sooner
- days_needed: days to cover the shift at the configured per-day rate

Ties between directions go to "later" (delays are the easier direction).
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from ..calendar_math import get_timezone_offset_hours, parse_instant
from ..types import PlanParams

ShiftDirection = Literal["later", "earlier"]


@dataclass
class ShiftStrategy:
    """Preferred way to cover the zone delta."""

    direction: ShiftDirection
    shift_amount_hours: float  # Signed: positive = later
    days_needed: float  # Whole days, or math.inf with a zero rate


def calculate_zone_delta_hours(start_tz: str, end_tz: str, instant: datetime) -> float:
    """
    Offset difference between two zones at an instant.

    Returns:
        Hours the end zone is ahead of the start zone (LA -> Taipei in
        October = +15.0)
    """
    return get_timezone_offset_hours(end_tz, instant) - get_timezone_offset_hours(start_tz, instant)


def _days_for(shift: float, max_per_day: float) -> float:
    if shift == 0:
        return 0
    if max_per_day <= 0:
        return math.inf
    return abs(shift) / max_per_day


def _ceil_days(shift: float, max_per_day: float) -> float:
    days = _days_for(shift, max_per_day)
    if days == 0 or math.isinf(days):
        return days
    return max(1, math.ceil(days))


def normalize_shift(params: PlanParams, total_delta_hours: float) -> ShiftStrategy:
    """
    Pick the direction that reaches alignment in fewer days.

    Args:
        params: Plan parameters (for the per-day limits)
        total_delta_hours: Output of calculate_zone_delta_hours

    Returns:
        ShiftStrategy for the faster direction
    """
    max_later = params.max_shift_later_per_day_hours or 0.0
    max_earlier = params.max_shift_earlier_per_day_hours or 0.0

    # Flying east means waking earlier by the clock difference
    base_shift = -total_delta_hours
    later_shift = base_shift if base_shift >= 0 else base_shift + 24
    earlier_shift = base_shift if base_shift <= 0 else base_shift - 24

    later_days = _days_for(later_shift, max_later)
    earlier_days = _days_for(earlier_shift, max_earlier)

    if later_days <= earlier_days:
        return ShiftStrategy(
            direction="later",
            shift_amount_hours=later_shift,
            days_needed=_ceil_days(later_shift, max_later),
        )
    return ShiftStrategy(
        direction="earlier",
        shift_amount_hours=earlier_shift,
        days_needed=_ceil_days(earlier_shift, max_earlier),
    )


def calculate_shift_strategy(params: PlanParams) -> tuple[float, ShiftStrategy]:
    """
    Zone delta at the first sleep onset plus the preferred strategy.

    Returns:
        Tuple of (total_delta_hours, ShiftStrategy)
    """
    reference = parse_instant(params.start_sleep_instant)
    total_delta = calculate_zone_delta_hours(params.start_time_zone, params.end_time_zone, reference)
    return total_delta, normalize_shift(params, total_delta)
