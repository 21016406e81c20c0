"""
Schedule Layer.

Everything computed in absolute time, before any display-zone projection.

Modules:
- anchor_resolver: Order user anchors plus auto-generated trip boundaries
- wake_interpolator: Fill one wake instant per day between anchors
- event_builder: Derive sleep/wake/bright events from each wake
- shift_strategy: Zone delta, preferred direction and days needed
"""

from .anchor_resolver import AUTO_END_ANCHOR_ID, AUTO_START_ANCHOR_ID, AnchorResolver, resolve_anchors
from .event_builder import BRIGHT_WINDOW_HOURS, build_schedule, build_schedule_entry
from .shift_strategy import ShiftStrategy, calculate_shift_strategy, normalize_shift
from .wake_interpolator import (
    DEFAULT_INTERPOLATION_MODE,
    PRE_SLEEP_AWAKE_BUFFER_HOURS,
    InterpPolicy,
    WakeInterpolator,
    interpolate_wakes,
)

__all__ = [
    "AnchorResolver",
    "resolve_anchors",
    "AUTO_START_ANCHOR_ID",
    "AUTO_END_ANCHOR_ID",
    "InterpPolicy",
    "WakeInterpolator",
    "interpolate_wakes",
    "DEFAULT_INTERPOLATION_MODE",
    "PRE_SLEEP_AWAKE_BUFFER_HOURS",
    "BRIGHT_WINDOW_HOURS",
    "build_schedule",
    "build_schedule_entry",
    "ShiftStrategy",
    "calculate_shift_strategy",
    "normalize_shift",
]
