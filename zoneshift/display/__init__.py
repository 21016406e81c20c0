"""
Display Layer.

Projects absolute-time events into the chosen display zone.

Modules:
- projector: Zone projection and splitting at local midnight
- bucketizer: Grouping by local display date
"""

from .bucketizer import bucketize
from .projector import (
    project_event,
    project_manual_event,
    project_schedule_event,
    reproject_display_events,
    split_at_midnight,
)

__all__ = [
    "bucketize",
    "project_event",
    "project_manual_event",
    "project_schedule_event",
    "reproject_display_events",
    "split_at_midnight",
]
