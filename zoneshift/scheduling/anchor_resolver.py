"""
Anchor resolution.

Turns the user's anchors plus the two trip boundaries into one chronologically
sorted list of absolute wake instants:

- Start boundary: first sleep onset + sleep duration, judged against the
  start zone's calendar day
- End boundary: the plan's end wake instant, judged against the end zone's
  calendar day

A boundary anchor is only synthesized when no user anchor already falls on
that local day. Sleep anchors count by the wake they imply.
"""

import logging
from datetime import datetime

from ..calendar_math import (
    add_hours,
    format_instant,
    get_zone,
    local_day_bounds,
    parse_instant,
)
from ..types import Anchor, AnchorResolution, Plan, ResolvedAnchor, SkippedRecord

logger = logging.getLogger(__name__)

AUTO_START_ANCHOR_ID = "__auto-start"
AUTO_END_ANCHOR_ID = "__auto-end"


class AnchorResolver:
    """Resolve and order the anchors of a plan."""

    def __init__(self, plan: Plan):
        self.plan = plan
        self.params = plan.params

    def resolve(self) -> AnchorResolution:
        """
        Resolve every anchor to a UTC instant and sort them.

        Returns:
            AnchorResolution with anchors sorted ascending by instant (stable
            on ties) and any user anchors that could not be parsed
        """
        user_anchors, skipped = self._resolve_user_anchors()

        start_wake = self.start_wake_instant()
        end_wake = self.end_wake_instant()

        merged: list[ResolvedAnchor] = []
        if not self._has_anchor_on_local_day(user_anchors, start_wake, self.params.start_time_zone):
            merged.append(
                self._make_auto_anchor(AUTO_START_ANCHOR_ID, start_wake, self.params.start_time_zone)
            )
        merged.extend(user_anchors)
        if not self._has_anchor_on_local_day(user_anchors, end_wake, self.params.end_time_zone):
            merged.append(
                self._make_auto_anchor(AUTO_END_ANCHOR_ID, end_wake, self.params.end_time_zone)
            )

        # sorted() is stable, so duplicate instants keep their merge order
        ordered = sorted(merged, key=lambda item: item.instant)
        return AnchorResolution(anchors=ordered, skipped=skipped)

    def start_wake_instant(self) -> datetime:
        """First sleep onset plus the planned sleep duration."""
        start_sleep = parse_instant(self.params.start_sleep_instant)
        return add_hours(start_sleep, self.params.sleep_hours)

    def end_wake_instant(self) -> datetime:
        return parse_instant(self.params.end_wake_instant)

    def _resolve_user_anchors(self) -> tuple[list[ResolvedAnchor], list[SkippedRecord]]:
        resolved = []
        skipped = []
        for anchor in self.plan.anchors:
            try:
                get_zone(anchor.zone)
                instant = self._anchor_wake_instant(anchor)
            except ValueError as e:
                logger.warning("Skipping anchor %r: %s", anchor.id, e)
                skipped.append(SkippedRecord(record_type="anchor", record_id=anchor.id, reason=str(e)))
                continue
            resolved.append(ResolvedAnchor(anchor=anchor, instant=instant))
        return resolved, skipped

    def _anchor_wake_instant(self, anchor: Anchor) -> datetime:
        """Wake instant pinned by an anchor; sleep anchors wake after sleep_hours."""
        instant = parse_instant(anchor.instant)
        if anchor.kind == "wake":
            return instant
        if anchor.kind == "sleep":
            return add_hours(instant, self.params.sleep_hours)
        raise ValueError(f"Unknown anchor kind: {anchor.kind}")

    def _has_anchor_on_local_day(
        self, anchors: list[ResolvedAnchor], instant: datetime, tz_name: str
    ) -> bool:
        """True if any anchor falls within the local calendar day of `instant`."""
        day_start, day_end = local_day_bounds(instant, tz_name)
        return any(day_start <= item.instant < day_end for item in anchors)

    def _make_auto_anchor(self, anchor_id: str, instant: datetime, tz_name: str) -> ResolvedAnchor:
        anchor = Anchor(
            id=anchor_id,
            instant=format_instant(instant),
            zone=tz_name,
            origin="auto",
        )
        return ResolvedAnchor(anchor=anchor, instant=instant)


def resolve_anchors(plan: Plan) -> AnchorResolution:
    """Convenience wrapper around AnchorResolver."""
    return AnchorResolver(plan).resolve()
