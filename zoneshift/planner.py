"""
Plan computation.

Pipeline:
1. Anchor resolver orders user anchors plus the trip boundary anchors
2. Wake interpolator fills one wake per day between anchors
3. Event builder derives sleep/wake/bright events from each wake
4. Projector moves schedule and manual events into the display zone,
   splitting at local midnight
5. Bucketizer groups everything by local display date

Every call is a pure function of the plan: no clock reads, no caching.
"""

from .calendar_math import get_zone, parse_instant, to_zoned
from .display.bucketizer import bucketize
from .display.projector import project_manual_event, project_schedule_event
from .scheduling.anchor_resolver import AnchorResolver
from .scheduling.event_builder import build_schedule
from .scheduling.shift_strategy import calculate_shift_strategy
from .scheduling.wake_interpolator import InterpPolicy, WakeInterpolator
from .types import (
    ComputedView,
    DisplayEvent,
    InterpolationMode,
    Plan,
    PlanMeta,
    ProjectedAnchor,
    ResolvedAnchor,
    SkippedRecord,
    WakeScheduleEntry,
)

# Accepted values of prefs.display_zone; legacy plans use home/target
DISPLAY_ZONE_ALIASES = {
    "start": "start",
    "end": "end",
    "home": "start",
    "target": "end",
}


class ZonePlanner:
    """Compute the wake schedule and its display-zone projection for a plan."""

    def __init__(self, interpolation_mode: InterpolationMode | None = None):
        """
        Initialize planner.

        Args:
            interpolation_mode: Strategy override; takes precedence over the
                plan's prefs and the module default
        """
        self.interpolation_mode = interpolation_mode

    def compute_plan(self, plan: Plan) -> ComputedView:
        """
        Run the full pipeline.

        Args:
            plan: Validated plan

        Returns:
            ComputedView with schedule, display days, projected manual events
            and anchors, summary meta and skipped-record warnings

        Raises:
            ValueError: if plan-level params (zones, start sleep, end wake)
                cannot be resolved
        """
        params = plan.params
        # Plan-level fields are trusted; fail fast rather than skip
        get_zone(params.start_time_zone)
        get_zone(params.end_time_zone)
        parse_instant(params.start_sleep_instant)
        parse_instant(params.end_wake_instant)

        display_zone = self.resolve_display_zone(plan)
        policy = InterpPolicy.from_params(params, self._select_mode(plan))

        # 1. Anchors
        resolution = AnchorResolver(plan).resolve()
        warnings: list[SkippedRecord] = list(resolution.skipped)

        # 2. Wake instants
        interpolator = WakeInterpolator(policy, params.sleep_hours, params.end_time_zone)
        wakes = interpolator.interpolate(resolution.anchors)

        # 3. Schedule events
        wake_schedule = build_schedule(wakes, params.sleep_hours)

        # 4. Projection
        schedule_events = self._project_schedule(wake_schedule, display_zone)
        manual_events: list[DisplayEvent] = []
        for event in plan.events:
            projected = project_manual_event(event, display_zone)
            if isinstance(projected, SkippedRecord):
                warnings.append(projected)
                continue
            manual_events.extend(projected)

        # 5. Day buckets
        display_days = bucketize(schedule_events + manual_events)

        total_delta, strategy = calculate_shift_strategy(params)
        meta = PlanMeta(
            total_delta_hours=total_delta,
            direction=strategy.direction,
            days_needed=strategy.days_needed,
            per_day_shifts=[entry.shift_from_previous_wake_hours for entry in wake_schedule],
            interpolation_mode=policy.mode,
        )

        return ComputedView(
            wake_schedule=wake_schedule,
            display_days=display_days,
            manual_events=manual_events,
            meta=meta,
            display_zone=display_zone,
            projected_anchors=self._project_anchors(resolution.anchors, display_zone),
            warnings=warnings,
        )

    def resolve_display_zone(self, plan: Plan) -> str:
        """IANA zone for prefs.display_zone (defaults to the end zone)."""
        choice = DISPLAY_ZONE_ALIASES.get(plan.prefs.display_zone or "end")
        if choice is None:
            raise ValueError(f"Unknown display zone choice: {plan.prefs.display_zone}")
        if choice == "start":
            return plan.params.start_time_zone
        return plan.params.end_time_zone

    def _select_mode(self, plan: Plan) -> InterpolationMode | None:
        return self.interpolation_mode or plan.prefs.interpolation_mode

    def _project_schedule(
        self, wake_schedule: list[WakeScheduleEntry], display_zone: str
    ) -> list[DisplayEvent]:
        events: list[DisplayEvent] = []
        for entry in wake_schedule:
            shift = entry.shift_from_previous_wake_hours
            events.extend(project_schedule_event(entry.sleep_event, display_zone))
            events.extend(project_schedule_event(entry.wake_event, display_zone, shift))
            events.extend(project_schedule_event(entry.bright_event, display_zone))
        return events

    def _project_anchors(
        self, anchors: list[ResolvedAnchor], display_zone: str
    ) -> list[ProjectedAnchor]:
        # Authored instant, so sleep anchors show their bedtime
        return [
            ProjectedAnchor(
                anchor=item.anchor,
                zoned=to_zoned(parse_instant(item.anchor.instant), display_zone),
            )
            for item in anchors
        ]


def compute_plan(
    plan: Plan, interpolation_mode: InterpolationMode | None = None
) -> ComputedView:
    """
    Convenience function to compute a plan.

    Args:
        plan: Validated plan
        interpolation_mode: Optional strategy override

    Returns:
        ComputedView for the plan
    """
    planner = ZonePlanner(interpolation_mode)
    return planner.compute_plan(plan)
