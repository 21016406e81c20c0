"""
Data structures for plan computation.

Input types (Plan, Anchor, ManualEvent) mirror what the external validator
hands over. Everything else is derived by the pipeline and never persisted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

# =============================================================================
# Input Types
# =============================================================================

DisplayZoneChoice = Literal["start", "end"]

InterpolationMode = Literal[
    "fixed_cadence",  # 24h steps, stop 6h before the next anchor's sleep onset
    "proportional",  # Even per-day shift across a segment, clamped to policy
]

AnchorOrigin = Literal["user", "auto"]

AnchorKind = Literal[
    "wake",  # instant is the wake time
    "sleep",  # instant is sleep onset; wake follows after sleep_hours
]


@dataclass
class Anchor:
    """
    Fixed commitment to be awake at a specific civil moment.

    Sleep anchors pin a bedtime instead; the resolver turns them into the
    wake that follows.

    Auto anchors are synthesized by the resolver for the trip boundaries and
    are never editable; consumers check `origin`, not the id.
    """

    id: str
    instant: str  # ISO 8601 with offset or "Z"
    zone: str  # IANA timezone the anchor was authored in
    kind: AnchorKind = "wake"
    note: str | None = None
    origin: AnchorOrigin = "user"

    @property
    def editable(self) -> bool:
        """True for user-authored anchors."""
        return self.origin == "user"


@dataclass
class ManualEvent:
    """Calendar appointment, independent of the sleep schedule."""

    id: str
    title: str
    start: str  # ISO 8601 with offset or "Z"
    zone: str  # IANA timezone the event was authored in
    end: str | None = None
    color_hint: str | None = None


@dataclass
class PlanParams:
    """Trip parameters."""

    start_time_zone: str
    end_time_zone: str
    start_sleep_instant: str  # First sleep onset, ISO 8601
    end_wake_instant: str  # Wake instant the trip must be aligned to, ISO 8601
    sleep_hours: float  # 0.25 - 18
    max_shift_later_per_day_hours: float  # 0 - 12
    max_shift_earlier_per_day_hours: float  # 0 - 12


@dataclass
class PlanPrefs:
    """Display preferences."""

    display_zone: DisplayZoneChoice = "end"
    interpolation_mode: InterpolationMode | None = None  # None = deployment default


@dataclass
class Plan:
    """Validated, read-only plan input."""

    params: PlanParams
    anchors: list[Anchor] = field(default_factory=list)
    events: list[ManualEvent] = field(default_factory=list)
    prefs: PlanPrefs = field(default_factory=PlanPrefs)
    id: str | None = None


# =============================================================================
# Per-record Results
# =============================================================================


@dataclass
class SkippedRecord:
    """A user record that could not be resolved and was left out of the view."""

    record_type: Literal["anchor", "event"]
    record_id: str
    reason: str


@dataclass
class ResolvedAnchor:
    """Anchor paired with its absolute UTC instant."""

    anchor: Anchor
    instant: datetime  # Aware, UTC


@dataclass
class AnchorResolution:
    """Sorted anchors plus anything that had to be skipped."""

    anchors: list[ResolvedAnchor]
    skipped: list[SkippedRecord] = field(default_factory=list)


# =============================================================================
# Schedule Types
# =============================================================================

ScheduleKind = Literal["wake", "sleep", "bright"]
DisplayKind = Literal["wake", "sleep", "bright", "manual"]
SplitPart = Literal["start", "end"]


@dataclass
class WakeInstant:
    """One interpolated wake instant."""

    instant: datetime  # Aware, UTC
    anchor: Anchor | None = None  # Set when the instant is an anchor
    shift_from_previous_wake_hours: float = 0.0


@dataclass
class ScheduleEvent:
    """Sleep, wake or bright-light event in absolute time."""

    id: str
    kind: ScheduleKind
    start_instant: datetime
    end_instant: datetime | None = None  # None for point-in-time wake markers
    anchor_id: str | None = None


@dataclass
class WakeScheduleEntry:
    """Everything derived from a single wake instant."""

    wake_event: ScheduleEvent
    sleep_event: ScheduleEvent
    bright_event: ScheduleEvent
    anchor: Anchor | None = None
    shift_from_previous_wake_hours: float = 0.0


# =============================================================================
# Display Types
# =============================================================================


@dataclass
class DisplayEvent:
    """
    Event projected into the display zone.

    Pieces produced by splitting at local midnight carry `split_from` (the
    pre-split id), `split_part` ("start" for the first piece, "end" for every
    later one) and their position via `split_index` / `split_count`.
    """

    id: str
    kind: DisplayKind
    start_zoned: datetime  # Aware, in the display zone
    end_zoned: datetime | None = None

    split_from: str | None = None
    split_part: SplitPart | None = None
    split_index: int | None = None  # 0-based
    split_count: int | None = None

    anchor_id: str | None = None
    shift_from_previous_wake_hours: float | None = None

    # Manual event metadata
    title: str | None = None
    color_hint: str | None = None
    original_zone: str | None = None

    @property
    def is_split(self) -> bool:
        return self.split_from is not None


@dataclass
class ProjectedAnchor:
    """Display-zone copy of an anchor. The stored anchor is never mutated."""

    anchor: Anchor
    zoned: datetime

    @property
    def editable(self) -> bool:
        return self.anchor.editable


@dataclass
class DisplayDay:
    """Events whose start falls on one local date in the display zone."""

    date: date
    events: list[DisplayEvent] = field(default_factory=list)


@dataclass
class PlanMeta:
    """Summary statistics for the computed plan."""

    total_delta_hours: float  # Offset(end zone) - offset(start zone)
    direction: Literal["later", "earlier"] = "later"
    days_needed: float = 0  # math.inf when neither direction has a shift rate
    per_day_shifts: list[float] = field(default_factory=list)
    interpolation_mode: InterpolationMode = "fixed_cadence"


@dataclass
class ComputedView:
    """Output of compute_plan."""

    wake_schedule: list[WakeScheduleEntry]
    display_days: list[DisplayDay]
    manual_events: list[DisplayEvent]
    meta: PlanMeta
    display_zone: str  # Resolved IANA timezone
    projected_anchors: list[ProjectedAnchor] = field(default_factory=list)
    warnings: list[SkippedRecord] = field(default_factory=list)
