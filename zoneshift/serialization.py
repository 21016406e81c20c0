"""
Conversion between JSON-shaped dicts and plan/view objects.

Input dicts come from the external validator in camelCase. Output dicts are
JSON-serializable for rendering collaborators: datetimes as ISO strings with
minute precision, dates as YYYY-MM-DD.
"""

import math
from dataclasses import replace
from datetime import datetime

from .types import (
    Anchor,
    ComputedView,
    DisplayEvent,
    ManualEvent,
    Plan,
    PlanParams,
    PlanPrefs,
    SkippedRecord,
    WakeScheduleEntry,
)

LEGACY_DISPLAY_ZONES = {"home": "start", "target": "end"}
DEFAULT_DISPLAY_ZONE = "end"


def normalize_plan(plan: Plan) -> Plan:
    """Fill preference defaults and map legacy display zone names."""
    display_zone = plan.prefs.display_zone or DEFAULT_DISPLAY_ZONE
    display_zone = LEGACY_DISPLAY_ZONES.get(display_zone, display_zone)
    return replace(plan, prefs=replace(plan.prefs, display_zone=display_zone))


def _first(data: dict, *keys: str):
    for key in keys:
        if key in data:
            return data[key]
    raise KeyError(keys[0])


def params_from_dict(data: dict) -> PlanParams:
    """Convert camelCase params (current or legacy names) to PlanParams."""
    return PlanParams(
        start_time_zone=_first(data, "startTimeZone", "homeZone"),
        end_time_zone=_first(data, "endTimeZone", "targetZone"),
        start_sleep_instant=_first(data, "startSleepInstant", "startSleepUtc"),
        end_wake_instant=_first(data, "endWakeInstant", "endWakeUtc"),
        sleep_hours=float(data["sleepHours"]),
        max_shift_later_per_day_hours=float(data["maxShiftLaterPerDayHours"]),
        max_shift_earlier_per_day_hours=float(data["maxShiftEarlierPerDayHours"]),
    )


def anchors_from_dict(data: list[dict]) -> list[Anchor]:
    """Convert JSON dicts to user Anchors."""
    return [
        Anchor(
            id=d["id"],
            instant=d["instant"],
            zone=d["zone"],
            kind=d.get("kind", "wake"),
            note=d.get("note"),
        )
        for d in data
    ]


def events_from_dict(data: list[dict]) -> list[ManualEvent]:
    """Convert JSON dicts to ManualEvents."""
    return [
        ManualEvent(
            id=d["id"],
            title=d["title"],
            start=d["start"],
            end=d.get("end"),
            zone=d["zone"],
            color_hint=d.get("colorHint"),
        )
        for d in data
    ]


def plan_from_dict(data: dict) -> Plan:
    """
    Build a Plan from validated camelCase input.

    Args:
        data: Dict with params, anchors, events and optional prefs

    Returns:
        Normalized Plan
    """
    prefs = data.get("prefs") or {}
    plan = Plan(
        id=data.get("id"),
        params=params_from_dict(data["params"]),
        anchors=anchors_from_dict(data.get("anchors", [])),
        events=events_from_dict(data.get("events", [])),
        prefs=PlanPrefs(
            display_zone=prefs.get("displayZone") or DEFAULT_DISPLAY_ZONE,
            interpolation_mode=prefs.get("interpolationMode"),
        ),
    )
    return normalize_plan(plan)


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="minutes")


def _anchor_to_dict(anchor: Anchor | None) -> dict | None:
    if anchor is None:
        return None
    return {
        "id": anchor.id,
        "kind": anchor.kind,
        "instant": anchor.instant,
        "zone": anchor.zone,
        "note": anchor.note,
        "origin": anchor.origin,
        "editable": anchor.editable,
    }


def display_event_to_dict(event: DisplayEvent) -> dict:
    """Convert a DisplayEvent to a JSON-serializable dict."""
    return {
        "id": event.id,
        "kind": event.kind,
        "startZoned": _iso(event.start_zoned),
        "endZoned": _iso(event.end_zoned),
        "splitFrom": event.split_from,
        "splitPart": event.split_part,
        "splitIndex": event.split_index,
        "splitCount": event.split_count,
        "anchorId": event.anchor_id,
        "shiftFromPreviousWakeHours": event.shift_from_previous_wake_hours,
        "title": event.title,
        "colorHint": event.color_hint,
        "originalZone": event.original_zone,
    }


def _entry_to_dict(entry: WakeScheduleEntry) -> dict:
    def schedule_event(event):
        return {
            "id": event.id,
            "kind": event.kind,
            "startInstant": _iso(event.start_instant),
            "endInstant": _iso(event.end_instant),
            "anchorId": event.anchor_id,
        }

    return {
        "wakeEvent": schedule_event(entry.wake_event),
        "sleepEvent": schedule_event(entry.sleep_event),
        "brightEvent": schedule_event(entry.bright_event),
        "anchor": _anchor_to_dict(entry.anchor),
        "shiftFromPreviousWakeHours": entry.shift_from_previous_wake_hours,
    }


def _finite_or_none(value: float) -> float | None:
    # JSON has no infinity
    return None if math.isinf(value) else value


def _warning_to_dict(warning: SkippedRecord) -> dict:
    return {
        "recordType": warning.record_type,
        "recordId": warning.record_id,
        "reason": warning.reason,
    }


def view_to_dict(view: ComputedView) -> dict:
    """Convert a ComputedView to a JSON-serializable dict."""
    return {
        "displayZone": view.display_zone,
        "wakeSchedule": [_entry_to_dict(entry) for entry in view.wake_schedule],
        "displayDays": [
            {
                "date": day.date.isoformat(),
                "events": [display_event_to_dict(e) for e in day.events],
            }
            for day in view.display_days
        ],
        "manualEvents": [display_event_to_dict(e) for e in view.manual_events],
        "projectedAnchors": [
            {**_anchor_to_dict(p.anchor), "zonedDateTime": _iso(p.zoned)}
            for p in view.projected_anchors
        ],
        "meta": {
            "totalDeltaHours": view.meta.total_delta_hours,
            "direction": view.meta.direction,
            "daysNeeded": _finite_or_none(view.meta.days_needed),
            "perDayShifts": view.meta.per_day_shifts,
            "interpolationMode": view.meta.interpolation_mode,
        },
        "warnings": [_warning_to_dict(w) for w in view.warnings],
    }
