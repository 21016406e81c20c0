"""
Calendar arithmetic.

Instant parsing, instant <-> local wall-clock conversion and local-midnight
lookups. All instants handed around the pipeline are aware UTC datetimes;
wall-clock values are aware datetimes in the relevant zone.

Failures on user data surface as ValueError so callers can skip the record.
"""

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytz

MINUTES_PER_DAY = 24 * 60


def get_zone(tz_name: str) -> ZoneInfo:
    """
    Look up an IANA timezone.

    Args:
        tz_name: IANA timezone name (e.g., "Asia/Taipei")

    Returns:
        ZoneInfo for the zone

    Raises:
        ValueError: if the zone is empty or unknown
    """
    if not tz_name:
        raise ValueError("Zone id required")
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {tz_name}") from e


def parse_instant(iso: str) -> datetime:
    """
    Parse an ISO 8601 timestamp with explicit offset (or "Z") to UTC.

    Raises:
        ValueError: if the string is not ISO 8601 or carries no offset
    """
    if not isinstance(iso, str):
        raise ValueError(f"Instant must be a string, got {type(iso).__name__}")
    parsed = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError(f"Instant has no UTC offset: {iso}")
    return parsed.astimezone(UTC)


def format_instant(instant: datetime) -> str:
    """Canonical UTC form, e.g. "2024-10-17T16:30:00Z"."""
    return instant.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_zoned(instant: datetime, tz_name: str) -> datetime:
    """Local wall-clock (aware) for an instant in the given zone."""
    return instant.astimezone(get_zone(tz_name))


def local_midnight(day: date, tz_name: str) -> datetime:
    """
    First instant of a local calendar date, as wall-clock in that zone.

    Round-trips through UTC so a midnight skipped by a DST gap resolves to the
    first wall-clock time that actually exists.
    """
    zone = get_zone(tz_name)
    naive = datetime.combine(day, time(0, 0))
    return naive.replace(tzinfo=zone).astimezone(UTC).astimezone(zone)


def local_day_bounds(instant: datetime, tz_name: str) -> tuple[datetime, datetime]:
    """
    Half-open UTC interval covering the local date of an instant.

    Args:
        instant: Aware datetime
        tz_name: Zone whose calendar defines the day

    Returns:
        (start, end) as aware UTC datetimes; end is the next local midnight
    """
    local_date = to_zoned(instant, tz_name).date()
    start = local_midnight(local_date, tz_name)
    end = local_midnight(local_date + timedelta(days=1), tz_name)
    return (start.astimezone(UTC), end.astimezone(UTC))


def add_hours(instant: datetime, hours: float) -> datetime:
    """Shift an instant by absolute hours (positive = later)."""
    return instant + timedelta(hours=hours)


def minutes_between(start: datetime, end: datetime) -> float:
    """Elapsed absolute minutes from start to end."""
    return (end - start).total_seconds() / 60


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed absolute hours from start to end."""
    return (end - start).total_seconds() / 3600


def local_date(instant: datetime, tz_name: str) -> date:
    """Calendar date of an instant in the given zone."""
    return to_zoned(instant, tz_name).date()


def enumerate_dates(start: date, end: date) -> list[date]:
    """All dates from start to end, inclusive. Empty if end < start."""
    dates = []
    cursor = start
    while cursor <= end:
        dates.append(cursor)
        cursor += timedelta(days=1)
    return dates


def get_timezone_offset_hours(tz_name: str, instant: datetime) -> float:
    """
    Get UTC offset in hours for a timezone at a given instant.

    Args:
        tz_name: IANA timezone name (e.g., "America/Los_Angeles")
        instant: Aware datetime to check the offset at (for DST)

    Returns:
        Offset in hours (e.g., -8.0 for PST, -7.0 for PDT)
    """
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {tz_name}") from e
    localized = instant.astimezone(pytz.UTC).astimezone(tz)
    return localized.utcoffset().total_seconds() / 3600
