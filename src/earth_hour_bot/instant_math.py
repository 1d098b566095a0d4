from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.relativedelta import relativedelta

DURATION_UNITS = {"minutes", "hours", "days", "months"}

_ONE_MINUTE = timedelta(minutes=1)
_HALF_MINUTE = timedelta(seconds=30)


class InvalidZoneError(ValueError):
    pass


class InvalidCalendarDateError(ValueError):
    pass


class Ordering(Enum):
    BEFORE = -1
    EQUAL = 0
    AFTER = 1


def resolve_zone(name: str) -> ZoneInfo:
    if not isinstance(name, str) or not name.strip():
        raise InvalidZoneError(f"Invalid timezone: {name!r}")
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidZoneError(f"Unknown timezone: {name}") from exc


def zoned_instant(year: int, month: int, day: int, hour: int, minute: int, zone: str) -> datetime:
    tz = resolve_zone(zone)
    try:
        return datetime(year, month, day, hour, minute, tzinfo=tz)
    except ValueError as exc:
        raise InvalidCalendarDateError(
            f"Invalid date/time: {year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}"
        ) from exc


def add_duration(instant: datetime, zone: str, unit: str, amount: int) -> datetime:
    """Add ``amount`` of ``unit`` to ``instant`` on the civil calendar of ``zone``.

    Months clamp to the target month's length (Mar 31 - 1 month is Feb 28/29).
    """
    if unit not in DURATION_UNITS:
        raise ValueError(f"Unsupported duration unit: {unit}")

    local = instant.astimezone(resolve_zone(zone))
    return local + relativedelta(**{unit: amount})


def _utc(instant: datetime) -> datetime:
    return instant.astimezone(timezone.utc)


def diff_minutes(a: datetime, b: datetime) -> int:
    """Whole minutes from ``b`` to ``a``, rounding half away from zero."""
    delta = _utc(a) - _utc(b)
    negative = delta < timedelta(0)
    minutes, remainder = divmod(abs(delta), _ONE_MINUTE)
    if remainder >= _HALF_MINUTE:
        minutes += 1
    return -minutes if negative else minutes


def compare(a: datetime, b: datetime) -> Ordering:
    # Same-tzinfo aware datetimes compare on wall time, so normalize first.
    left, right = _utc(a), _utc(b)
    if left < right:
        return Ordering.BEFORE
    if left > right:
        return Ordering.AFTER
    return Ordering.EQUAL


def is_before(a: datetime, b: datetime) -> bool:
    return compare(a, b) is Ordering.BEFORE


def local_date(instant: datetime, zone: str) -> date:
    return instant.astimezone(resolve_zone(zone)).date()


def local_year(instant: datetime, zone: str) -> int:
    return instant.astimezone(resolve_zone(zone)).year
