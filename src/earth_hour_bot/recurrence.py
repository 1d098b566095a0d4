from __future__ import annotations

from datetime import datetime

from earth_hour_bot.instant_math import add_duration, zoned_instant
from earth_hour_bot.models import Occurrence

EVENT_MONTH = 3
START_HOUR = 20
START_MINUTE = 30
DURATION_HOURS = 1

SATURDAY = 6
SUNDAY = 7


def days_back_to_saturday(iso_weekday: int) -> int:
    if iso_weekday == SATURDAY:
        return 0
    if iso_weekday == SUNDAY:
        return 1
    return iso_weekday + 1


def occurrence_start(year: int, zone: str) -> datetime:
    """Return 20:30 local time on the last Saturday of March for ``year``."""
    # March 31 always exists, and stepping back at most six days stays in March.
    march_31 = zoned_instant(year, EVENT_MONTH, 31, 0, 0, zone)
    saturday = add_duration(march_31, zone, "days", -days_back_to_saturday(march_31.isoweekday()))
    return saturday.replace(hour=START_HOUR, minute=START_MINUTE, second=0, microsecond=0)


def occurrence_end(year: int, zone: str) -> datetime:
    return add_duration(occurrence_start(year, zone), zone, "hours", DURATION_HOURS)


def occurrence(year: int, zone: str) -> Occurrence:
    start = occurrence_start(year, zone)
    return Occurrence(year=year, start=start, end=add_duration(start, zone, "hours", DURATION_HOURS))
