from __future__ import annotations

from datetime import datetime

from earth_hour_bot.instant_math import is_before, local_year
from earth_hour_bot.models import Occurrence
from earth_hour_bot.recurrence import occurrence, occurrence_start


def active_window_occurrence(now: datetime, zone: str) -> Occurrence:
    """This calendar year's occurrence, whether ``now`` is before, during or after it.

    Point-in-time checks use this so the window and the event day stay anchored
    to the current year for the rest of that day.
    """
    return occurrence(local_year(now, zone), zone)


def upcoming_occurrence(now: datetime, zone: str) -> Occurrence:
    """This year's occurrence until its end has passed, then next year's.

    Rolls on ``end`` (not ``start``) so countdowns stay on the running event
    for the whole active window.
    """
    year = local_year(now, zone)
    current = occurrence(year, zone)
    if is_before(now, current.end):
        return current
    return occurrence(year + 1, zone)


def reminder_year(now: datetime, zone: str) -> int:
    """Year whose reminders are still ahead: rolls as soon as this year's start is reached."""
    year = local_year(now, zone)
    if is_before(now, occurrence_start(year, zone)):
        return year
    return year + 1
