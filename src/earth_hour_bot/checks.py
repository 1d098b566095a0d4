from __future__ import annotations

from datetime import datetime

from earth_hour_bot.instant_math import Ordering, compare, diff_minutes, is_before, local_date
from earth_hour_bot.models import Countdown
from earth_hour_bot.occurrence_selector import active_window_occurrence, upcoming_occurrence

CONDITION_UNITS = {"minutes", "hours"}


def is_within_active_window(now: datetime, zone: str) -> bool:
    window = active_window_occurrence(now, zone)
    return compare(now, window.start) is not Ordering.BEFORE and is_before(now, window.end)


def is_event_day(now: datetime, zone: str) -> bool:
    window = active_window_occurrence(now, zone)
    return local_date(now, zone) == local_date(window.start, zone)


def minutes_until_start(now: datetime, zone: str) -> int:
    """Positive before the start, negative during the window, positive again once rolled."""
    return diff_minutes(upcoming_occurrence(now, zone).start, now)


def minutes_until_end(now: datetime, zone: str) -> int:
    # Shares the end-based roll of upcoming_occurrence; no boundary of its own.
    return diff_minutes(upcoming_occurrence(now, zone).end, now)


def countdown(now: datetime, zone: str) -> Countdown:
    upcoming = upcoming_occurrence(now, zone)
    return Countdown(
        start_minutes=diff_minutes(upcoming.start, now),
        end_minutes=diff_minutes(upcoming.end, now),
    )


def target_minutes(amount: int, unit: str) -> int:
    if unit not in CONDITION_UNITS:
        raise ValueError(f"Unit must be one of {sorted(CONDITION_UNITS)}")
    return amount * 60 if unit == "hours" else amount


def starts_within(now: datetime, zone: str, amount: int, unit: str = "minutes") -> bool:
    minutes = minutes_until_start(now, zone)
    return 0 <= minutes <= target_minutes(amount, unit)


def ends_within(now: datetime, zone: str, amount: int) -> bool:
    minutes = minutes_until_end(now, zone)
    return 0 <= minutes <= amount
