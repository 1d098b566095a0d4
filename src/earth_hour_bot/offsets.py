from __future__ import annotations

from datetime import datetime
from enum import Enum

from earth_hour_bot.instant_math import add_duration
from earth_hour_bot.recurrence import occurrence_start

REMINDER_HOUR = 20
REMINDER_MINUTE = 0


class ReminderOffset(Enum):
    ONE_MONTH_BEFORE = "notifications.oneMonthBeforeYear"
    ONE_WEEK_BEFORE = "notifications.oneWeekBeforeYear"
    ONE_DAY_BEFORE = "notifications.oneDayBeforeYear"
    THIRTY_MINUTES_BEFORE = "notifications.thirtyMinBeforeYear"

    @property
    def state_key(self) -> str:
        return self.value


def one_month_before(year: int, zone: str) -> datetime:
    return add_duration(occurrence_start(year, zone), zone, "months", -1)


def one_week_before(year: int, zone: str) -> datetime:
    return add_duration(occurrence_start(year, zone), zone, "days", -7)


def one_day_before(year: int, zone: str) -> datetime:
    return add_duration(occurrence_start(year, zone), zone, "days", -1)


def thirty_minutes_before(year: int, zone: str) -> datetime:
    # 20:00 on the event day, independent of the start time.
    start = occurrence_start(year, zone)
    return start.replace(hour=REMINDER_HOUR, minute=REMINDER_MINUTE, second=0, microsecond=0)


_CALCULATORS = {
    ReminderOffset.ONE_MONTH_BEFORE: one_month_before,
    ReminderOffset.ONE_WEEK_BEFORE: one_week_before,
    ReminderOffset.ONE_DAY_BEFORE: one_day_before,
    ReminderOffset.THIRTY_MINUTES_BEFORE: thirty_minutes_before,
}


def reminder_instant(kind: ReminderOffset, year: int, zone: str) -> datetime:
    return _CALCULATORS[kind](year, zone)
