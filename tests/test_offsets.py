import pytest

from earth_hour_bot.offsets import (
    ReminderOffset,
    one_day_before,
    one_month_before,
    one_week_before,
    reminder_instant,
    thirty_minutes_before,
)

TZ = "Europe/Amsterdam"


def _fmt(instant) -> str:
    return instant.strftime("%Y-%m-%d %H:%M")


@pytest.mark.parametrize(
    ("year", "expected"),
    [
        (2024, "2024-02-29 20:30"),
        (2025, "2025-02-28 20:30"),
        (2026, "2026-02-28 20:30"),
    ],
)
def test_one_month_before_clamps_to_february(year: int, expected: str) -> None:
    assert _fmt(one_month_before(year, TZ)) == expected


def test_one_week_before_is_previous_saturday() -> None:
    instant = one_week_before(2025, TZ)

    assert _fmt(instant) == "2025-03-22 20:30"
    assert instant.isoweekday() == 6


def test_one_day_before_is_friday() -> None:
    instant = one_day_before(2025, TZ)

    assert _fmt(instant) == "2025-03-28 20:30"
    assert instant.isoweekday() == 5


def test_thirty_minutes_before_pins_clock_to_eight_pm() -> None:
    instant = thirty_minutes_before(2025, TZ)

    assert _fmt(instant) == "2025-03-29 20:00"
    assert (instant.second, instant.microsecond) == (0, 0)


def test_reminder_instant_dispatches_by_kind() -> None:
    assert reminder_instant(ReminderOffset.ONE_MONTH_BEFORE, 2025, TZ) == one_month_before(2025, TZ)
    assert reminder_instant(ReminderOffset.ONE_WEEK_BEFORE, 2025, TZ) == one_week_before(2025, TZ)
    assert reminder_instant(ReminderOffset.ONE_DAY_BEFORE, 2025, TZ) == one_day_before(2025, TZ)
    assert reminder_instant(ReminderOffset.THIRTY_MINUTES_BEFORE, 2025, TZ) == thirty_minutes_before(2025, TZ)


def test_reminder_offsets_have_stable_state_keys() -> None:
    assert [kind.state_key for kind in ReminderOffset] == [
        "notifications.oneMonthBeforeYear",
        "notifications.oneWeekBeforeYear",
        "notifications.oneDayBeforeYear",
        "notifications.thirtyMinBeforeYear",
    ]
