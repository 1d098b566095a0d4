from datetime import datetime, timedelta

import pytest

from earth_hour_bot.checks import (
    countdown,
    ends_within,
    is_event_day,
    is_within_active_window,
    minutes_until_end,
    minutes_until_start,
    starts_within,
    target_minutes,
)
from earth_hour_bot.instant_math import diff_minutes, zoned_instant
from earth_hour_bot.recurrence import occurrence, occurrence_end, occurrence_start

TZ = "Europe/Amsterdam"


def _at(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    return zoned_instant(year, month, day, hour, minute, TZ)


def test_active_window_is_half_open() -> None:
    window = occurrence(2025, TZ)

    assert is_within_active_window(window.start - timedelta(minutes=1), TZ) is False
    assert is_within_active_window(window.start, TZ) is True
    assert is_within_active_window(window.start + timedelta(minutes=59), TZ) is True
    assert is_within_active_window(window.end, TZ) is False
    assert is_within_active_window(_at(2025, 3, 29, 22, 0), TZ) is False


def test_active_window_false_on_other_days() -> None:
    assert is_within_active_window(_at(2025, 3, 28, 20, 45), TZ) is False
    assert is_within_active_window(_at(2025, 4, 1, 20, 45), TZ) is False


def test_event_day_true_all_day() -> None:
    for hour, minute in ((0, 0), (12, 0), (21, 45), (23, 59)):
        assert is_event_day(_at(2025, 3, 29, hour, minute), TZ) is True


def test_event_day_false_on_other_days() -> None:
    assert is_event_day(_at(2025, 3, 28, 12, 0), TZ) is False
    assert is_event_day(_at(2025, 3, 30, 12, 0), TZ) is False
    assert is_event_day(_at(2025, 4, 1, 12, 0), TZ) is False


def test_minutes_until_start_before_start() -> None:
    assert minutes_until_start(_at(2025, 3, 29, 10, 0), TZ) == 630
    assert minutes_until_start(_at(2025, 3, 29, 20, 25), TZ) == 5


def test_minutes_until_start_is_negative_during_window() -> None:
    minutes = minutes_until_start(_at(2025, 3, 29, 20, 45), TZ)

    assert minutes < 0
    assert abs(minutes) <= 60
    assert minutes == -15


def test_minutes_until_start_after_end_targets_next_year() -> None:
    now = _at(2025, 3, 29, 22, 0)

    minutes = minutes_until_start(now, TZ)

    assert minutes == diff_minutes(occurrence_start(2026, TZ), now)
    assert minutes > 360 * 24 * 60


def test_minutes_until_end_during_window() -> None:
    minutes = minutes_until_end(_at(2025, 3, 29, 20, 45), TZ)

    assert 0 < minutes <= 60
    assert minutes == 45


def test_minutes_until_end_after_window_targets_next_year() -> None:
    now = _at(2025, 3, 29, 21, 45)

    assert minutes_until_end(now, TZ) == diff_minutes(occurrence_end(2026, TZ), now)


def test_minutes_until_end_jumps_to_next_year_at_end_instant() -> None:
    # The end countdown has no boundary of its own: it follows the end-based roll.
    end = occurrence_end(2025, TZ)

    assert minutes_until_end(end - timedelta(seconds=31), TZ) == 1
    assert minutes_until_end(end - timedelta(seconds=1), TZ) == 0
    assert minutes_until_end(end, TZ) == diff_minutes(occurrence_end(2026, TZ), end)


def test_countdown_matches_individual_queries() -> None:
    for now in (_at(2025, 3, 29, 10, 0), _at(2025, 3, 29, 20, 45), _at(2025, 3, 29, 22, 0)):
        result = countdown(now, TZ)
        assert result.start_minutes == minutes_until_start(now, TZ)
        assert result.end_minutes == minutes_until_end(now, TZ)
        assert result.end_minutes - result.start_minutes == 60


def test_target_minutes_converts_hours() -> None:
    assert target_minutes(1, "hours") == 60
    assert target_minutes(0, "hours") == 0
    assert target_minutes(15, "minutes") == 15
    with pytest.raises(ValueError):
        target_minutes(1, "days")


def test_starts_within_only_counts_future_start() -> None:
    before = _at(2025, 3, 29, 20, 25)

    assert starts_within(before, TZ, 10) is True
    assert starts_within(before, TZ, 1, "hours") is True
    assert starts_within(before, TZ, 0, "hours") is False
    assert starts_within(_at(2025, 3, 29, 20, 45), TZ, 60) is False


def test_ends_within_during_window() -> None:
    now = _at(2025, 3, 29, 20, 45)

    assert ends_within(now, TZ, 60) is True
    assert ends_within(now, TZ, 10) is False
    assert ends_within(_at(2025, 3, 29, 10, 0), TZ, 60) is False
