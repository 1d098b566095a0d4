from pathlib import Path

from earth_hour_bot.notification_state import NotificationState, load_state, save_state_atomic


def test_missing_file_is_empty_store(tmp_path: Path) -> None:
    state = load_state(tmp_path / "notification_state.json")

    assert state.get("notifications.oneMonthBeforeYear") is None


def test_roundtrip_values(tmp_path: Path) -> None:
    path = tmp_path / "data" / "notification_state.json"
    state = NotificationState()
    state.set("notifications.oneMonthBeforeYear", 2025)
    state.set("notifications.thankYouShown", True)

    save_state_atomic(path, state)
    loaded = load_state(path)

    assert loaded.get("notifications.oneMonthBeforeYear") == 2025
    assert loaded.get("notifications.thankYouShown") is True


def test_malformed_values_ignored(tmp_path: Path) -> None:
    path = tmp_path / "notification_state.json"
    path.write_text('{"values": ["not", "a", "mapping"]}\n', encoding="utf-8")

    assert load_state(path).values == {}


def test_non_object_root_is_empty_store(tmp_path: Path) -> None:
    path = tmp_path / "notification_state.json"
    path.write_text("[]\n", encoding="utf-8")

    assert load_state(path).values == {}
