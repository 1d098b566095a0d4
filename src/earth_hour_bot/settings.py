from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TICK_INTERVAL_SECONDS = 60
MAX_TICK_INTERVAL_SECONDS = 60


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    telegram_allowed_user_id: int
    telegram_allowed_chat_id: int
    earth_hour_config_path: Path
    notification_state_path: Path
    log_level: int = logging.INFO
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _int_env(name: str) -> int:
    raw = _required_env(name)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _log_level_env(name: str) -> int:
    raw = os.getenv(name, "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"{name} must be a logging level name like INFO or DEBUG, got {raw!r}")
    return level


def _tick_interval_env(name: str) -> int:
    raw = os.getenv(name, str(DEFAULT_TICK_INTERVAL_SECONDS)).strip()
    if not raw.isdigit() or not 1 <= int(raw) <= MAX_TICK_INTERVAL_SECONDS:
        # Start/end and reminder matching uses a one-minute tolerance.
        raise ValueError(f"{name} must be between 1 and {MAX_TICK_INTERVAL_SECONDS} seconds")
    return int(raw)


def load_settings() -> Settings:
    data_root = Path.cwd()

    return Settings(
        telegram_bot_token=_required_env("TELEGRAM_BOT_TOKEN"),
        telegram_allowed_user_id=_int_env("TELEGRAM_ALLOWED_USER_ID"),
        telegram_allowed_chat_id=_int_env("TELEGRAM_ALLOWED_CHAT_ID"),
        earth_hour_config_path=Path(
            os.getenv("EARTH_HOUR_CONFIG_PATH", data_root / "config" / "earth_hour.toml")
        ),
        notification_state_path=Path(
            os.getenv("NOTIFICATION_STATE_PATH", data_root / "data" / "notification_state.json")
        ),
        log_level=_log_level_env("EARTH_HOUR_LOG_LEVEL"),
        tick_interval_seconds=_tick_interval_env("EARTH_HOUR_TICK_SECONDS"),
    )
