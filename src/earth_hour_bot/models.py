from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


DEFAULT_TIMEZONE = "Europe/Amsterdam"
DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class Occurrence:
    year: int
    start: datetime
    end: datetime


@dataclass(frozen=True)
class Countdown:
    start_minutes: int
    end_minutes: int


@dataclass(frozen=True)
class AppConfig:
    timezone: str
    locale: str
