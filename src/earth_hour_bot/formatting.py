from __future__ import annotations

from datetime import datetime

from babel.dates import format_date

from earth_hour_bot.instant_math import resolve_zone
from earth_hour_bot.models import DEFAULT_LOCALE

ORDINAL_LANGUAGES = {"en"}

_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def normalize_language(locale: str | None) -> str:
    if not locale or not locale.strip():
        return DEFAULT_LOCALE
    return locale.strip().replace("_", "-").split("-")[0].lower()


def ordinal_en(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    return f"{day}{_ORDINAL_SUFFIXES.get(day % 10, 'th')}"


def _render_day(day: int, language: str) -> str:
    if language in ORDINAL_LANGUAGES:
        return ordinal_en(day)
    return str(day)


def friendly_date(instant: datetime, zone: str, locale: str | None = DEFAULT_LOCALE, include_year: bool = True) -> str:
    """Render e.g. "29th March 2025" (en) or "29 maart 2025" (nl).

    Only English gets an ordinal day; the month name comes from Babel's locale data.
    """
    language = normalize_language(locale)
    local = instant.astimezone(resolve_zone(zone))
    month = format_date(local.date(), "MMMM", locale=language)
    parts = [_render_day(local.day, language), month]
    if include_year:
        parts.append(f"{local.year:04d}")
    return " ".join(parts)


def friendly_time(instant: datetime, zone: str) -> str:
    return instant.astimezone(resolve_zone(zone)).strftime("%H:%M")


def _format_offset(local: datetime) -> str:
    offset = local.utcoffset()
    total_minutes = int(offset.total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def iso_with_offset_bracket(instant: datetime, zone: str) -> str:
    local = instant.astimezone(resolve_zone(zone))
    stamp = local.strftime("%Y-%m-%dT%H:%M:%S")
    return f"{stamp}.{local.microsecond // 1000:03d}({_format_offset(local)})"
