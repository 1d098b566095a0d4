from __future__ import annotations

import os
import re
import tempfile
import tomllib
from pathlib import Path

from babel import Locale, UnknownLocaleError

from earth_hour_bot.formatting import normalize_language
from earth_hour_bot.instant_math import InvalidZoneError, resolve_zone
from earth_hour_bot.models import DEFAULT_LOCALE, DEFAULT_TIMEZONE, AppConfig

LOCALE_PATTERN = re.compile(r"[A-Za-z]{2,3}([-_][A-Za-z0-9]{2,8})*")


def _toml_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _validate_locale(value: str) -> str:
    locale = value.strip()
    if not locale:
        raise ValueError("locale must not be empty")
    if not LOCALE_PATTERN.fullmatch(locale):
        raise ValueError(f"locale must be a language tag like 'en' or 'nl-NL', got {locale!r}")
    try:
        Locale.parse(normalize_language(locale))
    except (UnknownLocaleError, ValueError) as exc:
        raise ValueError(f"Unsupported locale: {locale}") from exc
    return locale


def validate_config(config: AppConfig) -> AppConfig:
    timezone = config.timezone.strip()
    if not timezone:
        raise ValueError("timezone must not be empty")

    try:
        resolve_zone(timezone)
    except InvalidZoneError as exc:
        raise ValueError(str(exc)) from exc

    return AppConfig(timezone=timezone, locale=_validate_locale(config.locale))


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("rb") as file_obj:
        data = tomllib.load(file_obj)

    config = AppConfig(
        timezone=str(data.get("timezone", "")),
        locale=str(data.get("locale", DEFAULT_LOCALE)),
    )
    return validate_config(config)


def render_config(config: AppConfig) -> str:
    validated = validate_config(config)

    lines = [
        "# Earth Hour runs 20:30-21:30 local time on the last Saturday of March.",
        f'timezone = "{_toml_escape(validated.timezone)}"',
        f'locale = "{_toml_escape(validated.locale)}"',
    ]
    return "\n".join(lines) + "\n"


def save_config_atomic(path: Path, config: AppConfig) -> None:
    rendered = render_config(config)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        delete=False,
    ) as temp_file:
        temp_file.write(rendered)
        temp_name = temp_file.name

    os.replace(temp_name, path)


def ensure_default_config(path: Path) -> None:
    if path.exists():
        return

    save_config_atomic(path, AppConfig(timezone=DEFAULT_TIMEZONE, locale=DEFAULT_LOCALE))


def update_timezone(path: Path, timezone: str) -> AppConfig:
    config = load_config(path)
    updated = validate_config(AppConfig(timezone=timezone, locale=config.locale))
    save_config_atomic(path, updated)
    return updated


def update_locale(path: Path, locale: str) -> AppConfig:
    config = load_config(path)
    updated = validate_config(AppConfig(timezone=config.timezone, locale=locale))
    save_config_atomic(path, updated)
    return updated
