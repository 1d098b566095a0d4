from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from telegram import Update
from telegram.ext import CallbackContext, CommandHandler

from earth_hour_bot.checks import (
    CONDITION_UNITS,
    countdown,
    ends_within,
    is_event_day,
    is_within_active_window,
    starts_within,
)
from earth_hour_bot.config_store import load_config, update_locale, update_timezone
from earth_hour_bot.formatting import friendly_date, friendly_time
from earth_hour_bot.occurrence_selector import upcoming_occurrence
from earth_hour_bot.settings import Settings

LOGGER = logging.getLogger(__name__)

SERVICE_KEY = "event_service"


@dataclass(frozen=True)
class HandlerDependencies:
    settings: Settings


def is_authorized(update: Update, settings: Settings) -> bool:
    effective_user = update.effective_user
    effective_chat = update.effective_chat
    if effective_user is None or effective_chat is None:
        return False
    return (
        effective_user.id == settings.telegram_allowed_user_id
        and effective_chat.id == settings.telegram_allowed_chat_id
    )


async def _deny_unauthorized(update: Update) -> None:
    if update.effective_message:
        await update.effective_message.reply_text("This bot is restricted to its configured owner.")


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def parse_amount(raw_text: str) -> int:
    value = raw_text.strip()
    if not value.isdigit():
        raise ValueError("Amount must be a non-negative whole number")
    return int(value)


def parse_starts_in_args(args: list[str]) -> tuple[int, str]:
    if not args or len(args) > 2:
        raise ValueError("Usage: /startsin <amount> [minutes|hours]")

    amount = parse_amount(args[0])
    unit = args[1].strip().lower() if len(args) == 2 else "minutes"
    if unit not in CONDITION_UNITS:
        raise ValueError(f"Unit must be one of {', '.join(sorted(CONDITION_UNITS))}")
    return amount, unit


def parse_ends_in_args(args: list[str]) -> int:
    if len(args) != 1:
        raise ValueError("Usage: /endsin <minutes>")
    return parse_amount(args[0])


def render_status(now: datetime, zone: str, locale: str) -> str:
    upcoming = upcoming_occurrence(now, zone)
    minutes = countdown(now, zone)
    lines = [
        f"Earth Hour status ({zone})",
        f"Currently Earth Hour: {_yes_no(is_within_active_window(now, zone))}",
        f"Earth Hour day: {_yes_no(is_event_day(now, zone))}",
        f"Next: {friendly_date(upcoming.start, zone, locale)}"
        f" {friendly_time(upcoming.start, zone)}-{friendly_time(upcoming.end, zone)}",
        f"Minutes until start: {minutes.start_minutes}",
        f"Minutes until end: {minutes.end_minutes}",
    ]
    return "\n".join(lines)


def _render_help() -> str:
    return (
        "Earth Hour is 20:30-21:30 local time on the last Saturday of March.\n\n"
        "Commands:\n"
        "/status - Is it Earth Hour now, and how long until it starts/ends\n"
        "/startsin <amount> [minutes|hours] - Does Earth Hour start within that time?\n"
        "/endsin <minutes> - Does Earth Hour end within that many minutes?\n"
        "/timezone <Area/City> - Change the timezone (e.g. Europe/Amsterdam)\n"
        "/language <tag> - Change the notification language (e.g. en, nl)\n"
        "/help - Show this help message"
    )


async def help_command(update: Update, context: CallbackContext) -> None:
    deps: HandlerDependencies = context.application.bot_data["handler_deps"]
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return
    await update.effective_message.reply_text(_render_help())


async def status_command(update: Update, context: CallbackContext) -> None:
    deps: HandlerDependencies = context.application.bot_data["handler_deps"]
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return

    config = load_config(deps.settings.earth_hour_config_path)
    now = datetime.now(ZoneInfo(config.timezone))
    await update.effective_message.reply_text(render_status(now, config.timezone, config.locale))


async def starts_in_command(update: Update, context: CallbackContext) -> None:
    deps: HandlerDependencies = context.application.bot_data["handler_deps"]
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return

    try:
        amount, unit = parse_starts_in_args(list(context.args or []))
    except ValueError as exc:
        await update.effective_message.reply_text(str(exc))
        return

    config = load_config(deps.settings.earth_hour_config_path)
    now = datetime.now(ZoneInfo(config.timezone))
    result = starts_within(now, config.timezone, amount, unit)
    LOGGER.info("[startsin] amount=%s unit=%s result=%s", amount, unit, result)
    await update.effective_message.reply_text(
        f"Earth Hour starts within {amount} {unit}: {_yes_no(result)}"
    )


async def ends_in_command(update: Update, context: CallbackContext) -> None:
    deps: HandlerDependencies = context.application.bot_data["handler_deps"]
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return

    try:
        amount = parse_ends_in_args(list(context.args or []))
    except ValueError as exc:
        await update.effective_message.reply_text(str(exc))
        return

    config = load_config(deps.settings.earth_hour_config_path)
    now = datetime.now(ZoneInfo(config.timezone))
    result = ends_within(now, config.timezone, amount)
    LOGGER.info("[endsin] amount=%s result=%s", amount, result)
    await update.effective_message.reply_text(
        f"Earth Hour ends within {amount} minutes: {_yes_no(result)}"
    )


async def timezone_command(update: Update, context: CallbackContext) -> None:
    deps: HandlerDependencies = context.application.bot_data["handler_deps"]
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return

    args = list(context.args or [])
    if len(args) != 1:
        config = load_config(settings.earth_hour_config_path)
        await update.effective_message.reply_text(
            f"Current timezone: {config.timezone}\nUsage: /timezone <Area/City>"
        )
        return

    try:
        config = update_timezone(settings.earth_hour_config_path, args[0])
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}. Please send an IANA name like Europe/Amsterdam.")
        return

    service = context.application.bot_data.get(SERVICE_KEY)
    if service is not None:
        service.reset_triggers()

    LOGGER.info("Timezone changed to %s", config.timezone)
    await update.effective_message.reply_text(f"Timezone set to {config.timezone}.")


async def language_command(update: Update, context: CallbackContext) -> None:
    deps: HandlerDependencies = context.application.bot_data["handler_deps"]
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return

    args = list(context.args or [])
    if len(args) != 1:
        config = load_config(settings.earth_hour_config_path)
        await update.effective_message.reply_text(
            f"Current language: {config.locale}\nUsage: /language <tag>"
        )
        return

    try:
        config = update_locale(settings.earth_hour_config_path, args[0])
    except ValueError as exc:
        await update.effective_message.reply_text(str(exc))
        return

    LOGGER.info("Language changed to %s", config.locale)
    await update.effective_message.reply_text(f"Language set to {config.locale}.")


def build_handlers(settings: Settings) -> list:
    return [
        CommandHandler("help", help_command),
        CommandHandler("start", help_command),
        CommandHandler("status", status_command),
        CommandHandler("startsin", starts_in_command),
        CommandHandler("endsin", ends_in_command),
        CommandHandler("timezone", timezone_command),
        CommandHandler("language", language_command),
    ]
