from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from telegram import Bot

from earth_hour_bot.config_store import load_config
from earth_hour_bot.formatting import friendly_date, friendly_time, iso_with_offset_bracket
from earth_hour_bot.messages import render_message
from earth_hour_bot.notification_state import THANK_YOU_SHOWN_KEY, load_state, save_state_atomic
from earth_hour_bot.occurrence_selector import active_window_occurrence, reminder_year
from earth_hour_bot.offsets import ReminderOffset, reminder_instant
from earth_hour_bot.recurrence import occurrence_start

LOGGER = logging.getLogger(__name__)

TRIGGER_TOLERANCE = timedelta(minutes=1)

REMINDER_TEMPLATES = {
    ReminderOffset.ONE_MONTH_BEFORE: "one_month_before",
    ReminderOffset.ONE_WEEK_BEFORE: "one_week_before",
    ReminderOffset.ONE_DAY_BEFORE: "one_day_before",
    ReminderOffset.THIRTY_MINUTES_BEFORE: "thirty_min_before",
}


def is_within_one_minute(now: datetime, target: datetime) -> bool:
    delta = now.astimezone(timezone.utc) - target.astimezone(timezone.utc)
    return abs(delta) <= TRIGGER_TOLERANCE


class EarthHourService:
    """Polled once a minute: fires start/end announcements and yearly reminders.

    Start/end dedupe lives in memory (reset on timezone change); reminder and
    thank-you bookkeeping is persisted in the notification state file.
    """

    def __init__(
        self,
        *,
        bot: Bot,
        chat_id: int,
        config_path: Path,
        notification_state_path: Path,
    ) -> None:
        self._bot = bot
        self._chat_id = chat_id
        self._config_path = config_path
        self._notification_state_path = notification_state_path
        self._last_started_year: int | None = None
        self._last_ended_year: int | None = None

    def reset_triggers(self) -> None:
        self._last_started_year = None
        self._last_ended_year = None

    async def tick(self, now: datetime) -> list[str]:
        config = load_config(self._config_path)
        zone = config.timezone
        window = active_window_occurrence(now, zone)

        LOGGER.debug(
            "Tick now=%s start=%s end=%s last_started=%s last_ended=%s",
            iso_with_offset_bracket(now, zone),
            iso_with_offset_bracket(window.start, zone),
            iso_with_offset_bracket(window.end, zone),
            self._last_started_year,
            self._last_ended_year,
        )

        fired: list[str] = []
        if is_within_one_minute(now, window.start) and self._last_started_year != window.year:
            LOGGER.info("Earth Hour %s started", window.year)
            await self._send(render_message("started", config.locale, time=friendly_time(window.end, zone)))
            self._last_started_year = window.year
            fired.append("started")

        if is_within_one_minute(now, window.end) and self._last_ended_year != window.year:
            LOGGER.info("Earth Hour %s ended", window.year)
            await self._send(render_message("ended", config.locale))
            self._last_ended_year = window.year
            fired.append("ended")

        fired.extend(await self.run_scheduled_reminders(now, zone, config.locale))
        return fired

    async def run_scheduled_reminders(self, now: datetime, zone: str, locale: str) -> list[str]:
        use_year = reminder_year(now, zone)
        state = load_state(self._notification_state_path)
        sent: list[str] = []

        for kind in ReminderOffset:
            try:
                target = reminder_instant(kind, use_year, zone)
                if not is_within_one_minute(now, target):
                    continue
                if state.get(kind.state_key) == use_year:
                    continue

                start = occurrence_start(use_year, zone)
                message = render_message(
                    REMINDER_TEMPLATES[kind],
                    locale,
                    date=friendly_date(start, zone, locale, include_year=False),
                    time=friendly_time(start, zone),
                )
                await self._send(message)
                state.set(kind.state_key, use_year)
                save_state_atomic(self._notification_state_path, state)
                sent.append(kind.state_key)
                LOGGER.info("Sent %s reminder for %s", kind.name, use_year)
            except Exception:
                LOGGER.exception("Error sending %s reminder", kind.name)

        return sent

    async def send_thank_you(self, now: datetime) -> bool:
        state = load_state(self._notification_state_path)
        if state.get(THANK_YOU_SHOWN_KEY):
            return False

        config = load_config(self._config_path)
        zone = config.timezone
        upcoming = occurrence_start(reminder_year(now, zone), zone)
        message = render_message(
            "thank_you",
            config.locale,
            date=friendly_date(upcoming, zone, config.locale, include_year=False),
            time=friendly_time(upcoming, zone),
        )
        await self._send(message)
        state.set(THANK_YOU_SHOWN_KEY, True)
        save_state_atomic(self._notification_state_path, state)
        LOGGER.info("Thank-you notification sent")
        return True

    async def _send(self, text: str) -> None:
        await self._bot.send_message(chat_id=self._chat_id, text=text)
