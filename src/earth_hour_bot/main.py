from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from telegram.ext import Application, CallbackContext

from earth_hour_bot.bot_handlers import SERVICE_KEY, HandlerDependencies, build_handlers
from earth_hour_bot.config_store import ensure_default_config, load_config
from earth_hour_bot.event_service import EarthHourService
from earth_hour_bot.settings import load_settings

LOGGER = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


async def scheduled_tick_callback(context: CallbackContext) -> None:
    service: EarthHourService = context.application.bot_data[SERVICE_KEY]
    try:
        await service.tick(datetime.now(timezone.utc))
    except Exception:
        LOGGER.exception("Error in Earth Hour tick")


async def startup_thank_you(application: Application) -> None:
    service: EarthHourService = application.bot_data[SERVICE_KEY]
    try:
        await service.send_thank_you(datetime.now(timezone.utc))
    except Exception:
        LOGGER.exception("Error sending thank-you notification")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    _ensure_parent(settings.earth_hour_config_path)
    _ensure_parent(settings.notification_state_path)

    ensure_default_config(settings.earth_hour_config_path)
    config = load_config(settings.earth_hour_config_path)
    LOGGER.info("Using timezone: %s", config.timezone)

    application = Application.builder().token(settings.telegram_bot_token).build()
    application.bot_data["settings"] = settings
    application.bot_data["handler_deps"] = HandlerDependencies(settings=settings)

    application.bot_data[SERVICE_KEY] = EarthHourService(
        bot=application.bot,
        chat_id=settings.telegram_allowed_chat_id,
        config_path=settings.earth_hour_config_path,
        notification_state_path=settings.notification_state_path,
    )

    for handler in build_handlers(settings):
        application.add_handler(handler)

    application.job_queue.run_repeating(
        scheduled_tick_callback,
        interval=settings.tick_interval_seconds,
        first=0,
        name="earth-hour-tick",
    )

    application.post_init = startup_thank_you
    application.run_polling()


if __name__ == "__main__":
    main()
