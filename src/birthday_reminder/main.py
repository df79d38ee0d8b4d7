from __future__ import annotations

import logging
from datetime import datetime, time
from zoneinfo import ZoneInfo

from telegram.ext import Application, CallbackContext

from birthday_reminder.bot_handlers import HandlerDependencies, build_handlers
from birthday_reminder.config_store import ensure_default_config, load_config
from birthday_reminder.reminder_service import ReminderService, parse_time_string
from birthday_reminder.settings import Settings, load_settings

LOGGER = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def local_now(settings: Settings) -> datetime:
    config = load_config(settings.birthday_config_path, strict=False)
    return datetime.now(ZoneInfo(config.timezone))


async def scheduled_reminder_callback(context: CallbackContext) -> None:
    service: ReminderService = context.application.bot_data["reminder_service"]
    today = local_now(context.application.bot_data["settings"]).date()
    await service.dispatch_for_date(today)


async def startup_catchup(application: Application) -> None:
    settings: Settings = application.bot_data["settings"]
    config = load_config(settings.birthday_config_path, strict=False)
    now = datetime.now(ZoneInfo(config.timezone))

    hour, minute = parse_time_string(config.daily_send_time)
    scheduled = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if now >= scheduled:
        LOGGER.info("Send time %s already passed today, running catch-up dispatch", config.daily_send_time)
        service: ReminderService = application.bot_data["reminder_service"]
        await service.dispatch_for_date(now.date())


def main() -> None:
    configure_logging()

    settings = load_settings()
    ensure_default_config(settings.birthday_config_path)
    config = load_config(settings.birthday_config_path, strict=False)

    tz = ZoneInfo(config.timezone)
    hour, minute = parse_time_string(config.daily_send_time)

    application = Application.builder().token(settings.telegram_bot_token).post_init(startup_catchup).build()
    application.bot_data["settings"] = settings
    application.bot_data["handler_deps"] = HandlerDependencies(settings=settings)
    application.bot_data["reminder_service"] = ReminderService(
        bot=application.bot,
        chat_id=settings.telegram_allowed_chat_id,
        config_path=settings.birthday_config_path,
        person_index_path=settings.person_index_path,
        sent_log_path=settings.sent_log_path,
    )

    for handler in build_handlers():
        application.add_handler(handler)

    application.job_queue.run_daily(
        scheduled_reminder_callback,
        time=time(hour=hour, minute=minute, tzinfo=tz),
        name="daily-birthday-reminders",
    )

    LOGGER.info("Starting bot, daily reminders at %s %s", config.daily_send_time, config.timezone)
    application.run_polling()


if __name__ == "__main__":
    main()
