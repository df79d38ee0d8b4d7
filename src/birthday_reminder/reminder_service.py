from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from telegram import Bot

from birthday_reminder.date_logic import turning_age
from birthday_reminder.identity_index import load_birthday_records
from birthday_reminder.models import BirthdayRecord
from birthday_reminder.rendering import ordinal_suffix
from birthday_reminder.sections import InvalidRecordError, project_record
from birthday_reminder.sent_log import load_sent_log, save_sent_log_atomic

LOGGER = logging.getLogger(__name__)

REMINDER_TITLE = "Birthday Reminder"


@dataclass(frozen=True)
class DueReminder:
    record: BirthdayRecord
    next_birthday_date: date
    days_until: int

    @property
    def turning_age(self) -> int | None:
        return turning_age(self.record, self.next_birthday_date)


def format_reminder_message(reminder: DueReminder) -> str:
    age = reminder.turning_age
    name = reminder.record.name
    occasion = f"{name}'s {age}{ordinal_suffix(age)} birthday" if age is not None else f"{name}'s birthday"

    if reminder.days_until == 0:
        headline = f"Today is {occasion}!"
    elif reminder.days_until == 1:
        headline = f"Tomorrow is {occasion}!"
    else:
        headline = f"In {reminder.days_until} days it's {occasion}."

    lines = [REMINDER_TITLE, headline, f"Date: {reminder.next_birthday_date.isoformat()}"]
    if reminder.record.notes:
        lines.append(f"Notes: {reminder.record.notes}")
    return "\n".join(lines)


def due_reminders(records: list[BirthdayRecord], today: date) -> list[DueReminder]:
    due: list[DueReminder] = []

    for record in records:
        try:
            projected = project_record(record, today)
        except InvalidRecordError as exc:
            LOGGER.warning("Skipping reminder check: %s", exc)
            continue

        if projected.days_until not in record.reminder_offsets:
            continue

        due.append(
            DueReminder(
                record=record,
                next_birthday_date=projected.next_occurrence,
                days_until=projected.days_until,
            )
        )

    due.sort(key=lambda item: (item.days_until, item.record.name.lower()))
    return due


class ReminderService:
    def __init__(
        self,
        *,
        bot: Bot,
        chat_id: int,
        config_path: Path,
        person_index_path: Path,
        sent_log_path: Path,
    ) -> None:
        self._bot = bot
        self._chat_id = chat_id
        self._config_path = config_path
        self._person_index_path = person_index_path
        self._sent_log_path = sent_log_path

    async def dispatch_for_date(self, today: date) -> int:
        _config, records = load_birthday_records(self._config_path, self._person_index_path)

        log = load_sent_log(self._sent_log_path)
        pruned = log.prune(today)

        sent_count = 0
        for reminder in due_reminders(records, today):
            if log.contains(today, reminder.record.id, reminder.days_until):
                continue
            await self._bot.send_message(chat_id=self._chat_id, text=format_reminder_message(reminder))
            log.record(today, reminder.record.id, reminder.days_until)
            sent_count += 1

        if pruned or sent_count:
            save_sent_log_atomic(self._sent_log_path, log)
        if sent_count:
            LOGGER.info("Sent %s reminders for %s", sent_count, today.isoformat())
        return sent_count


def parse_time_string(value: str) -> tuple[int, int]:
    hour, minute = value.split(":")
    return int(hour), int(minute)
