from __future__ import annotations

import logging
import tomllib
from dataclasses import replace
from pathlib import Path

from birthday_reminder.atomic_io import write_text_atomic
from birthday_reminder.date_logic import InvalidDateError, validate_birth_year, validate_month_day
from birthday_reminder.models import AppConfig, BirthdayEntry

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_SEND_TIME = "09:00"


def _toml_escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )


def _parse_daily_send_time(value: str) -> str:
    pieces = value.split(":")
    if len(pieces) != 2:
        raise ValueError("daily_send_time must be in HH:MM format")

    hour, minute = pieces
    if not hour.isdigit() or not minute.isdigit():
        raise ValueError("daily_send_time must contain numeric hour/minute")

    hour_i = int(hour)
    minute_i = int(minute)
    if not (0 <= hour_i <= 23 and 0 <= minute_i <= 59):
        raise ValueError("daily_send_time must be a valid 24-hour time")

    return f"{hour_i:02d}:{minute_i:02d}"


def _validate_offsets(offsets: list[int]) -> list[int]:
    if not offsets:
        raise ValueError("reminder_offsets must not be empty")
    if any(not isinstance(offset, int) or offset < 0 for offset in offsets):
        raise ValueError("reminder_offsets values must be non-negative integers")
    return sorted(set(offsets), reverse=True)


def validate_entry(entry: BirthdayEntry) -> BirthdayEntry:
    name = entry.name.strip()
    if not name:
        raise ValueError("birthday name must not be empty")

    try:
        validate_month_day(entry.month, entry.day, allow_feb_29=True)
        if entry.year is not None:
            validate_birth_year(entry.year, entry.month, entry.day)
    except InvalidDateError as exc:
        raise ValueError(f"{name}: {exc}") from exc

    notes = entry.notes.strip() if entry.notes else None

    return BirthdayEntry(
        name=name,
        month=int(entry.month),
        day=int(entry.day),
        year=int(entry.year) if entry.year is not None else None,
        reminder_offsets=_validate_offsets(list(entry.reminder_offsets)),
        notes=notes or None,
    )


def validate_config(config: AppConfig, *, strict: bool = True) -> AppConfig:
    """Validate the whole config.

    With ``strict=False`` a birthday that fails validation is kept as loaded
    and logged instead of failing the file, so readers can report it per
    record. Timezone and send time are always checked.
    """
    timezone = config.timezone.strip()
    if not timezone:
        raise ValueError("timezone must not be empty")

    birthdays: list[BirthdayEntry] = []
    for entry in config.birthdays:
        try:
            birthdays.append(validate_entry(entry))
        except ValueError as exc:
            if strict:
                raise
            LOGGER.warning("Keeping invalid birthday entry as loaded: %s", exc)
            birthdays.append(entry)

    return AppConfig(
        timezone=timezone,
        daily_send_time=_parse_daily_send_time(config.daily_send_time),
        birthdays=birthdays,
    )


def load_config(path: Path, *, strict: bool = True) -> AppConfig:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("rb") as file_obj:
        data = tomllib.load(file_obj)

    birthdays = [
        BirthdayEntry(
            name=str(row.get("name", "")),
            month=int(row.get("month", 0)),
            day=int(row.get("day", 0)),
            year=int(row["year"]) if row.get("year") is not None else None,
            reminder_offsets=[int(v) for v in row.get("reminder_offsets", [])],
            notes=str(row["notes"]) if row.get("notes") is not None else None,
        )
        for row in data.get("birthdays", [])
    ]

    return validate_config(
        AppConfig(
            timezone=str(data.get("timezone", "")),
            daily_send_time=str(data.get("daily_send_time", "")),
            birthdays=birthdays,
        ),
        strict=strict,
    )


def render_config(config: AppConfig) -> str:
    validated = validate_config(config)

    lines: list[str] = [
        f'timezone = "{_toml_escape(validated.timezone)}"',
        f'daily_send_time = "{validated.daily_send_time}"',
        "",
    ]

    for person in validated.birthdays:
        lines.append("[[birthdays]]")
        lines.append(f'name = "{_toml_escape(person.name)}"')
        lines.append(f"month = {person.month}")
        lines.append(f"day = {person.day}")
        if person.year is not None:
            lines.append(f"year = {person.year}")
        if person.notes:
            lines.append(f'notes = "{_toml_escape(person.notes)}"')
        offsets = ", ".join(str(offset) for offset in person.reminder_offsets)
        lines.append(f"reminder_offsets = [{offsets}]")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def save_config_atomic(path: Path, config: AppConfig) -> None:
    write_text_atomic(path, render_config(config))


def ensure_default_config(path: Path) -> None:
    if path.exists():
        return

    save_config_atomic(
        path,
        AppConfig(timezone=DEFAULT_TIMEZONE, daily_send_time=DEFAULT_SEND_TIME, birthdays=[]),
    )
    LOGGER.info("Created default config at %s", path)


def append_birthdays(path: Path, new_birthdays: list[BirthdayEntry]) -> AppConfig:
    config = load_config(path, strict=False)
    updated = replace(config, birthdays=[*config.birthdays, *new_birthdays])
    save_config_atomic(path, updated)
    return updated


def append_birthday(path: Path, new_birthday: BirthdayEntry) -> AppConfig:
    return append_birthdays(path, [new_birthday])


def update_birthday(path: Path, *, index: int, updated_birthday: BirthdayEntry) -> AppConfig:
    config = load_config(path, strict=False)
    if index < 0 or index >= len(config.birthdays):
        raise IndexError(f"No birthday at position {index}")

    birthdays = list(config.birthdays)
    birthdays[index] = updated_birthday
    updated = replace(config, birthdays=birthdays)
    save_config_atomic(path, updated)
    return updated


def remove_birthday(path: Path, *, index: int) -> BirthdayEntry:
    config = load_config(path, strict=False)
    if index < 0 or index >= len(config.birthdays):
        raise IndexError(f"No birthday at position {index}")

    birthdays = list(config.birthdays)
    removed = birthdays.pop(index)
    save_config_atomic(path, replace(config, birthdays=birthdays))
    return removed
