from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from pathlib import Path

from birthday_reminder.atomic_io import write_text_atomic
from birthday_reminder.config_store import load_config
from birthday_reminder.models import AppConfig, BirthdayEntry, BirthdayRecord

INDEX_VERSION = 1


@dataclass(frozen=True)
class IdAssignment:
    record_ids: list[str]
    fingerprints: dict[str, list[str]]


def normalize_name(name: str) -> str:
    return " ".join(name.strip().lower().split())


def fingerprint(entry: BirthdayEntry) -> str:
    year = str(entry.year) if entry.year is not None else "none"
    return f"{normalize_name(entry.name)}|{entry.month:02d}|{entry.day:02d}|{year}"


def load_index(path: Path) -> dict[str, list[str]]:
    if not path.exists():
        return {}

    with path.open("r", encoding="utf-8") as file_obj:
        data = json.load(file_obj)

    stored = data.get("records", {})
    if not isinstance(stored, dict):
        return {}

    return {
        key: [str(value) for value in values]
        for key, values in stored.items()
        if isinstance(key, str) and isinstance(values, list)
    }


def save_index_atomic(path: Path, fingerprints: dict[str, list[str]]) -> None:
    payload = {"version": INDEX_VERSION, "records": fingerprints}
    write_text_atomic(path, json.dumps(payload, indent=2, sort_keys=True) + "\n")


def assign_ids(entries: list[BirthdayEntry], known: dict[str, list[str]]) -> IdAssignment:
    """Give each entry a stable id.

    Entries sharing a fingerprint are told apart by their position among
    those duplicates, so the n-th "Alice 03-14" keeps the n-th stored id.
    """
    seen: dict[str, int] = {}
    record_ids: list[str] = []
    fingerprints: dict[str, list[str]] = {}

    for entry in entries:
        key = fingerprint(entry)
        position = seen.get(key, 0)
        seen[key] = position + 1

        existing = known.get(key, [])
        record_id = existing[position] if position < len(existing) else str(uuid.uuid4())

        fingerprints.setdefault(key, []).append(record_id)
        record_ids.append(record_id)

    return IdAssignment(record_ids=record_ids, fingerprints=fingerprints)


def to_records(entries: list[BirthdayEntry], record_ids: list[str]) -> list[BirthdayRecord]:
    return [
        BirthdayRecord(
            id=record_id,
            name=entry.name,
            month=entry.month,
            day=entry.day,
            year=entry.year,
            notes=entry.notes,
            reminder_offsets=tuple(entry.reminder_offsets),
        )
        for entry, record_id in zip(entries, record_ids, strict=True)
    ]


def load_birthday_records(config_path: Path, index_path: Path) -> tuple[AppConfig, list[BirthdayRecord]]:
    """Load every stored birthday with its id.

    Entries that fail validation are still returned; projecting them raises
    InvalidRecordError so callers can skip and report them one by one.
    """
    config = load_config(config_path, strict=False)
    assignment = assign_ids(config.birthdays, load_index(index_path))
    save_index_atomic(index_path, assignment.fingerprints)
    return config, to_records(config.birthdays, assignment.record_ids)
