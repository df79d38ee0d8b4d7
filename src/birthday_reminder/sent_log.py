from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path

from birthday_reminder.atomic_io import write_text_atomic

RETENTION_DAYS = 400


@dataclass(frozen=True, order=True)
class SentReminder:
    send_date: date
    record_id: str
    offset_days: int


@dataclass
class SentLog:
    entries: set[SentReminder] = field(default_factory=set)
    last_pruned: date | None = None

    def contains(self, send_date: date, record_id: str, offset_days: int) -> bool:
        return SentReminder(send_date, record_id, offset_days) in self.entries

    def record(self, send_date: date, record_id: str, offset_days: int) -> None:
        self.entries.add(SentReminder(send_date, record_id, offset_days))

    def prune(self, today: date, *, retention_days: int = RETENTION_DAYS) -> bool:
        """Drop entries older than the retention window, at most once per day."""
        if self.last_pruned == today:
            return False
        cutoff = today - timedelta(days=retention_days)
        self.entries = {entry for entry in self.entries if entry.send_date >= cutoff}
        self.last_pruned = today
        return True


def _parse_entry(raw: object) -> SentReminder | None:
    if not isinstance(raw, dict):
        return None
    try:
        return SentReminder(
            send_date=date.fromisoformat(str(raw["date"])),
            record_id=str(raw["record_id"]),
            offset_days=int(raw["offset"]),
        )
    except (KeyError, TypeError, ValueError):
        return None


def load_sent_log(path: Path) -> SentLog:
    if not path.exists():
        return SentLog()

    with path.open("r", encoding="utf-8") as file_obj:
        data = json.load(file_obj)

    entries = {entry for entry in map(_parse_entry, data.get("sent", [])) if entry is not None}
    last_pruned = data.get("last_pruned")
    return SentLog(
        entries=entries,
        last_pruned=date.fromisoformat(last_pruned) if last_pruned else None,
    )


def save_sent_log_atomic(path: Path, log: SentLog) -> None:
    payload = {
        "sent": [
            {
                "date": entry.send_date.isoformat(),
                "record_id": entry.record_id,
                "offset": entry.offset_days,
            }
            for entry in sorted(log.entries)
        ],
        "last_pruned": log.last_pruned.isoformat() if log.last_pruned else None,
    }
    write_text_atomic(path, json.dumps(payload, indent=2) + "\n")
