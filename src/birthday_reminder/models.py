from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


DEFAULT_REMINDER_OFFSETS = [30, 7, 1, 0]

MIN_BIRTH_YEAR = 1900
MAX_BIRTH_YEAR = 3000

SECTION_TODAY = "Today"
SECTION_THIS_WEEK = "This Week"
SECTION_THIS_MONTH = "This Month"
SECTION_NEXT_MONTH = "Next Month"

SECTION_ORDER = (SECTION_TODAY, SECTION_THIS_WEEK, SECTION_THIS_MONTH, SECTION_NEXT_MONTH)


@dataclass(frozen=True)
class BirthdayEntry:
    """A birthday as stored in the TOML file, before an id is attached."""

    name: str
    month: int
    day: int
    year: int | None
    reminder_offsets: list[int]
    notes: str | None = None


@dataclass(frozen=True)
class BirthdayRecord:
    id: str
    name: str
    month: int
    day: int
    year: int | None = None
    notes: str | None = None
    reminder_offsets: tuple[int, ...] = field(default_factory=lambda: tuple(DEFAULT_REMINDER_OFFSETS))


@dataclass(frozen=True)
class ProjectedOccurrence:
    record: BirthdayRecord
    next_occurrence: date
    days_until: int


@dataclass(frozen=True)
class BirthdaySection:
    title: str
    members: tuple[ProjectedOccurrence, ...]


@dataclass(frozen=True)
class AppConfig:
    timezone: str
    daily_send_time: str
    birthdays: list[BirthdayEntry]
