"""Parser for semicolon-separated contact exports.

Expected layout, header first::

    First Name;Last Name;Birthday
    Alice;Smith;1990-03-14
    Bob;;7-4

Birthdays are ``YYYY-MM-DD`` or a yearless ``M-D`` / ``MM-DD``.
"""

from __future__ import annotations

from dataclasses import dataclass

from birthday_reminder.date_logic import validate_birth_year, validate_month_day
from birthday_reminder.models import BirthdayEntry

FIELD_SEPARATOR = ";"


@dataclass(frozen=True)
class ParsedBirthday:
    first_name: str
    last_name: str
    month: int
    day: int
    year: int | None
    line: int

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_entry(self, reminder_offsets: list[int]) -> BirthdayEntry:
        return BirthdayEntry(
            name=self.name,
            month=self.month,
            day=self.day,
            year=self.year,
            reminder_offsets=list(reminder_offsets),
        )


@dataclass(frozen=True)
class ParseError:
    line: int
    error: str
    raw_data: str


@dataclass(frozen=True)
class ParseResult:
    valid: list[ParsedBirthday]
    errors: list[ParseError]


def _to_int(value: str) -> int | None:
    cleaned = value.strip()
    if not cleaned.isdigit():
        return None
    return int(cleaned)


def parse_birthday_field(value: str) -> tuple[int, int, int | None]:
    pieces = value.split("-")
    numbers = [_to_int(piece) for piece in pieces]

    if len(pieces) == 3 and None not in numbers:
        year, month, day = numbers
        validate_month_day(month, day)
        validate_birth_year(year, month, day)
        return month, day, year

    if len(pieces) == 2 and None not in numbers:
        month, day = numbers
        validate_month_day(month, day, allow_feb_29=True)
        return month, day, None

    raise ValueError(f"Invalid birthday format: {value}. Expected YYYY-MM-DD or M-D")


def parse_line(line: str, line_number: int) -> ParsedBirthday:
    parts = line.split(FIELD_SEPARATOR)
    if len(parts) < 3:
        raise ValueError("Invalid format: expected at least 3 columns (First Name;Last Name;Birthday)")

    first_name = parts[0].strip()
    last_name = parts[1].strip()
    birthday_text = parts[2].strip()

    if not first_name:
        raise ValueError("First name is required")
    if not birthday_text:
        raise ValueError("Birthday is required")

    month, day, year = parse_birthday_field(birthday_text)
    return ParsedBirthday(
        first_name=first_name,
        last_name=last_name,
        month=month,
        day=day,
        year=year,
        line=line_number,
    )


def parse_csv(content: str) -> ParseResult:
    """Parse every data row, collecting failures instead of stopping at the first.

    Line numbers count non-blank lines only, header included as line 1.
    """
    lines = [line for line in content.splitlines() if line.strip()]
    valid: list[ParsedBirthday] = []
    errors: list[ParseError] = []

    for index, raw in enumerate(lines[1:], start=2):
        line = raw.strip()
        try:
            valid.append(parse_line(line, index))
        except ValueError as exc:
            errors.append(ParseError(line=index, error=str(exc), raw_data=line))

    return ParseResult(valid=valid, errors=errors)
