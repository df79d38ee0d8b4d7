from datetime import date

import pytest

from birthday_reminder.models import BirthdayRecord
from birthday_reminder.rendering import (
    format_birthday,
    format_birthday_long,
    format_days_until,
    format_reminder_offsets,
    ordinal_suffix,
    render_sections_message,
)
from birthday_reminder.sections import group_by_section


def test_format_days_until() -> None:
    assert format_days_until(0) == "Today!"
    assert format_days_until(1) == "Tomorrow"
    assert format_days_until(2) == "2 days away"
    assert format_days_until(45) == "45 days away"


@pytest.mark.parametrize(
    "number, suffix",
    [(1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"), (12, "th"), (13, "th"), (21, "st"), (22, "nd"), (111, "th")],
)
def test_ordinal_suffix(number: int, suffix: str) -> None:
    assert ordinal_suffix(number) == suffix


def test_format_birthday() -> None:
    assert format_birthday(3, 4, None) == "03-04"
    assert format_birthday(3, 4, 1990) == "1990-03-04"
    assert format_birthday_long(3, 4, None) == "Mar 4"
    assert format_birthday_long(12, 25, 1990) == "Dec 25, 1990"


def test_format_reminder_offsets() -> None:
    assert format_reminder_offsets((30, 7, 1, 0)) == "30d, 7d, 1d, day-of"


def test_render_sections_message() -> None:
    records = [
        BirthdayRecord(id="b", name="Bob", month=6, day=1, notes="Bring cake"),
        BirthdayRecord(id="a", name="Alice", month=5, day=8, year=1990),
    ]

    message = render_sections_message(group_by_section(records, date(2024, 5, 8)))

    assert message == (
        "Tracked birthdays (2)\n"
        "\n"
        "Today:\n"
        "- Alice | Today! | 2024-05-08 | Turning 34\n"
        "\n"
        "Next Month:\n"
        "- Bob | 24 days away | 2024-06-01\n"
        "  Bring cake"
    )
