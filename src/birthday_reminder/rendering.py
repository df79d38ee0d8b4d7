from __future__ import annotations

from birthday_reminder.date_logic import turning_age
from birthday_reminder.models import BirthdaySection

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_days_until(days_until: int) -> str:
    if days_until == 0:
        return "Today!"
    if days_until == 1:
        return "Tomorrow"
    return f"{days_until} days away"


def ordinal_suffix(number: int) -> str:
    if number % 100 in (11, 12, 13):
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def format_birthday(month: int, day: int, year: int | None) -> str:
    if year is None:
        return f"{month:02d}-{day:02d}"
    return f"{year:04d}-{month:02d}-{day:02d}"


def format_birthday_long(month: int, day: int, year: int | None) -> str:
    label = f"{MONTH_ABBREVIATIONS[month - 1]} {day}"
    if year is None:
        return label
    return f"{label}, {year}"


def format_reminder_offsets(offsets: tuple[int, ...]) -> str:
    return ", ".join("day-of" if offset == 0 else f"{offset}d" for offset in offsets)


def render_sections_message(sections: list[BirthdaySection]) -> str:
    total = sum(len(section.members) for section in sections)
    lines = [f"Tracked birthdays ({total})"]

    for section in sections:
        lines.append("")
        lines.append(f"{section.title}:")
        for item in section.members:
            details = [
                format_days_until(item.days_until),
                item.next_occurrence.isoformat(),
            ]
            age = turning_age(item.record, item.next_occurrence)
            if age is not None:
                details.append(f"Turning {age}")
            lines.append(f"- {item.record.name} | {' | '.join(details)}")
            if item.record.notes:
                lines.append(f"  {item.record.notes}")

    return "\n".join(lines)
