from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from birthday_reminder.models import MAX_BIRTH_YEAR, MIN_BIRTH_YEAR, BirthdayRecord


class InvalidDateError(ValueError):
    pass


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def as_day(value: date) -> date:
    """Truncate a datetime to its calendar date; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def validate_month_day(month: int, day: int, *, allow_feb_29: bool = True) -> None:
    if month < 1 or month > 12:
        raise InvalidDateError(f"Invalid month: {month}")

    if day < 1 or day > 31:
        raise InvalidDateError(f"Invalid day: {day}")

    year = 2000 if allow_feb_29 else 2001
    max_day = calendar.monthrange(year, month)[1]
    if day > max_day:
        raise InvalidDateError(f"Invalid month/day combination: {month:02d}-{day:02d}")


def validate_birth_year(year: int, month: int, day: int) -> None:
    if year < MIN_BIRTH_YEAR or year > MAX_BIRTH_YEAR:
        raise InvalidDateError(f"Invalid year: {year}. Must be between {MIN_BIRTH_YEAR} and {MAX_BIRTH_YEAR}")
    try:
        date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date: {year:04d}-{month:02d}-{day:02d}") from exc


def occurrence_in_year(month: int, day: int, year: int) -> date:
    # Feb 29 birthdays are observed on Feb 28 in common years.
    if month == 2 and day == 29 and not is_leap_year(year):
        return date(year, 2, 28)
    return date(year, month, day)


def project_next_occurrence(
    month: int,
    day: int,
    reference_date: date,
    *,
    birth_year: int | None = None,
) -> date:
    """Return the first date on or after ``reference_date`` on which the birthday falls.

    ``birth_year`` is accepted for symmetry with the stored record but never
    shifts the result; the recurrence only depends on month and day. At most
    one year-advance is ever needed.
    """
    validate_month_day(month, day, allow_feb_29=True)
    today = as_day(reference_date)

    candidate = occurrence_in_year(month, day, today.year)
    if candidate < today:
        candidate = occurrence_in_year(month, day, today.year + 1)
    return candidate


def days_until(occurrence: date, reference_date: date) -> int:
    return (as_day(occurrence) - as_day(reference_date)).days


def next_birthday(record: BirthdayRecord, reference_date: date) -> date:
    return project_next_occurrence(
        record.month,
        record.day,
        reference_date,
        birth_year=record.year,
    )


def days_until_birthday(record: BirthdayRecord, reference_date: date) -> int:
    return days_until(next_birthday(record, reference_date), reference_date)


def turning_age(record: BirthdayRecord, birthday_occurrence: date) -> int | None:
    if record.year is None:
        return None
    return birthday_occurrence.year - record.year


def end_of_week(reference_date: date) -> date:
    """Saturday closing the Sunday-started week that contains ``reference_date``."""
    today = as_day(reference_date)
    # date.weekday(): Monday == 0 ... Saturday == 5, Sunday == 6
    return today + timedelta(days=(5 - today.weekday()) % 7)


def end_of_month(reference_date: date) -> date:
    today = as_day(reference_date)
    return today.replace(day=calendar.monthrange(today.year, today.month)[1])
