from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from birthday_reminder.date_logic import (
    InvalidDateError,
    as_day,
    days_until,
    end_of_month,
    end_of_week,
    next_birthday,
)
from birthday_reminder.models import (
    SECTION_NEXT_MONTH,
    SECTION_ORDER,
    SECTION_THIS_MONTH,
    SECTION_THIS_WEEK,
    SECTION_TODAY,
    BirthdayRecord,
    BirthdaySection,
    ProjectedOccurrence,
)


class InvalidRecordError(InvalidDateError):
    def __init__(self, record_id: str, message: str) -> None:
        super().__init__(f"Birthday {record_id}: {message}")
        self.record_id = record_id


@dataclass(frozen=True)
class GroupingResult:
    sections: list[BirthdaySection]
    errors: list[InvalidRecordError]


def project_record(record: BirthdayRecord, reference_date: date) -> ProjectedOccurrence:
    try:
        occurrence = next_birthday(record, reference_date)
    except InvalidDateError as exc:
        raise InvalidRecordError(record.id, str(exc)) from exc
    return ProjectedOccurrence(
        record=record,
        next_occurrence=occurrence,
        days_until=days_until(occurrence, reference_date),
    )


def classify_section(days_until_value: int, reference_date: date) -> str:
    """Map a days-until count to its display section.

    The week runs Sunday through Saturday, so an occurrence seven days out
    only counts as "This Week" when it does not cross the Saturday cutoff.
    "Next Month" is the catch-all for anything past the end of the current
    month, however far out.
    """
    if days_until_value == 0:
        return SECTION_TODAY

    today = as_day(reference_date)
    target = today + timedelta(days=days_until_value)

    if days_until_value <= 7 and target <= end_of_week(today):
        return SECTION_THIS_WEEK

    if target <= end_of_month(today):
        return SECTION_THIS_MONTH

    return SECTION_NEXT_MONTH


def _build_sections(projected: list[ProjectedOccurrence], reference_date: date) -> list[BirthdaySection]:
    # sorted() is stable: equal dates keep their input order.
    ordered = sorted(projected, key=lambda item: item.next_occurrence)

    buckets: dict[str, list[ProjectedOccurrence]] = {title: [] for title in SECTION_ORDER}
    for item in ordered:
        buckets[classify_section(item.days_until, reference_date)].append(item)

    return [
        BirthdaySection(title=title, members=tuple(buckets[title]))
        for title in SECTION_ORDER
        if buckets[title]
    ]


def group_by_section(records: Iterable[BirthdayRecord], reference_date: date) -> list[BirthdaySection]:
    """Group records into non-empty display sections.

    Raises InvalidRecordError for the first record whose month/day is out of
    range.
    """
    projected = [project_record(record, reference_date) for record in records]
    return _build_sections(projected, reference_date)


def group_by_section_collecting(records: Iterable[BirthdayRecord], reference_date: date) -> GroupingResult:
    """Like group_by_section, but returns invalid records as errors instead of raising."""
    projected: list[ProjectedOccurrence] = []
    errors: list[InvalidRecordError] = []

    for record in records:
        try:
            projected.append(project_record(record, reference_date))
        except InvalidRecordError as exc:
            errors.append(exc)

    return GroupingResult(sections=_build_sections(projected, reference_date), errors=errors)
