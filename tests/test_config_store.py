from pathlib import Path

import pytest

from birthday_reminder.config_store import (
    append_birthdays,
    ensure_default_config,
    load_config,
    remove_birthday,
    save_config_atomic,
    update_birthday,
)
from birthday_reminder.models import AppConfig, BirthdayEntry


def _save(path: Path, birthdays: list[BirthdayEntry]) -> None:
    save_config_atomic(
        path,
        AppConfig(timezone="America/Los_Angeles", daily_send_time="09:00", birthdays=birthdays),
    )


def test_save_and_load_config(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    _save(
        path,
        [
            BirthdayEntry(
                name="Alice",
                month=3,
                day=14,
                year=1990,
                reminder_offsets=[0, 7, 30, 1],
                notes='Likes "green" tea\nand scones',
            )
        ],
    )

    loaded = load_config(path)

    assert loaded.timezone == "America/Los_Angeles"
    assert loaded.daily_send_time == "09:00"
    assert loaded.birthdays[0].name == "Alice"
    assert loaded.birthdays[0].reminder_offsets == [30, 7, 1, 0]
    assert loaded.birthdays[0].notes == 'Likes "green" tea\nand scones'


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_invalid_offset_rejected(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    path.write_text(
        """
timezone = "America/Los_Angeles"
daily_send_time = "09:00"

[[birthdays]]
name = "Alice"
month = 3
day = 14
reminder_offsets = [-1]
""".strip()
        + "\n",
        encoding="utf-8",
    )

    with pytest.raises(ValueError):
        load_config(path)


def test_invalid_send_time_rejected(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    path.write_text('timezone = "UTC"\ndaily_send_time = "25:00"\n', encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_feb_29_without_year_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    _save(path, [BirthdayEntry(name="Leap", month=2, day=29, year=None, reminder_offsets=[0])])

    assert load_config(path).birthdays[0].day == 29


def test_feb_29_in_common_year_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        _save(
            tmp_path / "birthdays.toml",
            [BirthdayEntry(name="Leap", month=2, day=29, year=2001, reminder_offsets=[0])],
        )


def test_invalid_month_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        _save(
            tmp_path / "birthdays.toml",
            [BirthdayEntry(name="Nobody", month=13, day=1, year=None, reminder_offsets=[0])],
        )


def test_ensure_default_config_creates_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "config" / "birthdays.toml"

    ensure_default_config(path)
    loaded = load_config(path)

    assert loaded.birthdays == []
    assert loaded.daily_send_time == "09:00"


def test_append_birthdays_keeps_existing(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    _save(path, [BirthdayEntry(name="Alice", month=3, day=14, year=1990, reminder_offsets=[0])])

    append_birthdays(
        path,
        [
            BirthdayEntry(name="Bob", month=7, day=4, year=None, reminder_offsets=[1, 0]),
            BirthdayEntry(name="Carol", month=12, day=1, year=1985, reminder_offsets=[0]),
        ],
    )

    assert [entry.name for entry in load_config(path).birthdays] == ["Alice", "Bob", "Carol"]


def test_update_birthday_replaces_selected_entry(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    _save(
        path,
        [
            BirthdayEntry(name="Alice", month=3, day=14, year=1990, reminder_offsets=[30, 7, 1, 0]),
            BirthdayEntry(name="Bob", month=8, day=22, year=None, reminder_offsets=[7, 0]),
        ],
    )

    update_birthday(
        path,
        index=1,
        updated_birthday=BirthdayEntry(
            name="Bobby",
            month=8,
            day=23,
            year=2001,
            reminder_offsets=[14, 1, 0],
            notes="Prefers calls",
        ),
    )
    loaded = load_config(path)

    assert loaded.birthdays[0].name == "Alice"
    assert loaded.birthdays[1].name == "Bobby"
    assert (loaded.birthdays[1].month, loaded.birthdays[1].day, loaded.birthdays[1].year) == (8, 23, 2001)
    assert loaded.birthdays[1].reminder_offsets == [14, 1, 0]
    assert loaded.birthdays[1].notes == "Prefers calls"


def test_update_birthday_rejects_invalid_index(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    _save(path, [])

    with pytest.raises(IndexError):
        update_birthday(
            path,
            index=0,
            updated_birthday=BirthdayEntry(name="Alice", month=3, day=14, year=1990, reminder_offsets=[0]),
        )


def test_remove_birthday(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    _save(
        path,
        [
            BirthdayEntry(name="Alice", month=3, day=14, year=1990, reminder_offsets=[0]),
            BirthdayEntry(name="Bob", month=8, day=22, year=None, reminder_offsets=[0]),
        ],
    )

    removed = remove_birthday(path, index=0)

    assert removed.name == "Alice"
    assert [entry.name for entry in load_config(path).birthdays] == ["Bob"]


def test_remove_birthday_rejects_invalid_index(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    _save(path, [])

    with pytest.raises(IndexError):
        remove_birthday(path, index=3)


BROKEN_CONFIG = """
timezone = "UTC"
daily_send_time = "09:00"

[[birthdays]]
name = "Alice"
month = 3
day = 14
reminder_offsets = [0]

[[birthdays]]
name = "Broken"
month = 13
day = 1
reminder_offsets = [0]
""".lstrip()


def test_lenient_load_keeps_invalid_entries(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    path.write_text(BROKEN_CONFIG, encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)
    loaded = load_config(path, strict=False)

    assert [(entry.name, entry.month) for entry in loaded.birthdays] == [("Alice", 3), ("Broken", 13)]


def test_removing_invalid_entry_repairs_file(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    path.write_text(BROKEN_CONFIG, encoding="utf-8")

    removed = remove_birthday(path, index=1)

    assert removed.name == "Broken"
    assert [entry.name for entry in load_config(path).birthdays] == ["Alice"]


def test_append_is_rejected_while_invalid_entry_remains(tmp_path: Path) -> None:
    path = tmp_path / "birthdays.toml"
    path.write_text(BROKEN_CONFIG, encoding="utf-8")

    with pytest.raises(ValueError):
        append_birthdays(path, [BirthdayEntry(name="Bob", month=7, day=4, year=None, reminder_offsets=[0])])

    assert path.read_text(encoding="utf-8") == BROKEN_CONFIG


def test_year_outside_range_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Invalid year: 1850"):
        _save(
            tmp_path / "birthdays.toml",
            [BirthdayEntry(name="Grandpa", month=5, day=5, year=1850, reminder_offsets=[0])],
        )
