import json
from pathlib import Path

from birthday_reminder.config_store import save_config_atomic
from birthday_reminder.identity_index import assign_ids, load_birthday_records, load_index
from birthday_reminder.models import AppConfig, BirthdayEntry


def test_assign_ids_reuses_existing_and_extends() -> None:
    entries = [
        BirthdayEntry(name="Alice", month=3, day=14, year=1990, reminder_offsets=[7]),
        BirthdayEntry(name=" alice ", month=3, day=14, year=1990, reminder_offsets=[1]),
        BirthdayEntry(name="Bob", month=5, day=1, year=None, reminder_offsets=[0]),
    ]
    known = {
        "alice|03|14|1990": ["id-a-1"],
        "bob|05|01|none": ["id-b-1"],
    }

    assignment = assign_ids(entries, known)

    assert assignment.record_ids[0] == "id-a-1"
    assert assignment.record_ids[1] != "id-a-1"
    assert assignment.record_ids[2] == "id-b-1"
    assert len(assignment.fingerprints["alice|03|14|1990"]) == 2


def test_load_index_ignores_malformed_records(tmp_path: Path) -> None:
    path = tmp_path / "person_index.json"
    path.write_text(
        json.dumps({"version": 1, "records": {"bob|05|01|none": ["id-b-1"], "broken": "not-a-list"}}),
        encoding="utf-8",
    )

    assert load_index(path) == {"bob|05|01|none": ["id-b-1"]}


def test_load_birthday_records_keeps_invalid_entries(tmp_path: Path) -> None:
    config_path = tmp_path / "birthdays.toml"
    config_path.write_text(
        'timezone = "UTC"\ndaily_send_time = "09:00"\n\n'
        '[[birthdays]]\nname = "Broken"\nmonth = 13\nday = 1\nreminder_offsets = [0]\n',
        encoding="utf-8",
    )

    _config, records = load_birthday_records(config_path, tmp_path / "person_index.json")

    assert [(record.name, record.month) for record in records] == [("Broken", 13)]


def test_load_birthday_records_keeps_ids_stable(tmp_path: Path) -> None:
    config_path = tmp_path / "birthdays.toml"
    index_path = tmp_path / "person_index.json"
    save_config_atomic(
        config_path,
        AppConfig(
            timezone="UTC",
            daily_send_time="09:00",
            birthdays=[
                BirthdayEntry(name="Alice", month=3, day=14, year=1990, reminder_offsets=[7, 0], notes="Tea"),
                BirthdayEntry(name="Bob", month=5, day=1, year=None, reminder_offsets=[0]),
            ],
        ),
    )

    _config, first = load_birthday_records(config_path, index_path)
    _config, second = load_birthday_records(config_path, index_path)

    assert [record.id for record in first] == [record.id for record in second]
    assert len({record.id for record in first}) == 2
    assert first[0].notes == "Tea"
    assert first[0].reminder_offsets == (7, 0)
    assert index_path.exists()
