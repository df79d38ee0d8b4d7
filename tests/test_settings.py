from pathlib import Path

import pytest

from birthday_reminder.settings import load_settings


def test_load_settings_defaults_paths_under_root(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", " token ")
    monkeypatch.setenv("TELEGRAM_ALLOWED_USER_ID", "111")
    monkeypatch.setenv("TELEGRAM_ALLOWED_CHAT_ID", "-222")
    for name in ("BIRTHDAY_CONFIG_PATH", "PERSON_INDEX_PATH", "SENT_LOG_PATH"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings(tmp_path)

    assert settings.telegram_bot_token == "token"
    assert settings.telegram_allowed_chat_id == -222
    assert settings.birthday_config_path == tmp_path / "config" / "birthdays.toml"
    assert settings.sent_log_path == tmp_path / "data" / "sent_reminders.json"


def test_load_settings_requires_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)

    with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
        load_settings()


def test_load_settings_rejects_non_integer_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "token")
    monkeypatch.setenv("TELEGRAM_ALLOWED_USER_ID", "abc")
    monkeypatch.setenv("TELEGRAM_ALLOWED_CHAT_ID", "222")

    with pytest.raises(ValueError, match="TELEGRAM_ALLOWED_USER_ID"):
        load_settings()
