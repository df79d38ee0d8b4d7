from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    telegram_allowed_user_id: int
    telegram_allowed_chat_id: int
    birthday_config_path: Path
    person_index_path: Path
    sent_log_path: Path


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _required_int_env(name: str) -> int:
    raw = _required_env(name)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from exc


def load_settings(root: Path | None = None) -> Settings:
    root = root or Path.cwd()

    return Settings(
        telegram_bot_token=_required_env("TELEGRAM_BOT_TOKEN"),
        telegram_allowed_user_id=_required_int_env("TELEGRAM_ALLOWED_USER_ID"),
        telegram_allowed_chat_id=_required_int_env("TELEGRAM_ALLOWED_CHAT_ID"),
        birthday_config_path=Path(os.getenv("BIRTHDAY_CONFIG_PATH", root / "config" / "birthdays.toml")),
        person_index_path=Path(os.getenv("PERSON_INDEX_PATH", root / "data" / "person_index.json")),
        sent_log_path=Path(os.getenv("SENT_LOG_PATH", root / "data" / "sent_reminders.json")),
    )
