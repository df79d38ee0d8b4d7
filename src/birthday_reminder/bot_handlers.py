from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from telegram import Update
from telegram.ext import (
    CallbackContext,
    CommandHandler,
    ConversationHandler,
    MessageHandler,
    filters,
)

from birthday_reminder.config_store import (
    append_birthday,
    append_birthdays,
    load_config,
    remove_birthday,
    update_birthday,
)
from birthday_reminder.csv_import import ParseResult, parse_csv
from birthday_reminder.date_logic import validate_birth_year, validate_month_day
from birthday_reminder.identity_index import load_birthday_records
from birthday_reminder.models import DEFAULT_REMINDER_OFFSETS, BirthdayEntry
from birthday_reminder.rendering import (
    format_birthday,
    format_birthday_long,
    format_reminder_offsets,
    render_sections_message,
)
from birthday_reminder.sections import group_by_section_collecting
from birthday_reminder.settings import Settings

LOGGER = logging.getLogger(__name__)

(
    STATE_ADD_NAME,
    STATE_ADD_BIRTHDAY,
    STATE_ADD_NOTES,
    STATE_ADD_OFFSETS,
    STATE_ADD_CONFIRM,
    STATE_EDIT_SELECT,
    STATE_EDIT_NAME,
    STATE_EDIT_BIRTHDAY,
    STATE_EDIT_NOTES,
    STATE_EDIT_OFFSETS,
    STATE_EDIT_CONFIRM,
    STATE_DELETE_SELECT,
    STATE_DELETE_CONFIRM,
    STATE_IMPORT_FILE,
    STATE_IMPORT_CONFIRM,
) = range(15)

PENDING_ADD_KEY = "pending_add_birthday"
PENDING_EDIT_KEY = "pending_edit_birthday"
PENDING_DELETE_KEY = "pending_delete_birthday"
PENDING_IMPORT_KEY = "pending_import"

SKIP_WORDS = {"skip"}
CLEAR_WORDS = {"clear", "none", "-"}
YES_WORDS = {"yes", "y"}
NO_WORDS = {"no", "n"}
MAX_PREVIEW_ERRORS = 10

TEXT_ONLY = filters.TEXT & ~filters.COMMAND


@dataclass(frozen=True)
class HandlerDependencies:
    settings: Settings


def is_authorized(update: Update, settings: Settings) -> bool:
    effective_user = update.effective_user
    effective_chat = update.effective_chat
    if effective_user is None or effective_chat is None:
        return False
    return (
        effective_user.id == settings.telegram_allowed_user_id
        and effective_chat.id == settings.telegram_allowed_chat_id
    )


async def _authorized_settings(update: Update, context: CallbackContext) -> Settings | None:
    deps: HandlerDependencies = context.application.bot_data["handler_deps"]
    if is_authorized(update, deps.settings):
        return deps.settings
    if update.effective_message:
        await update.effective_message.reply_text("This bot is restricted to its configured owner.")
    return None


async def _reply(update: Update, text: str) -> None:
    await update.effective_message.reply_text(text)


def _message_text(update: Update) -> str:
    return (update.effective_message.text or "").strip()


def _is_skip(value: str) -> bool:
    return value.strip().lower() in SKIP_WORDS


def parse_decision(raw_text: str) -> bool | None:
    decision = raw_text.strip().lower()
    if decision in YES_WORDS:
        return True
    if decision in NO_WORDS:
        return False
    return None


def parse_birthday_text(raw_text: str) -> tuple[int, int, int | None]:
    value = raw_text.strip()

    full_match = re.fullmatch(r"(\d{4})-(\d{1,2})-(\d{1,2})", value)
    if full_match:
        year, month, day = (int(group) for group in full_match.groups())
        validate_month_day(month, day)
        validate_birth_year(year, month, day)
        return month, day, year

    short_match = re.fullmatch(r"(\d{1,2})-(\d{1,2})", value)
    if short_match:
        month, day = (int(group) for group in short_match.groups())
        validate_month_day(month, day, allow_feb_29=True)
        return month, day, None

    raise ValueError("Birthday must use YYYY-MM-DD or MM-DD")


def parse_offsets_text(raw_text: str) -> tuple[list[int], bool]:
    text = raw_text.strip()
    if not text or text.lower() in {"skip", "default"}:
        return list(DEFAULT_REMINDER_OFFSETS), True

    values: list[int] = []
    for token in text.split(","):
        cleaned = token.strip()
        if not cleaned:
            continue
        if not cleaned.isdigit():
            raise ValueError("Offsets must be comma-separated non-negative integers")
        values.append(int(cleaned))

    if not values:
        raise ValueError("Provide at least one offset or leave blank for default")

    return sorted(set(values), reverse=True), False


def parse_notes_text(raw_text: str) -> str | None:
    text = raw_text.strip()
    if not text or text.lower() in SKIP_WORDS | CLEAR_WORDS:
        return None
    return text


def _render_help() -> str:
    return (
        "Commands:\n"
        "/list - Show upcoming birthdays grouped by section\n"
        "/add - Add a birthday\n"
        "/edit - Edit an existing birthday\n"
        "/delete - Remove a birthday\n"
        "/import - Import birthdays from a semicolon-separated CSV file\n"
        "/help - Show this help message\n"
        "/cancel - Cancel the active wizard\n\n"
        "Birthday format examples:\n"
        "- 1990-03-14\n"
        "- 03-14\n\n"
        "Reminder offsets example: 30,7,1,0 (or send skip/default)\n"
        "CSV columns: First Name;Last Name;Birthday"
    )


def _render_entry_line(index: int, entry: BirthdayEntry) -> str:
    return (
        f"{index}. {entry.name} | {format_birthday(entry.month, entry.day, entry.year)}"
        f" | Reminders {format_reminder_offsets(tuple(entry.reminder_offsets))}"
    )


def _render_selection(header: str, entries: list[BirthdayEntry]) -> str:
    lines = [header]
    lines.extend(_render_entry_line(index, entry) for index, entry in enumerate(entries, start=1))
    return "\n".join(lines)


def _entry_from_pending(pending: dict[str, Any]) -> BirthdayEntry:
    return BirthdayEntry(
        name=str(pending["name"]),
        month=int(pending["month"]),
        day=int(pending["day"]),
        year=int(pending["year"]) if pending.get("year") is not None else None,
        reminder_offsets=[int(v) for v in pending["offsets"]],
        notes=pending.get("notes"),
    )


def _render_add_summary(pending: dict[str, Any]) -> str:
    entry = _entry_from_pending(pending)
    default_note = " (default)" if pending.get("used_default_offsets") else ""
    return (
        "Step 5/5: Confirm this entry:\n"
        f"Name: {entry.name}\n"
        f"Birthday: {format_birthday_long(entry.month, entry.day, entry.year)}\n"
        f"Notes: {entry.notes or '(none)'}\n"
        f"Offsets: {entry.reminder_offsets}{default_note}\n\n"
        "Reply with yes to save, or no to cancel."
    )


def _render_edit_summary(original: BirthdayEntry, pending: dict[str, Any]) -> str:
    updated = _entry_from_pending(pending)
    default_note = " (default)" if pending.get("used_default_offsets") else ""
    return (
        "Step 6/6: Confirm these edits:\n"
        f"Name: {original.name} -> {updated.name}\n"
        f"Birthday: {format_birthday(original.month, original.day, original.year)}"
        f" -> {format_birthday(updated.month, updated.day, updated.year)}\n"
        f"Notes: {original.notes or '(none)'} -> {updated.notes or '(none)'}\n"
        f"Offsets: {original.reminder_offsets} -> {updated.reminder_offsets}{default_note}\n\n"
        "Reply with yes to save, or no to cancel."
    )


def _render_import_preview(result: ParseResult) -> str:
    lines = [f"Found {len(result.valid)} valid birthdays and {len(result.errors)} invalid lines."]

    for parsed in result.valid:
        lines.append(f"- {parsed.name} | {format_birthday_long(parsed.month, parsed.day, parsed.year)}")

    if result.errors:
        lines.append("")
        lines.append("Skipped lines:")
        for error in result.errors[:MAX_PREVIEW_ERRORS]:
            lines.append(f"- Line {error.line}: {error.error}")
        hidden = len(result.errors) - MAX_PREVIEW_ERRORS
        if hidden > 0:
            lines.append(f"... and {hidden} more")

    if result.valid:
        lines.append("")
        lines.append("Reply with yes to import the valid birthdays, or no to cancel.")
    return "\n".join(lines)


def _pending(context: CallbackContext, key: str) -> dict[str, Any] | None:
    pending = context.user_data.get(key)
    if not isinstance(pending, dict) or not pending:
        return None
    return pending


async def _save_rejected(update: Update, exc: ValueError) -> int:
    LOGGER.warning("Birthday store rejected the change: %s", exc)
    await _reply(update, f"Could not save: {exc}. No changes were made.")
    return ConversationHandler.END


async def _session_expired(update: Update, command: str) -> int:
    await _reply(update, f"Session expired. Send /{command} to start again.")
    return ConversationHandler.END


async def help_command(update: Update, context: CallbackContext) -> None:
    if await _authorized_settings(update, context) is None:
        return
    await _reply(update, _render_help())


async def list_command(update: Update, context: CallbackContext) -> None:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return

    config, records = load_birthday_records(settings.birthday_config_path, settings.person_index_path)
    if not records:
        await _reply(update, "No birthdays are currently tracked.")
        return

    today = datetime.now(ZoneInfo(config.timezone)).date()
    result = group_by_section_collecting(records, today)
    for error in result.errors:
        LOGGER.warning("Skipping invalid birthday in /list: %s", error)

    message = render_sections_message(result.sections)
    if result.errors:
        message += f"\n\nSkipped {len(result.errors)} invalid entries."
    await _reply(update, message)


async def add_start(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    context.user_data[PENDING_ADD_KEY] = {}
    await _reply(update, "Add birthday wizard started.\nStep 1/5: Send the person's name.")
    return STATE_ADD_NAME


async def add_name(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    name = _message_text(update)
    if not name:
        await _reply(update, "Name cannot be empty. Please send a name.")
        return STATE_ADD_NAME

    context.user_data[PENDING_ADD_KEY] = {"name": name}
    await _reply(update, "Step 2/5: Send birthday as YYYY-MM-DD or MM-DD.")
    return STATE_ADD_BIRTHDAY


async def add_birthday(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_ADD_KEY)
    if pending is None:
        return await _session_expired(update, "add")

    try:
        month, day, year = parse_birthday_text(_message_text(update))
    except ValueError as exc:
        await _reply(update, f"{exc}. Please send YYYY-MM-DD or MM-DD.")
        return STATE_ADD_BIRTHDAY

    pending.update({"month": month, "day": day, "year": year})
    await _reply(update, "Step 3/5: Send notes for this person, or skip.")
    return STATE_ADD_NOTES


async def add_notes(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_ADD_KEY)
    if pending is None:
        return await _session_expired(update, "add")

    pending["notes"] = parse_notes_text(_message_text(update))
    await _reply(
        update,
        "Step 4/5: Send reminder offsets in days (e.g., 30,7,1,0).\n"
        "Send skip/default for [30,7,1,0].",
    )
    return STATE_ADD_OFFSETS


async def add_offsets(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_ADD_KEY)
    if pending is None:
        return await _session_expired(update, "add")

    try:
        offsets, used_default = parse_offsets_text(_message_text(update))
    except ValueError as exc:
        await _reply(update, f"{exc}. Provide comma-separated values like 30,7,1,0 or leave blank.")
        return STATE_ADD_OFFSETS

    pending["offsets"] = offsets
    pending["used_default_offsets"] = used_default
    await _reply(update, _render_add_summary(pending))
    return STATE_ADD_CONFIRM


async def add_confirm(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_ADD_KEY)
    if pending is None:
        return await _session_expired(update, "add")

    decision = parse_decision(_message_text(update))
    if decision is None:
        await _reply(update, "Please reply with yes or no.")
        return STATE_ADD_CONFIRM

    context.user_data.pop(PENDING_ADD_KEY, None)
    if not decision:
        await _reply(update, "Canceled. No changes were made.")
        return ConversationHandler.END

    entry = _entry_from_pending(pending)
    try:
        append_birthday(settings.birthday_config_path, entry)
    except ValueError as exc:
        return await _save_rejected(update, exc)

    await _reply(update, "Birthday saved.")
    LOGGER.info("Added birthday for %s", entry.name)
    return ConversationHandler.END


async def edit_start(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    config = load_config(settings.birthday_config_path, strict=False)
    if not config.birthdays:
        await _reply(update, "No birthdays are currently tracked.")
        return ConversationHandler.END

    context.user_data[PENDING_EDIT_KEY] = {}
    await _reply(
        update,
        _render_selection(
            "Edit birthday wizard started.\nStep 1/6: Reply with the number of the entry to edit:",
            config.birthdays,
        ),
    )
    return STATE_EDIT_SELECT


async def _select_entry(update: Update, settings: Settings) -> tuple[int, BirthdayEntry] | None:
    raw_text = _message_text(update)
    if not raw_text.isdigit():
        await _reply(update, "Please send the entry number shown in the list.")
        return None

    selected = int(raw_text)
    config = load_config(settings.birthday_config_path, strict=False)
    if selected < 1 or selected > len(config.birthdays):
        await _reply(update, f"Entry must be between 1 and {len(config.birthdays)}.")
        return None

    return selected - 1, config.birthdays[selected - 1]


async def edit_select(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    selection = await _select_entry(update, settings)
    if selection is None:
        return STATE_EDIT_SELECT

    index, entry = selection
    context.user_data[PENDING_EDIT_KEY] = {
        "index": index,
        "original": entry,
        "name": entry.name,
        "month": entry.month,
        "day": entry.day,
        "year": entry.year,
        "notes": entry.notes,
        "offsets": list(entry.reminder_offsets),
        "used_default_offsets": False,
    }
    await _reply(update, f'Step 2/6: Send a new name, or skip to keep "{entry.name}".')
    return STATE_EDIT_NAME


async def edit_name(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_EDIT_KEY)
    if pending is None or "index" not in pending:
        return await _session_expired(update, "edit")

    raw_text = _message_text(update)
    if not _is_skip(raw_text):
        if not raw_text:
            await _reply(update, "Name cannot be empty. Send a name or skip.")
            return STATE_EDIT_NAME
        pending["name"] = raw_text

    current = format_birthday(int(pending["month"]), int(pending["day"]), pending["year"])
    await _reply(update, f"Step 3/6: Send a new birthday as YYYY-MM-DD or MM-DD,\nor skip to keep {current}.")
    return STATE_EDIT_BIRTHDAY


async def edit_birthday(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_EDIT_KEY)
    if pending is None or "index" not in pending:
        return await _session_expired(update, "edit")

    raw_text = _message_text(update)
    if not _is_skip(raw_text):
        try:
            month, day, year = parse_birthday_text(raw_text)
        except ValueError as exc:
            await _reply(update, f"{exc}. Please send YYYY-MM-DD or MM-DD, or skip.")
            return STATE_EDIT_BIRTHDAY
        pending.update({"month": month, "day": day, "year": year})

    current_notes = pending.get("notes") or "(none)"
    await _reply(update, f"Step 4/6: Send new notes, skip to keep {current_notes!r}, or clear to remove them.")
    return STATE_EDIT_NOTES


async def edit_notes(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_EDIT_KEY)
    if pending is None or "index" not in pending:
        return await _session_expired(update, "edit")

    raw_text = _message_text(update)
    if not _is_skip(raw_text):
        pending["notes"] = parse_notes_text(raw_text)

    current_offsets = format_reminder_offsets(tuple(int(v) for v in pending["offsets"]))
    await _reply(
        update,
        "Step 5/6: Send new reminder offsets in days (e.g., 30,7,1,0).\n"
        f"Send skip to keep {current_offsets}, or default for [30,7,1,0].",
    )
    return STATE_EDIT_OFFSETS


async def edit_offsets(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_EDIT_KEY)
    if pending is None or "index" not in pending:
        return await _session_expired(update, "edit")

    raw_text = _message_text(update)
    if _is_skip(raw_text):
        pending["used_default_offsets"] = False
    else:
        try:
            offsets, used_default = parse_offsets_text(raw_text)
        except ValueError as exc:
            await _reply(update, f"{exc}. Provide comma-separated values like 30,7,1,0, send default, or skip.")
            return STATE_EDIT_OFFSETS
        pending["offsets"] = offsets
        pending["used_default_offsets"] = used_default

    await _reply(update, _render_edit_summary(pending["original"], pending))
    return STATE_EDIT_CONFIRM


async def edit_confirm(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_EDIT_KEY)
    if pending is None or "index" not in pending:
        return await _session_expired(update, "edit")

    decision = parse_decision(_message_text(update))
    if decision is None:
        await _reply(update, "Please reply with yes or no.")
        return STATE_EDIT_CONFIRM

    context.user_data.pop(PENDING_EDIT_KEY, None)
    if not decision:
        await _reply(update, "Canceled. No changes were made.")
        return ConversationHandler.END

    entry = _entry_from_pending(pending)
    try:
        update_birthday(settings.birthday_config_path, index=int(pending["index"]), updated_birthday=entry)
    except IndexError:
        await _reply(update, "Could not save because the birthday list changed. Send /edit and try again.")
        return ConversationHandler.END
    except ValueError as exc:
        return await _save_rejected(update, exc)

    await _reply(update, "Birthday updated.")
    LOGGER.info("Updated birthday for %s", entry.name)
    return ConversationHandler.END


async def delete_start(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    config = load_config(settings.birthday_config_path, strict=False)
    if not config.birthdays:
        await _reply(update, "No birthdays are currently tracked.")
        return ConversationHandler.END

    await _reply(update, _render_selection("Reply with the number of the entry to delete:", config.birthdays))
    return STATE_DELETE_SELECT


async def delete_select(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    selection = await _select_entry(update, settings)
    if selection is None:
        return STATE_DELETE_SELECT

    index, entry = selection
    context.user_data[PENDING_DELETE_KEY] = {"index": index, "name": entry.name}
    await _reply(update, f"Delete {entry.name}? Reply with yes or no.")
    return STATE_DELETE_CONFIRM


async def delete_confirm(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_DELETE_KEY)
    if pending is None:
        return await _session_expired(update, "delete")

    decision = parse_decision(_message_text(update))
    if decision is None:
        await _reply(update, "Please reply with yes or no.")
        return STATE_DELETE_CONFIRM

    context.user_data.pop(PENDING_DELETE_KEY, None)
    if not decision:
        await _reply(update, "Canceled. No changes were made.")
        return ConversationHandler.END

    try:
        removed = remove_birthday(settings.birthday_config_path, index=int(pending["index"]))
    except IndexError:
        await _reply(update, "Could not delete because the birthday list changed. Send /delete and try again.")
        return ConversationHandler.END
    except ValueError as exc:
        return await _save_rejected(update, exc)

    if removed.name != pending["name"]:
        LOGGER.warning("Deleted %s at position %s, expected %s", removed.name, pending["index"], pending["name"])
    await _reply(update, f"Deleted {removed.name}.")
    LOGGER.info("Deleted birthday for %s", removed.name)
    return ConversationHandler.END


async def import_start(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    context.user_data.pop(PENDING_IMPORT_KEY, None)
    await _reply(
        update,
        "Send a CSV file with the columns First Name;Last Name;Birthday.\n"
        "The first line is treated as a header.",
    )
    return STATE_IMPORT_FILE


async def import_document(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    document = update.effective_message.document
    if document is None:
        await _reply(update, "Please send the CSV as a file attachment.")
        return STATE_IMPORT_FILE

    telegram_file = await document.get_file()
    payload = await telegram_file.download_as_bytearray()
    try:
        content = bytes(payload).decode("utf-8-sig")
    except UnicodeDecodeError:
        await _reply(update, "The file must be UTF-8 encoded text. Send another file or /cancel.")
        return STATE_IMPORT_FILE

    result = parse_csv(content)
    for error in result.errors:
        LOGGER.warning("CSV import line %s rejected: %s", error.line, error.error)

    await _reply(update, _render_import_preview(result))
    if not result.valid:
        return ConversationHandler.END

    context.user_data[PENDING_IMPORT_KEY] = {
        "entries": [parsed.to_entry(DEFAULT_REMINDER_OFFSETS) for parsed in result.valid],
    }
    return STATE_IMPORT_CONFIRM


async def import_confirm(update: Update, context: CallbackContext) -> int:
    settings = await _authorized_settings(update, context)
    if settings is None:
        return ConversationHandler.END

    pending = _pending(context, PENDING_IMPORT_KEY)
    if pending is None:
        return await _session_expired(update, "import")

    decision = parse_decision(_message_text(update))
    if decision is None:
        await _reply(update, "Please reply with yes or no.")
        return STATE_IMPORT_CONFIRM

    context.user_data.pop(PENDING_IMPORT_KEY, None)
    if not decision:
        await _reply(update, "Canceled. No changes were made.")
        return ConversationHandler.END

    entries: list[BirthdayEntry] = pending["entries"]
    try:
        append_birthdays(settings.birthday_config_path, entries)
    except ValueError as exc:
        return await _save_rejected(update, exc)

    await _reply(update, f"Imported {len(entries)} birthdays.")
    LOGGER.info("Imported %s birthdays from CSV", len(entries))
    return ConversationHandler.END


async def cancel_command(update: Update, context: CallbackContext) -> int:
    if await _authorized_settings(update, context) is None:
        return ConversationHandler.END

    for key in (PENDING_ADD_KEY, PENDING_EDIT_KEY, PENDING_DELETE_KEY, PENDING_IMPORT_KEY):
        context.user_data.pop(key, None)
    await _reply(update, "Wizard canceled.")
    return ConversationHandler.END


def _conversation(name: str, command: str, entry_callback, states: dict) -> ConversationHandler:
    return ConversationHandler(
        entry_points=[CommandHandler(command, entry_callback)],
        states=states,
        fallbacks=[CommandHandler("cancel", cancel_command)],
        name=name,
        persistent=False,
    )


def build_handlers() -> list:
    add_conversation = _conversation(
        "add_birthday_conversation",
        "add",
        add_start,
        {
            STATE_ADD_NAME: [MessageHandler(TEXT_ONLY, add_name)],
            STATE_ADD_BIRTHDAY: [MessageHandler(TEXT_ONLY, add_birthday)],
            STATE_ADD_NOTES: [MessageHandler(TEXT_ONLY, add_notes)],
            STATE_ADD_OFFSETS: [MessageHandler(TEXT_ONLY, add_offsets)],
            STATE_ADD_CONFIRM: [MessageHandler(TEXT_ONLY, add_confirm)],
        },
    )

    edit_conversation = _conversation(
        "edit_birthday_conversation",
        "edit",
        edit_start,
        {
            STATE_EDIT_SELECT: [MessageHandler(TEXT_ONLY, edit_select)],
            STATE_EDIT_NAME: [MessageHandler(TEXT_ONLY, edit_name)],
            STATE_EDIT_BIRTHDAY: [MessageHandler(TEXT_ONLY, edit_birthday)],
            STATE_EDIT_NOTES: [MessageHandler(TEXT_ONLY, edit_notes)],
            STATE_EDIT_OFFSETS: [MessageHandler(TEXT_ONLY, edit_offsets)],
            STATE_EDIT_CONFIRM: [MessageHandler(TEXT_ONLY, edit_confirm)],
        },
    )

    delete_conversation = _conversation(
        "delete_birthday_conversation",
        "delete",
        delete_start,
        {
            STATE_DELETE_SELECT: [MessageHandler(TEXT_ONLY, delete_select)],
            STATE_DELETE_CONFIRM: [MessageHandler(TEXT_ONLY, delete_confirm)],
        },
    )

    import_conversation = _conversation(
        "import_birthdays_conversation",
        "import",
        import_start,
        {
            STATE_IMPORT_FILE: [
                MessageHandler(filters.Document.ALL, import_document),
                MessageHandler(TEXT_ONLY, import_document),
            ],
            STATE_IMPORT_CONFIRM: [MessageHandler(TEXT_ONLY, import_confirm)],
        },
    )

    return [
        CommandHandler("help", help_command),
        CommandHandler("list", list_command),
        CommandHandler("cancel", cancel_command),
        add_conversation,
        edit_conversation,
        delete_conversation,
        import_conversation,
    ]
