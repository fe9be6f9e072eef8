# SPDX-License-Identifier: MIT

import base64
import binascii
import datetime
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum

from daybook import configuration, time
from daybook.model.day_entry import (
    NOTE_CATEGORIES,
    NOTE_CATEGORY_DISPLAY_NAMES,
    DayEntry,
    NoteCategory,
    NoteItem,
    earliest_note_reminder,
    is_blank,
    normalize_day_entry,
)
from daybook.model.entity_id import EntityId
from daybook.repository.persistent_map import PersistentJsonMap
from daybook.service.reminder import ReminderScheduler, reminder_title
from daybook.template.note import get_note_template

logger = logging.getLogger(__name__)


class AgendaRepository:
    """Day entries keyed by day key, plus one note per ISO week.

    Every mutation normalizes the touched entry, rewrites the whole file and
    only then commits the new state to memory. If the write fails the
    in-memory state stays as it was before the call.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        week_notes_path: Optional[Path] = None,
        scheduler: Optional[ReminderScheduler] = None,
    ) -> None:
        self._path = path
        self._week_notes_path = week_notes_path
        self.scheduler = scheduler
        self._agenda_file: Optional[PersistentJsonMap] = None
        self._week_notes_file: Optional[PersistentJsonMap] = None
        self._entries: Optional[dict[str, DayEntry]] = None
        self._week_notes: Optional[dict[str, str]] = None

    @property
    def agenda_file(self) -> PersistentJsonMap:
        if self._agenda_file is None:
            path = self._path if self._path is not None else configuration.DATA_AGENDA_PATH
            self._agenda_file = PersistentJsonMap(path)
        return self._agenda_file

    @property
    def week_notes_file(self) -> PersistentJsonMap:
        if self._week_notes_file is None:
            path = (
                self._week_notes_path
                if self._week_notes_path is not None
                else configuration.DATA_WEEK_NOTES_PATH
            )
            self._week_notes_file = PersistentJsonMap(path)
        return self._week_notes_file

    @property
    def entries(self) -> dict[str, DayEntry]:
        if self._entries is None:
            self._entries = self.__read_entries() or {}
        return self._entries

    @property
    def week_notes(self) -> dict[str, str]:
        if self._week_notes is None:
            self._week_notes = self.__read_week_notes()
        return self._week_notes

    def __read_entries(self) -> Optional[dict[str, DayEntry]]:
        raw_entries = self.agenda_file.read()
        if raw_entries is None:
            return None
        if not isinstance(raw_entries, dict):
            logger.warning("Ignoring %s: not a day-entry map", self.agenda_file.path)
            return None
        try:
            entries: dict[str, DayEntry] = {}
            for key, raw_entry in raw_entries.items():
                entry = normalize_day_entry(
                    self.__convert_entry_for_deserialization(raw_entry)
                )
                if entry:
                    entries[key] = entry
            return entries
        except (AttributeError, KeyError, TypeError, ValueError, binascii.Error):
            logger.warning(
                "Could not decode %s", self.agenda_file.path, exc_info=True
            )
            return None

    def __read_week_notes(self) -> dict[str, str]:
        raw_week_notes = self.week_notes_file.load()
        if not all(isinstance(value, str) for value in raw_week_notes.values()):
            logger.warning("Could not decode %s", self.week_notes_file.path)
            return {}
        return {
            key: value.strip()
            for key, value in raw_week_notes.items()
            if not is_blank(value)
        }

    def __convert_note_for_serialization(self, note: NoteItem) -> dict[str, Any]:
        serializable_note: dict[str, Any] = {
            "id": note["id"],
            "text": note["text"],
            "category": note["category"],
            "createdAt": time.datetime_to_iso_str(note["created_at"]),
        }
        if note["reminder"] is not None:
            serializable_note["reminder"] = time.datetime_to_iso_str(note["reminder"])
        return serializable_note

    def __convert_note_for_deserialization(self, note: dict[str, Any]) -> NoteItem:
        category = note.get("category", "other")
        if category not in NOTE_CATEGORIES:
            category = "other"
        return {
            "id": str(note["id"]),
            "text": str(note["text"]),
            "category": cast(NoteCategory, category),
            "created_at": time.datetime_from_str(note["createdAt"]),
            "reminder": time.datetime_from_str_optional(note.get("reminder")),
        }

    def __convert_entry_for_serialization(self, entry: DayEntry) -> dict[str, Any]:
        serializable_entry: dict[str, Any] = {}
        if "text" in entry:
            serializable_entry["text"] = entry["text"]
        if "drawing_data" in entry:
            serializable_entry["drawingData"] = base64.b64encode(
                entry["drawing_data"]
            ).decode("ascii")
        if "reminder" in entry:
            serializable_entry["reminder"] = time.datetime_to_iso_str(entry["reminder"])
        if "notes" in entry:
            serializable_entry["notes"] = [
                self.__convert_note_for_serialization(note) for note in entry["notes"]
            ]
        if "hourly" in entry:
            serializable_entry["hourly"] = {
                str(hour): text for hour, text in entry["hourly"].items()
            }
        if "period_delayed" in entry:
            serializable_entry["periodDelayed"] = True
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> DayEntry:
        deserialized_entry: DayEntry = {}
        if entry.get("text") is not None:
            deserialized_entry["text"] = str(entry["text"])
        if entry.get("drawingData") is not None:
            deserialized_entry["drawing_data"] = base64.b64decode(
                entry["drawingData"], validate=True
            )
        if entry.get("reminder") is not None:
            deserialized_entry["reminder"] = time.datetime_from_str(entry["reminder"])
        if entry.get("notes") is not None:
            deserialized_entry["notes"] = [
                self.__convert_note_for_deserialization(note) for note in entry["notes"]
            ]
        if entry.get("hourly") is not None:
            deserialized_entry["hourly"] = {
                int(hour): str(text) for hour, text in entry["hourly"].items()
            }
        if entry.get("periodDelayed"):
            deserialized_entry["period_delayed"] = True
        return deserialized_entry

    def __commit(self, key: str, entry: DayEntry) -> bool:
        normalized_entry = normalize_day_entry(entry)
        entries = dict(self.entries)
        if normalized_entry:
            entries[key] = normalized_entry
        else:
            entries.pop(key, None)

        document = {
            entry_key: self.__convert_entry_for_serialization(day_entry)
            for entry_key, day_entry in entries.items()
        }
        if not self.agenda_file.save(document):
            return False
        self._entries = entries
        return True

    def __schedule_note(self, key: str, note: NoteItem) -> None:
        if self.scheduler is None or note["reminder"] is None:
            return
        title = reminder_title(key, NOTE_CATEGORY_DISPLAY_NAMES[note["category"]])
        self.scheduler(note["reminder"], title, note["text"])

    def __schedule_reminder(self, key: str) -> None:
        """Hand the day reminder to the scheduler with the note that owns it."""
        if self.scheduler is None:
            return
        entry = self.entries.get(key)
        if entry is None or "reminder" not in entry:
            return
        reminder = entry["reminder"]

        for note in entry.get("notes", []):
            if note["reminder"] == reminder:
                self.__schedule_note(key, note)
                return
        self.scheduler(reminder, reminder_title(key), entry.get("text", ""))

    def __day_reminder(self, key: str) -> Optional[pendulum.DateTime]:
        return self.entries.get(key, {}).get("reminder")

    def __working_copy(self, key: str) -> DayEntry:
        return deepcopy(self.entries.get(key, {}))

    def reload_from_disk(self) -> None:
        """Replace the in-memory day entries with the file's content.

        If the file cannot be read the current state is kept.
        """
        entries = self.__read_entries()
        if entries is None:
            return
        with self.agenda_file.loading():
            self._entries = entries

    def entry(self, date: datetime.date) -> Optional[DayEntry]:
        entry = self.entries.get(time.day_key(date))
        if entry is None:
            return None
        return deepcopy(entry)

    def day_keys(self) -> list[str]:
        return sorted(self.entries.keys())

    def update_day_text(
        self,
        date: datetime.date,
        text: Optional[str],
        drawing_data: Optional[bytes],
        reminder: Optional[pendulum.DateTime] = None,
        remove_reminder: bool = False,
    ) -> None:
        key = time.day_key(date)
        entry = self.__working_copy(key)

        entry.pop("text", None)
        if not is_blank(text):
            entry["text"] = cast(str, text)
        entry.pop("drawing_data", None)
        if drawing_data is not None:
            entry["drawing_data"] = drawing_data

        if reminder is not None:
            entry["reminder"] = reminder
        if remove_reminder:
            entry.pop("reminder", None)

        if self.__commit(key, entry):
            self.__schedule_reminder(key)

    def notes(self, date: datetime.date) -> list[NoteItem]:
        entry = self.entries.get(time.day_key(date), {})
        return deepcopy(entry.get("notes", []))

    def add_note(
        self,
        date: datetime.date,
        text: str,
        category: NoteCategory,
        reminder: Optional[pendulum.DateTime] = None,
    ) -> NoteItem:
        key = time.day_key(date)
        entry = self.__working_copy(key)

        note = get_note_template(text, category, reminder)
        entry["notes"] = entry.get("notes", []) + [note]
        if reminder is not None:
            current_reminder = entry.get("reminder")
            entry["reminder"] = (
                reminder if current_reminder is None else min(current_reminder, reminder)
            )

        if self.__commit(key, entry):
            self.__schedule_note(key, note)
        return deepcopy(note)

    def update_note(
        self,
        date: datetime.date,
        id: EntityId,
        text: str,
        category: NoteCategory,
        reminder: Optional[pendulum.DateTime] = None,
    ) -> None:
        key = time.day_key(date)
        if key not in self.entries:
            return
        entry = self.__working_copy(key)
        notes = entry.get("notes", [])
        matching_notes = [note for note in notes if note["id"] == id]
        if len(matching_notes) == 0:
            return

        note = matching_notes[0]
        note["text"] = text
        note["category"] = category
        note["reminder"] = reminder
        self.__set_reminder_from_notes(entry, notes)

        previous_reminder = self.__day_reminder(key)
        if not self.__commit(key, entry):
            return
        self.__schedule_note(key, note)
        day_reminder = self.__day_reminder(key)
        if day_reminder != previous_reminder and day_reminder != reminder:
            self.__schedule_reminder(key)

    def delete_note(self, date: datetime.date, id: EntityId) -> None:
        key = time.day_key(date)
        if key not in self.entries:
            return
        entry = self.__working_copy(key)
        notes = entry.get("notes", [])
        remaining_notes = [note for note in notes if note["id"] != id]
        if len(remaining_notes) == len(notes):
            return

        entry["notes"] = remaining_notes
        self.__set_reminder_from_notes(entry, remaining_notes)

        previous_reminder = self.__day_reminder(key)
        if self.__commit(key, entry) and self.__day_reminder(key) != previous_reminder:
            self.__schedule_reminder(key)

    def __set_reminder_from_notes(self, entry: DayEntry, notes: list[NoteItem]) -> None:
        reminder = earliest_note_reminder(notes)
        if reminder is None:
            entry.pop("reminder", None)
        else:
            entry["reminder"] = reminder

    def search_notes(self, query: str) -> list[tuple[str, NoteItem]]:
        """Notes whose text contains `query`, ignoring case, in day order."""
        needle = query.strip().lower()
        results: list[tuple[str, NoteItem]] = []
        for key in self.day_keys():
            for note in self.entries[key].get("notes", []):
                if needle in note["text"].lower():
                    results.append((key, deepcopy(note)))
        return results

    def reminders_between(
        self, start: pendulum.DateTime, end: pendulum.DateTime
    ) -> list[tuple[str, pendulum.DateTime]]:
        reminders = [
            (key, entry["reminder"])
            for key, entry in self.entries.items()
            if "reminder" in entry and start <= entry["reminder"] < end
        ]
        return sorted(reminders, key=lambda item: item[1])

    def hourly_text(self, date: datetime.date, hour: int) -> Optional[str]:
        entry = self.entries.get(time.day_key(date), {})
        return entry.get("hourly", {}).get(hour)

    def set_hourly(self, date: datetime.date, hour: int, text: Optional[str]) -> None:
        key = time.day_key(date)
        entry = self.__working_copy(key)

        hourly = entry.get("hourly", {})
        if is_blank(text):
            hourly.pop(hour, None)
        else:
            hourly[hour] = cast(str, text).strip()
        entry["hourly"] = hourly

        self.__commit(key, entry)

    def is_period_delayed(self, date: datetime.date) -> bool:
        entry = self.entries.get(time.day_key(date), {})
        return entry.get("period_delayed", False)

    def set_period_delay(self, date: datetime.date, delayed: bool) -> None:
        key = time.day_key(date)
        entry = self.__working_copy(key)

        if delayed:
            entry["period_delayed"] = True
        else:
            entry.pop("period_delayed", None)

        self.__commit(key, entry)

    def week_note(self, date: datetime.date) -> Optional[str]:
        return self.week_notes.get(time.week_key(date))

    def set_week_note(self, date: datetime.date, text: Optional[str]) -> None:
        key = time.week_key(date)
        week_notes = dict(self.week_notes)
        if is_blank(text):
            week_notes.pop(key, None)
        else:
            week_notes[key] = cast(str, text).strip()

        if self.week_notes_file.save(week_notes):
            self._week_notes = week_notes


AGENDA_REPO = AgendaRepository()
