# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

import pendulum

from daybook.model.entity_id import EntityId

NoteCategory = Literal["personal", "work", "finance", "health", "other"]

NOTE_CATEGORIES: tuple[NoteCategory, ...] = (
    "personal",
    "work",
    "finance",
    "health",
    "other",
)

NOTE_CATEGORY_DISPLAY_NAMES: dict[NoteCategory, str] = {
    "personal": "Personal",
    "work": "Work",
    "finance": "Finance",
    "health": "Health",
    "other": "Other",
}


class NoteItem(TypedDict):
    id: EntityId
    text: str
    category: NoteCategory
    created_at: pendulum.DateTime
    reminder: Optional[pendulum.DateTime]


class DayEntry(TypedDict):
    # Absent keys mean "nothing set"; see normalize_day_entry
    text: NotRequired[str]
    drawing_data: NotRequired[bytes]  # opaque ink data
    reminder: NotRequired[pendulum.DateTime]  # earliest pending reminder of the day
    notes: NotRequired[list[NoteItem]]
    hourly: NotRequired[dict[int, str]]  # hour of day (0-23) -> text
    period_delayed: NotRequired[Literal[True]]


def is_blank(text: Optional[str]) -> bool:
    return text is None or text.strip() == ""


def normalize_day_entry(entry: DayEntry) -> DayEntry:
    """Return `entry` with empty values dropped instead of stored.

    Blank text, empty blobs, empty note lists, blank or empty hourly slots and
    a false delay flag are all represented by the key being absent.
    """
    normalized: DayEntry = {}

    text = entry.get("text")
    if not is_blank(text):
        normalized["text"] = text  # type: ignore[typeddict-item]

    drawing_data = entry.get("drawing_data")
    if drawing_data:
        normalized["drawing_data"] = drawing_data

    reminder = entry.get("reminder")
    if reminder is not None:
        normalized["reminder"] = reminder

    notes = entry.get("notes")
    if notes:
        normalized["notes"] = list(notes)

    hourly = {
        hour: text.strip()
        for hour, text in (entry.get("hourly") or {}).items()
        if not is_blank(text)
    }
    if hourly:
        normalized["hourly"] = dict(sorted(hourly.items()))

    if entry.get("period_delayed"):
        normalized["period_delayed"] = True

    return normalized


def earliest_note_reminder(notes: list[NoteItem]) -> Optional[pendulum.DateTime]:
    reminders = [note["reminder"] for note in notes if note["reminder"] is not None]
    if len(reminders) == 0:
        return None
    return min(reminders)
