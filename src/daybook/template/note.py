# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from daybook.model.day_entry import NoteCategory, NoteItem
from daybook.model.entity_id import generate_entity_id
from daybook.time import now_utc


def get_note_template(
    text: str,
    category: NoteCategory,
    reminder: Optional[pendulum.DateTime] = None,
) -> NoteItem:
    return {
        "id": generate_entity_id(),
        "text": text,
        "category": category,
        "created_at": now_utc(),
        "reminder": reminder,
    }
