# SPDX-License-Identifier: MIT

import calendar
from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from daybook.model.day_entry import NOTE_CATEGORY_DISPLAY_NAMES, DayEntry, NoteItem
from daybook.service.cycle import CycleSettings, day_status
from daybook.time import (
    datetime_to_display_local_datetime_str,
    datetime_to_display_local_datetime_str_optional,
    day_key,
)
from daybook.view.header import header

PERIOD_COLOR = "bright_red"
FERTILE_COLOR = "spring_green"
DELAYED_COLOR = "gold"
NOTE_META_COLOR = "yellow"


def day_report(
    date: pendulum.Date,
    entry: Optional[DayEntry],
    week_note: Optional[str],
    start_hour: int,
    end_hour: int,
    cycle_settings: Optional[CycleSettings] = None,
) -> None:
    header(date.format("dddd, MMMM D YYYY"))
    console = Console()
    entry = entry or {}

    status_parts = []
    if cycle_settings is not None:
        status = day_status(cycle_settings, date)
        if status == "period":
            status_parts.append(f"[{PERIOD_COLOR}]period[/{PERIOD_COLOR}]")
        elif status == "fertile":
            status_parts.append(f"[{FERTILE_COLOR}]fertile window[/{FERTILE_COLOR}]")
    if entry.get("period_delayed"):
        status_parts.append(f"[{DELAYED_COLOR}]period delayed[/{DELAYED_COLOR}]")
    if "reminder" in entry:
        status_parts.append(
            f"reminder {datetime_to_display_local_datetime_str(entry['reminder'])}"
        )
    if len(status_parts) > 0:
        console.print(" · ".join(status_parts))

    if "text" in entry:
        console.print(Panel(entry["text"], title="day", box=box.ROUNDED))
    if "drawing_data" in entry:
        console.print(f"[bright_black]drawing: {len(entry['drawing_data'])} bytes[/bright_black]")

    notes_table(entry.get("notes", []))

    hourly = entry.get("hourly", {})
    hours_table = Table(box=box.SIMPLE, show_header=False)
    hours_table.add_column("hour", style="cyan")
    hours_table.add_column("text")
    for hour in range(start_hour, end_hour + 1):
        hours_table.add_row(f"{hour:02d}:00", hourly.get(hour, ""))
    # Slots outside the configured range are still shown
    for hour, text in hourly.items():
        if hour < start_hour or hour > end_hour:
            hours_table.add_row(f"{hour:02d}:00", text)
    console.print(hours_table)

    if week_note is not None:
        console.print(Panel(week_note, title="week", box=box.ROUNDED))


def notes_table(notes: list[NoteItem], day_keys: Optional[list[str]] = None) -> None:
    if len(notes) == 0:
        return
    table = Table(box=box.SIMPLE)
    if day_keys is not None:
        table.add_column("day")
    table.add_column("id", style="bright_black")
    table.add_column("category", style=NOTE_META_COLOR)
    table.add_column("text")
    table.add_column("reminder")
    for index, note in enumerate(notes):
        row = []
        if day_keys is not None:
            row.append(day_keys[index])
        row += [
            note["id"][:8],
            NOTE_CATEGORY_DISPLAY_NAMES[note["category"]],
            note["text"],
            datetime_to_display_local_datetime_str_optional(note["reminder"]) or "",
        ]
        table.add_row(*row)
    Console().print(table)


def note_search_report(query: str, results: list[tuple[str, NoteItem]]) -> None:
    header(f"notes matching '{query}'")
    if len(results) == 0:
        Console().print("No notes found")
        return
    notes_table([note for _, note in results], [key for key, _ in results])


def reminders_report(reminders: list[tuple[str, pendulum.DateTime]]) -> None:
    header("upcoming reminders")
    table = Table(box=box.SIMPLE)
    table.add_column("day")
    table.add_column("reminder")
    for key, reminder in reminders:
        table.add_row(key, datetime_to_display_local_datetime_str(reminder))
    Console().print(table)


def month_report(
    year: int,
    month: int,
    cycle_settings: Optional[CycleSettings],
    populated_day_keys: set[str],
    delayed_day_keys: set[str],
) -> None:
    header(pendulum.date(year, month, 1).format("MMMM YYYY"))

    table = Table(box=box.SIMPLE)
    for weekday in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
        table.add_column(weekday, justify="right")

    for week in calendar.Calendar(firstweekday=0).monthdatescalendar(year, month):
        row = []
        for date in week:
            if date.month != month:
                row.append("")
                continue
            key = day_key(date)
            cell = str(date.day)
            if key in populated_day_keys:
                cell += "•"
            if key in delayed_day_keys:
                cell = f"[{DELAYED_COLOR}]{cell}![/{DELAYED_COLOR}]"
            elif cycle_settings is not None:
                status = day_status(cycle_settings, date)
                if status == "period":
                    cell = f"[{PERIOD_COLOR}]{cell}[/{PERIOD_COLOR}]"
                elif status == "fertile":
                    cell = f"[{FERTILE_COLOR}]{cell}[/{FERTILE_COLOR}]"
            row.append(cell)
        table.add_row(*row)

    Console().print(table)
