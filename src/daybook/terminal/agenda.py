# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer

from daybook.model.entity_id import EntityId
from daybook.repository.agenda import AGENDA_REPO
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.service.cycle import cycle_settings_from_config
from daybook.terminal.custom_typer import AliasedTyperGroup
from daybook.terminal.parse import (
    parse_date,
    parse_datetime,
    parse_hour,
    parse_note_category,
)
from daybook.time import local_today, now_utc
from daybook.view import agenda as agenda_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"
REMINDER_HELP = "valid inputs: 'YYYY-MM-DD HH:mm' or HH:mm (today), local time"


def _resolve_note_id(date: pendulum.Date, id_prefix: str) -> EntityId:
    matches = [
        note["id"] for note in AGENDA_REPO.notes(date) if note["id"].startswith(id_prefix)
    ]
    if len(matches) != 1:
        raise typer.BadParameter(f"No unique note matches '{id_prefix}' on that day")
    return matches[0]


def _show_day(date: pendulum.Date) -> None:
    config = CONFIGURATION_REPO.get_config()
    agenda_report.day_report(
        date,
        AGENDA_REPO.entry(date),
        AGENDA_REPO.week_note(date),
        config["agenda_start_hour"],
        config["agenda_end_hour"],
        cycle_settings_from_config(config),
    )


@app.command("show, s")
def show(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Show everything recorded for a day."""
    _show_day(date if date is not None else local_today())


@app.command("text, t", no_args_is_help=True)
def text(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    text: Annotated[Optional[str], typer.Argument()] = None,
    drawing: Annotated[
        Optional[Path],
        typer.Option("--drawing", "-d", exists=True, dir_okay=False, help="ink data file"),
    ] = None,
    remove_drawing: Annotated[bool, typer.Option("--remove-drawing")] = False,
    reminder: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--reminder", "-r", parser=parse_datetime, help=REMINDER_HELP),
    ] = None,
    remove_reminder: Annotated[bool, typer.Option("--remove-reminder")] = False,
) -> None:
    """Replace the free text of a day; an empty text clears it."""
    existing_entry = AGENDA_REPO.entry(date) or {}
    drawing_data = existing_entry.get("drawing_data")
    if drawing is not None:
        drawing_data = drawing.read_bytes()
    if remove_drawing:
        drawing_data = None

    AGENDA_REPO.update_day_text(
        date, text, drawing_data, reminder=reminder, remove_reminder=remove_reminder
    )
    _show_day(date)


@app.command("note-add, na", no_args_is_help=True)
def note_add(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    text: Annotated[str, typer.Argument()],
    category: Annotated[
        str,
        typer.Option(
            "--category",
            "-c",
            help="valid inputs: personal, work, finance, health, other",
        ),
    ] = "other",
    reminder: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--reminder", "-r", parser=parse_datetime, help=REMINDER_HELP),
    ] = None,
) -> None:
    """Add a categorized note to a day."""
    if text.strip() == "":
        raise typer.BadParameter("Note text cannot be empty")
    AGENDA_REPO.add_note(date, text.strip(), parse_note_category(category), reminder)
    _show_day(date)


@app.command("note-edit, ne", no_args_is_help=True)
def note_edit(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    id: Annotated[str, typer.Argument(help="note id or unique prefix")],
    text: Annotated[Optional[str], typer.Option("--text", "-t")] = None,
    category: Annotated[
        Optional[str],
        typer.Option(
            "--category",
            "-c",
            help="valid inputs: personal, work, finance, health, other",
        ),
    ] = None,
    reminder: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--reminder", "-r", parser=parse_datetime, help=REMINDER_HELP),
    ] = None,
    remove_reminder: Annotated[bool, typer.Option("--remove-reminder")] = False,
) -> None:
    """Change the text, category or reminder of a note."""
    note_id = _resolve_note_id(date, id)
    note = [note for note in AGENDA_REPO.notes(date) if note["id"] == note_id][0]

    new_text = note["text"] if text is None else text.strip()
    if new_text == "":
        raise typer.BadParameter("Note text cannot be empty")
    new_category = (
        note["category"] if category is None else parse_note_category(category)
    )
    new_reminder = note["reminder"] if reminder is None else reminder
    if remove_reminder:
        new_reminder = None

    AGENDA_REPO.update_note(date, note_id, new_text, new_category, new_reminder)
    _show_day(date)


@app.command("note-delete, nd", no_args_is_help=True)
def note_delete(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    id: Annotated[str, typer.Argument(help="note id or unique prefix")],
) -> None:
    """Delete a note from a day."""
    AGENDA_REPO.delete_note(date, _resolve_note_id(date, id))
    _show_day(date)


@app.command("hour, h", no_args_is_help=True)
def hour(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    hour: Annotated[int, typer.Argument(callback=parse_hour, help="0-23")],
    text: Annotated[Optional[str], typer.Argument(help="omit to clear the slot")] = None,
) -> None:
    """Set or clear the text of one hour slot."""
    AGENDA_REPO.set_hourly(date, hour, text)
    _show_day(date)


@app.command("delay, dl", no_args_is_help=True)
def delay(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    delayed: Annotated[bool, typer.Option("--on/--off")] = True,
) -> None:
    """Mark or unmark a day as period delayed."""
    AGENDA_REPO.set_period_delay(date, delayed)
    _show_day(date)


@app.command("week, w")
def week(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_date, help=DATE_HELP),
    ] = None,
    text: Annotated[Optional[str], typer.Option("--text", "-t")] = None,
    clear: Annotated[bool, typer.Option("--clear")] = False,
) -> None:
    """Show, set or clear the note of the week containing a day."""
    date = date if date is not None else local_today()
    if clear:
        AGENDA_REPO.set_week_note(date, None)
    elif text is not None:
        AGENDA_REPO.set_week_note(date, text)

    week_note = AGENDA_REPO.week_note(date)
    typer.echo(week_note if week_note is not None else "No note for this week")


@app.command("search, sr", no_args_is_help=True)
def search(query: Annotated[str, typer.Argument()]) -> None:
    """Search note texts across all days."""
    agenda_report.note_search_report(query, AGENDA_REPO.search_notes(query))


@app.command("reminders, r")
def reminders(
    days: Annotated[int, typer.Option("--days", "-d", min=1)] = 7,
) -> None:
    """List day reminders due in the next few days."""
    start = now_utc()
    agenda_report.reminders_report(
        AGENDA_REPO.reminders_between(start, start.add(days=days))
    )
