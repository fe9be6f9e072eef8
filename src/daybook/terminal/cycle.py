# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from daybook.repository.agenda import AGENDA_REPO
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.service.cycle import (
    cycle_phase,
    cycle_settings_from_config,
    day_status,
    next_period_start,
)
from daybook.terminal.custom_typer import AliasedTyperGroup
from daybook.terminal.parse import parse_date
from daybook.time import date_from_day_key, local_today
from daybook.view import agenda as agenda_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


@app.command("status, s")
def status(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Cycle day, phase and next predicted period for a day."""
    date = date if date is not None else local_today()
    settings = cycle_settings_from_config(CONFIGURATION_REPO.get_config())
    if settings is None:
        typer.echo("No period start recorded; set one with: config set --last-period-start")
        raise typer.Exit(1)

    phase = cycle_phase(settings["cycle_start"], settings["cycle_length_days"], date)
    typer.echo(f"{date.format('YYYY-MM-DD')}: cycle day {phase + 1}")
    typer.echo(f"status: {day_status(settings, date) or 'none'}")
    if AGENDA_REPO.is_period_delayed(date):
        typer.echo("marked as delayed")
    typer.echo(
        f"next period: {next_period_start(settings, date).format('YYYY-MM-DD')}"
    )


@app.command("month, m")
def month(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_date, help="any day of the month to show"),
    ] = None,
) -> None:
    """Month calendar with period and fertile days highlighted."""
    date = date if date is not None else local_today()
    settings = cycle_settings_from_config(CONFIGURATION_REPO.get_config())

    populated_day_keys = set(AGENDA_REPO.day_keys())
    delayed_day_keys = {
        key
        for key in populated_day_keys
        if AGENDA_REPO.is_period_delayed(date_from_day_key(key))
    }
    agenda_report.month_report(
        date.year, date.month, settings, populated_day_keys, delayed_day_keys
    )
