# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from daybook import configuration
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.terminal.custom_typer import AliasedTyperGroup
from daybook.terminal.parse import parse_date
from daybook.time import day_key

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("preferred_currency", config["preferred_currency"])
    table.add_row("notifications_enabled", _enabled(config["notifications_enabled"]))
    table.add_row("theme", config["theme"])
    table.add_row("tone", config["tone"])
    table.add_row("cycle_length_days", str(config["cycle_length_days"]))
    table.add_row("period_length_days", str(config["period_length_days"]))
    table.add_row("last_period_start", config["last_period_start"] or "None")
    table.add_row(
        "agenda hours",
        f"{config['agenda_start_hour']:02d}:00 - {config['agenda_end_hour']:02d}:00",
    )
    table.add_row(
        "monthly_spend_limit",
        "None"
        if config["monthly_spend_limit"] is None
        else str(config["monthly_spend_limit"]),
    )

    console.print(table)


@app.command("set, s", no_args_is_help=True)
def set(
    preferred_currency: Annotated[
        Optional[str], typer.Option("--currency", help="e.g. MXN, EUR, USD")
    ] = None,
    notifications_enabled: Annotated[
        Optional[bool], typer.Option("--notifications/--no-notifications")
    ] = None,
    theme: Annotated[
        Optional[str],
        typer.Option(
            "--theme", help="valid inputs: mint, peach, lavender, sky, lime, coral, rose"
        ),
    ] = None,
    tone: Annotated[
        Optional[str], typer.Option("--tone", help="valid inputs: white, dark")
    ] = None,
    cycle_length_days: Annotated[
        Optional[int], typer.Option("--cycle-length", min=1, max=90)
    ] = None,
    period_length_days: Annotated[
        Optional[int], typer.Option("--period-length", min=1, max=30)
    ] = None,
    last_period_start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--last-period-start", parser=parse_date),
    ] = None,
    remove_last_period_start: Annotated[
        bool, typer.Option("--remove-last-period-start")
    ] = False,
    agenda_start_hour: Annotated[
        Optional[int], typer.Option("--agenda-start-hour", min=0, max=23)
    ] = None,
    agenda_end_hour: Annotated[
        Optional[int], typer.Option("--agenda-end-hour", min=0, max=23)
    ] = None,
    monthly_spend_limit: Annotated[
        Optional[float], typer.Option("--spend-limit", min=0)
    ] = None,
    remove_monthly_spend_limit: Annotated[
        bool, typer.Option("--remove-spend-limit")
    ] = False,
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
) -> None:
    """Change configuration settings."""
    if theme is not None and theme not in (
        "mint",
        "peach",
        "lavender",
        "sky",
        "lime",
        "coral",
        "rose",
    ):
        raise typer.BadParameter("valid inputs: mint, peach, lavender, sky, lime, coral, rose")
    if tone is not None and tone not in ("white", "dark"):
        raise typer.BadParameter("valid inputs: white, dark")

    config = CONFIGURATION_REPO.get_config()
    start_hour = agenda_start_hour if agenda_start_hour is not None else config["agenda_start_hour"]
    end_hour = agenda_end_hour if agenda_end_hour is not None else config["agenda_end_hour"]
    if start_hour > end_hour:
        raise typer.BadParameter("Agenda start hour must not be after the end hour")

    CONFIGURATION_REPO.update_config(
        preferred_currency=preferred_currency,
        notifications_enabled=notifications_enabled,
        theme=theme,  # type: ignore[arg-type]
        tone=tone,  # type: ignore[arg-type]
        cycle_length_days=cycle_length_days,
        period_length_days=period_length_days,
        last_period_start=(
            day_key(last_period_start) if last_period_start is not None else None
        ),
        remove_last_period_start=remove_last_period_start,
        agenda_start_hour=agenda_start_hour,
        agenda_end_hour=agenda_end_hour,
        monthly_spend_limit=monthly_spend_limit,
        remove_monthly_spend_limit=remove_monthly_spend_limit,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )
    CONFIGURATION_REPO.flush()
    view()
