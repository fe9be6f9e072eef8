# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from daybook.terminal import agenda, configuration, cycle, finance
from daybook.terminal.custom_typer import OrderedAliasedTyperGroup
from daybook.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Daybook - agenda, cycle tracking and a pocket ledger in the CLI",
    no_args_is_help=True,
)
app.add_typer(agenda.app, name="agenda, ag")
app.add_typer(finance.app, name="finance, fi")
app.add_typer(cycle.app, name="cycle, cy")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log storage and reminder activity"),
    ] = False,
) -> None:
    """
    Daybook - agenda, cycle tracking and a pocket ledger in the CLI

    Global options that apply to all commands.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
