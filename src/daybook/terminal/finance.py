# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from daybook.model.entity_id import EntityId
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.repository.finance import FINANCE_REPO
from daybook.service.finance import (
    aggregate,
    check_spend_limit,
    filter_transactions,
)
from daybook.template.transaction import get_transaction_template
from daybook.terminal.custom_typer import AliasedTyperGroup
from daybook.terminal.parse import (
    parse_amount,
    parse_balance,
    parse_date,
    parse_finance_category,
)
from daybook.time import local_today
from daybook.view import finance as finance_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"
CATEGORY_HELP = "valid inputs: salary, food, coffee, transport, shopping, health, home, fun, other"


def _resolve_transaction_id(id_prefix: str) -> EntityId:
    matches = [
        transaction["id"]
        for transaction in FINANCE_REPO.get_all_transactions()
        if transaction["id"] is not None and transaction["id"].startswith(id_prefix)
    ]
    if len(matches) != 1:
        raise typer.BadParameter(f"No unique transaction matches '{id_prefix}'")
    return matches[0]


def _transaction_datetime(date: Optional[pendulum.Date]) -> pendulum.DateTime:
    date = date if date is not None else local_today()
    return pendulum.datetime(date.year, date.month, date.day, 12, tz="local").in_tz("UTC")


def _warn_spend_limit() -> None:
    config = CONFIGURATION_REPO.get_config()
    alert = check_spend_limit(
        FINANCE_REPO.get_all_transactions(),
        config["monthly_spend_limit"],
        local_today(),
    )
    if alert is not None:
        finance_report.spend_limit_warning(alert, config["preferred_currency"])


def _record(
    title: str,
    amount: float,
    date: Optional[pendulum.Date],
    category: str,
) -> None:
    title = title.strip()
    if title == "":
        raise typer.BadParameter("Title cannot be empty")
    transaction = get_transaction_template(
        title, amount, _transaction_datetime(date), parse_finance_category(category)
    )
    FINANCE_REPO.add(transaction)
    list_transactions()
    if amount < 0:
        _warn_spend_limit()


@app.command("list, ls")
def list_transactions(
    kind: Annotated[
        str, typer.Option("--kind", "-k", help="valid inputs: all, income, expense")
    ] = "all",
    query: Annotated[Optional[str], typer.Option("--search", "-s")] = None,
) -> None:
    """List transactions, most recent first."""
    if kind not in ("all", "income", "expense"):
        raise typer.BadParameter("valid inputs: all, income, expense")
    config = CONFIGURATION_REPO.get_config()
    transactions = filter_transactions(
        FINANCE_REPO.get_all_transactions(), kind, query  # type: ignore[arg-type]
    )
    finance_report.transactions_report(
        transactions, FINANCE_REPO.wallet_balance, config["preferred_currency"]
    )


@app.command("income, in", no_args_is_help=True)
def income(
    title: Annotated[str, typer.Argument()],
    amount: Annotated[float, typer.Argument(parser=parse_amount)],
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    category: Annotated[str, typer.Option("--category", "-c", help=CATEGORY_HELP)] = "other",
) -> None:
    """Record money coming in."""
    _record(title, amount, date, category)


@app.command("expense, ex", no_args_is_help=True)
def expense(
    title: Annotated[str, typer.Argument()],
    amount: Annotated[float, typer.Argument(parser=parse_amount)],
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    category: Annotated[str, typer.Option("--category", "-c", help=CATEGORY_HELP)] = "other",
) -> None:
    """Record money going out."""
    _record(title, -amount, date, category)


@app.command("edit, e", no_args_is_help=True)
def edit(
    id: Annotated[str, typer.Argument(help="transaction id or unique prefix")],
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    amount: Annotated[
        Optional[float],
        typer.Option("--amount", "-a", parser=parse_amount, help="keeps income/expense sign"),
    ] = None,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    category: Annotated[
        Optional[str], typer.Option("--category", "-c", help=CATEGORY_HELP)
    ] = None,
) -> None:
    """Replace fields of a transaction; the wallet follows the amount change."""
    transaction_id = _resolve_transaction_id(id)
    transaction = FINANCE_REPO.get_transaction(transaction_id)
    if transaction is None:
        raise typer.BadParameter(f"No transaction {id}")

    if title is not None:
        if title.strip() == "":
            raise typer.BadParameter("Title cannot be empty")
        transaction["title"] = title.strip()
    if amount is not None:
        transaction["amount"] = -amount if transaction["amount"] < 0 else amount
    if date is not None:
        transaction["date"] = _transaction_datetime(date)
    if category is not None:
        transaction["category"] = parse_finance_category(category)

    FINANCE_REPO.replace(transaction_id, transaction)
    list_transactions()


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: Annotated[str, typer.Argument(help="transaction id or unique prefix")],
) -> None:
    """Delete a transaction; the wallet gives back its amount."""
    FINANCE_REPO.remove(_resolve_transaction_id(id))
    list_transactions()


@app.command("balance, b")
def balance(
    value: Annotated[
        Optional[float],
        typer.Argument(parser=parse_balance, help="omit to show the wallet balance"),
    ] = None,
) -> None:
    """Show the wallet balance or set it to match a real account."""
    config = CONFIGURATION_REPO.get_config()
    if value is not None:
        FINANCE_REPO.set_wallet_balance(value)
    finance_report.summary_report(
        FINANCE_REPO.get_all_transactions(),
        FINANCE_REPO.wallet_balance,
        config["preferred_currency"],
    )


@app.command("summary, su")
def summary() -> None:
    """Income, expenses and balance over all transactions."""
    config = CONFIGURATION_REPO.get_config()
    transactions = FINANCE_REPO.get_all_transactions()
    finance_report.summary_report(
        transactions,
        FINANCE_REPO.wallet_balance,
        config["preferred_currency"],
        check_spend_limit(transactions, config["monthly_spend_limit"], local_today()),
    )


@app.command("report, r")
def report(
    granularity: Annotated[
        str, typer.Option("--by", "-b", help="valid inputs: day, week, month")
    ] = "month",
    kind: Annotated[
        str, typer.Option("--kind", "-k", help="valid inputs: all, income, expense")
    ] = "all",
) -> None:
    """Totals per day, week or month."""
    if granularity not in ("day", "week", "month"):
        raise typer.BadParameter("valid inputs: day, week, month")
    if kind not in ("all", "income", "expense"):
        raise typer.BadParameter("valid inputs: all, income, expense")
    config = CONFIGURATION_REPO.get_config()
    transactions = filter_transactions(
        FINANCE_REPO.get_all_transactions(), kind  # type: ignore[arg-type]
    )
    finance_report.period_report(
        aggregate(transactions, granularity),  # type: ignore[arg-type]
        granularity,  # type: ignore[arg-type]
        config["preferred_currency"],
    )
