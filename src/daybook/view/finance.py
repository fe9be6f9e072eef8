# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from daybook.model.transaction import FINANCE_CATEGORY_DISPLAY_NAMES, Transaction
from daybook.service.finance import (
    GranularityType,
    PeriodSummary,
    SpendLimitAlert,
    expense_total,
    format_currency,
    income_total,
    net_total,
)
from daybook.time import datetime_to_display_local_datetime_str
from daybook.view.header import header

INCOME_COLOR = "green"
EXPENSE_COLOR = "red"
BALANCE_COLOR = "blue"


def _amount_cell(amount: float, currency: str) -> str:
    color = INCOME_COLOR if amount > 0 else EXPENSE_COLOR
    return f"[{color}]{format_currency(amount, currency)}[/{color}]"


def transactions_report(
    transactions: list[Transaction], wallet_balance: float, currency: str
) -> None:
    header("transactions")
    console = Console()

    if len(transactions) == 0:
        console.print("No transactions yet")
    else:
        table = Table(box=box.SIMPLE)
        table.add_column("id", style="bright_black")
        table.add_column("date")
        table.add_column("title")
        table.add_column("category")
        table.add_column("amount", justify="right")
        for transaction in transactions:
            table.add_row(
                (transaction["id"] or "")[:8],
                datetime_to_display_local_datetime_str(transaction["date"]),
                transaction["title"],
                FINANCE_CATEGORY_DISPLAY_NAMES[transaction["category"]],
                _amount_cell(transaction["amount"], currency),
            )
        console.print(table)

    console.print(
        f"wallet: [{BALANCE_COLOR}]{format_currency(wallet_balance, currency)}[/{BALANCE_COLOR}]"
    )


def summary_report(
    transactions: list[Transaction],
    wallet_balance: float,
    currency: str,
    alert: Optional[SpendLimitAlert] = None,
) -> None:
    header("summary")
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("label")
    table.add_column("value", justify="right")
    table.add_row(
        "Income",
        f"[{INCOME_COLOR}]{format_currency(income_total(transactions), currency)}[/{INCOME_COLOR}]",
    )
    table.add_row(
        "Expenses",
        f"[{EXPENSE_COLOR}]{format_currency(expense_total(transactions), currency)}[/{EXPENSE_COLOR}]",
    )
    table.add_row(
        "Balance",
        f"[{BALANCE_COLOR}]{format_currency(net_total(transactions), currency)}[/{BALANCE_COLOR}]",
    )
    table.add_row("Wallet", format_currency(wallet_balance, currency))

    console = Console()
    console.print(table)
    if alert is not None:
        spend_limit_warning(alert, currency)


def spend_limit_warning(alert: SpendLimitAlert, currency: str) -> None:
    Console().print(
        f"[bold {EXPENSE_COLOR}]Spend limit exceeded for {alert['month_start'].format('MMMM YYYY')}: "
        f"{format_currency(alert['spent'], currency)} of {format_currency(alert['limit'], currency)} "
        f"(+{format_currency(alert['exceeded_by'], currency)})[/bold {EXPENSE_COLOR}]"
    )


def period_report(
    summaries: list[PeriodSummary], granularity: GranularityType, currency: str
) -> None:
    header(f"report by {granularity}")
    table = Table(box=box.SIMPLE)
    table.add_column(granularity)
    table.add_column("income", justify="right", style=INCOME_COLOR)
    table.add_column("expense", justify="right", style=EXPENSE_COLOR)
    table.add_column("net", justify="right")
    table.add_column("top expense")
    for summary in summaries:
        top_expense = ""
        if summary["expense_by_category"]:
            category, amount = max(
                summary["expense_by_category"].items(), key=lambda item: item[1]
            )
            top_expense = (
                f"{FINANCE_CATEGORY_DISPLAY_NAMES[category]} "
                f"{format_currency(amount, currency)}"
            )
        table.add_row(
            summary["period_start"].format("YYYY-MM-DD"),
            format_currency(summary["income"], currency),
            format_currency(summary["expense"], currency),
            format_currency(summary["net"], currency),
            top_expense,
        )
    Console().print(table)
