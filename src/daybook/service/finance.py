# SPDX-License-Identifier: MIT

import datetime
from typing import Literal, Optional, TypedDict

import pendulum

from daybook.model.transaction import FinanceCategory, Transaction

TransactionKind = Literal["all", "income", "expense"]
GranularityType = Literal["day", "week", "month"]


class PeriodSummary(TypedDict):
    period_start: pendulum.Date
    income: float
    expense: float  # absolute value
    net: float
    expense_by_category: dict[FinanceCategory, float]
    transaction_count: int


class SpendLimitAlert(TypedDict):
    month_start: pendulum.Date
    limit: float
    spent: float
    exceeded_by: float


def income_total(transactions: list[Transaction]) -> float:
    return sum(
        transaction["amount"] for transaction in transactions if transaction["amount"] > 0
    )


def expense_total(transactions: list[Transaction]) -> float:
    return abs(
        sum(
            transaction["amount"]
            for transaction in transactions
            if transaction["amount"] < 0
        )
    )


def net_total(transactions: list[Transaction]) -> float:
    return income_total(transactions) - expense_total(transactions)


def filter_transactions(
    transactions: list[Transaction],
    kind: TransactionKind = "all",
    query: Optional[str] = None,
) -> list[Transaction]:
    needle = (query or "").strip().lower()
    filtered_transactions = []
    for transaction in transactions:
        if kind == "income" and transaction["amount"] <= 0:
            continue
        if kind == "expense" and transaction["amount"] >= 0:
            continue
        if needle != "" and needle not in transaction["title"].lower():
            continue
        filtered_transactions.append(transaction)
    return filtered_transactions


def get_period_start(
    granularity: GranularityType, reference: datetime.date
) -> pendulum.Date:
    """Start of the day, ISO week (Monday) or month containing `reference`."""
    if isinstance(reference, pendulum.DateTime):
        reference = reference.in_tz("local")
    date = pendulum.date(reference.year, reference.month, reference.day)
    if granularity == "day":
        return date
    if granularity == "week":
        return date.subtract(days=date.weekday())
    if granularity == "month":
        return date.replace(day=1)
    raise ValueError(f"unknown granularity: {granularity}")


def aggregate(
    transactions: list[Transaction], granularity: GranularityType = "month"
) -> list[PeriodSummary]:
    summaries: dict[pendulum.Date, PeriodSummary] = {}
    for transaction in transactions:
        period_start = get_period_start(granularity, transaction["date"])
        if period_start not in summaries:
            summaries[period_start] = {
                "period_start": period_start,
                "income": 0.0,
                "expense": 0.0,
                "net": 0.0,
                "expense_by_category": {},
                "transaction_count": 0,
            }
        summary = summaries[period_start]
        amount = transaction["amount"]
        if amount > 0:
            summary["income"] += amount
        elif amount < 0:
            summary["expense"] += -amount
            category = transaction["category"]
            summary["expense_by_category"][category] = (
                summary["expense_by_category"].get(category, 0.0) - amount
            )
        summary["net"] += amount
        summary["transaction_count"] += 1

    return [summaries[period_start] for period_start in sorted(summaries)]


def check_spend_limit(
    transactions: list[Transaction],
    limit: Optional[float],
    reference: datetime.date,
) -> Optional[SpendLimitAlert]:
    """Alert when the expenses of the month containing `reference` exceed `limit`."""
    if limit is None:
        return None
    month_start = get_period_start("month", reference)
    month_transactions = [
        transaction
        for transaction in transactions
        if get_period_start("month", transaction["date"]) == month_start
    ]
    spent = expense_total(month_transactions)
    if spent <= limit:
        return None
    return {
        "month_start": month_start,
        "limit": limit,
        "spent": spent,
        "exceeded_by": spent - limit,
    }


def format_currency(value: float, currency: str) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{abs(value):,.2f} {currency}"
