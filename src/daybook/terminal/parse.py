# SPDX-License-Identifier: MIT

import math
import re
from typing import Optional

import pendulum
import typer

from daybook.model.day_entry import NOTE_CATEGORIES, NoteCategory
from daybook.model.transaction import FINANCE_CATEGORIES, FinanceCategory


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param)
    today = pendulum.today("local").date()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            year, month, day = map(int, date.split("-"))
            return pendulum.date(year, month, day)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return today.add(days=int(date))

    if date == "today" or date == "t":
        return today
    if date == "yesterday" or date == "y":
        return today.subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today.add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_datetime(datetime_param: Optional[str]) -> Optional[pendulum.DateTime]:
    """Parse a reminder time entered in local time and return it in UTC.

    Accepts 'YYYY-MM-DD HH:mm', 'YYYY-MM-DDTHH:mm' or '(H)H:mm' for today.
    """
    if datetime_param is None:
        return None

    datetime = datetime_param.strip()

    full_match = re.match(
        r"^(\d{4})-(\d{2})-(\d{2})[ T](\d{1,2}):(\d{2})$", datetime
    )
    if full_match:
        year, month, day, hour, minute = map(int, full_match.groups())
        try:
            return pendulum.datetime(
                year, month, day, hour, minute, tz="local"
            ).in_tz("UTC")
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date and time: {e}")

    time_match = re.match(r"^(\d{1,2}):(\d{2})$", datetime)
    if time_match:
        hour = int(time_match.group(1))
        minute = int(time_match.group(2))
        if hour < 0 or hour > 23:
            raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
        if minute < 0 or minute > 59:
            raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")
        return (
            pendulum.today("local")
            .set(hour=hour, minute=minute, second=0, microsecond=0)
            .in_tz("UTC")
        )

    raise typer.BadParameter("Incorrect datetime format")


def parse_hour(hour: int) -> int:
    if hour < 0 or hour > 23:
        raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
    return hour


def _parse_number(number_param: str) -> float:
    """Commas followed by exactly three digits group thousands ("1,000.50");
    a single other comma is the decimal separator ("4,50")."""
    number = number_param.strip()
    if re.match(r"^-?\d{1,3}(,\d{3})+(\.\d+)?$", number):
        number = number.replace(",", "")
    elif number.count(",") == 1 and "." not in number:
        number = number.replace(",", ".")
    try:
        return float(number)
    except ValueError:
        raise typer.BadParameter(f"Not a number: {number_param}")


def parse_amount(amount_param: str) -> float:
    amount = _parse_number(amount_param)
    if not math.isfinite(amount) or amount <= 0:
        raise typer.BadParameter("Amount must be a positive number")
    return amount


def parse_balance(balance_param: str) -> float:
    balance = _parse_number(balance_param)
    if not math.isfinite(balance):
        raise typer.BadParameter("Balance must be a finite number")
    return balance


def parse_note_category(category: str) -> NoteCategory:
    if category not in NOTE_CATEGORIES:
        raise typer.BadParameter(f"valid inputs: {', '.join(NOTE_CATEGORIES)}")
    return category  # type: ignore[return-value]


def parse_finance_category(category: str) -> FinanceCategory:
    if category not in FINANCE_CATEGORIES:
        raise typer.BadParameter(f"valid inputs: {', '.join(FINANCE_CATEGORIES)}")
    return category  # type: ignore[return-value]
