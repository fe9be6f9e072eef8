# SPDX-License-Identifier: MIT

import datetime
from typing import Literal, Optional, TypedDict

import pendulum

from daybook.configuration import Configuration

DayStatus = Literal["period", "fertile"]

# Fixed window of cycle days counted from the period start, whatever the
# cycle length is.
FERTILE_WINDOW_START = 10
FERTILE_WINDOW_END = 15


class CycleSettings(TypedDict):
    cycle_start: pendulum.Date
    cycle_length_days: int
    period_length_days: int


def cycle_settings_from_config(config: Configuration) -> Optional[CycleSettings]:
    """Build cycle settings, or None when no period start has been recorded."""
    if config["last_period_start"] is None:
        return None
    year, month, day = map(int, config["last_period_start"].split("-"))
    return {
        "cycle_start": pendulum.date(year, month, day),
        "cycle_length_days": config["cycle_length_days"],
        "period_length_days": config["period_length_days"],
    }


def _as_date(value: datetime.date) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def days_since_start(cycle_start: datetime.date, date: datetime.date) -> int:
    return _as_date(date).toordinal() - _as_date(cycle_start).toordinal()


def cycle_phase(
    cycle_start: datetime.date, cycle_length_days: int, date: datetime.date
) -> int:
    """Day offset of `date` within its cycle, always in [0, cycle_length_days)."""
    cycle_length_days = max(1, cycle_length_days)
    return days_since_start(cycle_start, date) % cycle_length_days


def is_period_day(
    cycle_start: datetime.date,
    cycle_length_days: int,
    period_length_days: int,
    date: datetime.date,
) -> bool:
    return cycle_phase(cycle_start, cycle_length_days, date) < period_length_days


def is_fertile_day(
    cycle_start: datetime.date, cycle_length_days: int, date: datetime.date
) -> bool:
    phase = cycle_phase(cycle_start, cycle_length_days, date)
    return FERTILE_WINDOW_START <= phase <= FERTILE_WINDOW_END


def day_status(settings: CycleSettings, date: datetime.date) -> Optional[DayStatus]:
    if is_period_day(
        settings["cycle_start"],
        settings["cycle_length_days"],
        settings["period_length_days"],
        date,
    ):
        return "period"
    if is_fertile_day(settings["cycle_start"], settings["cycle_length_days"], date):
        return "fertile"
    return None


def next_period_start(settings: CycleSettings, after: datetime.date) -> pendulum.Date:
    """First predicted period start strictly after `after`."""
    cycle_length_days = max(1, settings["cycle_length_days"])
    phase = cycle_phase(settings["cycle_start"], cycle_length_days, after)
    after_date = _as_date(after)
    start = pendulum.date(after_date.year, after_date.month, after_date.day)
    return start.add(days=cycle_length_days - phase)
