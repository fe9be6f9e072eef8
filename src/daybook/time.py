# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def day_key(date: datetime.date) -> str:
    """Canonical 'YYYY-MM-DD' key for the Gregorian day of `date`.

    The value is used as given: a DateTime is not converted to another
    timezone first, so callers resolve the local day before asking for a key.
    """
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


def week_key(date: datetime.date) -> str:
    """ISO-8601 'YYYY-Www' key, Monday first, using the ISO week-numbering year."""
    iso_year, iso_week, _ = date.isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def date_from_day_key(key: str) -> pendulum.Date:
    year, month, day = map(int, key.split("-"))
    return pendulum.date(year, month, day)


def local_today() -> pendulum.Date:
    return pendulum.today("local").date()
