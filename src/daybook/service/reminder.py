# SPDX-License-Identifier: MIT

import logging
from typing import Optional, Protocol

import pendulum

from daybook.time import datetime_to_display_local_datetime_str, now_utc

logger = logging.getLogger(__name__)


class ReminderScheduler(Protocol):
    def __call__(self, at: pendulum.DateTime, title: str, body: str) -> None: ...


class LoggingReminderScheduler:
    """Records reminders the stores hand over instead of raising OS alerts.

    Reminders in the past are dropped, and nothing is recorded while
    notifications are disabled.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.scheduled: list[tuple[pendulum.DateTime, str, str]] = []

    def __call__(self, at: pendulum.DateTime, title: str, body: str) -> None:
        if not self.enabled:
            return
        if at <= now_utc():
            logger.debug("Skipping reminder in the past: %s", at)
            return
        self.scheduled.append((at, title, body))
        logger.info(
            "Reminder scheduled for %s: %s",
            datetime_to_display_local_datetime_str(at),
            title,
        )


def reminder_title(day_key: str, category_name: Optional[str] = None) -> str:
    if category_name is None:
        return f"Agenda {day_key}"
    return f"Agenda {day_key} ({category_name})"
