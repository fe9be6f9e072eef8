import unittest

from daybook.service.reminder import LoggingReminderScheduler, reminder_title
from daybook.time import now_utc


class TestLoggingReminderScheduler(unittest.TestCase):
    def test_future_reminder_is_recorded(self) -> None:
        scheduler = LoggingReminderScheduler()
        at = now_utc().add(hours=1)
        with self.assertLogs("daybook.service.reminder", level="INFO"):
            scheduler(at, "Agenda 2024-03-05", "buy milk")
        self.assertEqual(scheduler.scheduled, [(at, "Agenda 2024-03-05", "buy milk")])

    def test_past_reminder_is_dropped(self) -> None:
        scheduler = LoggingReminderScheduler()
        scheduler(now_utc().subtract(minutes=1), "late", "")
        self.assertEqual(scheduler.scheduled, [])

    def test_disabled_scheduler_records_nothing(self) -> None:
        scheduler = LoggingReminderScheduler(enabled=False)
        scheduler(now_utc().add(hours=1), "title", "body")
        self.assertEqual(scheduler.scheduled, [])

    def test_title(self) -> None:
        self.assertEqual(reminder_title("2024-03-05"), "Agenda 2024-03-05")
        self.assertEqual(reminder_title("2024-03-05", "Work"), "Agenda 2024-03-05 (Work)")


if __name__ == "__main__":
    unittest.main(verbosity=2)
