import datetime
import unittest

import pendulum

from daybook.time import date_from_day_key, day_key, week_key


class TestDayKey(unittest.TestCase):
    def test_zero_padded(self) -> None:
        self.assertEqual(day_key(pendulum.date(2024, 3, 5)), "2024-03-05")
        self.assertEqual(day_key(datetime.date(987, 1, 9)), "0987-01-09")

    def test_same_wall_clock_day_in_different_zones(self) -> None:
        late_evening_mexico = pendulum.datetime(2024, 3, 5, 23, tz="America/Mexico_City")
        late_evening_tokyo = pendulum.datetime(2024, 3, 5, 23, tz="Asia/Tokyo")
        self.assertEqual(day_key(late_evening_mexico), "2024-03-05")
        self.assertEqual(day_key(late_evening_mexico), day_key(late_evening_tokyo))

    def test_plain_and_pendulum_dates_agree(self) -> None:
        self.assertEqual(
            day_key(datetime.date(2024, 12, 31)), day_key(pendulum.date(2024, 12, 31))
        )

    def test_inverse(self) -> None:
        self.assertEqual(date_from_day_key("2024-02-29"), pendulum.date(2024, 2, 29))


class TestWeekKey(unittest.TestCase):
    def test_monday_to_sunday_share_a_key(self) -> None:
        monday = pendulum.date(2024, 3, 4)
        keys = {week_key(monday.add(days=offset)) for offset in range(7)}
        self.assertEqual(keys, {"2024-W10"})
        self.assertEqual(week_key(monday.add(days=7)), "2024-W11")

    def test_iso_week_year_at_year_boundary(self) -> None:
        self.assertEqual(week_key(pendulum.date(2024, 12, 30)), "2025-W01")
        self.assertEqual(week_key(pendulum.date(2021, 1, 3)), "2020-W53")
        self.assertEqual(week_key(pendulum.date(2024, 1, 1)), "2024-W01")


if __name__ == "__main__":
    unittest.main(verbosity=2)
