import unittest

import pendulum
import typer

from daybook.terminal.parse import (
    parse_amount,
    parse_balance,
    parse_date,
    parse_finance_category,
    parse_hour,
)


class TestParseAmount(unittest.TestCase):
    def test_plain(self) -> None:
        self.assertEqual(parse_amount("12"), 12.0)
        self.assertEqual(parse_amount(" 4.5 "), 4.5)

    def test_decimal_comma(self) -> None:
        self.assertEqual(parse_amount("4,50"), 4.5)
        self.assertEqual(parse_amount("0,5"), 0.5)

    def test_thousands_grouping(self) -> None:
        self.assertEqual(parse_amount("1,000"), 1000.0)
        self.assertEqual(parse_amount("12,345,678"), 12345678.0)
        self.assertEqual(parse_amount("1,000.25"), 1000.25)

    def test_rejects_ambiguous_or_invalid(self) -> None:
        for value in ("1,000,50", "1,2,3", "abc", "", "0", "-3", "inf", "nan"):
            with self.subTest(value=value):
                with self.assertRaises(typer.BadParameter):
                    parse_amount(value)


class TestParseBalance(unittest.TestCase):
    def test_negative_and_grouped(self) -> None:
        self.assertEqual(parse_balance("-1,250"), -1250.0)
        self.assertEqual(parse_balance("-12,75"), -12.75)
        self.assertEqual(parse_balance("0"), 0.0)

    def test_rejects_infinite(self) -> None:
        with self.assertRaises(typer.BadParameter):
            parse_balance("inf")


class TestParseOther(unittest.TestCase):
    def test_date(self) -> None:
        self.assertEqual(parse_date("2024-03-05"), pendulum.date(2024, 3, 5))
        self.assertIsNone(parse_date(None))
        with self.assertRaises(typer.BadParameter):
            parse_date("2024-02-30")
        with self.assertRaises(typer.BadParameter):
            parse_date("someday")

    def test_hour(self) -> None:
        self.assertEqual(parse_hour(0), 0)
        self.assertEqual(parse_hour(23), 23)
        with self.assertRaises(typer.BadParameter):
            parse_hour(24)

    def test_finance_category(self) -> None:
        self.assertEqual(parse_finance_category("coffee"), "coffee")
        with self.assertRaises(typer.BadParameter):
            parse_finance_category("yacht")


if __name__ == "__main__":
    unittest.main(verbosity=2)
