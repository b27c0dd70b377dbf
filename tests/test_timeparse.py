"""
Unit tests for clock time and weekday parsing.
"""

import unittest

from smartschedule.timeparse import day_index, parse_days, sort_days, to_minutes


class TestToMinutes(unittest.TestCase):
    def test_midnight_and_noon(self) -> None:
        self.assertEqual(to_minutes("12:00AM"), 0)
        self.assertEqual(to_minutes("12:00PM"), 720)

    def test_afternoon_and_end_of_day(self) -> None:
        self.assertEqual(to_minutes("1:30PM"), 810)
        self.assertEqual(to_minutes("11:59PM"), 1439)

    def test_morning_with_leading_zero(self) -> None:
        self.assertEqual(to_minutes("09:00AM"), 540)
        self.assertEqual(to_minutes("12:30AM"), 30)

    def test_malformed_returns_zero(self) -> None:
        # Never raises: bad catalog values degrade to 0 and log a warning
        with self.assertLogs("smartschedule.timeparse", level="WARNING"):
            self.assertEqual(to_minutes("14:00"), 0)
        with self.assertLogs("smartschedule.timeparse", level="WARNING"):
            self.assertEqual(to_minutes(""), 0)

    def test_suffix_is_case_sensitive(self) -> None:
        with self.assertLogs("smartschedule.timeparse", level="WARNING"):
            self.assertEqual(to_minutes("1:30pm"), 0)


class TestDays(unittest.TestCase):
    def test_parse_days(self) -> None:
        self.assertEqual(parse_days("MoWe"), ("Monday", "Wednesday"))
        self.assertEqual(parse_days("FrTu"), ("Tuesday", "Friday"))

    def test_parse_days_rejects_unknown(self) -> None:
        self.assertIsNone(parse_days("Sa"))
        self.assertIsNone(parse_days("MoW"))
        self.assertIsNone(parse_days(""))

    def test_sort_days_week_order(self) -> None:
        self.assertEqual(sort_days(["Friday", "Monday", "Monday"]), ["Monday", "Friday"])
        self.assertLess(day_index("Monday"), day_index("Friday"))


if __name__ == "__main__":
    unittest.main()
