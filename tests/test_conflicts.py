"""
Unit tests for conflict detection.

Definition used here:
- Two sections conflict if a pair of their timeslots shares a weekday
  and the time intervals overlap.
- Touching endpoints (end == start) is NOT a conflict.
"""

import itertools
import unittest

from smartschedule.conflicts import detect_conflicts, is_valid, overlapping_days, overlaps
from smartschedule.model import LAB, LECTURE, Section, Timeslot


def _section(course: str, code: str, *slots: Timeslot, section_type: str = LECTURE) -> Section:
    return Section(code=code, section_type=section_type, course_code=course, timeslots=tuple(slots))


def _slot(days: str, start: str, end: str) -> Timeslot:
    names = {"M": "Monday", "T": "Tuesday", "W": "Wednesday", "R": "Thursday", "F": "Friday"}
    return Timeslot(days=tuple(names[d] for d in days), start=start, end=end)


class TestOverlaps(unittest.TestCase):
    def test_overlap_same_day(self) -> None:
        a = _section("A", "L1", _slot("M", "9:00AM", "10:30AM"))
        b = _section("B", "L1", _slot("M", "10:00AM", "11:00AM"))
        self.assertTrue(overlaps(a, b))
        self.assertTrue(overlaps(b, a))

    def test_no_overlap_touching_end(self) -> None:
        a = _section("A", "L1", _slot("M", "9:00AM", "10:00AM"))
        b = _section("B", "L1", _slot("M", "10:00AM", "11:00AM"))
        self.assertFalse(overlaps(a, b))

    def test_different_day_no_conflict(self) -> None:
        a = _section("A", "L1", _slot("M", "9:00AM", "11:00AM"))
        b = _section("B", "L1", _slot("T", "10:00AM", "12:00PM"))
        self.assertFalse(overlaps(a, b))

    def test_missing_timeslots_never_conflict(self) -> None:
        a = _section("A", "L1")
        b = _section("B", "L1", _slot("M", "9:00AM", "11:00AM"))
        self.assertFalse(overlaps(a, b))
        self.assertFalse(overlaps(b, a))

    def test_second_timeslot_overlaps(self) -> None:
        a = _section("A", "L1", _slot("M", "9:00AM", "10:00AM"), _slot("W", "2:00PM", "3:00PM"))
        b = _section("B", "L1", _slot("RW", "2:30PM", "4:00PM"))
        self.assertTrue(overlaps(a, b))
        self.assertEqual(overlapping_days(a, b), ["Wednesday"])

    def test_is_valid(self) -> None:
        a = _section("A", "L1", _slot("M", "9:00AM", "10:00AM"))
        b = _section("A", "LA1", _slot("M", "10:00AM", "11:00AM"), section_type=LAB)
        c = _section("B", "L1", _slot("M", "10:30AM", "11:30AM"))
        self.assertTrue(is_valid([a, b]))
        self.assertFalse(is_valid([a, b, c]))
        self.assertTrue(is_valid([]))


class TestDetectConflicts(unittest.TestCase):
    def test_monday_overlap_reports_one_conflict(self) -> None:
        a = _section("COMP1021", "L1", _slot("M", "9:00AM", "10:30AM"))
        b = _section("MATH1013", "L2", _slot("M", "10:00AM", "11:00AM"))
        confs = detect_conflicts([a, b])
        self.assertEqual(len(confs), 1)
        self.assertIn("Monday", confs[0].reason)
        self.assertEqual((confs[0].course1, confs[0].section1), ("COMP1021", "L1"))
        self.assertEqual((confs[0].course2, confs[0].section2), ("MATH1013", "L2"))

    def test_reason_lists_all_shared_days(self) -> None:
        a = _section("A", "L1", _slot("MW", "9:00AM", "10:30AM"))
        b = _section("B", "L1", _slot("WM", "10:00AM", "11:00AM"))
        confs = detect_conflicts([a, b])
        self.assertEqual(len(confs), 1)
        self.assertEqual(confs[0].reason, "Time overlap on Monday, Wednesday")

    def test_no_conflicts_returns_empty_list(self) -> None:
        a = _section("A", "L1", _slot("M", "9:00AM", "10:00AM"))
        b = _section("B", "L1", _slot("M", "10:00AM", "11:00AM"))
        self.assertEqual(detect_conflicts([a, b]), [])

    def test_order_independent(self) -> None:
        sections = [
            _section("A", "L1", _slot("M", "9:00AM", "10:30AM")),
            _section("B", "L1", _slot("M", "10:00AM", "11:00AM")),
            _section("C", "T1", _slot("MF", "10:45AM", "11:30AM"), section_type=LAB),
        ]
        expected = detect_conflicts(sections)
        self.assertEqual(len(expected), 2)
        for perm in itertools.permutations(sections):
            self.assertEqual(detect_conflicts(list(perm)), expected)


if __name__ == "__main__":
    unittest.main()
