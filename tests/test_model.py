"""
Unit tests for the shared data model.
"""

import unittest

from smartschedule.model import LECTURE, OTHER, Section, SectionType, Timeslot


class TestTimeslot(unittest.TestCase):
    def test_minutes_computed_at_construction(self) -> None:
        slot = Timeslot(days=("Monday",), start="9:00AM", end="10:20AM")
        self.assertEqual((slot.start_minutes, slot.end_minutes), (540, 620))

    def test_bad_clock_warns_once(self) -> None:
        with self.assertLogs("smartschedule.timeparse", level="WARNING") as cm:
            slot = Timeslot(days=("Monday",), start="9am", end="10:00AM")
            for _ in range(5):
                self.assertEqual(slot.start_minutes, 0)
        self.assertEqual(len(cm.output), 1)

    def test_equality_ignores_derived_minutes(self) -> None:
        a = Timeslot(days=("Monday",), start="9:00AM", end="10:00AM")
        b = Timeslot(days=("Monday",), start="9:00AM", end="10:00AM")
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))


class TestSectionType(unittest.TestCase):
    def test_members_compare_as_strings(self) -> None:
        self.assertIsInstance(LECTURE, SectionType)
        self.assertEqual(LECTURE, "LECTURE")
        self.assertEqual(SectionType("OTHER"), OTHER)

    def test_section_label(self) -> None:
        s = Section(code="LA1", section_type=SectionType.LAB, course_code="COMP2011")
        self.assertEqual(s.label(), "COMP2011 LA1")


if __name__ == "__main__":
    unittest.main()
