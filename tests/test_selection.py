"""
Unit tests for the mutable section selection.

Selection contract:
- at most one section per (course, section type)
- adding the same (course, type) replaces the previous section
- removing a course drops all its sections
"""

import unittest

from smartschedule.model import LAB, LECTURE, ScheduleCombination, Section, Timeslot
from smartschedule.selection import Selection


def _section(course: str, code: str, section_type: str = LECTURE, start: str = "9:00AM", end: str = "10:00AM") -> Section:
    return Section(
        code=code,
        section_type=section_type,
        course_code=course,
        timeslots=(Timeslot(days=("Monday",), start=start, end=end),),
    )


class TestSelection(unittest.TestCase):
    def test_add_replaces_same_course_and_type(self) -> None:
        sel = Selection()
        sel.add(_section("A", "L1"))
        sel.add(_section("A", "LA1", LAB, "1:00PM", "2:00PM"))
        sel.add(_section("A", "L2", start="3:00PM", end="4:00PM"))

        self.assertEqual(len(sel), 2)
        self.assertEqual({s.code for s in sel}, {"L2", "LA1"})

    def test_remove_drops_whole_course(self) -> None:
        sel = Selection([_section("A", "L1"), _section("A", "LA1", LAB), _section("B", "L1")])
        removed = sel.remove("A")
        self.assertEqual(removed, 2)
        self.assertEqual(sel.course_codes, ["B"])

    def test_switch_only_replaces_existing(self) -> None:
        sel = Selection([_section("A", "L1")])
        self.assertFalse(sel.switch(_section("A", "LA1", LAB)))
        self.assertTrue(sel.switch(_section("A", "L2")))
        self.assertEqual([s.code for s in sel], ["L2"])

    def test_conflicts_follow_changes(self) -> None:
        sel = Selection([_section("A", "L1"), _section("B", "L1", start="9:30AM", end="10:30AM")])
        self.assertEqual(len(sel.conflicts()), 1)

        sel.add(_section("B", "L2", start="10:00AM", end="11:00AM"))
        self.assertEqual(sel.conflicts(), [])

    def test_apply_generated_combination(self) -> None:
        sel = Selection([_section("Z", "L9")])
        combo = ScheduleCombination(sections=(_section("A", "L1"), _section("A", "LA1", LAB, "1:00PM", "2:00PM")), score=80)
        sel.apply(combo)
        self.assertEqual(sel.sections, list(combo.sections))

    def test_clear(self) -> None:
        sel = Selection([_section("A", "L1")])
        sel.clear()
        self.assertEqual(len(sel), 0)

    def test_total_credits_counts_lectures_only(self) -> None:
        lecture = Section(code="L1", section_type=LECTURE, course_code="A", credits=4.0)
        lab = Section(code="LA1", section_type=LAB, course_code="A", credits=4.0)
        other = Section(code="L1", section_type=LECTURE, course_code="B", credits=3.0)
        self.assertEqual(Selection([lecture, lab, other]).total_credits, 7.0)
        self.assertEqual(Selection([lab]).total_credits, 0)


if __name__ == "__main__":
    unittest.main()
