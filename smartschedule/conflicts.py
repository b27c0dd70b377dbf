"""
Conflict detection.

Two sections conflict if any pair of their timeslots shares a weekday and
the time intervals overlap:
    start < other_end AND other_start < end

Intervals are half-open, so a class ending at 10:00 does not clash with one
starting at 10:00. The same predicate is used for the manual selection and
for filtering generated schedules.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from smartschedule.model import Conflict, Section, Timeslot
from smartschedule.timeparse import sort_days


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and b_start < a_end


def _overlapping_slot_pairs(a: Section, b: Section) -> Iterator[tuple[Timeslot, Timeslot, list[str]]]:
    """
    Yield (slot_a, slot_b, shared_days) for every overlapping timeslot pair.
    Sections without timeslot data never overlap.
    """
    if not a.timeslots or not b.timeslots:
        return

    for slot_a in a.timeslots:
        for slot_b in b.timeslots:
            common = [d for d in slot_a.days if d in slot_b.days]
            if not common:
                continue
            if _overlaps(slot_a.start_minutes, slot_a.end_minutes, slot_b.start_minutes, slot_b.end_minutes):
                yield slot_a, slot_b, common


def overlaps(a: Section, b: Section) -> bool:
    """True on the first overlapping timeslot pair."""
    return next(_overlapping_slot_pairs(a, b), None) is not None


def overlapping_days(a: Section, b: Section) -> list[str]:
    """All weekdays on which the two sections overlap, Monday first."""
    days: list[str] = []
    for _, _, common in _overlapping_slot_pairs(a, b):
        days.extend(common)
    return sort_days(days)


def is_valid(sections: Sequence[Section]) -> bool:
    """
    True if no two sections of the combination overlap.
    """
    for i in range(len(sections)):
        for j in range(i + 1, len(sections)):
            if overlaps(sections[i], sections[j]):
                return False
    return True


def _ordered_pair(a: Section, b: Section) -> tuple[Section, Section]:
    key_a = (a.course_code, a.code, a.section_type)
    key_b = (b.course_code, b.code, b.section_type)
    return (a, b) if key_a <= key_b else (b, a)


def detect_conflicts(selection: Iterable[Section]) -> list[Conflict]:
    """
    Find conflicting section pairs, each pair reported once.
    Returns an empty list if the selection is conflict-free.
    """
    sections = list(selection)
    conflicts: list[Conflict] = []

    # O(n^2) is fine: a weekly plan holds a few dozen sections at most
    for i in range(len(sections)):
        for j in range(i + 1, len(sections)):
            days = overlapping_days(sections[i], sections[j])
            if not days:
                continue
            first, second = _ordered_pair(sections[i], sections[j])
            conflicts.append(
                Conflict(
                    course1=first.course_code,
                    section1=first.code,
                    course2=second.course_code,
                    section2=second.code,
                    reason=f"Time overlap on {', '.join(days)}",
                )
            )

    conflicts.sort(key=lambda c: (c.course1, c.section1, c.course2, c.section2))
    return conflicts
