"""
Central data model definitions used across the project.

This module defines the canonical structure of Course, Section and Timeslot
objects so that:
- the catalog loader, conflict detection, generator and CLI share the same fields
- catalog data stays immutable once loaded (frozen dataclasses)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from smartschedule.timeparse import to_minutes


class SectionType(str, Enum):
    """Component type of a section."""

    LECTURE = "LECTURE"
    LAB = "LAB"
    TUTORIAL = "TUTORIAL"
    OTHER = "OTHER"


LECTURE = SectionType.LECTURE
LAB = SectionType.LAB
TUTORIAL = SectionType.TUTORIAL
OTHER = SectionType.OTHER


@dataclass(frozen=True)
class Timeslot:
    """
    One weekly meeting pattern: a set of weekdays plus start/end clock times.

    Minutes are parsed once at construction.
    """

    days: tuple[str, ...]
    start: str
    end: str
    start_minutes: int = field(init=False, repr=False, compare=False)
    end_minutes: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_minutes", to_minutes(self.start))
        object.__setattr__(self, "end_minutes", to_minutes(self.end))


@dataclass(frozen=True)
class Section:
    """
    Represents one offered instance of a course component
    (lecture, lab, tutorial or other) with its own meeting times.
    """

    code: str
    section_type: SectionType
    course_code: str
    course_title: str = ""
    credits: float = 0.0
    timeslots: tuple[Timeslot, ...] = ()
    linked_section: Optional[str] = None
    date_time: str = ""
    room: str = ""
    instructor: str = ""
    quota: str = ""
    enrolled: str = ""
    available: str = ""
    wait: str = ""
    remarks: str = ""

    @property
    def seats_available(self) -> Optional[int]:
        """Numeric value of `available`, or None for display-only values like 'Full'."""
        text = self.available.strip()
        return int(text) if text.isdigit() else None

    def label(self) -> str:
        return f"{self.course_code} {self.code}"


@dataclass(frozen=True)
class Course:
    """
    Represents one course of the catalog with all of its sections.
    """

    code: str
    title: str
    department: str = ""
    credits: float = 0.0
    sections: tuple[Section, ...] = ()

    def sections_of_type(self, section_type: str) -> list[Section]:
        return [s for s in self.sections if s.section_type == section_type]

    @property
    def lectures(self) -> list[Section]:
        return self.sections_of_type(LECTURE)

    @property
    def labs(self) -> list[Section]:
        return self.sections_of_type(LAB)

    @property
    def tutorials(self) -> list[Section]:
        return self.sections_of_type(TUTORIAL)


@dataclass(frozen=True)
class Conflict:
    """
    A pair of chosen sections whose timeslots overlap.

    The pair is stored in (course, section) order so the record does not
    depend on the order the sections were chosen in.
    """

    course1: str
    section1: str
    course2: str
    section2: str
    reason: str


@dataclass(frozen=True)
class ScoreBreakdown:
    """Raw (uncapped, unweighted) values of every scoring component."""

    morning_penalty: float = 0.0
    evening_penalty: float = 0.0
    friday_penalty: float = 0.0
    days_off_bonus: float = 0.0
    gap_penalty: float = 0.0
    compact_bonus: float = 0.0


@dataclass(frozen=True)
class ScheduleCombination:
    """
    One conflict-free candidate schedule together with its score.
    """

    sections: tuple[Section, ...]
    score: int
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)


@dataclass(frozen=True)
class Preferences:
    """
    Soft preference weights, each an integer from 0 (ignore) to 10 (very important).

    `compact` is accepted and validated but no scoring component uses it.
    """

    no_morning: int = 5
    no_evening: int = 3
    no_friday: int = 7
    days_off: int = 8
    minimize_gaps: int = 6
    compact: int = 4

    def __post_init__(self) -> None:
        for name in ("no_morning", "no_evening", "no_friday", "days_off", "minimize_gaps", "compact"):
            value = getattr(self, name)
            # bool is an int subclass, but True/False are not weights
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Weight {name!r} must be an integer, got {value!r}")
            if not (0 <= value <= 10):
                raise ValueError(f"Weight {name!r} must be between 0 and 10, got {value}")
