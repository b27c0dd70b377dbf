"""
The user's working set of chosen sections.

Rules:
- at most one section per (course, section type)
- adding a section of a (course, type) already present replaces it
- removing a course drops all of its sections

Conflicts are never stored; they are recomputed from the current sections.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from smartschedule.conflicts import detect_conflicts
from smartschedule.model import LECTURE, Conflict, ScheduleCombination, Section


class Selection:
    def __init__(self, sections: Iterable[Section] = ()) -> None:
        self._sections: list[Section] = []
        for s in sections:
            self.add(s)

    @staticmethod
    def _slot_key(section: Section) -> tuple[str, str]:
        return (section.course_code, section.section_type)

    def _index_of(self, section: Section) -> int:
        key = self._slot_key(section)
        for i, existing in enumerate(self._sections):
            if self._slot_key(existing) == key:
                return i
        return -1

    def add(self, section: Section) -> None:
        """Add a section, replacing one of the same course and type in place."""
        i = self._index_of(section)
        if i >= 0:
            self._sections[i] = section
        else:
            self._sections.append(section)

    def switch(self, section: Section) -> bool:
        """
        Replace the section of the same course and type.
        Returns False (and changes nothing) if there is none to replace.
        """
        i = self._index_of(section)
        if i < 0:
            return False
        self._sections[i] = section
        return True

    def remove(self, course_code: str) -> int:
        """Drop every section of a course. Returns how many were removed."""
        before = len(self._sections)
        self._sections = [s for s in self._sections if s.course_code != course_code]
        return before - len(self._sections)

    def clear(self) -> None:
        self._sections = []

    def apply(self, combination: ScheduleCombination) -> None:
        """Replace the whole selection with a generated schedule."""
        self.clear()
        for s in combination.sections:
            self.add(s)

    @property
    def sections(self) -> list[Section]:
        return list(self._sections)

    @property
    def course_codes(self) -> list[str]:
        seen: list[str] = []
        for s in self._sections:
            if s.course_code not in seen:
                seen.append(s.course_code)
        return seen

    @property
    def total_credits(self) -> float:
        """Credits of the chosen courses; only lectures count so labs don't double up."""
        return sum(s.credits for s in self._sections if s.section_type == LECTURE)

    def conflicts(self) -> list[Conflict]:
        return detect_conflicts(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def __contains__(self, section: object) -> bool:
        return section in self._sections
