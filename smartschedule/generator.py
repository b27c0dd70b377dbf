"""
Schedule generation.

Pipeline for a list of requested courses:

    enumerate combinations -> drop conflicting ones -> score -> rank

Enumeration is lazy: per course we build the (small) list of options
(lecture + companion lab + companion tutorial), then walk the cross-product
across courses one combination at a time. The number of combinations is the
product of the option counts, so callers should bound the number of courses
(see check_course_count).
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterator, Optional, Sequence

from smartschedule.conflicts import is_valid
from smartschedule.linkage import resolve_companions
from smartschedule.model import Course, Preferences, ScheduleCombination, Section
from smartschedule.scoring import score_combination

logger = logging.getLogger(__name__)

MAX_COURSES = 6
DEFAULT_TOP_K = 10


class TooManyCoursesError(ValueError):
    """Raised by check_course_count when a request would blow up enumeration."""


def check_course_count(courses: Sequence[Course], limit: int = MAX_COURSES) -> None:
    """
    Caller-side guard. generate_schedules itself does not cap anything.
    """
    if len(courses) > limit:
        raise TooManyCoursesError(f"Please select {limit} or fewer courses (got {len(courses)})")


def course_options(course: Course) -> Iterator[tuple[Section, ...]]:
    """
    Yield every valid (lecture, lab?, tutorial?) pick for one course.
    At most one lab and one tutorial per option.
    """
    for lecture in course.lectures:
        companions = resolve_companions(course, lecture)
        labs: Sequence[Optional[Section]] = companions.labs or (None,)
        tutorials: Sequence[Optional[Section]] = companions.tutorials or (None,)

        for lab in labs:
            for tutorial in tutorials:
                yield tuple(s for s in (lecture, lab, tutorial) if s is not None)


def iter_combinations(courses: Sequence[Course]) -> Iterator[tuple[Section, ...]]:
    """
    Lazily yield the cross-product of course options across all courses.
    No courses yields exactly one empty combination.
    """
    options_per_course = []
    for course in courses:
        options = list(course_options(course))
        logger.debug("%s: %d option(s)", course.code, len(options))
        options_per_course.append(options)

    for picks in itertools.product(*options_per_course):
        yield tuple(itertools.chain.from_iterable(picks))


class Ranking:
    """
    Scored combinations sorted by score, best first.

    Ties keep generation order but callers should not rely on it.
    """

    def __init__(self, combinations: Sequence[ScheduleCombination]) -> None:
        self._all = sorted(combinations, key=lambda c: c.score, reverse=True)

    @property
    def all(self) -> list[ScheduleCombination]:
        return list(self._all)

    def top(self, k: int = DEFAULT_TOP_K) -> list[ScheduleCombination]:
        return self._all[: max(0, k)]

    def __len__(self) -> int:
        return len(self._all)

    def __iter__(self) -> Iterator[ScheduleCombination]:
        return iter(self._all)


def rank_schedules(combinations: Sequence[ScheduleCombination]) -> Ranking:
    return Ranking(combinations)


def score_valid_combinations(
    courses: Sequence[Course], preferences: Preferences
) -> Iterator[ScheduleCombination]:
    """Enumerate, filter out conflicts and score; yields one combination at a time."""
    for sections in iter_combinations(courses):
        if not is_valid(sections):
            continue
        score, breakdown = score_combination(sections, preferences)
        yield ScheduleCombination(sections=sections, score=score, breakdown=breakdown)


def generate_schedules(courses: Sequence[Course], preferences: Preferences) -> list[ScheduleCombination]:
    """
    Full pipeline. Returns every conflict-free combination, best score first.
    An empty list means no valid schedule exists.
    """
    ranking = rank_schedules(list(score_valid_combinations(courses, preferences)))
    logger.debug("Generated %d valid schedule(s) for %d course(s)", len(ranking), len(courses))
    return ranking.all
