"""
Lecture / lab / tutorial linkage.

Catalogs tie a lab or tutorial to one lecture through its `linked_section`
field, e.g. lab 'LA1' declaring 'L1(2213)'. When at least one lab declares
a link to a lecture, only those labs may be combined with it. When no lab of
the course declares a link, every lab is a free choice. Tutorials follow the
same rule independently.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from smartschedule.model import Course, Section

logger = logging.getLogger(__name__)

# Leading section token, e.g. 'L1' out of 'L1(2213)'
_SECTION_TOKEN_RE = re.compile(r"^([A-Z]+\d+)")


@dataclass(frozen=True)
class Companions:
    """Candidate labs and tutorials for one lecture. Empty means "none"."""

    labs: tuple[Section, ...]
    tutorials: tuple[Section, ...]


def normalize_section_code(code: Optional[str]) -> str:
    """Upper-case and drop whitespace and parentheses: ' l1 (2213)' -> 'L12213'."""
    if not code:
        return ""
    return re.sub(r"[\s()]", "", code.upper())


def _leading_token(code: str) -> Optional[str]:
    match = _SECTION_TOKEN_RE.match(code.strip().upper())
    return match.group(1) if match else None


def is_linked(reference: Optional[str], lecture_code: str) -> bool:
    """
    Check whether a declared linkage reference points at `lecture_code`.

    Exact match after normalization first, then a match on the leading
    letters+digits token so 'L1(2213)' still links to 'L1'.
    """
    if not reference:
        return False

    if normalize_section_code(reference) == normalize_section_code(lecture_code):
        return True

    token_a = _leading_token(reference)
    token_b = _leading_token(lecture_code)
    return token_a is not None and token_a == token_b


def _resolve(candidates: list[Section], lecture: Section, kind: str) -> tuple[Section, ...]:
    if not candidates:
        logger.debug("%s %s: no %ss for this course", lecture.course_code, lecture.code, kind)
        return ()

    linked = [s for s in candidates if is_linked(s.linked_section, lecture.code)]
    if linked:
        logger.debug(
            "%s %s: using linked %s(s) %s",
            lecture.course_code,
            lecture.code,
            kind,
            ", ".join(s.code for s in linked),
        )
        return tuple(linked)

    logger.debug(
        "%s %s: no linked %s found, offering all %d",
        lecture.course_code,
        lecture.code,
        kind,
        len(candidates),
    )
    return tuple(candidates)


def resolve_companions(course: Course, lecture: Section) -> Companions:
    """
    Return the labs and tutorials that may be taken together with `lecture`.
    """
    return Companions(
        labs=_resolve(course.labs, lecture, "lab"),
        tutorials=_resolve(course.tutorials, lecture, "tutorial"),
    )
