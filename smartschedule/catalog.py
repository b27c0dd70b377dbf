"""
Catalog loading (JSON -> Course objects).

- Reads a courses.json file exported by the course catalog service
- Converts each entry into immutable Course / Section / Timeslot objects
- Parses the raw 'dateTime' meeting string when no parsed times are present

Expected course shape (only courseCode is required):

    {
      "courseCode": "COMP2011",
      "courseTitle": "Programming with C++",
      "department": "COMP",
      "credits": 4,
      "sections": [
        {
          "sectionCode": "L1",
          "sectionType": "LECTURE",
          "dateTime": "MoWe 09:00AM - 10:20AM",
          "parsedTime": {"days": ["Monday", "Wednesday"], "startTime": "09:00AM", "endTime": "10:20AM"},
          "linkedSection": null,
          ...
        }
      ]
    }
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from smartschedule.model import OTHER, Course, Section, SectionType, Timeslot
from smartschedule.timeparse import WEEKDAYS, parse_days, sort_days

logger = logging.getLogger(__name__)


PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CATALOG_PATH = PACKAGE_DIR / "data" / "courses.json"

SEARCH_LIMIT = 20

_MEETING_RE = re.compile(r"^\s*([A-Za-z]+)\s+(\d{1,2}:\d{2}(?:AM|PM))\s*-\s*(\d{1,2}:\d{2}(?:AM|PM))\s*$")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _safe_str(x: Any) -> str:
    return "" if x is None else str(x).strip()


def _credits(value: Any) -> float:
    try:
        credits = float(value)
    except (TypeError, ValueError):
        return 0.0
    return credits if credits > 0 else 0.0


# ---------------------------------------------------------------------------
# Meeting times
# ---------------------------------------------------------------------------


def parse_meeting_line(line: str) -> Optional[Timeslot]:
    """
    Parses exactly one meeting line like 'TuTh 01:30PM - 02:50PM'.
    Lines like 'TBA', unknown day codes or end <= start give None.
    """
    match = _MEETING_RE.match(line or "")
    if not match:
        return None

    days = parse_days(match.group(1))
    if not days:
        return None

    slot = Timeslot(days=days, start=match.group(2), end=match.group(3))
    if slot.end_minutes <= slot.start_minutes:
        return None
    return slot


def parse_meeting_times(text: str) -> tuple[Timeslot, ...]:
    """Parse a multi-line meeting string, one Timeslot per valid line."""
    slots: list[Timeslot] = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        slot = parse_meeting_line(line)
        if slot is None:
            logger.debug("Skipping meeting line %r", line)
            continue
        slots.append(slot)
    return tuple(slots)


def _timeslot_from_dict(data: dict[str, Any]) -> Optional[Timeslot]:
    raw_days = data.get("days") or []
    if not isinstance(raw_days, list):
        return None

    days = [d for d in (_safe_str(x) for x in raw_days) if d in WEEKDAYS]
    start = _safe_str(data.get("startTime"))
    end = _safe_str(data.get("endTime"))
    if not days or not start or not end:
        return None

    slot = Timeslot(days=tuple(sort_days(days)), start=start, end=end)
    if slot.end_minutes <= slot.start_minutes:
        logger.warning("Skipping timeslot with end <= start: %s-%s", start, end)
        return None
    return slot


def _timeslots_from_parsed_time(parsed: Any) -> tuple[Timeslot, ...]:
    """
    'parsedTime' either carries a list of 'timeslots' or is itself a single slot.
    """
    if not isinstance(parsed, dict):
        return ()

    raw_slots = parsed.get("timeslots")
    if not isinstance(raw_slots, list) or not raw_slots:
        raw_slots = [parsed]

    slots: list[Timeslot] = []
    for raw in raw_slots:
        if not isinstance(raw, dict):
            continue
        slot = _timeslot_from_dict(raw)
        if slot is not None:
            slots.append(slot)
    return tuple(slots)


# ---------------------------------------------------------------------------
# Course parsing
# ---------------------------------------------------------------------------


def _section_type(value: Any) -> SectionType:
    try:
        return SectionType(_safe_str(value).upper())
    except ValueError:
        return OTHER


def section_from_dict(
    data: dict[str, Any], course_code: str, course_title: str = "", credits: float = 0.0
) -> Section:
    section_type = _section_type(data.get("sectionType"))

    date_time = _safe_str(data.get("dateTime"))
    timeslots = _timeslots_from_parsed_time(data.get("parsedTime"))
    if not timeslots and date_time:
        timeslots = parse_meeting_times(date_time)

    linked = _safe_str(data.get("linkedSection")) or None

    return Section(
        code=_safe_str(data.get("sectionCode")),
        section_type=section_type,
        course_code=course_code,
        course_title=course_title,
        credits=credits,
        timeslots=timeslots,
        linked_section=linked,
        date_time=date_time,
        room=_safe_str(data.get("room")),
        instructor=_safe_str(data.get("instructor")),
        quota=_safe_str(data.get("quota")),
        enrolled=_safe_str(data.get("enrolled")),
        available=_safe_str(data.get("available")),
        wait=_safe_str(data.get("wait")),
        remarks=_safe_str(data.get("remarks")),
    )


def course_from_dict(data: dict[str, Any]) -> Course:
    """
    Build a Course from one catalog entry. Raises ValueError without a courseCode.
    """
    code = _safe_str(data.get("courseCode")).upper()
    if not code:
        raise ValueError("Catalog entry without courseCode")

    title = _safe_str(data.get("courseTitle"))
    credits = _credits(data.get("credits"))

    sections: list[Section] = []
    raw_sections = data.get("sections") or []
    if isinstance(raw_sections, list):
        for raw in raw_sections:
            if isinstance(raw, dict):
                sections.append(section_from_dict(raw, code, title, credits))

    return Course(
        code=code,
        title=title,
        department=_safe_str(data.get("department")).upper(),
        credits=credits,
        sections=tuple(sections),
    )


def courses_from_list(entries: Any) -> list[Course]:
    """
    Convert decoded JSON into courses, skipping entries that are not usable.
    """
    if not isinstance(entries, list):
        return []

    courses: list[Course] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        try:
            courses.append(course_from_dict(entry))
        except ValueError as e:
            logger.warning("Skipping catalog entry: %s", e)
    return courses


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_catalog(path: str | Path = DEFAULT_CATALOG_PATH) -> list[Course]:
    """
    Load all courses from a catalog JSON file.
    Raises OSError / json.JSONDecodeError if the file is missing or broken.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return courses_from_list(data)


def index_courses(courses: list[Course]) -> dict[str, Course]:
    return {c.code: c for c in courses}


def _normalize_query(text: str) -> str:
    return re.sub(r"\s+", "", text).lower()


def list_departments(courses: list[Course]) -> list[str]:
    """Sorted distinct department codes, courses without one are left out."""
    return sorted({c.department for c in courses if c.department})


def search_courses(
    courses: list[Course],
    query: str = "",
    department: Optional[str] = None,
    limit: int = SEARCH_LIMIT,
) -> list[Course]:
    """
    Substring search over course code and title, optionally within one department.
    Spaces are ignored, so 'comp 2011' finds 'COMP2011'.

    With a department and no query text, every course of that department matches.
    """
    q = _normalize_query(query or "")
    dept = (department or "").strip().upper()
    if not q and not dept:
        return []

    matches: list[Course] = []
    for c in courses:
        if dept and c.department != dept:
            continue
        hay = _normalize_query(f"{c.code} {c.title}")
        if q in hay:
            matches.append(c)
    return matches[:limit]
