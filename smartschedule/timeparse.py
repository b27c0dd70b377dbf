"""
Clock times and weekday labels.

Catalog times look like '09:00AM' or '1:30PM'. Everything downstream
(overlap checks, scoring) works on integer minutes since midnight, so this
module is the only place that knows the clock string format.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

# Two-letter abbreviations used in raw meeting strings ("MoWe", "TuTh")
DAY_ABBREVIATIONS = {
    "Mo": "Monday",
    "Tu": "Tuesday",
    "We": "Wednesday",
    "Th": "Thursday",
    "Fr": "Friday",
}

_CLOCK_RE = re.compile(r"(\d+):(\d+)(AM|PM)")


def to_minutes(clock: str) -> int:
    """
    Convert '1:30PM' to minutes since midnight (810).

    Malformed input returns 0 instead of raising: catalog data is expected
    to be validated upstream.
    """
    match = _CLOCK_RE.search(clock or "")
    if not match:
        logger.warning("Unparseable clock time %r, using 0", clock)
        return 0

    h = int(match.group(1))
    m = int(match.group(2))
    period = match.group(3)

    if period == "PM" and h != 12:
        h += 12
    if period == "AM" and h == 12:
        h = 0

    return h * 60 + m


def day_index(day: str) -> int:
    """Position of a weekday label in the week (unknown labels sort last)."""
    try:
        return WEEKDAYS.index(day)
    except ValueError:
        return len(WEEKDAYS)


def sort_days(days: Iterable[str]) -> list[str]:
    return sorted(set(days), key=lambda d: (day_index(d), d))


def parse_days(text: str) -> Optional[tuple[str, ...]]:
    """
    Parse 'MoWeFr' into ('Monday', 'Wednesday', 'Friday').
    Returns None if any chunk is not a known weekday abbreviation.
    """
    raw = (text or "").strip()
    if not raw or len(raw) % 2 != 0:
        return None

    days: list[str] = []
    for i in range(0, len(raw), 2):
        day = DAY_ABBREVIATIONS.get(raw[i : i + 2].capitalize())
        if day is None:
            return None
        days.append(day)

    return tuple(sort_days(days))
