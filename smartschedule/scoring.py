"""
Preference scoring.

Each conflict-free combination gets a score from 0 to 100:

1. Every component is computed raw (penalty points or bonus points).
2. Raw values are capped to [0, 10].
3. Penalties contribute (10 - capped), the days-off bonus contributes capped.
4. Contributions are weighted by each slider's share of the total weight
   and scaled to 0-100.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Sequence

from smartschedule.model import Preferences, ScoreBreakdown, Section
from smartschedule.timeparse import WEEKDAYS

MORNING_CUTOFF = 10 * 60  # classes starting before 10:00
EVENING_CUTOFF = 18 * 60  # classes ending after 18:00
MAX_GAP_MINUTES = 60  # shorter breaks are not penalized

MORNING_POINTS = 2
EVENING_POINTS = 2
FRIDAY_POINTS = 3
DAY_OFF_POINTS = 5
GAP_MINUTES_PER_POINT = 30

COMPONENT_CAP = 10

# Returned when every weight is 0 and there is nothing to rank by
NEUTRAL_SCORE = 50


def morning_penalty(sections: Sequence[Section]) -> float:
    count = 0
    for section in sections:
        for slot in section.timeslots:
            if slot.start_minutes < MORNING_CUTOFF:
                count += len(slot.days)
    return count * MORNING_POINTS


def evening_penalty(sections: Sequence[Section]) -> float:
    count = 0
    for section in sections:
        for slot in section.timeslots:
            if slot.end_minutes > EVENING_CUTOFF:
                count += len(slot.days)
    return count * EVENING_POINTS


def friday_penalty(sections: Sequence[Section]) -> float:
    count = sum(1 for section in sections for slot in section.timeslots if "Friday" in slot.days)
    return count * FRIDAY_POINTS


def days_off_bonus(sections: Sequence[Section]) -> float:
    days_used = {day for section in sections for slot in section.timeslots for day in slot.days}
    return (len(WEEKDAYS) - len(days_used)) * DAY_OFF_POINTS


def gap_penalty(sections: Sequence[Section]) -> float:
    """
    Sum of breaks longer than an hour between consecutive classes of a day,
    one point per half hour.
    """
    by_day: dict[str, list[tuple[int, int]]] = defaultdict(list)
    for section in sections:
        for slot in section.timeslots:
            for day in slot.days:
                by_day[day].append((slot.start_minutes, slot.end_minutes))

    total_gap = 0
    for intervals in by_day.values():
        intervals.sort()
        for (_, end), (next_start, _) in zip(intervals, intervals[1:]):
            gap = next_start - end
            if gap > MAX_GAP_MINUTES:
                total_gap += gap

    return total_gap / GAP_MINUTES_PER_POINT


def _cap(value: float) -> float:
    return max(0.0, min(float(COMPONENT_CAP), value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_breakdown(sections: Sequence[Section]) -> ScoreBreakdown:
    return ScoreBreakdown(
        morning_penalty=morning_penalty(sections),
        evening_penalty=evening_penalty(sections),
        friday_penalty=friday_penalty(sections),
        days_off_bonus=days_off_bonus(sections),
        gap_penalty=gap_penalty(sections),
    )


def score_combination(sections: Sequence[Section], preferences: Preferences) -> tuple[int, ScoreBreakdown]:
    """
    Score one conflict-free combination. Returns (score, breakdown).
    """
    breakdown = score_breakdown(sections)

    weighted = [
        (COMPONENT_CAP - _cap(breakdown.morning_penalty), preferences.no_morning),
        (COMPONENT_CAP - _cap(breakdown.evening_penalty), preferences.no_evening),
        (COMPONENT_CAP - _cap(breakdown.friday_penalty), preferences.no_friday),
        (_cap(breakdown.days_off_bonus), preferences.days_off),
        (COMPONENT_CAP - _cap(breakdown.gap_penalty), preferences.minimize_gaps),
    ]

    total_weight = sum(weight for _, weight in weighted)
    if total_weight == 0:
        return NEUTRAL_SCORE, breakdown

    raw = sum(value * (weight / total_weight) for value, weight in weighted) * 10
    score = max(0, min(100, _round_half_up(raw)))
    return score, breakdown
