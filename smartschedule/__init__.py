"""
Weekly class schedule planner: conflict detection and ranked schedule generation.
"""

from smartschedule.conflicts import detect_conflicts
from smartschedule.generator import generate_schedules

__all__ = ["detect_conflicts", "generate_schedules"]
