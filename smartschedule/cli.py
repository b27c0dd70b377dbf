"""
CLI (Command Line Interface).

Quick terminal commands on top of a catalog JSON file, e.g.:

    smartschedule search <text> [--dept COMP]
    smartschedule departments
    smartschedule sections <course_code>
    smartschedule conflicts COMP2011:L1 COMP2011:LA1 MATH1013:L2
    smartschedule generate COMP2011 MATH1013 --top 5 --no-friday 10

Note:
- The scheduling engine lives in smartschedule/generator.py and conflicts.py
- Output is rendered with rich tables
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from smartschedule.catalog import DEFAULT_CATALOG_PATH, index_courses, list_departments, load_catalog, search_courses
from smartschedule.generator import (
    DEFAULT_TOP_K,
    MAX_COURSES,
    TooManyCoursesError,
    check_course_count,
    generate_schedules,
    rank_schedules,
)
from smartschedule.model import Course, Preferences, ScheduleCombination, Section
from smartschedule.selection import Selection

logger = logging.getLogger(__name__)

console = Console()

# (flag, Preferences field, help)
WEIGHT_FLAGS = [
    ("--no-morning", "no_morning", "Avoid classes before 10:00"),
    ("--no-evening", "no_evening", "Avoid classes after 18:00"),
    ("--no-friday", "no_friday", "Avoid Friday classes"),
    ("--days-off", "days_off", "Prefer fewer days on campus"),
    ("--minimize-gaps", "minimize_gaps", "Avoid breaks longer than an hour"),
    ("--compact", "compact", "Keep classes close together (currently not scored)"),
]


def _load_courses(path: Path) -> list[Course]:
    """
    Load the catalog.

    CLI behavior: never crash if data is missing or broken.
    Instead, return [] as a safe default so commands can still run.
    """
    try:
        return load_catalog(path)
    except FileNotFoundError:
        logger.warning("Catalog not found: %s", path)
        return []
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Could not read catalog %s: %s", path, e)
        return []


def _section_times(section: Section) -> str:
    if not section.timeslots:
        return "TBA"
    parts = []
    for slot in section.timeslots:
        days = "".join(d[:2] for d in slot.days)
        parts.append(f"{days} {slot.start}-{slot.end}")
    return "; ".join(parts)


def _cmd_search(args: argparse.Namespace, courses: list[Course]) -> int:
    """
    Search courses by code or title (spaces ignored), optionally within a department.
    """
    query = (args.text or "").strip()
    if not query and not args.dept:
        console.print("Please provide a search text or --dept.")
        return 1

    matches = search_courses(courses, query, department=args.dept)
    if not matches:
        console.print("No results.")
        return 0

    table = Table(title="Search results (max 20)", box=box.SIMPLE)
    table.add_column("Course", style="bold cyan")
    table.add_column("Title")
    table.add_column("Dept", style="green")
    table.add_column("Credits", justify="right")
    table.add_column("Sections", justify="right", style="yellow")
    for c in matches:
        table.add_row(c.code, c.title or "(no title)", c.department, f"{c.credits:g}", str(len(c.sections)))
    console.print(table)
    return 0


def _cmd_departments(courses: list[Course]) -> int:
    departments = list_departments(courses)
    if not departments:
        console.print("No departments.")
        return 0

    for dept in departments:
        count = sum(1 for c in courses if c.department == dept)
        console.print(f"{dept} ({count} courses)")
    return 0


def _cmd_sections(args: argparse.Namespace, course_by_code: dict[str, Course]) -> int:
    """
    List all sections of one course with times and capacity.
    """
    code = (args.course_code or "").strip().upper()
    course = course_by_code.get(code)
    if course is None:
        console.print(f"Unknown course: {code}")
        return 1

    table = Table(title=f"{course.code} {course.title}", box=box.SIMPLE)
    table.add_column("Section", style="bold cyan")
    table.add_column("Type", style="green")
    table.add_column("Time")
    table.add_column("Room")
    table.add_column("Instructor", style="magenta")
    table.add_column("Avail/Quota", justify="right")
    table.add_column("Linked to")
    for s in course.sections:
        table.add_row(
            s.code,
            s.section_type.value,
            _section_times(s),
            s.room,
            s.instructor,
            f"{s.available}/{s.quota}" if s.quota else s.available,
            s.linked_section or "",
        )
    console.print(table)
    return 0


def _resolve_section_refs(refs: list[str], course_by_code: dict[str, Course]) -> tuple[list[Section], list[str]]:
    """
    Turn 'COURSE:SECTION' references into Section objects.
    Returns (sections, unknown_refs).
    """
    sections: list[Section] = []
    unknown: list[str] = []
    for ref in refs:
        code, _, section_code = ref.partition(":")
        course = course_by_code.get(code.strip().upper())
        match = None
        if course is not None:
            wanted = section_code.strip().upper()
            match = next((s for s in course.sections if s.code.upper() == wanted), None)
        if match is None:
            unknown.append(ref)
        else:
            sections.append(match)
    return sections, unknown


def _cmd_conflicts(args: argparse.Namespace, course_by_code: dict[str, Course]) -> int:
    """
    Print all conflicts among the given sections.
    """
    sections, unknown = _resolve_section_refs(args.sections, course_by_code)
    if unknown:
        console.print(f"Unknown section(s): {', '.join(unknown)} (use COURSE:SECTION, e.g. COMP2011:L1)")
        return 1

    # Later sections replace earlier ones of the same course and type
    selection = Selection(sections)
    console.print(
        f"Selected: {', '.join(s.label() for s in selection)} "
        f"| courses: {len(selection.course_codes)} | credits: {selection.total_credits:g}"
    )

    confs = selection.conflicts()
    if not confs:
        console.print("No conflicts found.")
        return 0

    console.print(f"Conflicts found: {len(confs)}")
    for c in confs:
        console.print(f"- {c.course1} ({c.section1})  <->  {c.course2} ({c.section2}): {c.reason}")
    return 0


def _preferences_from_args(args: argparse.Namespace) -> Preferences:
    return Preferences(**{field: getattr(args, field) for _, field, _ in WEIGHT_FLAGS})


def _combination_lines(combo: ScheduleCombination) -> str:
    lines = []
    for s in combo.sections:
        lines.append(f"{s.label()} ({s.section_type.value.lower()}) {_section_times(s)}")
    return "\n".join(lines)


def _breakdown_text(combo: ScheduleCombination) -> str:
    b = combo.breakdown
    return (
        f"morning {b.morning_penalty:g} | evening {b.evening_penalty:g} | friday {b.friday_penalty:g}\n"
        f"days off {b.days_off_bonus:g} | gaps {b.gap_penalty:g}"
    )


def _cmd_generate(args: argparse.Namespace, course_by_code: dict[str, Course]) -> int:
    """
    Generate conflict-free schedules for the given courses and print the best ones.
    """
    codes = [c.strip().upper() for c in args.courses if c.strip()]
    if not codes:
        console.print("Please select at least one course.")
        return 1

    missing = [c for c in codes if c not in course_by_code]
    if missing:
        console.print(f"Unknown course(s): {', '.join(missing)}")
        return 1

    courses = [course_by_code[c] for c in dict.fromkeys(codes)]
    try:
        check_course_count(courses, limit=MAX_COURSES)
        preferences = _preferences_from_args(args)
    except (TooManyCoursesError, ValueError) as e:
        console.print(str(e))
        return 1

    ranking = rank_schedules(generate_schedules(courses, preferences))
    if not len(ranking):
        console.print("No valid schedules found. Try adjusting your course selection.")
        return 0

    best = ranking.top(args.top)
    table = Table(title=f"Top {len(best)} of {len(ranking)} schedules", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right", style="bold yellow")
    table.add_column("Sections")
    table.add_column("Breakdown", style="dim")
    for i, combo in enumerate(best, start=1):
        table.add_row(str(i), str(combo.score), _combination_lines(combo), _breakdown_text(combo))
    console.print(table)
    return 0


def _weight(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if not (0 <= value <= 10):
        raise argparse.ArgumentTypeError(f"weight must be between 0 and 10, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    defaults = Preferences()

    parser = argparse.ArgumentParser(prog="smartschedule", description="Smart schedule planner CLI")
    parser.add_argument(
        "--catalog", type=Path, default=DEFAULT_CATALOG_PATH, help="Path to the catalog JSON file"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search for courses")
    p_search.add_argument("text", type=str, nargs="?", default="", help="Search text (e.g. 'COMP 2011' or 'calculus')")
    p_search.add_argument("--dept", type=str, default=None, help="Only courses of this department (e.g. COMP)")

    sub.add_parser("departments", help="List all departments of the catalog")

    p_sections = sub.add_parser("sections", help="List the sections of a course")
    p_sections.add_argument("course_code", type=str, help="Course code (e.g. COMP2011)")

    p_conflicts = sub.add_parser("conflicts", help="Show time conflicts among chosen sections")
    p_conflicts.add_argument("sections", nargs="+", help="Sections as COURSE:SECTION (e.g. COMP2011:L1)")

    p_generate = sub.add_parser("generate", help="Generate ranked conflict-free schedules")
    p_generate.add_argument("courses", nargs="+", help=f"Course codes (at most {MAX_COURSES})")
    p_generate.add_argument("--top", type=int, default=DEFAULT_TOP_K, help="How many schedules to show")
    for flag, field, help_text in WEIGHT_FLAGS:
        p_generate.add_argument(
            flag,
            dest=field,
            type=_weight,
            default=getattr(defaults, field),
            help=f"{help_text} (weight 0-10)",
        )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    courses = _load_courses(args.catalog)
    course_by_code = index_courses(courses)

    if args.command == "search":
        raise SystemExit(_cmd_search(args, courses))
    if args.command == "departments":
        raise SystemExit(_cmd_departments(courses))
    if args.command == "sections":
        raise SystemExit(_cmd_sections(args, course_by_code))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args, course_by_code))
    if args.command == "generate":
        raise SystemExit(_cmd_generate(args, course_by_code))

    raise SystemExit(2)
