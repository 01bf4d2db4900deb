"""Conflict-free weekly schedule search.

This package picks one section per requested course so that no two chosen
sections meet at the same time, honoring the hard constraints and the
break/compact preference of the request.

Main pieces:
- ScheduleBuilder / build_schedule: end-to-end build for one request
- ForwardCheckingSearch: backtracking search with forward checking
- FailureAnalyzer: CP-SAT explanation of infeasible requests

Usage:
    from schedule_builder.catalog import load_catalog
    from schedule_builder.scheduler import ScheduleBuilder

    builder = ScheduleBuilder(load_catalog("sections.csv"))
    result = builder.build(["MATH 30.13", "CSCI 111"])
"""

from .conflicts import (
    check_section_conflict,
    find_assignment_conflicts,
    find_conflicts,
    sections_conflict,
    slots_conflict,
)
from .diagnostics import FailureAnalyzer
from .filters import filter_sections
from .grid import project_weekly_grid
from .ordering import order_courses
from .scheduler import ScheduleBuilder, build_schedule
from .scoring import find_gaps, gap_score, select_best, summarize_gaps
from .search import Deadline, ForwardCheckingSearch, SearchNode, SearchOutcome

__all__ = [
    # Main builder
    "ScheduleBuilder",
    "build_schedule",
    # Search
    "Deadline",
    "ForwardCheckingSearch",
    "SearchNode",
    "SearchOutcome",
    # Components
    "filter_sections",
    "order_courses",
    "project_weekly_grid",
    "FailureAnalyzer",
    # Conflicts
    "slots_conflict",
    "sections_conflict",
    "find_conflicts",
    "find_assignment_conflicts",
    "check_section_conflict",
    # Scoring
    "gap_score",
    "select_best",
    "find_gaps",
    "summarize_gaps",
]
