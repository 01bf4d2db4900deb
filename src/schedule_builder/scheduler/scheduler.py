"""Main schedule builder: filter, order, search, score, project."""

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from ..catalog import SectionCatalog
from ..constants import DEFAULT_POOL_SIZE, DEFAULT_TERM, DEFAULT_TIMEOUT_MS
from ..models import (
    Assignment,
    CourseCode,
    Preferences,
    ScheduledCourse,
    ScheduleErrorKind,
    ScheduleResult,
    ScheduleStatistics,
    Section,
)
from ..validators import validate_preferences
from .diagnostics import FailureAnalyzer
from .filters import filter_sections
from .grid import project_weekly_grid
from .ordering import order_courses
from .scoring import gap_score, select_best
from .search import Deadline, ForwardCheckingSearch, SearchOutcome

logger = logging.getLogger(__name__)


class ScheduleBuilder:
    """
    Builds a conflict-free weekly schedule for a list of courses.

    Sections come from a SectionCatalog. Hard constraints in the
    preferences narrow each course's candidates, courses are ordered
    fewest-candidates-first, and a forward-checking search picks one
    section per course. With a break or compact preference the search
    collects a pool of schedules and the one with the most or least idle
    time between classes wins.

    The builder holds no per-request state, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        catalog: SectionCatalog,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        pool_size: int = DEFAULT_POOL_SIZE,
        diagnose_failures: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the builder.

        Args:
            catalog: Source of sections per course and term.
            timeout_ms: Wall-clock budget for each build, in milliseconds.
            pool_size: Number of schedules compared when scoring.
            diagnose_failures: Run CP-SAT analysis when no schedule exists.
            clock: Monotonic clock in seconds.
        """
        self.catalog = catalog
        self.timeout_ms = timeout_ms
        self.pool_size = pool_size
        self.diagnose_failures = diagnose_failures
        self._clock = clock

    def build(
        self,
        course_codes: Sequence[CourseCode],
        preferences: Preferences | None = None,
        term: str = DEFAULT_TERM,
    ) -> ScheduleResult:
        """
        Build a schedule.

        Args:
            course_codes: Courses to take, one section each.
            preferences: Constraints and preferences; None means unconstrained.
            term: Term code passed to the catalog.

        Returns:
            ScheduleResult; on failure ``error`` says why.
        """
        preferences = preferences or Preferences()
        deadline = Deadline(self.timeout_ms, self._clock)
        codes = list(dict.fromkeys(course_codes))

        errors = validate_preferences(preferences)
        if errors:
            logger.warning(f"Rejected contradictory preferences: {'; '.join(errors)}")
            return ScheduleResult.failure(
                ScheduleErrorKind.INVALID_PREFERENCE,
                f"Contradictory preferences: {'; '.join(errors)}.",
            )

        if preferences.include_days:
            logger.debug("include_days is advisory and does not affect filtering or scoring")

        catalog_sections: dict[CourseCode, list[Section]] = {}
        for code in codes:
            sections = self.catalog.get_sections(code, term)
            if not sections:
                logger.warning(f"No sections found for {code} in term {term}")
                return ScheduleResult.failure(
                    ScheduleErrorKind.INVALID_COURSE_CODE,
                    f"No sections found for {code} in term {term}.",
                    failed_course=code,
                )
            catalog_sections[code] = sections

        candidates: dict[CourseCode, list[Section]] = {}
        for code in codes:
            filtered = filter_sections(catalog_sections[code], preferences)
            if not filtered:
                logger.warning(f"No open sections of {code} match the preferences")
                return ScheduleResult.failure(
                    ScheduleErrorKind.NO_OPEN_SECTIONS,
                    f"No open sections of {code} match the given preferences.",
                    failed_course=code,
                )
            candidates[code] = filtered

        order = order_courses(codes, candidates)
        logger.info(
            f"Searching schedules for {len(order)} courses with {self.timeout_ms} ms limit "
            f"(order: {', '.join(f'{c}={len(candidates[c])}' for c in order)})"
        )

        search = ForwardCheckingSearch(order, candidates)
        if preferences.wants_scoring:
            outcome = search.collect(deadline, self.pool_size)
        else:
            outcome = search.first_fit(deadline)

        statistics = self._create_statistics(outcome, deadline)

        if not outcome.found:
            if outcome.timed_out:
                return self._create_timeout_result(statistics)
            return self._create_infeasible_result(candidates, statistics, deadline)

        if preferences.wants_scoring:
            assignment, score = select_best(outcome.assignments, preferences.prefer_breaks)
            logger.info(
                f"Selected schedule with gap score {score} from pool of "
                f"{len(outcome.assignments)}"
            )
        else:
            assignment = outcome.assignments[0]
            score = gap_score(assignment)
        statistics.gap_score = score

        result = self._create_success_result(codes, assignment, statistics)
        if outcome.timed_out:
            result.issues.append(
                f"Time limit reached after {len(outcome.assignments)} of "
                f"{self.pool_size} candidate schedules; picked the best of those found."
            )
        return result

    def _create_statistics(self, outcome: SearchOutcome, deadline: Deadline) -> ScheduleStatistics:
        return ScheduleStatistics(
            nodes_explored=outcome.nodes_explored,
            candidates_evaluated=outcome.candidates_evaluated,
            pruned_by_forward_check=outcome.pruned_by_forward_check,
            schedules_found=len(outcome.assignments),
            elapsed_seconds=deadline.elapsed_seconds(),
        )

    def _create_success_result(
        self,
        codes: list[CourseCode],
        assignment: Assignment,
        statistics: ScheduleStatistics,
    ) -> ScheduleResult:
        """Create result for a found assignment, listed in request order."""
        schedule = [ScheduledCourse.from_section(assignment[code]) for code in codes]
        total_minutes = sum(
            slot.duration_minutes for item in schedule for slot in item.slots
        )
        logger.info(f"Found valid schedule for {len(codes)} courses")
        return ScheduleResult(
            success=True,
            message=f"Found valid schedule for {len(codes)} courses.",
            schedule=schedule,
            weekly_grid=project_weekly_grid(assignment),
            total_hours=round(total_minutes / 60, 2),
            statistics=statistics,
        )

    def _create_timeout_result(self, statistics: ScheduleStatistics) -> ScheduleResult:
        """Create result for a search that ran out of time."""
        logger.warning(f"Search exceeded time limit ({self.timeout_ms} ms)")
        return ScheduleResult.failure(
            ScheduleErrorKind.TIMEOUT,
            f"Schedule search timed out after {self.timeout_ms} ms. "
            "Try again or request fewer courses.",
            statistics=statistics,
        )

    def _create_infeasible_result(
        self,
        candidates: dict[CourseCode, list[Section]],
        statistics: ScheduleStatistics,
        deadline: Deadline,
    ) -> ScheduleResult:
        """Create result for a search space with no valid schedule.

        Failure analysis runs within what is left of the build's deadline.
        """
        logger.warning("No conflict-free schedule exists - analyzing failures")
        result = ScheduleResult.failure(
            ScheduleErrorKind.INFEASIBLE,
            "No conflict-free schedule found with the given preferences.",
            statistics=statistics,
        )
        if self.diagnose_failures:
            analyzer = FailureAnalyzer(candidates, deadline=deadline)
            result.issues = analyzer.analyze_infeasibility()
            for issue in result.issues:
                logger.warning(f"  - {issue}")
            statistics.elapsed_seconds = deadline.elapsed_seconds()
        return result


def build_schedule(
    course_codes: Sequence[CourseCode],
    preferences: Preferences | dict[str, Any] | None,
    term: str,
    catalog: SectionCatalog,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> ScheduleResult:
    """
    Build a conflict-free schedule in one call.

    Args:
        course_codes: Courses to take.
        preferences: Preferences object or request dictionary
                     (see Preferences.from_dict).
        term: Term code.
        catalog: Source of sections.
        timeout_ms: Wall-clock budget in milliseconds.
        pool_size: Number of schedules compared when scoring.

    Returns:
        ScheduleResult for the request.
    """
    if isinstance(preferences, dict):
        preferences = Preferences.from_dict(preferences)
    builder = ScheduleBuilder(catalog, timeout_ms=timeout_ms, pool_size=pool_size)
    return builder.build(course_codes, preferences, term)
