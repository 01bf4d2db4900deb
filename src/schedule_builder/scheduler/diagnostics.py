"""Infeasibility analysis using the OR-Tools CP-SAT solver.

When the search proves that no conflict-free schedule exists, the analyzer
explains why by re-posing the problem to CP-SAT on subsets of the requested
courses. Each course gets one boolean per candidate section, exactly one of
which must be true, and every overlapping pair of sections from different
courses is forbidden.

The analysis shares the build's deadline: every solve is capped by the time
left, and the analysis stops with a partial issue list once it expires.
"""

import logging
from collections.abc import Mapping, Sequence

from ortools.sat.python import cp_model

from ..constants import DIAGNOSTIC_TIME_LIMIT
from ..models import Assignment, CourseCode, Section
from .conflicts import sections_conflict
from .search import Deadline

logger = logging.getLogger(__name__)


class FailureAnalyzer:
    """Analyzes why a set of courses cannot be scheduled together."""

    def __init__(
        self,
        candidates: Mapping[CourseCode, Sequence[Section]],
        time_limit: float = DIAGNOSTIC_TIME_LIMIT,
        deadline: Deadline | None = None,
    ):
        """
        Initialize the analyzer.

        Args:
            candidates: Filtered candidate sections per course.
            time_limit: CP-SAT time limit per check, in seconds.
            deadline: Deadline of the build being analyzed; None means only
                      time_limit bounds each check.
        """
        self.candidates = candidates
        self.courses = list(candidates)
        self.time_limit = time_limit
        self.deadline = deadline
        self.stopped_early = False

    def analyze_infeasibility(self) -> list[str]:
        """
        Analyze potential causes of infeasibility.

        Returns list of issues: course pairs that can never be combined and
        single courses whose removal makes the rest schedulable, with an
        example schedule of the remaining courses. If the deadline expires
        first, the issues found so far are returned followed by a note.
        """
        issues = []

        for first, second in self.incompatible_pairs():
            issues.append(
                f"'{first}' and '{second}': every candidate section pair overlaps"
            )

        if len(self.courses) > 2 and not self.stopped_early:
            for course in self.courses:
                if self._out_of_time():
                    break
                rest = [c for c in self.courses if c != course]
                assignment = self.solve(rest)
                if assignment is not None:
                    example = ", ".join(str(assignment[c]) for c in rest)
                    issues.append(
                        f"Dropping '{course}' makes the remaining courses schedulable "
                        f"(e.g. {example})"
                    )

        if self.stopped_early:
            logger.debug("Failure analysis cut short by the build deadline")
            issues.append("Failure analysis stopped at the time limit; more causes may exist.")

        return issues

    def incompatible_pairs(self) -> list[tuple[CourseCode, CourseCode]]:
        """Course pairs where every candidate of one overlaps every candidate of the other."""
        pairs = []
        for i, first in enumerate(self.courses):
            if self._out_of_time():
                break
            for second in self.courses[i + 1 :]:
                sections_a = self.candidates[first]
                sections_b = self.candidates[second]
                if not sections_a or not sections_b:
                    continue
                if all(sections_conflict(a, b) for a in sections_a for b in sections_b):
                    pairs.append((first, second))
        return pairs

    def solve(self, courses: Sequence[CourseCode] | None = None) -> Assignment | None:
        """
        Find any conflict-free assignment of the given courses with CP-SAT.

        Returns:
            The assignment, or None if CP-SAT proves there is none or runs
            out of time.
        """
        if self._out_of_time():
            return None

        model, x = self._build_model(courses)
        status, solver = self._solve(model)
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            return None

        assignment: Assignment = {}
        for (course, idx), var in x.items():
            if solver.Value(var):
                assignment[course] = self.candidates[course][idx]
        return assignment

    def _out_of_time(self) -> bool:
        if self.deadline is not None and self.deadline.expired():
            self.stopped_early = True
        return self.stopped_early

    def _build_model(
        self, courses: Sequence[CourseCode] | None
    ) -> tuple[cp_model.CpModel, dict[tuple[CourseCode, int], cp_model.IntVar]]:
        """Create one boolean per candidate section with conflict constraints."""
        selected = list(courses) if courses is not None else self.courses
        model = cp_model.CpModel()

        # x[(course, section_index)] = BoolVar
        x: dict[tuple[CourseCode, int], cp_model.IntVar] = {}
        for course in selected:
            course_vars = []
            for idx, section in enumerate(self.candidates[course]):
                var = model.NewBoolVar(f"x_{course}_{section.section_id}_{idx}")
                x[(course, idx)] = var
                course_vars.append(var)
            model.AddExactlyOne(course_vars)

        for i, first in enumerate(selected):
            for second in selected[i + 1 :]:
                for ia, a in enumerate(self.candidates[first]):
                    for ib, b in enumerate(self.candidates[second]):
                        if sections_conflict(a, b):
                            model.AddBoolOr([x[(first, ia)].Not(), x[(second, ib)].Not()])

        return model, x

    def _solve(self, model: cp_model.CpModel) -> tuple[int, cp_model.CpSolver]:
        time_limit = self.time_limit
        if self.deadline is not None:
            time_limit = min(time_limit, self.deadline.remaining_seconds())

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = time_limit
        solver.parameters.log_search_progress = False
        status = solver.Solve(model)
        logger.debug(f"CP-SAT check ({time_limit:.3f}s limit): {solver.StatusName(status)}")
        return status, solver
