"""Forward-checking backtracking search over course sections.

Courses are the variables, their candidate sections the domains, and the
only constraint is that no two chosen sections overlap in time. After each
tentative choice the domains of all later courses are pruned against it;
if any of them becomes empty the choice is abandoned before recursing.

Every recursive step builds a new SearchNode with its own copy of the
pruned domains, so sibling branches never see each other's pruning. The
deadline is passed explicitly and checked on entry to every step and
before every candidate.
"""

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from ..exceptions import SearchTimeoutError
from ..models import Assignment, CourseCode, Section
from .conflicts import conflicts_with_any, sections_conflict

logger = logging.getLogger(__name__)


class Deadline:
    """Wall-clock deadline for one build."""

    def __init__(self, timeout_ms: int, clock: Callable[[], float] = time.monotonic):
        """
        Start the deadline now.

        Args:
            timeout_ms: Time budget in milliseconds.
            clock: Monotonic clock returning seconds.
        """
        self.timeout_ms = timeout_ms
        self._clock = clock
        self.started_at = clock()
        self.expires_at = self.started_at + timeout_ms / 1000

    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def check(self) -> None:
        """Raise SearchTimeoutError if the deadline has passed."""
        if self.expired():
            raise SearchTimeoutError(self.timeout_ms)

    def remaining_seconds(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self.expires_at - self._clock())

    def elapsed_seconds(self) -> float:
        return self._clock() - self.started_at


@dataclass(frozen=True)
class SearchNode:
    """Search state after choosing sections for the first len(assigned) courses.

    ``remaining`` holds the pruned candidates of the courses not yet assigned.
    """

    assigned: tuple[Section, ...]
    remaining: Mapping[CourseCode, tuple[Section, ...]]


@dataclass
class SearchOutcome:
    """Assignments found by one search run plus counters."""

    assignments: list[Assignment] = field(default_factory=list)
    timed_out: bool = False
    nodes_explored: int = 0
    candidates_evaluated: int = 0
    pruned_by_forward_check: int = 0

    @property
    def found(self) -> bool:
        return bool(self.assignments)


class ForwardCheckingSearch:
    """Backtracking search with forward checking over a fixed course order."""

    def __init__(
        self,
        order: Sequence[CourseCode],
        candidates: Mapping[CourseCode, Sequence[Section]],
    ):
        """
        Initialize the search.

        Args:
            order: Courses in the order they are assigned.
            candidates: Filtered candidate sections per course; the search
                        tries them in the given order and never modifies them.
        """
        self.order = list(order)
        self.candidates = candidates

    def first_fit(self, deadline: Deadline) -> SearchOutcome:
        """Return as soon as one complete assignment is found."""
        return self._run(deadline, limit=1)

    def collect(self, deadline: Deadline, pool_size: int) -> SearchOutcome:
        """Collect up to pool_size distinct assignments in discovery order.

        If the deadline expires first, the assignments found so far are kept
        and the outcome is flagged as timed out.
        """
        return self._run(deadline, limit=max(1, pool_size))

    def _run(self, deadline: Deadline, limit: int) -> SearchOutcome:
        outcome = SearchOutcome()
        root = SearchNode(
            assigned=(),
            remaining={code: tuple(self.candidates.get(code, ())) for code in self.order},
        )
        try:
            self._expand(root, deadline, outcome, limit)
        except SearchTimeoutError:
            outcome.timed_out = True
            logger.debug(
                f"Search stopped at deadline after {outcome.nodes_explored} nodes "
                f"with {len(outcome.assignments)} schedule(s) found"
            )
        return outcome

    def _expand(
        self,
        node: SearchNode,
        deadline: Deadline,
        outcome: SearchOutcome,
        limit: int,
    ) -> None:
        deadline.check()
        outcome.nodes_explored += 1

        depth = len(node.assigned)
        if depth == len(self.order):
            outcome.assignments.append(dict(zip(self.order, node.assigned)))
            return

        course = self.order[depth]
        for section in node.remaining[course]:
            if len(outcome.assignments) >= limit:
                return
            deadline.check()
            outcome.candidates_evaluated += 1

            if conflicts_with_any(section, node.assigned):
                continue

            pruned = self._forward_check(section, node.remaining, depth)
            if pruned is None:
                outcome.pruned_by_forward_check += 1
                continue

            child = SearchNode(assigned=node.assigned + (section,), remaining=pruned)
            self._expand(child, deadline, outcome, limit)

    def _forward_check(
        self,
        section: Section,
        remaining: Mapping[CourseCode, tuple[Section, ...]],
        depth: int,
    ) -> dict[CourseCode, tuple[Section, ...]] | None:
        """Prune later courses against a tentative choice.

        Returns:
            New candidate map for the unassigned courses, or None if some
            course is left without candidates.
        """
        pruned: dict[CourseCode, tuple[Section, ...]] = {}
        for future in self.order[depth + 1 :]:
            valid = tuple(s for s in remaining[future] if not sections_conflict(s, section))
            if not valid:
                return None
            pruned[future] = valid
        return pruned
