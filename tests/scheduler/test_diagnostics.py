"""Tests for CP-SAT failure analysis."""

import logging

import pytest

from schedule_builder.scheduler.conflicts import find_assignment_conflicts
from schedule_builder.scheduler.diagnostics import FailureAnalyzer
from schedule_builder.scheduler.search import Deadline


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clashing_candidates(make_section):
    """Three courses where MATH and PHYS can never meet together."""
    return {
        "MATH 10": [make_section("MATH 10", "A", ("Mon", "08:00", "09:30"))],
        "PHYS 10": [
            make_section("PHYS 10", "K", ("Mon", "08:30", "10:00")),
            make_section("PHYS 10", "L", ("Mon", "09:00", "10:00")),
        ],
        "ENGL 11": [make_section("ENGL 11", "B", ("Tue", "08:00", "09:30"))],
    }


class TestFailureAnalyzer:
    """Tests for FailureAnalyzer."""

    def test_incompatible_pairs(self, clashing_candidates):
        analyzer = FailureAnalyzer(clashing_candidates)
        assert analyzer.incompatible_pairs() == [("MATH 10", "PHYS 10")]

    def test_solve_subset(self, clashing_candidates):
        """Test solving only some of the courses."""
        analyzer = FailureAnalyzer(clashing_candidates)
        assignment = analyzer.solve(["MATH 10", "ENGL 11"])
        assert {c: s.section_id for c, s in assignment.items()} == {"MATH 10": "A", "ENGL 11": "B"}
        assert set(analyzer.solve(["PHYS 10", "ENGL 11"])) == {"PHYS 10", "ENGL 11"}

    def test_analyze_infeasibility(self, clashing_candidates):
        issues = FailureAnalyzer(clashing_candidates).analyze_infeasibility()
        assert "'MATH 10' and 'PHYS 10': every candidate section pair overlaps" in issues
        assert (
            "Dropping 'PHYS 10' makes the remaining courses schedulable "
            "(e.g. MATH 10 A, ENGL 11 B)"
        ) in issues
        assert any(
            issue.startswith("Dropping 'MATH 10' makes the remaining courses schedulable (e.g. PHYS 10 ")
            for issue in issues
        )
        assert not any("Dropping 'ENGL 11'" in issue for issue in issues)
        assert not any("stopped at the time limit" in issue for issue in issues)

    def test_no_single_culprit(self, make_section):
        """Test a three-way clash where no pair is fully incompatible."""
        candidates = {
            "A": [
                make_section("A", "1", ("Mon", "08:00", "09:00")),
                make_section("A", "2", ("Mon", "09:00", "10:00")),
            ],
            "B": [
                make_section("B", "1", ("Mon", "08:00", "09:00")),
                make_section("B", "2", ("Mon", "09:00", "10:00")),
            ],
            "C": [
                make_section("C", "1", ("Mon", "08:00", "09:00")),
                make_section("C", "2", ("Mon", "09:00", "10:00")),
            ],
        }
        analyzer = FailureAnalyzer(candidates)
        assert analyzer.solve() is None
        assert analyzer.incompatible_pairs() == []
        issues = analyzer.analyze_infeasibility()
        assert len(issues) == 3
        assert all(issue.startswith("Dropping") for issue in issues)

    def test_solve(self, week_catalog):
        """Test that CP-SAT finds a valid assignment when one exists."""
        codes = ["ENGL 11", "THEO 11", "HIST 20"]
        candidates = {code: week_catalog.get_sections(code, "2025-2") for code in codes}
        assignment = FailureAnalyzer(candidates).solve()

        assert assignment is not None
        assert set(assignment) == set(codes)
        assert find_assignment_conflicts(list(assignment.values())) == []

    def test_solve_infeasible(self, clashing_candidates):
        assert FailureAnalyzer(clashing_candidates).solve() is None


class TestFailureAnalyzerDeadline:
    """The analyzer shares the build's deadline."""

    def test_spent_deadline_returns_partial_issues(self, clashing_candidates):
        clock = FrozenClock()
        deadline = Deadline(1000, clock)
        clock.now += 1.5
        analyzer = FailureAnalyzer(clashing_candidates, deadline=deadline)

        issues = analyzer.analyze_infeasibility()

        assert analyzer.stopped_early
        assert issues == ["Failure analysis stopped at the time limit; more causes may exist."]
        assert analyzer.solve() is None

    def test_deadline_expiring_between_checks(self, clashing_candidates):
        """Test that pair issues found before expiry are kept."""
        clock = FrozenClock()
        deadline = Deadline(1000, clock)
        analyzer = FailureAnalyzer(clashing_candidates, deadline=deadline)

        pairs = analyzer.incompatible_pairs()
        clock.now += 1.0
        assert analyzer.solve(["MATH 10", "ENGL 11"]) is None

        assert pairs == [("MATH 10", "PHYS 10")]
        assert analyzer.stopped_early

    def test_time_limit_capped_by_deadline(self, clashing_candidates, caplog):
        """Test that each CP-SAT check gets at most the time left."""
        clock = FrozenClock()
        deadline = Deadline(250, clock)
        analyzer = FailureAnalyzer(clashing_candidates, time_limit=5.0, deadline=deadline)

        with caplog.at_level(logging.DEBUG, logger="schedule_builder.scheduler.diagnostics"):
            assert analyzer.solve(["MATH 10", "ENGL 11"]) is not None

        assert "CP-SAT check (0.250s limit)" in caplog.text
        assert not analyzer.stopped_early
