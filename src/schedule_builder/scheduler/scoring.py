"""Gap scoring and free-time reporting for weekly schedules."""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import time
from typing import Any

from ..constants import (
    DEFAULT_MIN_GAP_MINUTES,
    GAP_DAY_END,
    GAP_DAY_START,
    OVERNIGHT_GAP_MINUTES,
)
from ..models import Assignment, Day, FreeGap, Section, Slot
from ..utils import format_duration, minutes_to_time, to_minutes


def slots_by_day(sections: Iterable[Section]) -> dict[Day, list[tuple[Slot, Section]]]:
    """Group every slot of the given sections by day, sorted by start time."""
    by_day: dict[Day, list[tuple[Slot, Section]]] = defaultdict(list)
    for section in sections:
        for slot in section.slots:
            by_day[slot.day].append((slot, section))

    return {
        day: sorted(entries, key=lambda entry: entry[0].start)
        for day, entries in sorted(by_day.items(), key=lambda item: item[0].value)
    }


def gap_score(assignment: Assignment) -> int:
    """Total idle minutes between consecutive classes on the same day.

    Overlapping or back-to-back classes add nothing.
    """
    total = 0
    for entries in slots_by_day(assignment.values()).values():
        for (prev, _), (curr, _) in zip(entries, entries[1:]):
            total += max(0, to_minutes(curr.start) - to_minutes(prev.end))
    return total


def select_best(pool: Sequence[Assignment], prefer_breaks: bool) -> tuple[Assignment, int]:
    """Pick the assignment with the most (breaks) or least (compact) idle time.

    Ties go to the assignment found first.

    Args:
        pool: Assignments in discovery order, must not be empty
        prefer_breaks: True to maximize the gap score, False to minimize it

    Returns:
        Tuple of (best assignment, its gap score)
    """
    if not pool:
        raise ValueError("Cannot select from an empty pool")

    scored = [(gap_score(assignment), index) for index, assignment in enumerate(pool)]
    if prefer_breaks:
        score, index = max(scored, key=lambda item: (item[0], -item[1]))
    else:
        score, index = min(scored)
    return pool[index], score


def find_gaps(
    sections: Iterable[Section],
    day: Day | None = None,
    min_duration: int = DEFAULT_MIN_GAP_MINUTES,
    day_start: time = GAP_DAY_START,
    day_end: time = GAP_DAY_END,
) -> list[FreeGap]:
    """Find free stretches of at least min_duration minutes.

    For each day with classes, reports the time before the first class
    (from day_start), between classes, and after the last class (up to
    day_end).

    Args:
        sections: Sections making up the schedule
        day: Only report this day
        min_duration: Shortest gap to report, in minutes
        day_start: Start of the usable day
        day_end: End of the usable day

    Returns:
        Gaps ordered by day, then start time
    """
    gaps: list[FreeGap] = []
    start_of_day = to_minutes(day_start)
    end_of_day = to_minutes(day_end)

    for current_day, entries in slots_by_day(sections).items():
        if day is not None and current_day != day:
            continue

        prev_end = start_of_day
        prev_class: str | None = None
        for slot, section in entries:
            start = to_minutes(slot.start)
            if start > prev_end and start - prev_end >= min_duration:
                gaps.append(
                    FreeGap(
                        day=current_day,
                        start=minutes_to_time(prev_end),
                        end=slot.start,
                        before_class=prev_class,
                        after_class=str(section),
                    )
                )
            prev_end = max(prev_end, to_minutes(slot.end))
            prev_class = str(section)

        remaining = end_of_day - prev_end
        if remaining > 0 and min_duration <= remaining < OVERNIGHT_GAP_MINUTES:
            gaps.append(
                FreeGap(
                    day=current_day,
                    start=minutes_to_time(prev_end),
                    end=day_end,
                    before_class=prev_class,
                )
            )

    return gaps


def summarize_gaps(gaps: Sequence[FreeGap]) -> dict[str, Any]:
    """Summarize a gap report: total free time, longest gap, days with gaps."""
    total = sum(g.duration_minutes for g in gaps)
    longest = max(gaps, key=lambda g: g.duration_minutes, default=None)

    days: list[str] = []
    for gap in gaps:
        if gap.day.label not in days:
            days.append(gap.day.label)

    return {
        "gaps_found": len(gaps),
        "total_free_time": format_duration(total),
        "longest_gap": (
            {
                "day": longest.day.label,
                "duration": format_duration(longest.duration_minutes),
                "time": longest.time_range,
            }
            if longest
            else None
        ),
        "days_with_gaps": days,
    }
