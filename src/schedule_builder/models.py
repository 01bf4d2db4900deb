"""Data models for the schedule builder."""

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Any, Self

from .constants import DAY_ALIASES, DAYS_ORDER, DEFAULT_INSTRUCTOR, MORNING_CUTOFF
from .exceptions import InvalidDayError, InvalidSlotError
from .utils import format_time, parse_optional_time, parse_time, to_minutes

CourseCode = str


class Day(Enum):
    """Days of the academic week."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5

    @property
    def label(self) -> str:
        """Display name, e.g. 'Monday'."""
        return DAYS_ORDER[self.value]

    @classmethod
    def from_name(cls, name: "str | Day") -> "Day":
        """Parse a day name or abbreviation (case-insensitive).

        Accepts full names ("Monday"), three-letter forms ("Mon") and the
        short forms used in class listings ("M", "T", "W", "Th", "F", "S").

        Raises:
            InvalidDayError: If the name is not Monday to Saturday
        """
        if isinstance(name, cls):
            return name

        key = str(name).strip().lower()
        canonical = DAY_ALIASES.get(key, key.capitalize())
        if canonical not in DAYS_ORDER:
            raise InvalidDayError(name)
        return cls(DAYS_ORDER.index(canonical))


class ScheduleErrorKind(str, Enum):
    """Reasons why no schedule was produced."""

    INVALID_COURSE_CODE = "invalid_course_code"
    NO_OPEN_SECTIONS = "no_open_sections"
    INFEASIBLE = "infeasible"
    TIMEOUT = "timeout"
    INVALID_PREFERENCE = "invalid_preference"


@dataclass(frozen=True)
class Slot:
    """A single day/time/room meeting block of a section."""

    day: Day
    start: time
    end: time
    room: str | None = None

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidSlotError(
                self.day.label, format_time(self.start), format_time(self.end)
            )

    @classmethod
    def create(
        cls,
        day: str | Day,
        start: str | time,
        end: str | time,
        room: str | None = None,
    ) -> Self:
        """Create a slot from loosely typed values ("Mon", "08:00", "0930")."""
        return cls(
            day=Day.from_name(day),
            start=parse_time(start),
            end=parse_time(end),
            room=room or None,
        )

    @property
    def duration_minutes(self) -> int:
        return to_minutes(self.end) - to_minutes(self.start)

    @property
    def time_range(self) -> str:
        """Time range string, e.g. '08:00-09:30'."""
        return f"{format_time(self.start)}-{format_time(self.end)}"

    def __str__(self) -> str:
        return f"{self.day.label} {self.time_range}"

    def to_dict(self) -> dict[str, Any]:
        """Convert slot to dictionary."""
        return {
            "day": self.day.label,
            "start_time": format_time(self.start),
            "end_time": format_time(self.end),
            "room": self.room,
        }


@dataclass(frozen=True)
class Section:
    """One offered instance of a course.

    Attributes:
        course: Course code, e.g. "MATH 30.13"
        section_id: Section identifier within the course, e.g. "A1"
        instructor: Instructor name, None when not yet assigned
        free_slots: Remaining seats; only sections with seats are eligible
        slots: Meeting blocks in catalog order
    """

    course: CourseCode
    section_id: str
    instructor: str | None = None
    free_slots: int = 0
    slots: tuple[Slot, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.free_slots > 0

    @property
    def instructor_name(self) -> str:
        return self.instructor or DEFAULT_INSTRUCTOR

    @property
    def rooms(self) -> list[str]:
        return [slot.room for slot in self.slots if slot.room]

    @property
    def label(self) -> str:
        """Grid label, e.g. 'MATH 30.13 (A1)'."""
        return f"{self.course} ({self.section_id})"

    def __str__(self) -> str:
        return f"{self.course} {self.section_id}"


# Course code -> chosen section, one entry per requested course
Assignment = dict[CourseCode, Section]


def _parse_days(values) -> frozenset[Day]:
    if not values:
        return frozenset()
    return frozenset(Day.from_name(value) for value in values)


@dataclass
class Preferences:
    """Hard constraints and soft preferences for one schedule request.

    All fields are optional; an unset field leaves that dimension
    unconstrained. ``include_days`` is accepted but not used for filtering
    or scoring.
    """

    exclude_days: frozenset[Day] = field(default_factory=frozenset)
    include_days: frozenset[Day] = field(default_factory=frozenset)
    start_after: time | None = None
    start_before: time | None = None
    end_before: time | None = None
    building_prefix: str | None = None
    prefer_breaks: bool = False
    prefer_compact: bool = False

    @property
    def wants_scoring(self) -> bool:
        """True when the pool search and gap scoring should be used."""
        return self.prefer_breaks or self.prefer_compact

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create Preferences from a request dictionary.

        Besides the field names, accepts ``building_filter`` as an alias of
        ``building_prefix`` and the legacy flags ``no_saturday``,
        ``no_friday`` and ``morning_only``, which are folded into
        ``exclude_days`` and ``start_before``.
        """
        exclude_days = set(_parse_days(data.get("exclude_days")))
        if data.get("no_saturday"):
            exclude_days.add(Day.SATURDAY)
        if data.get("no_friday"):
            exclude_days.add(Day.FRIDAY)

        start_before = parse_optional_time(data.get("start_before"))
        if data.get("morning_only"):
            if start_before is None or MORNING_CUTOFF < start_before:
                start_before = MORNING_CUTOFF

        building = data.get("building_prefix") or data.get("building_filter")

        return cls(
            exclude_days=frozenset(exclude_days),
            include_days=_parse_days(data.get("include_days")),
            start_after=parse_optional_time(data.get("start_after")),
            start_before=start_before,
            end_before=parse_optional_time(data.get("end_before")),
            building_prefix=building.strip() if building else None,
            prefer_breaks=bool(data.get("prefer_breaks", False)),
            prefer_compact=bool(data.get("prefer_compact", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert preferences to dictionary."""
        return {
            "exclude_days": [d.label for d in sorted(self.exclude_days, key=lambda d: d.value)],
            "include_days": [d.label for d in sorted(self.include_days, key=lambda d: d.value)],
            "start_after": format_time(self.start_after) if self.start_after else None,
            "start_before": format_time(self.start_before) if self.start_before else None,
            "end_before": format_time(self.end_before) if self.end_before else None,
            "building_prefix": self.building_prefix,
            "prefer_breaks": self.prefer_breaks,
            "prefer_compact": self.prefer_compact,
        }


@dataclass
class ScheduledCourse:
    """One line of a finished schedule."""

    course: CourseCode
    section: str
    instructor: str
    slots: list[Slot]

    @classmethod
    def from_section(cls, section: Section) -> Self:
        return cls(
            course=section.course,
            section=section.section_id,
            instructor=section.instructor_name,
            slots=list(section.slots),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "course_code": self.course,
            "section": self.section,
            "instructor": self.instructor,
            "slots": [s.to_dict() for s in self.slots],
        }


@dataclass
class WeeklyGrid:
    """Presentation grid: time-range rows by day columns."""

    columns: list[str] = field(default_factory=list)
    rows: list[str] = field(default_factory=list)
    cells: dict[str, dict[str, str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "columns": list(self.columns),
            "rows": list(self.rows),
            "cells": {row: dict(self.cells[row]) for row in self.rows},
        }


@dataclass
class ScheduleStatistics:
    """Search statistics for one build."""

    nodes_explored: int = 0
    candidates_evaluated: int = 0
    pruned_by_forward_check: int = 0
    schedules_found: int = 0
    gap_score: int | None = None
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes_explored": self.nodes_explored,
            "candidates_evaluated": self.candidates_evaluated,
            "pruned_by_forward_check": self.pruned_by_forward_check,
            "schedules_found": self.schedules_found,
            "gap_score": self.gap_score,
            "elapsed_seconds": self.elapsed_seconds,
        }


@dataclass
class ScheduleResult:
    """Result of a schedule build."""

    success: bool
    message: str
    schedule: list[ScheduledCourse] = field(default_factory=list)
    weekly_grid: WeeklyGrid = field(default_factory=WeeklyGrid)
    total_hours: float = 0.0
    error: ScheduleErrorKind | None = None
    failed_course: CourseCode | None = None
    issues: list[str] = field(default_factory=list)
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)

    @classmethod
    def failure(
        cls,
        error: ScheduleErrorKind,
        message: str,
        failed_course: CourseCode | None = None,
        statistics: ScheduleStatistics | None = None,
    ) -> Self:
        """Create a failed result with an empty schedule and grid."""
        return cls(
            success=False,
            message=message,
            error=error,
            failed_course=failed_course,
            statistics=statistics or ScheduleStatistics(),
        )

    @property
    def assignment(self) -> dict[CourseCode, str]:
        """Course code -> chosen section id."""
        return {item.course: item.section for item in self.schedule}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "schedule": [s.to_dict() for s in self.schedule],
            "weekly_grid": self.weekly_grid.to_dict(),
            "total_hours": self.total_hours,
            "message": self.message,
            "error": self.error.value if self.error else None,
            "failed_course": self.failed_course,
            "issues": list(self.issues),
            "statistics": self.statistics.to_dict(),
        }


@dataclass
class ConflictReport:
    """Outcome of checking two sections against each other."""

    first: Section
    second: Section
    overlaps: list[tuple[Slot, Slot]] = field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        return bool(self.overlaps)

    @property
    def message(self) -> str:
        if self.has_conflict:
            return f"CONFLICT DETECTED between {self.first} and {self.second}."
        return f"No conflict between {self.first} and {self.second}."

    @property
    def details(self) -> str:
        """One entry per overlapping pair, e.g. 'Monday: 08:00-09:30 overlaps with 09:00-10:30'."""
        return "; ".join(
            f"{a.day.label}: {a.time_range} overlaps with {b.time_range}"
            for a, b in self.overlaps
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "has_conflict": self.has_conflict,
            "conflict_count": len(self.overlaps),
            "message": self.message,
            "details": self.details,
            "section1": ScheduledCourse.from_section(self.first).to_dict(),
            "section2": ScheduledCourse.from_section(self.second).to_dict(),
        }


@dataclass
class FreeGap:
    """A stretch of free time in a weekly schedule."""

    day: Day
    start: time
    end: time
    before_class: str | None = None
    after_class: str | None = None

    @property
    def duration_minutes(self) -> int:
        return to_minutes(self.end) - to_minutes(self.start)

    @property
    def time_range(self) -> str:
        return f"{format_time(self.start)}-{format_time(self.end)}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "day": self.day.label,
            "start_time": format_time(self.start),
            "end_time": format_time(self.end),
            "duration_minutes": self.duration_minutes,
            "before_class": self.before_class,
            "after_class": self.after_class,
        }
