"""Custom exceptions for the schedule builder."""


class ScheduleBuilderError(Exception):
    """Base exception for schedule builder errors."""

    pass


class InvalidTimeError(ScheduleBuilderError):
    """Time-of-day value could not be parsed."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Invalid time of day: {value!r}. Expected 'HH:MM' or 'HHMM'."
        )


class InvalidDayError(ScheduleBuilderError):
    """Day name is not one of Monday to Saturday."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid day: {value!r}. Expected Monday to Saturday.")


class InvalidSlotError(ScheduleBuilderError):
    """Meeting slot ends at or before its start."""

    def __init__(self, day: str, start: str, end: str):
        self.day = day
        self.start = start
        self.end = end
        super().__init__(f"Invalid slot on {day}: start {start} is not before end {end}")


class CatalogFormatError(ScheduleBuilderError):
    """Section catalog data is missing required columns or has bad values."""

    def __init__(self, message: str, source: str | None = None, row: int | None = None):
        self.source = source
        self.row = row
        location = ""
        if source:
            location += f" in '{source}'"
        if row is not None:
            location += f" at row {row}"
        super().__init__(f"Invalid catalog data{location}: {message}")


class SectionNotFoundError(ScheduleBuilderError):
    """Requested section does not exist in the catalog."""

    def __init__(self, course: str, section_id: str, term: str):
        self.course = course
        self.section_id = section_id
        self.term = term
        super().__init__(f"Section not found: {course} {section_id} in term {term}")


class SearchTimeoutError(ScheduleBuilderError):
    """Search deadline expired before the search finished."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Search exceeded time limit ({timeout_ms} ms)")
