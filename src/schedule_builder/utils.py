"""Utility functions for schedule building."""

import re
from datetime import time

import pandas as pd

from .exceptions import InvalidTimeError

TIME_PATTERN = re.compile(r"^(\d{1,2}):?(\d{2})(?::\d{2})?$")


def parse_time(value: str | time) -> time:
    """Parse a time of day.

    Accepts "HH:MM", "HHMM", "H:MM", "HH:MM:SS" strings or a datetime.time.

    Args:
        value: Raw time value

    Returns:
        Parsed time

    Raises:
        InvalidTimeError: If the value is not a valid time of day
    """
    if isinstance(value, time):
        return value

    match = TIME_PATTERN.match(str(value).strip())
    if not match:
        raise InvalidTimeError(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(value)

    return time(hours, minutes)


def parse_optional_time(value: str | time | None) -> time | None:
    """Parse a time of day, keeping None and empty strings as None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_time(value)


def format_time(value: time) -> str:
    """Format a time as 'HH:MM'."""
    return value.strftime("%H:%M")


def to_minutes(value: time) -> int:
    """Minutes since midnight."""
    return value.hour * 60 + value.minute


def minutes_to_time(minutes: int) -> time:
    """Inverse of to_minutes."""
    return time(minutes // 60, minutes % 60)


def format_duration(minutes: int) -> str:
    """Format a duration like '1h 30m'."""
    return f"{minutes // 60}h {minutes % 60}m"


def safe_str(value) -> str:
    """Convert a cell value to a stripped string, treating NaN as empty."""
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def safe_int(value, default: int = 0) -> int:
    """Convert a cell value to int, returning default for NaN or garbage."""
    if value is None or pd.isna(value):
        return default
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


def parse_course_list(courses: str) -> list[str]:
    """Split a comma-separated course list, dropping blanks and duplicates.

    Example: "CSCI 111, MATH 30.13" -> ["CSCI 111", "MATH 30.13"]
    """
    result: list[str] = []
    for part in courses.split(","):
        code = " ".join(part.split())
        if code and code not in result:
            result.append(code)
    return result


def parse_section_ref(reference: str) -> tuple[str, str]:
    """Split "COURSE_CODE SECTION" into its parts.

    The last whitespace-separated token is the section, everything before it
    is the course code: "MATH 30.13 A1" -> ("MATH 30.13", "A1").

    Raises:
        ValueError: If the reference has fewer than two tokens
    """
    parts = reference.split()
    if len(parts) < 2:
        raise ValueError(
            f"Could not parse section reference: '{reference}'. "
            "Expected format: 'COURSE_CODE SECTION' (e.g., 'MATH 10 A1')"
        )
    return " ".join(parts[:-1]), parts[-1].upper()
