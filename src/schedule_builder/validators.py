"""Validation logic for schedule requests."""

from .models import Preferences
from .utils import format_time


def validate_time_window(preferences: Preferences) -> tuple[bool, str | None]:
    """Check that the start/end limits leave room for at least one class.

    A class must start at or after ``start_after``, before ``start_before``
    and end by ``end_before``. When these bounds cannot all hold at once no
    section can ever pass the filter.

    Args:
        preferences: Preferences to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    start_after = preferences.start_after
    if start_after is None:
        return True, None

    if preferences.start_before is not None and start_after >= preferences.start_before:
        return False, (
            f"start_after ({format_time(start_after)}) must be earlier than "
            f"start_before ({format_time(preferences.start_before)})"
        )

    if preferences.end_before is not None and start_after >= preferences.end_before:
        return False, (
            f"start_after ({format_time(start_after)}) must be earlier than "
            f"end_before ({format_time(preferences.end_before)})"
        )

    return True, None


def validate_preferences(preferences: Preferences) -> list[str]:
    """Run all preference checks.

    Setting both prefer_breaks and prefer_compact is not an error: the
    break preference takes precedence when the pool is scored.

    Returns:
        List of error messages, empty when the preferences are consistent
    """
    errors = []
    is_valid, error = validate_time_window(preferences)
    if not is_valid:
        errors.append(error)
    return errors
