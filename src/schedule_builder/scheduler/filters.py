"""Hard-constraint filtering of candidate sections.

Each check looks at a single section in isolation. A section survives only
if it passes every check enabled by the preferences.
"""

import logging

from ..models import Preferences, Section

logger = logging.getLogger(__name__)


def meets_day_exclusions(section: Section, preferences: Preferences) -> bool:
    """No slot may fall on an excluded day."""
    if not preferences.exclude_days:
        return True
    return all(slot.day not in preferences.exclude_days for slot in section.slots)


def meets_time_window(section: Section, preferences: Preferences) -> bool:
    """Every slot must respect start_after, start_before and end_before."""
    for slot in section.slots:
        if preferences.start_after is not None and slot.start < preferences.start_after:
            return False
        if preferences.start_before is not None and slot.start >= preferences.start_before:
            return False
        if preferences.end_before is not None and slot.end > preferences.end_before:
            return False
    return True


def meets_building(section: Section, preferences: Preferences) -> bool:
    """At least one slot must be in a room whose code starts with the prefix."""
    if not preferences.building_prefix:
        return True
    prefix = preferences.building_prefix.upper()
    return any(room.upper().startswith(prefix) for room in section.rooms)


def is_candidate(section: Section, preferences: Preferences) -> bool:
    """Check eligibility (open seats) and every hard constraint."""
    return (
        section.is_open
        and meets_day_exclusions(section, preferences)
        and meets_time_window(section, preferences)
        and meets_building(section, preferences)
    )


def filter_sections(sections: list[Section], preferences: Preferences) -> list[Section]:
    """Keep the sections that satisfy every hard constraint.

    Input order is preserved; the search tries candidates in this order.

    Args:
        sections: All sections of one course from the catalog
        preferences: Request preferences

    Returns:
        Candidate sections for the search
    """
    candidates = [s for s in sections if is_candidate(s, preferences)]
    if sections and len(candidates) < len(sections):
        logger.debug(
            f"{sections[0].course}: {len(candidates)} of {len(sections)} sections "
            "pass the preference filter"
        )
    return candidates
