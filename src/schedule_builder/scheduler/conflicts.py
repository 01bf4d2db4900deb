"""Time conflict checks between slots and sections."""

from collections.abc import Iterable

from ..models import ConflictReport, Section, Slot


def slots_conflict(a: Slot, b: Slot) -> bool:
    """Check whether two slots overlap.

    Intervals are half-open, so a class ending at 09:30 does not clash
    with one starting at 09:30.
    """
    return a.day == b.day and a.start < b.end and b.start < a.end


def sections_conflict(a: Section, b: Section) -> bool:
    """Check whether any slot of one section overlaps any slot of the other."""
    return any(slots_conflict(s1, s2) for s1 in a.slots for s2 in b.slots)


def conflicts_with_any(section: Section, chosen: Iterable[Section]) -> bool:
    """Check a candidate section against already chosen sections."""
    return any(sections_conflict(section, other) for other in chosen)


def find_conflicts(a: Section, b: Section) -> list[tuple[Slot, Slot]]:
    """List every overlapping (slot of a, slot of b) pair."""
    return [(s1, s2) for s1 in a.slots for s2 in b.slots if slots_conflict(s1, s2)]


def check_section_conflict(a: Section, b: Section) -> ConflictReport:
    """Build a conflict report for two specific sections."""
    return ConflictReport(first=a, second=b, overlaps=find_conflicts(a, b))


def find_assignment_conflicts(sections: list[Section]) -> list[tuple[Section, Section]]:
    """List every conflicting pair within a set of chosen sections.

    An empty result means the sections form a valid weekly schedule.
    """
    pairs = []
    for i, first in enumerate(sections):
        for second in sections[i + 1 :]:
            if sections_conflict(first, second):
                pairs.append((first, second))
    return pairs
