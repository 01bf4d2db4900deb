"""Weekly grid projection of a finished assignment."""

from ..constants import DAYS_ORDER
from ..models import Assignment, WeeklyGrid


def project_weekly_grid(assignment: Assignment) -> WeeklyGrid:
    """Lay an assignment out as time-range rows by day columns.

    Rows are the distinct "HH:MM-HH:MM" ranges used by any slot, sorted.
    Each cell holds "<course> (<section>)" or an empty string.
    """
    placements: dict[str, dict[str, str]] = {}
    for section in assignment.values():
        for slot in section.slots:
            placements.setdefault(slot.time_range, {})[slot.day.label] = section.label

    rows = sorted(placements)
    cells = {
        row: {day: placements[row].get(day, "") for day in DAYS_ORDER}
        for row in rows
    }
    return WeeklyGrid(columns=list(DAYS_ORDER), rows=rows, cells=cells)
