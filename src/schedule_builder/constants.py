"""Constants for schedule building."""

from datetime import time

# Default term code used when the caller does not pass one
DEFAULT_TERM = "2025-2"

# Wall-clock budget for one build, in milliseconds
DEFAULT_TIMEOUT_MS = 5000

# Number of feasible schedules collected before scoring when a break or
# compact preference is set. The winner is the best of this pool, not
# necessarily the best schedule overall.
DEFAULT_POOL_SIZE = 20

# Instructor shown when a section has none assigned
DEFAULT_INSTRUCTOR = "TBA"

# Weekly grid columns, in display order
DAYS_ORDER = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Day name aliases (lowercase) -> canonical day name
DAY_ALIASES = {
    "m": "Monday",
    "mon": "Monday",
    "t": "Tuesday",
    "tu": "Tuesday",
    "tue": "Tuesday",
    "tues": "Tuesday",
    "w": "Wednesday",
    "wed": "Wednesday",
    "th": "Thursday",
    "thu": "Thursday",
    "thurs": "Thursday",
    "f": "Friday",
    "fri": "Friday",
    "s": "Saturday",
    "sat": "Saturday",
}

# Legacy "morning only" flag maps to a start-before cut-off
MORNING_CUTOFF = time(12, 0)

# Day window used by the free-time gap report
GAP_DAY_START = time(7, 0)
GAP_DAY_END = time(21, 0)
DEFAULT_MIN_GAP_MINUTES = 30

# Gaps of this length or more at the end of the day are not reported
OVERNIGHT_GAP_MINUTES = 12 * 60

# CP-SAT time limit per feasibility check during failure analysis (seconds)
DIAGNOSTIC_TIME_LIMIT = 1.0

# Columns expected in tabular catalog files (one row per meeting slot)
CATALOG_COLUMNS = [
    "term",
    "course_code",
    "section",
    "instructor",
    "free_slots",
    "day",
    "start_time",
    "end_time",
    "room",
]
REQUIRED_CATALOG_COLUMNS = ["course_code", "section", "free_slots"]
