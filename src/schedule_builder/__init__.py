"""Schedule Builder - conflict-free weekly class schedules from a section catalog.

Given the courses a student wants to take, the builder picks one open
section of each so that no two classes overlap, honoring excluded days,
time windows and building preferences, and optionally favoring spaced-out
or back-to-back days.

Example usage:
    from schedule_builder import Preferences, ScheduleBuilder, load_catalog

    catalog = load_catalog("sections.csv")
    builder = ScheduleBuilder(catalog)
    result = builder.build(
        ["MATH 30.13", "CSCI 111"],
        Preferences.from_dict({"no_saturday": True, "prefer_compact": True}),
        term="2025-2",
    )

    if result.success:
        for item in result.schedule:
            print(f"{item.course} {item.section} | {item.instructor}")
    else:
        print(f"{result.error.value}: {result.message}")

    # Export to JSON
    from schedule_builder.exporters import JSONExporter
    JSONExporter().export(result, "schedule.json")
"""

from .catalog import DataFrameCatalog, InMemoryCatalog, SectionCatalog, find_section, load_catalog
from .exceptions import (
    CatalogFormatError,
    InvalidDayError,
    InvalidSlotError,
    InvalidTimeError,
    ScheduleBuilderError,
    SearchTimeoutError,
    SectionNotFoundError,
)
from .exporters import ExcelExporter, JSONExporter, get_exporter
from .models import (
    Day,
    Preferences,
    ScheduledCourse,
    ScheduleErrorKind,
    ScheduleResult,
    ScheduleStatistics,
    Section,
    Slot,
    WeeklyGrid,
)
from .scheduler import ScheduleBuilder, build_schedule

__version__ = "0.1.0"

__all__ = [
    # Main builder
    "ScheduleBuilder",
    "build_schedule",
    # Catalog
    "SectionCatalog",
    "InMemoryCatalog",
    "DataFrameCatalog",
    "load_catalog",
    "find_section",
    # Models
    "Day",
    "Slot",
    "Section",
    "Preferences",
    "ScheduledCourse",
    "ScheduleErrorKind",
    "ScheduleResult",
    "ScheduleStatistics",
    "WeeklyGrid",
    # Exporters
    "JSONExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "ScheduleBuilderError",
    "InvalidTimeError",
    "InvalidDayError",
    "InvalidSlotError",
    "CatalogFormatError",
    "SectionNotFoundError",
    "SearchTimeoutError",
]
