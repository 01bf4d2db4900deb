"""Section catalog providers.

The schedule builder never queries storage itself. It asks a catalog for
the sections of one course in one term and receives a ready list of
Section objects. Catalogs are read-only once built.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import pandas as pd

from .constants import CATALOG_COLUMNS, DEFAULT_TERM, REQUIRED_CATALOG_COLUMNS
from .exceptions import (
    CatalogFormatError,
    InvalidDayError,
    InvalidSlotError,
    InvalidTimeError,
    SectionNotFoundError,
)
from .models import CourseCode, Section, Slot
from .utils import safe_int, safe_str

logger = logging.getLogger(__name__)


class SectionCatalog(Protocol):
    """Anything that can list the sections of a course in a term."""

    def get_sections(
        self, course_code: CourseCode, term: str, include_full: bool = False
    ) -> list[Section]:
        """Return the open sections of the course in the term, or [] if none.

        With include_full, sections without free seats are returned as well.
        """
        ...


class InMemoryCatalog:
    """Catalog backed by a dictionary keyed by (term, course code)."""

    def __init__(self, sections: Iterable[Section] = (), term: str = DEFAULT_TERM):
        self._sections: dict[tuple[str, CourseCode], list[Section]] = {}
        for section in sections:
            self.add(section, term)

    def add(self, section: Section, term: str = DEFAULT_TERM) -> None:
        """Add a section to the catalog."""
        self._sections.setdefault((term, section.course), []).append(section)

    def get_sections(
        self, course_code: CourseCode, term: str, include_full: bool = False
    ) -> list[Section]:
        sections = self._sections.get((term, course_code), [])
        if include_full:
            return list(sections)
        return [s for s in sections if s.is_open]

    def get_courses(self, term: str) -> list[CourseCode]:
        """All course codes offered in a term."""
        return [code for t, code in self._sections if t == term]

    def get_terms(self) -> list[str]:
        """All terms in the catalog."""
        return sorted({t for t, _ in self._sections})


class DataFrameCatalog(InMemoryCatalog):
    """Catalog built from a table with one row per meeting slot.

    Expected columns: term, course_code, section, instructor, free_slots,
    day, start_time, end_time, room. Only course_code, section and
    free_slots are required; a missing term column puts every row in the
    default term. Rows of the same (term, course_code, section) are merged
    into one Section. Rows without a day or start time describe a section
    with no scheduled meetings.

    Sections of a course are listed by free seats (most first), then by
    section id.
    """

    def __init__(self, df: pd.DataFrame, source: str | None = None):
        super().__init__()
        self.source = source
        self._load(self._normalize_columns(df))

    def _normalize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.rename(columns=lambda c: str(c).strip().lower())
        missing = [c for c in REQUIRED_CATALOG_COLUMNS if c not in df.columns]
        if missing:
            raise CatalogFormatError(
                f"missing required column(s): {', '.join(missing)}", source=self.source
            )

        df = df.copy()
        for column in CATALOG_COLUMNS:
            if column not in df.columns:
                df[column] = DEFAULT_TERM if column == "term" else None
        return df

    def _load(self, df: pd.DataFrame) -> None:
        # (term, course, section) -> [instructor, free_slots, slots]
        grouped: dict[tuple[str, str, str], list] = {}

        for idx, row in df.iterrows():
            course = safe_str(row["course_code"])
            section_id = safe_str(row["section"])
            if not course or not section_id:
                continue
            term = safe_str(row["term"]) or DEFAULT_TERM

            key = (term, course, section_id)
            if key not in grouped:
                grouped[key] = [None, safe_int(row["free_slots"]), []]

            entry = grouped[key]
            instructor = safe_str(row["instructor"])
            if instructor and entry[0] is None:
                entry[0] = instructor

            slot = self._parse_slot(row, idx)
            if slot is not None and slot not in entry[2]:
                entry[2].append(slot)

        sections_by_course: dict[tuple[str, str], list[Section]] = {}
        for (term, course, section_id), (instructor, free_slots, slots) in grouped.items():
            sections_by_course.setdefault((term, course), []).append(
                Section(
                    course=course,
                    section_id=section_id,
                    instructor=instructor,
                    free_slots=free_slots,
                    slots=tuple(slots),
                )
            )

        for (term, _), sections in sections_by_course.items():
            for section in sorted(sections, key=lambda s: (-s.free_slots, s.section_id)):
                self.add(section, term)

        logger.info(
            f"Loaded {len(grouped)} sections for {len(sections_by_course)} courses"
            + (f" from {self.source}" if self.source else "")
        )

    def _parse_slot(self, row: pd.Series, idx) -> Slot | None:
        day = safe_str(row["day"])
        start = safe_str(row["start_time"])
        if not day or not start:
            return None
        try:
            return Slot.create(day, start, safe_str(row["end_time"]), safe_str(row["room"]))
        except (InvalidDayError, InvalidTimeError, InvalidSlotError) as e:
            raise CatalogFormatError(str(e), source=self.source, row=idx) from e


def load_catalog(path: str | Path) -> DataFrameCatalog:
    """Load a section catalog from a CSV, JSON (records) or Excel file.

    Args:
        path: Catalog file path

    Returns:
        Catalog with every section in the file

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogFormatError: If the format is unsupported or columns are missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path, dtype=str)
    elif suffix == ".json":
        df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    elif suffix in (".xlsx", ".xlsm"):
        df = pd.read_excel(path, dtype=str, engine="openpyxl")
    else:
        raise CatalogFormatError(f"unsupported file type '{suffix}'", source=str(path))

    return DataFrameCatalog(df, source=str(path))


def find_section(
    catalog: SectionCatalog, course_code: CourseCode, section_id: str, term: str
) -> Section:
    """Look up one section by course code and section id (case-insensitive).

    Raises:
        SectionNotFoundError: If the catalog has no such section
    """
    wanted = section_id.strip().upper()
    for section in catalog.get_sections(course_code, term, include_full=True):
        if section.section_id.upper() == wanted:
            return section
    raise SectionNotFoundError(course_code, section_id, term)
