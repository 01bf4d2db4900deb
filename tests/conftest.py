"""Test fixtures for schedule builder tests."""

import pandas as pd
import pytest

from schedule_builder.catalog import InMemoryCatalog
from schedule_builder.models import Section, Slot


def _make_section(course, section_id, *slots, free_slots=10, instructor=None):
    """Build a Section from (day, start, end[, room]) tuples."""
    return Section(
        course=course,
        section_id=section_id,
        instructor=instructor,
        free_slots=free_slots,
        slots=tuple(Slot.create(*slot) for slot in slots),
    )


@pytest.fixture
def make_section():
    """Factory for sections: make_section("MATH 10", "A", ("Mon", "08:00", "09:30"))."""
    return _make_section


@pytest.fixture
def math_sections():
    """Two MATH 30.13 sections on different days."""
    return [
        _make_section("MATH 30.13", "A", ("Mon", "08:00", "09:30", "SEC-A 201")),
        _make_section("MATH 30.13", "B", ("Tue", "10:00", "11:30", "CTC 105")),
    ]


@pytest.fixture
def csci_sections():
    """Two CSCI 111 sections, X clashing with MATH 30.13 A."""
    return [
        _make_section("CSCI 111", "X", ("Mon", "08:00", "09:30", "SEC-B 301")),
        _make_section("CSCI 111", "Y", ("Wed", "13:00", "14:30", "F-113")),
    ]


@pytest.fixture
def conflict_catalog(math_sections, csci_sections):
    """Catalog with two courses whose first sections overlap."""
    return InMemoryCatalog(math_sections + csci_sections)


@pytest.fixture
def week_catalog():
    """Catalog with a richer mix of sections for preference tests."""
    sections = [
        _make_section(
            "ENGL 11",
            "A",
            ("M", "08:00", "09:00", "CTC 101"),
            ("W", "08:00", "09:00", "CTC 101"),
            instructor="Reyes, Ana",
        ),
        _make_section(
            "ENGL 11",
            "B",
            ("T", "13:30", "15:00", "SEC-A 110"),
            ("Th", "13:30", "15:00", "SEC-A 110"),
            instructor="Cruz, Ben",
        ),
        _make_section(
            "ENGL 11",
            "C",
            ("S", "09:00", "12:00", "CTC 202"),
            instructor="Lim, Carla",
        ),
        _make_section(
            "THEO 11",
            "D1",
            ("M", "09:00", "10:00", "SEC-C 204"),
            ("W", "09:00", "10:00", "SEC-C 204"),
        ),
        _make_section(
            "THEO 11",
            "D2",
            ("M", "14:00", "15:00", "SEC-C 204"),
            ("W", "14:00", "15:00", "SEC-C 204"),
        ),
        _make_section(
            "PHYS 10",
            "K",
            ("F", "15:00", "18:00", "F-227"),
            free_slots=0,
        ),
        _make_section(
            "HIST 20",
            "S",
            ("Sat", "08:00", "11:00", "B-101"),
        ),
    ]
    return InMemoryCatalog(sections)


@pytest.fixture
def catalog_dataframe():
    """Catalog table with one row per meeting slot."""
    return pd.DataFrame(
        {
            "term": ["2025-2", "2025-2", "2025-2", "2025-2", "2025-1"],
            "course_code": ["MATH 30.13", "MATH 30.13", "MATH 30.13", "CSCI 111", "CSCI 111"],
            "section": ["A", "A", "B", "X", "X"],
            "instructor": ["Santos, Maria", None, "Garcia, Jose", None, "Tan, Leo"],
            "free_slots": ["5", "5", "12", "0", "3"],
            "day": ["Mon", "Wed", "Tue", "Fri", "Mon"],
            "start_time": ["08:00", "08:00", "10:00", "13:00", "09:00"],
            "end_time": ["09:30", "09:30", "11:30", "14:30", "10:30"],
            "room": ["SEC-A 201", "SEC-A 201", "CTC 105", "F-113", "F-113"],
        }
    )


@pytest.fixture
def catalog_csv(tmp_path, catalog_dataframe):
    """Catalog written to a CSV file."""
    path = tmp_path / "sections.csv"
    catalog_dataframe.to_csv(path, index=False)
    return path
