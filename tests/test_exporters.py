"""Tests for schedule result exporters."""

import json

import pytest
from openpyxl import load_workbook

from schedule_builder.exporters import ExcelExporter, JSONExporter, get_exporter
from schedule_builder.models import ScheduleErrorKind, ScheduleResult
from schedule_builder.scheduler import ScheduleBuilder


@pytest.fixture
def success_result(conflict_catalog):
    """Successful result for the two-course conflict catalog."""
    return ScheduleBuilder(conflict_catalog).build(["MATH 30.13", "CSCI 111"])


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export_success(self, success_result, tmp_path):
        """Test JSON output of a found schedule."""
        path = tmp_path / "out" / "schedule.json"
        JSONExporter().export(success_result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["success"] is True
        assert [item["course_code"] for item in data["schedule"]] == ["MATH 30.13", "CSCI 111"]
        assert data["weekly_grid"]["columns"][0] == "Monday"
        assert data["total_hours"] == 3.0

    def test_export_failure(self, tmp_path):
        """Test JSON output of a failed build."""
        result = ScheduleResult.failure(ScheduleErrorKind.TIMEOUT, "timed out")
        path = tmp_path / "failed.json"
        JSONExporter(indent=None).export(result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["success"] is False
        assert data["error"] == "timeout"
        assert data["schedule"] == []


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_sheets(self, success_result, tmp_path):
        """Test workbook layout."""
        path = tmp_path / "schedule.xlsx"
        ExcelExporter().export(success_result, path)

        wb = load_workbook(path)
        assert wb.sheetnames == ["Weekly Grid", "Schedule", "Summary"]

    def test_weekly_grid_sheet(self, success_result, tmp_path):
        """Test grid headers and filled cells."""
        path = tmp_path / "schedule.xlsx"
        ExcelExporter().export(success_result, path)

        ws = load_workbook(path)["Weekly Grid"]
        assert [ws.cell(row=1, column=c).value for c in range(1, 8)] == [
            "Time",
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
            "Friday",
            "Saturday",
        ]
        grid = success_result.weekly_grid
        assert ws.max_row == len(grid.rows) + 1
        for row_idx, time_range in enumerate(grid.rows, start=2):
            assert ws.cell(row=row_idx, column=1).value == time_range
            for col, day in enumerate(grid.columns, start=2):
                assert (ws.cell(row=row_idx, column=col).value or "") == grid.cells[time_range][day]

    def test_schedule_sheet(self, success_result, tmp_path):
        """Test one row per meeting slot."""
        path = tmp_path / "schedule.xlsx"
        ExcelExporter().export(success_result, path)

        ws = load_workbook(path)["Schedule"]
        rows = list(ws.iter_rows(values_only=True))
        assert rows[0] == ("Course", "Section", "Instructor", "Day", "Time", "Room")
        assert len(rows) == 1 + sum(len(item.slots) for item in success_result.schedule)

    def test_failed_result(self, tmp_path):
        """Test export of a failure with issues."""
        result = ScheduleResult.failure(ScheduleErrorKind.INFEASIBLE, "No schedule")
        result.issues = ["'A' and 'B': every candidate section pair overlaps"]
        path = tmp_path / "failed.xlsx"
        ExcelExporter().export(result, path)

        wb = load_workbook(path)
        assert wb["Weekly Grid"].max_row == 1
        summary = {row[0]: row[1] for row in wb["Summary"].iter_rows(min_row=2, values_only=True)}
        assert summary["Error"] == "infeasible"
        assert summary["Issue"] == result.issues[0]


class TestGetExporter:
    """Tests for get_exporter function."""

    def test_known_formats(self):
        assert isinstance(get_exporter("json"), JSONExporter)
        assert isinstance(get_exporter("excel"), ExcelExporter)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("pdf")
