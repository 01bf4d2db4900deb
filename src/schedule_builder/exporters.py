"""Export functionality for schedule results."""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .models import ScheduleResult, WeeklyGrid

# Grid styles
FONT_HEADER = Font(bold=True)
FONT_CELL = Font(size=10)
FILL_OCCUPIED = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_SIDE = Side(style="thin")
THIN_BORDER = Border(left=THIN_SIDE, right=THIN_SIDE, top=THIN_SIDE, bottom=THIN_SIDE)
TIME_COLUMN_WIDTH = 14.0
DAY_COLUMN_WIDTH = 22.0


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export a schedule result to file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output file
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to Excel file.

        Creates workbook with sheets:
        - Weekly Grid: time ranges by day, occupied cells shaded
        - Schedule: one row per meeting slot
        - Summary: status, message, hours and search statistics

        Args:
            result: ScheduleResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            grid_sheet = writer.book.create_sheet("Weekly Grid")
            self._write_grid(grid_sheet, result.weekly_grid)
            self._export_schedule_sheet(result, writer)
            self._export_summary_sheet(result, writer)

    def _write_grid(self, ws: Worksheet, grid: WeeklyGrid) -> None:
        """Write the weekly grid with borders and shading."""
        headers = ["Time", *grid.columns]
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER

        for row_idx, time_range in enumerate(grid.rows, start=2):
            time_cell = ws.cell(row=row_idx, column=1, value=time_range)
            time_cell.font = FONT_HEADER
            time_cell.alignment = ALIGN_CENTER
            time_cell.border = THIN_BORDER

            for col, day in enumerate(grid.columns, start=2):
                value = grid.cells[time_range].get(day, "")
                cell = ws.cell(row=row_idx, column=col, value=value or None)
                cell.font = FONT_CELL
                cell.alignment = ALIGN_CENTER
                cell.border = THIN_BORDER
                if value:
                    cell.fill = FILL_OCCUPIED

        ws.column_dimensions["A"].width = TIME_COLUMN_WIDTH
        for col in range(2, len(headers) + 1):
            ws.column_dimensions[get_column_letter(col)].width = DAY_COLUMN_WIDTH
        ws.freeze_panes = "B2"

    def _export_schedule_sheet(self, result: ScheduleResult, writer: pd.ExcelWriter) -> None:
        """Export schedule lines to Excel sheet."""
        rows = []
        for item in result.schedule:
            for slot in item.slots:
                rows.append(
                    {
                        "Course": item.course,
                        "Section": item.section,
                        "Instructor": item.instructor,
                        "Day": slot.day.label,
                        "Time": slot.time_range,
                        "Room": slot.room or "",
                    }
                )

        columns = ["Course", "Section", "Instructor", "Day", "Time", "Room"]
        df = pd.DataFrame(rows, columns=columns)
        df.to_excel(writer, sheet_name="Schedule", index=False)

    def _export_summary_sheet(self, result: ScheduleResult, writer: pd.ExcelWriter) -> None:
        """Export summary to Excel sheet."""
        stats = result.statistics
        rows = [
            {"Metric": "Success", "Value": result.success},
            {"Metric": "Message", "Value": result.message},
            {"Metric": "Error", "Value": result.error.value if result.error else ""},
            {"Metric": "Total Hours", "Value": result.total_hours},
            {"Metric": "Gap Score (min)", "Value": stats.gap_score if stats.gap_score is not None else ""},
            {"Metric": "Schedules Found", "Value": stats.schedules_found},
            {"Metric": "Nodes Explored", "Value": stats.nodes_explored},
            {"Metric": "Elapsed Seconds", "Value": round(stats.elapsed_seconds, 4)},
        ]
        rows.extend({"Metric": "Issue", "Value": issue} for issue in result.issues)

        df = pd.DataFrame(rows)
        df.to_excel(writer, sheet_name="Summary", index=False)


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
