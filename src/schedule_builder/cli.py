"""CLI entry point for the schedule builder."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from .catalog import find_section, load_catalog
from .constants import DEFAULT_MIN_GAP_MINUTES, DEFAULT_POOL_SIZE, DEFAULT_TERM, DEFAULT_TIMEOUT_MS
from .exceptions import ScheduleBuilderError
from .exporters import get_exporter
from .models import Day, Preferences, ScheduleResult, WeeklyGrid
from .scheduler import ScheduleBuilder, check_section_conflict, find_gaps, summarize_gaps
from .utils import parse_course_list, parse_section_ref

app = typer.Typer(
    name="schedule-builder",
    help="Build conflict-free weekly class schedules from a section catalog",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    excel = "excel"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_catalog_or_exit(catalog_file: Path):
    try:
        return load_catalog(catalog_file)
    except ScheduleBuilderError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def build(
    catalog_file: Annotated[
        Path,
        typer.Argument(help="Section catalog (.csv, .json or .xlsx)", exists=True, readable=True),
    ],
    courses: Annotated[
        str,
        typer.Argument(help='Comma-separated course codes, e.g. "CSCI 111, MATH 30.13"'),
    ],
    term: Annotated[str, typer.Option("-t", "--term", help="Term code")] = DEFAULT_TERM,
    exclude_day: Annotated[
        Optional[list[str]],
        typer.Option("--exclude-day", help="Day to keep free (repeatable)"),
    ] = None,
    include_day: Annotated[
        Optional[list[str]],
        typer.Option("--include-day", help="Preferred day (advisory, repeatable)"),
    ] = None,
    no_saturday: Annotated[bool, typer.Option("--no-saturday", help="Exclude Saturday classes")] = False,
    no_friday: Annotated[bool, typer.Option("--no-friday", help="Exclude Friday classes")] = False,
    morning_only: Annotated[
        bool, typer.Option("--morning-only", help="Only classes starting before 12:00")
    ] = False,
    start_after: Annotated[
        Optional[str], typer.Option("--start-after", help="Earliest start time, e.g. 13:00")
    ] = None,
    start_before: Annotated[
        Optional[str], typer.Option("--start-before", help="Classes must start before, e.g. 12:00")
    ] = None,
    end_before: Annotated[
        Optional[str], typer.Option("--end-before", help="Classes must end by, e.g. 17:00")
    ] = None,
    building: Annotated[
        Optional[str], typer.Option("--building", help="Room code prefix, e.g. SEC")
    ] = None,
    prefer_breaks: Annotated[
        bool, typer.Option("--prefer-breaks", help="Prefer breaks between classes")
    ] = False,
    prefer_compact: Annotated[
        bool, typer.Option("--prefer-compact", help="Prefer back-to-back classes")
    ] = False,
    timeout_ms: Annotated[
        int, typer.Option("--timeout-ms", help="Search time limit in milliseconds", min=1)
    ] = DEFAULT_TIMEOUT_MS,
    pool_size: Annotated[
        int, typer.Option("--pool-size", help="Schedules compared when scoring", min=1)
    ] = DEFAULT_POOL_SIZE,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file (.json or .xlsx)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Build a conflict-free schedule for the given courses."""
    _configure_logging(verbose)

    course_codes = parse_course_list(courses)
    if not course_codes:
        console.print("[bold red]Error:[/bold red] No course codes given")
        raise typer.Exit(1)

    try:
        preferences = Preferences.from_dict(
            {
                "exclude_days": exclude_day,
                "include_days": include_day,
                "no_saturday": no_saturday,
                "no_friday": no_friday,
                "morning_only": morning_only,
                "start_after": start_after,
                "start_before": start_before,
                "end_before": end_before,
                "building_prefix": building,
                "prefer_breaks": prefer_breaks,
                "prefer_compact": prefer_compact,
            }
        )
    except ScheduleBuilderError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    catalog = _load_catalog_or_exit(catalog_file)
    builder = ScheduleBuilder(catalog, timeout_ms=timeout_ms, pool_size=pool_size)

    with console.status("[bold green]Building schedule..."):
        result = builder.build(course_codes, preferences, term)

    _show_result(result, verbose)

    if output:
        format_type = OutputFormat.excel if output.suffix in (".xlsx", ".xlsm") else OutputFormat.json
        if format_type == OutputFormat.json and output.suffix != ".json":
            output = output.with_suffix(".json")
        with console.status(f"[bold green]Exporting to {output}..."):
            get_exporter(format_type.value).export(result, output)
        console.print(f"\n[bold green]✓[/bold green] Schedule exported to: {output}")

    if not result.success:
        raise typer.Exit(1)


@app.command()
def check(
    catalog_file: Annotated[
        Path,
        typer.Argument(help="Section catalog (.csv, .json or .xlsx)", exists=True, readable=True),
    ],
    section1: Annotated[str, typer.Argument(help='First section, e.g. "MATH 10 A1"')],
    section2: Annotated[str, typer.Argument(help='Second section, e.g. "ENGL 11 B"')],
    term: Annotated[str, typer.Option("-t", "--term", help="Term code")] = DEFAULT_TERM,
) -> None:
    """Check whether two sections have a schedule conflict."""
    catalog = _load_catalog_or_exit(catalog_file)

    try:
        first = find_section(catalog, *parse_section_ref(section1), term)
        second = find_section(catalog, *parse_section_ref(section2), term)
    except (ValueError, ScheduleBuilderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    report = check_section_conflict(first, second)
    if report.has_conflict:
        console.print(f"[bold red]✗ {report.message}[/bold red]")
        for a, b in report.overlaps:
            console.print(f"  [red]• {a} overlaps with {b.time_range}[/red]")
    else:
        console.print(f"[bold green]✓ {report.message}[/bold green]")

    for section in (first, second):
        slots = ", ".join(str(s) for s in section.slots) or "no meetings"
        console.print(f"  {section} ({section.instructor_name}): {slots}")


@app.command()
def gaps(
    catalog_file: Annotated[
        Path,
        typer.Argument(help="Section catalog (.csv, .json or .xlsx)", exists=True, readable=True),
    ],
    sections: Annotated[
        list[str],
        typer.Argument(help='Enrolled sections, e.g. "CSCI 21 A" "THEO 11 D2"'),
    ],
    day: Annotated[Optional[str], typer.Option("--day", help="Only this day")] = None,
    min_duration: Annotated[
        int, typer.Option("--min-duration", help="Shortest gap to report, minutes", min=1)
    ] = DEFAULT_MIN_GAP_MINUTES,
    term: Annotated[str, typer.Option("-t", "--term", help="Term code")] = DEFAULT_TERM,
) -> None:
    """Find free time between classes of enrolled sections."""
    catalog = _load_catalog_or_exit(catalog_file)

    try:
        chosen = [find_section(catalog, *parse_section_ref(ref), term) for ref in sections]
        day_filter = Day.from_name(day) if day else None
    except (ValueError, ScheduleBuilderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    found = find_gaps(chosen, day=day_filter, min_duration=min_duration)
    summary = summarize_gaps(found)

    if not found:
        console.print("[bold yellow]No free gaps found[/bold yellow]")
        return

    table = Table(title="Free Time")
    table.add_column("Day", style="cyan")
    table.add_column("Time", style="green")
    table.add_column("Duration", style="magenta")
    table.add_column("After", style="blue")
    table.add_column("Before", style="blue")
    for gap in found:
        table.add_row(
            gap.day.label,
            gap.time_range,
            f"{gap.duration_minutes} min",
            gap.before_class or "-",
            gap.after_class or "-",
        )
    console.print(table)

    console.print(f"\n  Total free time: {summary['total_free_time']}")
    if summary["longest_gap"]:
        longest = summary["longest_gap"]
        console.print(f"  Longest gap: {longest['day']} {longest['time']} ({longest['duration']})")


def _show_result(result: ScheduleResult, verbose: bool) -> None:
    """Print a build result."""
    if not result.success:
        console.print(f"\n[bold red]✗ {result.message}[/bold red]")
        if result.error:
            console.print(f"  Reason: {result.error.value}")
        if result.failed_course:
            console.print(f"  Course: {result.failed_course}")
        for issue in result.issues:
            console.print(f"  [yellow]• {issue}[/yellow]")
        return

    console.print(f"\n[bold green]✓ {result.message}[/bold green]")

    schedule_table = Table(title="Schedule")
    schedule_table.add_column("Course", style="cyan")
    schedule_table.add_column("Section", style="magenta")
    schedule_table.add_column("Instructor", style="green")
    schedule_table.add_column("Meetings")
    for item in result.schedule:
        meetings = "; ".join(f"{s} ({s.room})" if s.room else str(s) for s in item.slots)
        schedule_table.add_row(item.course, item.section, item.instructor, meetings)
    console.print(schedule_table)

    console.print(_grid_table(result.weekly_grid))
    console.print(f"  Total hours: {result.total_hours}")

    for issue in result.issues:
        console.print(f"  [yellow]• {issue}[/yellow]")

    if verbose:
        stats = result.statistics
        console.print("\n[bold]Search statistics:[/bold]")
        console.print(f"  Nodes explored: {stats.nodes_explored}")
        console.print(f"  Candidates evaluated: {stats.candidates_evaluated}")
        console.print(f"  Pruned by forward checking: {stats.pruned_by_forward_check}")
        console.print(f"  Schedules found: {stats.schedules_found}")
        console.print(f"  Gap score: {stats.gap_score} min")
        console.print(f"  Elapsed: {stats.elapsed_seconds:.3f}s")


def _grid_table(grid: WeeklyGrid) -> Table:
    """Render the weekly grid as a rich table."""
    table = Table(title="Weekly Grid", show_lines=True)
    table.add_column("Time", style="cyan")
    for day in grid.columns:
        table.add_column(day, style="green")
    for row in grid.rows:
        table.add_row(row, *(grid.cells[row].get(day, "") for day in grid.columns))
    return table


if __name__ == "__main__":
    app()
