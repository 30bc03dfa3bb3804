"""
CLI (Command Line Interface).

This module renders the calendar in the terminal, e.g.:

    monthcal month
    monthcal month --month 2025-06
    monthcal month --shift -1
    monthcal day 06/15/2025
    monthcal search 2025-06-15
    monthcal conflicts

Dates for 'day' and 'search' accept MM/DD/YYYY or YYYY-MM-DD.
All commands read the static event file (--events, default: packaged data).
"""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from monthcal.conflicts import annotate, find_conflicts
from monthcal.datekey import format_long, parse_search_input, to_key
from monthcal.grid import WEEKDAY_LABELS, MonthGrid, shift_month
from monthcal.index import EventIndex, build_index, lookup
from monthcal.log import setup_logging
from monthcal.model import AnnotatedEvent, Event
from monthcal.storage import load_events

logger = logging.getLogger(__name__)

console = Console(highlight=False)

# events shown per grid cell before "+N more"
MAX_CELL_EVENTS = 3


def _event_span(ev: Event) -> str:
    return f"{ev.start_time}-{ev.end_time or '?'}"


def _cell_text(d: date, grid: MonthGrid, index: EventIndex, today: date, selected: Optional[date]) -> str:
    """
    Build the rich markup for one day cell of the month grid.
    """
    number = str(d.day)
    if d == selected:
        number = f"[bold yellow]{number}[/]"
    elif d == today:
        number = f"[reverse]{number}[/]"
    else:
        number = f"[bold]{number}[/]"

    lines = [number]
    day_events = annotate(lookup(index, d))
    for ev in day_events[:MAX_CELL_EVENTS]:
        marker = "[red]![/] " if ev.conflict else ""
        lines.append(f"{marker}{_event_span(ev)} {escape(ev.title)}")
    if len(day_events) > MAX_CELL_EVENTS:
        lines.append(f"[italic]+{len(day_events) - MAX_CELL_EVENTS} more[/]")

    text = "\n".join(lines)
    if not grid.contains(d):
        text = f"[dim]{text}[/]"
    return text


def _render_month(grid: MonthGrid, index: EventIndex, selected: Optional[date] = None) -> Table:
    today = date.today()
    table = Table(title=grid.title, box=box.SIMPLE_HEAVY, show_lines=True, expand=True)
    for label in WEEKDAY_LABELS:
        table.add_column(label, vertical="top", ratio=1)
    for week in grid.weeks():
        cells = [_cell_text(d, grid, index, today, selected) for d in week]
        table.add_row(*cells, *[""] * (len(WEEKDAY_LABELS) - len(cells)))
    return table


def _print_legend() -> None:
    console.print("[bold]•[/] Event   [red]![/] Conflict   [reverse] today [/] Today highlighted")


def _print_day(d: date, index: EventIndex) -> None:
    """
    Print every event of one day with its conflict flag.
    """
    console.print(f"[bold]{format_long(d)}[/]")
    day_events: list[AnnotatedEvent] = annotate(lookup(index, d))
    if not day_events:
        console.print("No events scheduled for this day")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("Time")
    table.add_column("Title")
    table.add_column("Conflict")
    for ev in day_events:
        table.add_row(_event_span(ev), escape(ev.title), "[red]yes[/]" if ev.conflict else "")
    console.print(table)


def _month_arg(text: str) -> date:
    try:
        return datetime.strptime(text.strip(), "%Y-%m").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {text!r}") from exc


def _cmd_month(args: argparse.Namespace, events: list[Event]) -> int:
    """
    Print the month grid (default: the current month).
    """
    shown = args.month or date.today()
    if args.shift:
        try:
            shown = shift_month(shown, args.shift)
        except ValueError as exc:
            console.print(f"Invalid --shift: {exc}")
            return 2
    index = build_index(events)
    console.print(_render_month(MonthGrid.for_date(shown), index))
    _print_legend()
    return 0


def _cmd_day(args: argparse.Namespace, events: list[Event]) -> int:
    """
    Print the events of one day.
    """
    result = parse_search_input(args.date)
    if not result.ok:
        console.print(result.message)
        return 1

    _print_day(result.date, build_index(events))
    return 0


def _cmd_search(args: argparse.Namespace, events: list[Event]) -> int:
    """
    Resolve a date, then show its month with the date highlighted.
    """
    result = parse_search_input(args.date)
    if not result.ok:
        console.print(result.message)
        return 1

    found = result.date
    logger.debug("search %r resolved to %s", args.date, to_key(found))

    index = build_index(events)
    console.print(result.label)
    console.print(_render_month(MonthGrid.for_date(found), index, selected=found))
    _print_day(found, index)
    return 0


def _cmd_conflicts(args: argparse.Namespace, events: list[Event]) -> int:
    """
    Print all detected conflicts in the event list.
    """
    confs = find_conflicts(events)
    if not confs:
        console.print("No conflicts found.")
        return 0

    console.print(f"Conflicts found: {len(confs)}")
    for a, b in confs:
        console.print(
            f"- {to_key(a.date)} {_event_span(a)} {escape(a.title)}  <->  {_event_span(b)} {escape(b.title)}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="monthcal", description="Month-view calendar with conflict flags")
    parser.add_argument("--events", type=Path, default=None, help="Path to events.json (default: packaged data)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_month = sub.add_parser("month", help="Show a month grid")
    p_month.add_argument("--month", type=_month_arg, default=None, help="Month to show (YYYY-MM)")
    p_month.add_argument("--shift", type=int, default=0, help="Move N months forward (negative: back)")

    p_day = sub.add_parser("day", help="Show the events of one day")
    p_day.add_argument("date", type=str, help="MM/DD/YYYY or YYYY-MM-DD")

    p_search = sub.add_parser("search", help="Find a date and show its month")
    p_search.add_argument("date", type=str, help="MM/DD/YYYY or YYYY-MM-DD")

    sub.add_parser("conflicts", help="Show all overlapping events")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, loads events, dispatches to command
    handlers and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    events = load_events(args.events)

    if args.command == "month":
        raise SystemExit(_cmd_month(args, events))
    if args.command == "day":
        raise SystemExit(_cmd_day(args, events))
    if args.command == "search":
        raise SystemExit(_cmd_search(args, events))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args, events))

    raise SystemExit(2)
