"""
Tests for CLI entry points.

These tests focus on:
- exit codes of each sub-command
- search error messages and the resolved long date label
- month cell contents: event cap, "+N more" and conflict markers
Events come from a temporary file so the packaged data is never needed.
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import date
from pathlib import Path
from unittest import mock

from rich.console import Console

from monthcal.cli import MAX_CELL_EVENTS, _cell_text, main
from monthcal.grid import MonthGrid
from monthcal.index import build_index
from monthcal.storage import event_from_dict

EVENTS = [
    {"id": 1, "date": "2025-06-15", "startTime": "09:00", "endTime": "10:00",
     "durationMinutes": 60, "title": "Planning", "color": "#3b82f6"},
    {"id": 2, "date": "2025-06-15", "startTime": "09:30", "endTime": "10:00",
     "durationMinutes": 30, "title": "Client call", "color": "#ef4444"},
    {"id": 3, "date": "2025-06-15", "startTime": "10:30", "endTime": "11:00",
     "durationMinutes": 30, "title": "Review", "color": "#f59e0b"},
]

BUSY_DAY = [
    {"id": 10, "date": "2025-06-18", "startTime": "09:00", "durationMinutes": 60, "title": "Planning", "color": "#111"},
    {"id": 11, "date": "2025-06-18", "startTime": "09:30", "durationMinutes": 30, "title": "Client call", "color": "#222"},
    {"id": 12, "date": "2025-06-18", "startTime": "11:00", "durationMinutes": 30, "title": "Review", "color": "#333"},
    {"id": 13, "date": "2025-06-18", "startTime": "13:00", "durationMinutes": 30, "title": "Late sync", "color": "#444"},
]


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.events_path = Path(self._tmp.name) / "events.json"
        self.events_path.write_text(json.dumps(EVENTS), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple[int, str]:
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--events", str(self.events_path), *argv])
        return ctx.exception.code, out.getvalue()

    def test_search_valid_date(self) -> None:
        code, out = self._run("search", "2025-06-15")
        self.assertEqual(code, 0)
        self.assertIn("Sunday, June 15, 2025", out)
        self.assertIn("June 2025", out)

    def test_search_invalid_day_for_month(self) -> None:
        code, out = self._run("search", "02/31/2025")
        self.assertEqual(code, 1)
        self.assertIn("Invalid date for the given month", out)

    def test_search_invalid_format(self) -> None:
        code, out = self._run("search", "not-a-date")
        self.assertEqual(code, 1)
        self.assertIn("Invalid date format", out)

    def test_day_lists_events(self) -> None:
        code, out = self._run("day", "06/15/2025")
        self.assertEqual(code, 0)
        self.assertIn("Planning", out)
        self.assertIn("Review", out)

    def test_day_without_events(self) -> None:
        code, out = self._run("day", "2025-06-16")
        self.assertEqual(code, 0)
        self.assertIn("No events scheduled for this day", out)

    def test_month(self) -> None:
        code, out = self._run("month", "--month", "2025-06")
        self.assertEqual(code, 0)
        self.assertIn("June 2025", out)
        self.assertIn("Mon", out)

    def test_month_shift(self) -> None:
        code, out = self._run("month", "--month", "2025-06", "--shift", "-1")
        self.assertEqual(code, 0)
        self.assertIn("May 2025", out)

    def test_month_shift_out_of_range(self) -> None:
        code, out = self._run("month", "--month", "2025-06", "--shift", "100000")
        self.assertEqual(code, 2)
        self.assertIn("Invalid --shift", out)

    def test_month_december_9999(self) -> None:
        code, out = self._run("month", "--month", "9999-12")
        self.assertEqual(code, 0)
        self.assertIn("December 9999", out)

    def test_search_last_supported_date(self) -> None:
        code, out = self._run("search", "12/31/9999")
        self.assertEqual(code, 0)
        self.assertIn("Friday, December 31, 9999", out)

    def test_month_cell_truncates_and_marks_conflicts(self) -> None:
        self.events_path.write_text(json.dumps(BUSY_DAY), encoding="utf-8")
        wide = Console(width=200, highlight=False, color_system=None)
        with mock.patch("monthcal.cli.console", wide):
            code, out = self._run("month", "--month", "2025-06")
        self.assertEqual(code, 0)
        self.assertIn("+1 more", out)
        self.assertIn("! 09:00-10:00 Planning", out)
        self.assertIn("! 09:30-10:00 Client call", out)
        self.assertNotIn("Late sync", out)

    def test_day_flags_overlapping_events(self) -> None:
        self.events_path.write_text(json.dumps(BUSY_DAY), encoding="utf-8")
        code, out = self._run("day", "2025-06-18")
        self.assertEqual(code, 0)
        self.assertIn("Late sync", out)
        self.assertEqual(out.count("yes"), 2)

    def test_month_rejects_bad_value(self) -> None:
        code, _ = self._run("month", "--month", "June")
        self.assertEqual(code, 2)

    def test_conflicts(self) -> None:
        code, out = self._run("conflicts")
        self.assertEqual(code, 0)
        self.assertIn("Conflicts found: 1", out)

    def test_missing_event_file_still_runs(self) -> None:
        self.events_path.unlink()
        code, out = self._run("conflicts")
        self.assertEqual(code, 0)
        self.assertIn("No conflicts found.", out)


class TestMonthCell(unittest.TestCase):
    def setUp(self) -> None:
        self.day = date(2025, 6, 18)
        self.grid = MonthGrid.for_date(self.day)
        self.index = build_index(event_from_dict(rec) for rec in BUSY_DAY)

    def test_cell_shows_at_most_max_events(self) -> None:
        text = _cell_text(self.day, self.grid, self.index, date(2000, 1, 1), None)
        lines = text.split("\n")
        # day number, MAX_CELL_EVENTS events, overflow line
        self.assertEqual(len(lines), 1 + MAX_CELL_EVENTS + 1)
        self.assertEqual(lines[-1], "[italic]+1 more[/]")
        self.assertNotIn("Late sync", text)

    def test_cell_marks_only_conflicting_events(self) -> None:
        text = _cell_text(self.day, self.grid, self.index, date(2000, 1, 1), None)
        self.assertEqual(text.count("[red]![/]"), 2)
        self.assertIn("11:00-11:30 Review", text)
        self.assertNotIn("! 11:00", text)

    def test_empty_padding_day_is_muted(self) -> None:
        text = _cell_text(date(2025, 5, 26), self.grid, self.index, date(2000, 1, 1), None)
        self.assertEqual(text, "[dim][bold]26[/][/]")


if __name__ == "__main__":
    unittest.main()
