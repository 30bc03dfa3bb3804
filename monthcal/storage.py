"""
Static event data loading.

This module reads the file:

    data/events.json

which holds a JSON list of event objects:

    {"id": 1, "date": "2025-06-15", "startTime": "09:00", "endTime": "10:00",
     "durationMinutes": 60, "title": "Standup", "color": "#3b82f6"}

The calendar only reads this file; it never writes it back.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from monthcal.model import Event

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent


class EventDataError(ValueError):
    """Raised when an event record cannot be turned into an Event."""


def _default_events_path() -> Path:
    """
    Return the default path of events.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    return PACKAGE_DIR / "data" / "events.json"


def _parse_hhmm(value: Any, field: str) -> str:
    try:
        parsed = datetime.strptime(str(value).strip(), "%H:%M")
    except ValueError as exc:
        raise EventDataError(f"{field} must be HH:MM, got {value!r}") from exc
    # "9:5" is stored as "09:05"
    return parsed.strftime("%H:%M")


def _end_time(start: str, duration: int) -> str:
    h, m = (int(x) for x in start.split(":"))
    total = (h * 60 + m + duration) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def event_from_dict(raw: dict[str, Any]) -> Event:
    """
    Build an Event from one JSON record.
    Raises EventDataError for missing or malformed fields.
    """
    if not isinstance(raw, dict):
        raise EventDataError(f"event record must be an object, got {type(raw).__name__}")

    for key in ("id", "date", "startTime", "durationMinutes"):
        if raw.get(key) in (None, ""):
            raise EventDataError(f"event record is missing {key!r}")

    try:
        day = datetime.strptime(str(raw["date"]).strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise EventDataError(f"date must be YYYY-MM-DD, got {raw['date']!r}") from exc

    start = _parse_hhmm(raw["startTime"], "startTime")

    duration = raw["durationMinutes"]
    # bool is an int subclass, reject it explicitly
    if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
        raise EventDataError(f"durationMinutes must be a non-negative integer, got {duration!r}")

    end_raw = raw.get("endTime")
    end = _parse_hhmm(end_raw, "endTime") if end_raw else _end_time(start, duration)

    return Event(
        id=raw["id"],
        date=day,
        start_time=start,
        duration_minutes=duration,
        title=str(raw.get("title") or ""),
        color=raw.get("color"),
        end_time=end,
    )


def load_events(path: str | Path | None = None) -> list[Event]:
    """
    Load events from events.json, keeping file order.

    Returns an empty list if the file does not exist or is invalid.
    Malformed records are logged and skipped.
    """
    events_path = Path(path) if path is not None else _default_events_path()

    if not events_path.exists():
        logger.warning("event file not found: %s", events_path)
        return []

    try:
        data = json.loads(events_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("could not read %s: %s", events_path, exc)
        return []

    if not isinstance(data, list):
        logger.warning("%s does not contain a JSON list", events_path)
        return []

    events: list[Event] = []
    for pos, raw in enumerate(data):
        try:
            events.append(event_from_dict(raw))
        except EventDataError as exc:
            logger.warning("skipping event #%d in %s: %s", pos, events_path.name, exc)

    logger.debug("loaded %d of %d events from %s", len(events), len(data), events_path)
    return events
