"""
Central data model definitions used across the project.

This module defines the canonical structure of Event objects and of the
search result so that:
- the codec, the index and the conflict detector share the same field names
- the CLI only ever consumes these types, never raw JSON dicts
- derived values (conflict flags) are new objects, never mutated events
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum
from typing import Optional, Union


EventId = Union[str, int]


@dataclass(frozen=True)
class Event:
    """
    Represents one scheduled event on a single calendar day.

    Overlap math always uses start_time + duration_minutes.
    end_time is kept for display only.
    """

    id: EventId
    date: date
    start_time: str
    duration_minutes: int
    title: str
    color: Optional[str] = None
    end_time: Optional[str] = None


@dataclass(frozen=True)
class AnnotatedEvent(Event):
    """
    An Event plus its conflict flag, relative to one day's event set.
    """

    conflict: bool = False

    @classmethod
    def from_event(cls, event: Event, conflict: bool) -> AnnotatedEvent:
        values = {f.name: getattr(event, f.name) for f in fields(Event)}
        return cls(**values, conflict=conflict)


class SearchError(str, Enum):
    INVALID_FORMAT = "invalid_format"
    INVALID_MONTH = "invalid_month"
    INVALID_DAY = "invalid_day"
    INVALID_YEAR = "invalid_year"
    INVALID_DAY_FOR_MONTH = "invalid_day_for_month"


FORMAT_HINT = "Please use MM/DD/YYYY or YYYY-MM-DD"

ERROR_MESSAGES: dict[SearchError, str] = {
    SearchError.INVALID_FORMAT: f"Invalid date format. {FORMAT_HINT}",
    SearchError.INVALID_MONTH: "Invalid month",
    SearchError.INVALID_DAY: "Invalid day",
    SearchError.INVALID_YEAR: "Invalid year",
    SearchError.INVALID_DAY_FOR_MONTH: "Invalid date for the given month",
}


def error_message(reason: SearchError) -> str:
    """Display-ready message for a search failure reason."""
    return ERROR_MESSAGES[reason]


@dataclass(frozen=True)
class ParsedSearchDate:
    """
    Result of resolving a user date string.

    Exactly one of (date, label) or error is set.
    """

    date: Optional[date] = None
    label: Optional[str] = None
    error: Optional[SearchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is None:
            return self.label or ""
        return error_message(self.error)
