"""
Month-view calendar: event grouping by date and same-day conflict detection.
"""

from monthcal.conflicts import annotate, find_conflicts, overlap_minutes
from monthcal.datekey import error_message, format_long, parse_search_input, to_key
from monthcal.index import EventIndex, build_index, lookup
from monthcal.model import AnnotatedEvent, Event, ParsedSearchDate, SearchError

__all__ = [
    "AnnotatedEvent",
    "Event",
    "EventIndex",
    "ParsedSearchDate",
    "SearchError",
    "annotate",
    "build_index",
    "error_message",
    "find_conflicts",
    "format_long",
    "lookup",
    "overlap_minutes",
    "parse_search_input",
    "to_key",
]
