"""
Conflict detection.

Given the events of one day, flag every event that overlaps another one.
Overlap rule (minutes since midnight):

    overlap = max(0, min(end_a, end_b) - max(start_a, start_b))

A conflict needs overlap > 0, so back-to-back events and zero-length
events never conflict.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from monthcal.index import build_index
from monthcal.model import AnnotatedEvent, Event

logger = logging.getLogger(__name__)


def _time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def _span(ev: Event) -> tuple[int, int]:
    start = _time_to_minutes(ev.start_time)
    return start, start + ev.duration_minutes


def _overlap(a: tuple[int, int], b: tuple[int, int]) -> int:
    return max(0, min(a[1], b[1]) - max(a[0], b[0]))


def overlap_minutes(a: Event, b: Event) -> int:
    """
    Minutes shared by two events' time ranges (date is not checked).
    """
    return _overlap(_span(a), _span(b))


def annotate(events_for_date: Sequence[Event]) -> list[AnnotatedEvent]:
    """
    Return one AnnotatedEvent per input event, in input order.
    """
    spans = [_span(ev) for ev in events_for_date]
    flags = [False] * len(spans)

    # O(n^2) is fine: a single day holds a handful of events
    for i in range(len(spans)):
        for j in range(i + 1, len(spans)):
            if _overlap(spans[i], spans[j]) > 0:
                flags[i] = True
                flags[j] = True

    return [AnnotatedEvent.from_event(ev, flag) for ev, flag in zip(events_for_date, flags)]


def find_conflicts(events: Iterable[Event]) -> list[tuple[Event, Event]]:
    """
    Find overlapping event pairs (A,B) across all dates, each pair once.
    Pairs are ordered by date key, then by input order.
    """
    conflicts: list[tuple[Event, Event]] = []
    index = build_index(events)

    for key in sorted(index):
        day = index[key]
        spans = [_span(ev) for ev in day]
        for i in range(len(day)):
            for j in range(i + 1, len(day)):
                if _overlap(spans[i], spans[j]) > 0:
                    conflicts.append((day[i], day[j]))

    logger.debug("found %d conflicting pairs on %d dates", len(conflicts), len(index))
    return conflicts
