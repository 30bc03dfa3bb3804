"""
Event index: date key -> events scheduled that day.

The index is rebuilt from the full event list whenever it changes;
it is never updated in place.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Union

from monthcal.datekey import to_key
from monthcal.model import Event

EventIndex = dict[str, list[Event]]


def build_index(events: Iterable[Event]) -> EventIndex:
    """
    Group events by date key in one pass.
    Within a key, events keep their relative input order.
    """
    grouped: dict[str, list[Event]] = defaultdict(list)
    for ev in events:
        grouped[to_key(ev.date)].append(ev)
    return dict(grouped)


def lookup(index: EventIndex, date_key: Union[str, date]) -> list[Event]:
    """
    Return the events for a date key (or date), or [] if there are none.
    """
    key = date_key if isinstance(date_key, str) else to_key(date_key)
    return list(index.get(key, ()))
