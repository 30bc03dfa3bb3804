"""
Date keys and search input parsing.

Every calendar day is identified by a canonical 'YYYY-MM-DD' key.
The search box accepts two shapes:

    MM/DD/YYYY   (slash separated, month first)
    YYYY-MM-DD   (hyphen separated, year first)

Validation order is month -> day -> year, then a month re-derivation that
catches days overflowing their month (02/31, 04/31, ...).
"""

from __future__ import annotations

import logging
import re
from datetime import date, timedelta

# messages live with the result type; re-exported here for codec callers
from monthcal.model import ERROR_MESSAGES, FORMAT_HINT, error_message  # noqa: F401
from monthcal.model import ParsedSearchDate, SearchError

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[0-9]+")

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def to_key(d: date) -> str:
    """
    Format a date (or datetime) as 'YYYY-MM-DD'.
    """
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def month_name(month: int) -> str:
    return _MONTH_NAMES[month - 1]


def format_long(d: date) -> str:
    """
    Long display form, e.g. 'Sunday, June 15, 2025'.
    Names are fixed English labels (no locale lookup).
    """
    return f"{_WEEKDAY_NAMES[d.weekday()]}, {month_name(d.month)} {d.day}, {d.year}"


def _split_components(raw: str) -> tuple[int, int, int] | None:
    """
    Return (year, month, day) for a recognized shape, or None.
    """
    if "/" in raw:
        parts = raw.split("/")
        order = (2, 0, 1)
    elif "-" in raw:
        parts = raw.split("-")
        order = (0, 1, 2)
    else:
        return None

    if len(parts) != 3:
        return None

    tokens = [p.strip() for p in parts]
    if not all(_INT_RE.fullmatch(t) for t in tokens):
        return None

    year, month, day = (int(tokens[i]) for i in order)
    return year, month, day


def _failure(reason: SearchError, raw: str) -> ParsedSearchDate:
    logger.debug("search input %r rejected: %s", raw, reason.value)
    return ParsedSearchDate(error=reason)


def parse_search_input(raw: str) -> ParsedSearchDate:
    """
    Resolve a user-supplied date string into a validated calendar date.

    Never raises: failures come back as ParsedSearchDate.error.
    """
    text = (raw or "").strip()

    components = _split_components(text)
    if components is None:
        return _failure(SearchError.INVALID_FORMAT, text)
    year, month, day = components

    if not 1 <= month <= 12:
        return _failure(SearchError.INVALID_MONTH, text)
    if not 1 <= day <= 31:
        return _failure(SearchError.INVALID_DAY, text)
    if not 1900 <= year <= 9999:
        return _failure(SearchError.INVALID_YEAR, text)

    # Roll forward from the 1st so an overflowing day lands in the next month
    resolved = date(year, month, 1) + timedelta(days=day - 1)
    if resolved.month != month:
        return _failure(SearchError.INVALID_DAY_FOR_MONTH, text)

    return ParsedSearchDate(date=resolved, label=format_long(resolved))
