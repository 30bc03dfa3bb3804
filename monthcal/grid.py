"""
Month grid generation for the calendar view.

Weeks start on Monday. A month grid covers the week containing the 1st
through the week containing the last day, so it always holds whole weeks.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator

from monthcal.datekey import month_name

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class MonthGrid:
    """
    Lazy, restartable sequence of the days shown for one month.

    Iterating yields dates; weeks() yields 7-tuples of dates.
    The grid never extends past date.max.
    """

    def __init__(self, year: int, month: int) -> None:
        self.year = year
        self.month = month
        first = date(year, month, 1)
        last = date(year, month, calendar.monthrange(year, month)[1])
        self.start = first - timedelta(days=first.weekday())
        # the last week of year 9999 runs past date.max
        pad = 6 - last.weekday()
        self.end = last + timedelta(days=pad) if (date.max - last).days >= pad else date.max

    @classmethod
    def for_date(cls, d: date) -> MonthGrid:
        return cls(d.year, d.month)

    def __iter__(self) -> Iterator[date]:
        day = self.start
        while True:
            yield day
            if day >= self.end:
                return
            day += timedelta(days=1)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __repr__(self) -> str:
        return f"MonthGrid({self.year}, {self.month})"

    def weeks(self) -> Iterator[tuple[date, ...]]:
        """Yield Monday-first weeks; only a grid cut at date.max ends short."""
        week: list[date] = []
        for day in self:
            week.append(day)
            if len(week) == 7:
                yield tuple(week)
                week = []
        if week:
            yield tuple(week)

    def contains(self, d: date) -> bool:
        """True if d belongs to the displayed month (not a padding day)."""
        return d.year == self.year and d.month == self.month

    @property
    def title(self) -> str:
        return month_title(date(self.year, self.month, 1))


def shift_month(d: date, n: int) -> date:
    """
    First day of the month n months away from d (negative n goes back).
    Raises ValueError when that month falls outside years 1..9999.
    """
    total = d.year * 12 + (d.month - 1) + n
    year = total // 12
    if not date.min.year <= year <= date.max.year:
        raise ValueError(f"cannot move {n} months from {month_title(d)}")
    return date(year, total % 12 + 1, 1)


def month_title(d: date) -> str:
    return f"{month_name(d.month)} {d.year}"
