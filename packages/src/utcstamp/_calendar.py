"""Gregorian calendar components and the 400-year cycle table.

The Gregorian leap-year pattern repeats every 400 years, and those 400
years always hold exactly 146097 days.  :class:`CalendarCycle` lists
every calendar date of the first cycle after the epoch (1970-01-01 up
to, but excluding, 2370-01-01).  Any later date maps onto the table by
subtracting whole cycles from its year, so both directions of the
date/day-count conversion are one table access or one binary search
away, all in integer arithmetic.

The table is process-wide.  It is built on first use, exactly once,
under a lock; after that it is never mutated and needs no locking for
reads.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace

from utcstamp._errors import ensure

logger = logging.getLogger(__name__)

EPOCH_YEAR = 1970
CYCLE_YEARS = 400
CYCLE_DAYS = 146097

# February is listed with its leap-year length; see TimeComponents.days_in_month
_MONTH_DAYS = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap-year rule."""
    if year % 4 != 0:
        return False
    if year % 400 == 0:
        return True
    return year % 100 != 0


def days_in_month(year: int, month: int) -> int:
    if month == 2 and not is_leap_year(year):
        return 28
    return _MONTH_DAYS[month - 1]


@dataclass(frozen=True, slots=True, order=True)
class TimeComponents:
    """Decomposed form of an instant.

    Field order defines the ordering: two components compare as the
    tuples ``(year, month, day, hour, minute, second, microsecond)``.
    """

    year: int = EPOCH_YEAR
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0

    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    def valid(self) -> str | None:
        """Return ``None`` when valid, else a human-readable reason."""
        if self.year < EPOCH_YEAR:
            return "invalid year"
        if self.month < 1 or self.month > 12:
            return "invalid month"
        if self.day < 1 or self.day > days_in_month(self.year, self.month):
            return "invalid day"
        if self.hour < 0 or self.hour >= 24:
            return "invalid hour"
        if self.minute < 0 or self.minute >= 60:
            return "invalid minute"
        if self.second < 0 or self.second >= 60:
            return "invalid second"
        if self.microsecond < 0:
            return "invalid subsecond"
        if self.microsecond >= 1_000_000:
            return "too precise"
        return None


def _compare(a: TimeComponents, b: TimeComponents) -> int:
    """Three-way comparison: negative, zero or positive."""
    return (a > b) - (a < b)


_lock = threading.Lock()
_instance: CalendarCycle | None = None


class CalendarCycle:
    """Every calendar date of one 400-year cycle, starting 1970-01-01.

    Obtain the shared instance with :meth:`get`; constructing one
    directly builds a private table.

    Example::

        cycle = CalendarCycle.get()
        cycle.offset(59)          # TimeComponents(1970, 3, 1, ...)
        cycle.days(cycle.offset(59))  # 59
    """

    __slots__ = ("_days",)

    def __init__(self) -> None:
        days: list[TimeComponents] = []
        year, month, day = EPOCH_YEAR, 1, 1
        while year < EPOCH_YEAR + CYCLE_YEARS:
            days.append(TimeComponents(year, month, day))
            day += 1
            if day > days_in_month(year, month):
                day = 1
                month += 1
                if month > 12:
                    month = 1
                    year += 1
        self._days: tuple[TimeComponents, ...] = tuple(days)

    @classmethod
    def get(cls) -> CalendarCycle:
        """Return the process-wide cycle, building it on first call."""
        global _instance
        cycle = _instance
        if cycle is not None:
            return cycle
        with _lock:
            if _instance is None:
                _instance = cls()
                logger.debug("Built calendar cycle: %d days", len(_instance._days))
            return _instance

    def total_days(self) -> int:
        return len(self._days)

    def period(self, tc: TimeComponents) -> int:
        """Number of whole cycles between the epoch year and ``tc.year``."""
        ensure(tc.year >= EPOCH_YEAR, "year before epoch", year=tc.year)
        return (tc.year - EPOCH_YEAR) // CYCLE_YEARS

    def reduce(self, tc: TimeComponents) -> TimeComponents:
        """Rewrite ``tc.year`` into the first cycle."""
        ensure(tc.year >= EPOCH_YEAR, "year before epoch", year=tc.year)
        delta = tc.year - EPOCH_YEAR
        if delta < CYCLE_YEARS:
            return tc
        return replace(tc, year=EPOCH_YEAR + delta % CYCLE_YEARS)

    def offset(self, index: int) -> TimeComponents:
        """Date of the zero-based day *index* within the cycle."""
        ensure(
            0 <= index < len(self._days),
            "cycle index out of bounds",
            index=index,
            total_days=len(self._days),
        )
        return self._days[index]

    def days(self, tc: TimeComponents) -> int:
        """Index of the greatest table entry not exceeding *tc*."""
        ensure(
            EPOCH_YEAR <= tc.year < EPOCH_YEAR + CYCLE_YEARS,
            "year outside first cycle",
            year=tc.year,
        )
        left, right = 0, len(self._days) - 1
        while left <= right:
            mid = (left + right) // 2
            if _compare(self._days[mid], tc) <= 0:
                left = mid + 1
            else:
                right = mid - 1
        return left - 1
