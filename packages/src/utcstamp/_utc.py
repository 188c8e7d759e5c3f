"""Wall-clock timestamps in UTC.

A :class:`UtcTime` is the number of microseconds since
1970-01-01T00:00:00Z.  It is never negative: any construction or
arithmetic producing a negative count is a defect and raises
:class:`~utcstamp._errors.InvariantError`.

:func:`decompose` and :func:`compose` convert between the flat count
and :class:`~utcstamp._calendar.TimeComponents` via the shared
:class:`~utcstamp._calendar.CalendarCycle`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, overload

from utcstamp._calendar import CYCLE_YEARS, CalendarCycle, TimeComponents
from utcstamp._duration import USEC_PER_SEC, Duration
from utcstamp._errors import ensure, fatal

if TYPE_CHECKING:
    from utcstamp._iso8601 import ParseResult


def _read_wall_usec() -> int:
    try:
        return time.time_ns() // 1000
    except OSError as exc:
        fatal("wall clock read failed", error=str(exc))


@dataclass(frozen=True, slots=True, order=True)
class UtcTime:
    """Microseconds since the Unix epoch.

    Example::

        >>> UtcTime.from_usec(0).to_iso8601()
        '1970-01-01T00:00:00.000000Z'
        >>> UtcTime.from_iso8601("1970-01-01T00:00:01Z").to_usec()
        1000000
    """

    usec: int

    def __post_init__(self) -> None:
        ensure(self.usec >= 0, "negative UTC time", usec=self.usec)

    @classmethod
    def now(cls) -> UtcTime:
        """Sample the wall clock.

        Raises:
            InvariantError: The clock could not be read.
        """
        return cls(_read_wall_usec())

    @classmethod
    def from_usec(cls, usec: int) -> UtcTime:
        return cls(usec)

    def to_usec(self) -> int:
        return self.usec

    # -- Arithmetic ----------------------------------------------------------

    @overload
    def __sub__(self, other: UtcTime) -> Duration: ...
    @overload
    def __sub__(self, other: Duration) -> UtcTime: ...

    def __sub__(self, other: object) -> Duration | UtcTime:
        if isinstance(other, UtcTime):
            return Duration(self.usec - other.usec)
        if isinstance(other, Duration):
            return UtcTime(self.usec - other.usec)
        return NotImplemented

    def __add__(self, other: object) -> UtcTime:
        if not isinstance(other, Duration):
            return NotImplemented
        return UtcTime(self.usec + other.usec)

    __radd__ = __add__

    # -- Text ----------------------------------------------------------------

    def to_iso8601(self) -> str:
        """Format as ``YYYY-MM-DDThh:mm:ss.ffffffZ``."""
        from utcstamp._iso8601 import format_iso8601

        return format_iso8601(self)

    @classmethod
    def parse(cls, data: bytes | bytearray | memoryview | str) -> ParseResult:
        """Parse ISO-8601 text; never raises on malformed input."""
        from utcstamp._iso8601 import parse_iso8601

        return parse_iso8601(data)

    @classmethod
    def from_iso8601(cls, data: bytes | bytearray | memoryview | str) -> UtcTime:
        """Parse ISO-8601 text.

        Raises:
            ParseError: The text is malformed or names an invalid date.
        """
        return cls.parse(data).unwrap()

    def pretty_print(self) -> str:
        """The ISO-8601 rendering wrapped in double quotes."""
        return f'"{self.to_iso8601()}"'

    def __str__(self) -> str:
        return self.to_iso8601()


def decompose(t: UtcTime) -> TimeComponents:
    """Split a timestamp into calendar and clock fields."""
    rest = t.to_usec()
    ensure(rest >= 0, "negative UTC time", usec=rest)
    rest, microsecond = divmod(rest, USEC_PER_SEC)
    rest, second = divmod(rest, 60)
    rest, minute = divmod(rest, 60)
    days, hour = divmod(rest, 24)

    cycle = CalendarCycle.get()
    period, index = divmod(days, cycle.total_days())
    date = cycle.offset(index)
    return TimeComponents(
        year=date.year + period * CYCLE_YEARS,
        month=date.month,
        day=date.day,
        hour=hour,
        minute=minute,
        second=second,
        microsecond=microsecond,
    )


def compose(tc: TimeComponents) -> int:
    """Inverse of :func:`decompose`, returning microseconds since the epoch.

    *tc* must already be valid; invalid components are a defect.
    """
    reason = tc.valid()
    ensure(reason is None, "composing invalid time components", reason=reason, components=tc)

    cycle = CalendarCycle.get()
    period = cycle.period(tc)
    day = period * cycle.total_days() + cycle.days(cycle.reduce(tc))
    seconds = ((day * 24 + tc.hour) * 60 + tc.minute) * 60 + tc.second
    return seconds * USEC_PER_SEC + tc.microsecond
