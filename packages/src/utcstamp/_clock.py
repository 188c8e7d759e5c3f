"""Clock port, system adapter and stopwatch.

Provides ClockPort (Protocol) and SystemClock so that code measuring
elapsed time or stamping records can take a clock as a dependency, and
tests can inject :class:`~utcstamp.testing.FakeClock` instead.

Both readings are sampled by the value types themselves
(:meth:`MonotonicTime.now`, :meth:`UtcTime.now`); SystemClock only
routes to them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from utcstamp._duration import Duration
from utcstamp._monotonic import MonotonicTime
from utcstamp._utc import UtcTime


@runtime_checkable
class ClockPort(Protocol):
    """Source of monotonic and wall-clock samples."""

    def monotonic(self) -> MonotonicTime:
        """Return a monotonic sample.  Only differences are meaningful."""
        ...

    def utc(self) -> UtcTime:
        """Return the current wall-clock time."""
        ...


class SystemClock:
    """Production clock backed by the operating system.

    Satisfies :class:`ClockPort` via structural subtyping.

    Usage::

        clock = SystemClock()
        start = clock.monotonic()
        # ... some work ...
        elapsed = clock.monotonic() - start
    """

    def monotonic(self) -> MonotonicTime:
        return MonotonicTime.now()

    def utc(self) -> UtcTime:
        return UtcTime.now()


class Stopwatch:
    """Measures elapsed monotonic time from a start point.

    Args:
        clock: Clock to sample.  Defaults to :class:`SystemClock`.
    """

    __slots__ = ("_clock", "_start")

    def __init__(self, clock: ClockPort | None = None) -> None:
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._start = self._clock.monotonic()

    @property
    def started_at(self) -> MonotonicTime:
        return self._start

    def elapsed(self) -> Duration:
        """Time since construction or the last :meth:`restart`."""
        return Duration(self._clock.monotonic().usec - self._start.usec)

    def restart(self) -> Duration:
        """Reset the start point; return the time elapsed before the reset."""
        now = self._clock.monotonic()
        elapsed = Duration(now.usec - self._start.usec)
        self._start = now
        return elapsed
