"""Monotonic clock samples and sleeping.

A :class:`MonotonicTime` counts microseconds from an arbitrary origin
chosen by the operating system (``time.monotonic_ns``).  Only the
*difference* between two samples of the same process is meaningful, so
the type converts to :class:`~utcstamp._duration.Duration` and to
nothing else.

``sleep_for`` and ``sleep_until`` block the calling thread and cannot
be interrupted.  Code that needs cancellable waits uses the asyncio
variants, which can be cancelled through their task.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import overload

from utcstamp._duration import Duration, clock_face
from utcstamp._errors import fatal


def _read_monotonic_usec() -> int:
    try:
        return time.monotonic_ns() // 1000
    except OSError as exc:
        fatal("monotonic clock read failed", error=str(exc))


@dataclass(frozen=True, slots=True, order=True)
class MonotonicTime:
    """Sample of the monotonic clock, in microseconds."""

    usec: int

    @classmethod
    def now(cls) -> MonotonicTime:
        """Sample the monotonic clock.

        Raises:
            InvariantError: The clock could not be read.
        """
        return cls(_read_monotonic_usec())

    @classmethod
    def from_usec(cls, usec: int) -> MonotonicTime:
        return cls(usec)

    def to_usec(self) -> int:
        return self.usec

    @overload
    def __sub__(self, other: MonotonicTime) -> Duration: ...
    @overload
    def __sub__(self, other: Duration) -> MonotonicTime: ...

    def __sub__(self, other: object) -> Duration | MonotonicTime:
        if isinstance(other, MonotonicTime):
            return Duration(self.usec - other.usec)
        if isinstance(other, Duration):
            return MonotonicTime(self.usec - other.usec)
        return NotImplemented

    def __add__(self, other: object) -> MonotonicTime:
        if not isinstance(other, Duration):
            return NotImplemented
        return MonotonicTime(self.usec + other.usec)

    __radd__ = __add__

    def pretty_print(self) -> str:
        """Elapsed time since the clock origin, ``H:MM:SS.ffffff``."""
        return clock_face(self.usec)

    def __str__(self) -> str:
        return self.pretty_print()


def sleep_until(target: MonotonicTime) -> None:
    """Block until the monotonic clock reaches *target*.

    Returns immediately when *target* is not in the future.  If the
    operating system wakes the thread early, the remainder is slept
    again, so the call never returns before *target*.
    """
    while True:
        remaining = target - MonotonicTime.now()
        if remaining.usec <= 0:
            return
        time.sleep(remaining.to_seconds())


def sleep_for(duration: Duration) -> None:
    """Block the calling thread for at least *duration*."""
    if duration.usec <= 0:
        return
    sleep_until(MonotonicTime.now() + duration)


async def async_sleep_until(target: MonotonicTime) -> None:
    """Asyncio counterpart of :func:`sleep_until`; cancellable."""
    while True:
        remaining = target - MonotonicTime.now()
        if remaining.usec <= 0:
            return
        await asyncio.sleep(remaining.to_seconds())


async def async_sleep_for(duration: Duration) -> None:
    """Asyncio counterpart of :func:`sleep_for`; cancellable."""
    if duration.usec <= 0:
        return
    await async_sleep_until(MonotonicTime.now() + duration)
