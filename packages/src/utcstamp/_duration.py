"""Signed microsecond durations.

A :class:`Duration` is a plain integer count of microseconds.  All
arithmetic stays in integers; floats appear only in
:meth:`Duration.to_seconds`, which exists to hand a value to sleep
primitives.
"""

from __future__ import annotations

from dataclasses import dataclass

USEC_PER_MSEC = 1_000
USEC_PER_SEC = 1_000_000
USEC_PER_MIN = 60 * USEC_PER_SEC
USEC_PER_HOUR = 60 * USEC_PER_MIN


def clock_face(usec: int) -> str:
    """Render a microsecond count as ``H:MM:SS.ffffff``.

    The hour field is unpadded and unbounded.  Negative counts are
    rendered as ``-`` followed by the rendering of the absolute value.
    """
    if usec < 0:
        return "-" + clock_face(-usec)
    hours, rest = divmod(usec, USEC_PER_HOUR)
    minutes, rest = divmod(rest, USEC_PER_MIN)
    seconds, micros = divmod(rest, USEC_PER_SEC)
    return f"{hours}:{minutes:02d}:{seconds:02d}.{micros:06d}"


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """Signed time delta at microsecond granularity.

    Example::

        >>> str(Duration.from_usec(3_661_000_001))
        '1:01:01.000001'
        >>> Duration.from_sec(2) - Duration.from_msec(500)
        Duration(usec=1500000)
    """

    usec: int = 0

    # -- Construction --------------------------------------------------------

    @classmethod
    def from_usec(cls, usec: int) -> Duration:
        return cls(usec)

    @classmethod
    def from_msec(cls, msec: int) -> Duration:
        return cls(msec * USEC_PER_MSEC)

    @classmethod
    def from_sec(cls, sec: int) -> Duration:
        return cls(sec * USEC_PER_SEC)

    @classmethod
    def from_min(cls, minutes: int) -> Duration:
        return cls(minutes * USEC_PER_MIN)

    @classmethod
    def from_hour(cls, hours: int) -> Duration:
        return cls(hours * USEC_PER_HOUR)

    # -- Accessors -----------------------------------------------------------

    def to_usec(self) -> int:
        return self.usec

    def to_seconds(self) -> float:
        """Seconds as a float, for APIs such as :func:`time.sleep`."""
        return self.usec / USEC_PER_SEC

    # -- Arithmetic ----------------------------------------------------------

    def __add__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.usec + other.usec)

    def __sub__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.usec - other.usec)

    def __neg__(self) -> Duration:
        return Duration(-self.usec)

    def __mul__(self, factor: object) -> Duration:
        # bool is an int subclass; a flag here is a caller mistake
        if not isinstance(factor, int) or isinstance(factor, bool):
            return NotImplemented
        return Duration(self.usec * factor)

    __rmul__ = __mul__

    def __bool__(self) -> bool:
        return self.usec != 0

    # -- Rendering -----------------------------------------------------------

    def pretty_print(self) -> str:
        """Clock-face rendering, ``H:MM:SS.ffffff``."""
        return clock_face(self.usec)

    def __str__(self) -> str:
        return self.pretty_print()


ZERO = Duration(0)
