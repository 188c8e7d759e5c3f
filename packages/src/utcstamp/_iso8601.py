"""ISO-8601 codec for :class:`~utcstamp._utc.UtcTime`.

One fixed profile is produced and accepted::

    YYYY-MM-DDThh:mm:ss.ffffffZ

Formatting always emits six fractional digits and a four-digit (or
longer) year.  Parsing is strict and byte-oriented:

- every numeric field needs at least one digit;
- the ``.ffffff`` part is optional, shorter fractions are right-padded
  with zeros and more than six digits are rejected as ``too precise``;
- only ``Z`` is accepted as the zone designator;
- nothing may follow the ``Z``.

Parsing never raises on malformed input.  It returns a
:class:`ParseResult` whose error message starts with the quoted input,
followed by the reason::

    "1970-13-01T00:00:00.000000Z" invalid month
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from utcstamp._calendar import TimeComponents
from utcstamp._errors import ParseError, ensure
from utcstamp._utc import UtcTime, compose, decompose

logger = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1

_MAX_DIGITS = 19  # no field of a valid timestamp needs more
_FRACTION_DIGITS = 6

_DIGIT_0 = ord("0")
_DIGIT_9 = ord("9")


def format_iso8601(t: UtcTime) -> str:
    """Render *t* as ``YYYY-MM-DDThh:mm:ss.ffffffZ``."""
    tc = decompose(t)
    return (
        f"{tc.year:04d}-{tc.month:02d}-{tc.day:02d}"
        f"T{tc.hour:02d}:{tc.minute:02d}:{tc.second:02d}"
        f".{tc.microsecond:06d}Z"
    )


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of :func:`parse_iso8601`: a value or a failure reason.

    Build one with :meth:`success` or :meth:`failure`.  Exactly one of
    *value* and *reason* is set.
    """

    value: UtcTime | None = None
    text: str | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        ensure(
            (self.value is not None)
            == (self.text is None)
            == (self.reason is None),
            "parse result needs either a value or a failure",
            value=self.value,
            text=self.text,
            reason=self.reason,
        )

    @classmethod
    def success(cls, value: UtcTime) -> ParseResult:
        return cls(value=value)

    @classmethod
    def failure(cls, text: str, reason: str) -> ParseResult:
        return cls(text=text, reason=reason)

    @property
    def ok(self) -> bool:
        return self.value is not None

    @property
    def error(self) -> str | None:
        """Quoted input followed by the reason, or ``None`` on success."""
        if self.value is not None:
            return None
        return f"{self.text} {self.reason}"

    def unwrap(self) -> UtcTime:
        """Return the parsed value or raise :class:`ParseError`."""
        if self.text is not None and self.reason is not None:
            raise ParseError(self.text, self.reason)
        assert self.value is not None
        return self.value


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


class _Rejected(Exception):
    """Internal signal carrying the reason a parse failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def _render_byte(b: int) -> str:
    # b"X" -> 'X', b"\x00" -> '\x00'
    return repr(bytes([b]))[1:]


def _render_input(data: bytes) -> str:
    return '"' + data.decode("utf-8", "backslashreplace") + '"'


class _Scanner:
    """Left-to-right cursor over the input bytes."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def _is_digit(self) -> bool:
        return not self.at_end() and _DIGIT_0 <= self._data[self._pos] <= _DIGIT_9

    def expect(self, char: str) -> None:
        if self.at_end():
            raise _Rejected("premature ending")
        actual = self._data[self._pos]
        expected = ord(char)
        if actual != expected:
            raise _Rejected(f"expect {_render_byte(expected)} got {_render_byte(actual)}")
        self._pos += 1

    def number(self) -> int:
        value = 0
        count = 0
        while self._is_digit():
            count += 1
            if count > _MAX_DIGITS:
                raise _Rejected("out of range")
            value = value * 10 + self._data[self._pos] - _DIGIT_0
            self._pos += 1
        if count == 0:
            if self.at_end():
                raise _Rejected("premature ending")
            raise _Rejected(f"expect digit got {_render_byte(self._data[self._pos])}")
        return value

    def fraction(self) -> int:
        """Optional ``.digits`` part, scaled to microseconds."""
        if self.at_end() or self._data[self._pos] != ord("."):
            return 0
        self._pos += 1
        value = 0
        count = 0
        while self._is_digit():
            count += 1
            if count > _FRACTION_DIGITS:
                raise _Rejected("too precise")
            value = value * 10 + self._data[self._pos] - _DIGIT_0
            self._pos += 1
        return value * 10 ** (_FRACTION_DIGITS - count)


def _scan(data: bytes) -> TimeComponents:
    s = _Scanner(data)
    year = s.number()
    s.expect("-")
    month = s.number()
    s.expect("-")
    day = s.number()
    s.expect("T")
    hour = s.number()
    s.expect(":")
    minute = s.number()
    s.expect(":")
    second = s.number()
    microsecond = s.fraction()
    s.expect("Z")
    if not s.at_end():
        raise _Rejected("more chars than expected")

    tc = TimeComponents(year, month, day, hour, minute, second, microsecond)
    reason = tc.valid()
    if reason is not None:
        raise _Rejected(reason)
    return tc


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def parse_iso8601(
    data: bytes | bytearray | memoryview | str,
    start: int = 0,
    length: int | None = None,
) -> ParseResult:
    """Parse ``YYYY-MM-DDThh:mm:ss[.ffffff]Z`` into a :class:`UtcTime`.

    Args:
        data: The text.  ``str`` input is encoded as UTF-8 first.
        start: Offset of the first byte to parse.
        length: Number of bytes to parse; defaults to the rest of *data*.

    Returns:
        A :class:`ParseResult`.  Malformed input never raises; only a
        window outside *data* (a caller defect) does.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    end = len(raw) if length is None else start + length
    ensure(
        0 <= start <= end <= len(raw),
        "parse window outside input",
        start=start,
        length=length,
        size=len(raw),
    )
    window = raw[start:end]

    try:
        tc = _scan(window)
        usec = compose(tc)
        if usec > INT64_MAX:
            raise _Rejected("out of range")
    except _Rejected as exc:
        result = ParseResult.failure(_render_input(window), exc.reason)
        logger.debug("Rejected timestamp: %s", result.error)
        return result
    return ParseResult.success(UtcTime(usec))
