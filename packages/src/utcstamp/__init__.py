"""utcstamp.

Microsecond UTC timestamps, monotonic clock samples, durations, and a
strict ISO-8601 codec built on integer-only Gregorian calendar arithmetic.
"""

from importlib.metadata import PackageNotFoundError, version

from utcstamp._calendar import CalendarCycle, TimeComponents, is_leap_year
from utcstamp._clock import ClockPort, Stopwatch, SystemClock
from utcstamp._duration import Duration
from utcstamp._errors import (
    ErrorPayload,
    InvariantError,
    ParseError,
    build_error_payload,
)
from utcstamp._iso8601 import ParseResult, format_iso8601, parse_iso8601
from utcstamp._logging import JsonFormatter, configure_logging
from utcstamp._monotonic import (
    MonotonicTime,
    async_sleep_for,
    async_sleep_until,
    sleep_for,
    sleep_until,
)
from utcstamp._settings import CalendarSettings, LoggingSettings, Settings
from utcstamp._utc import UtcTime, compose, decompose

try:
    __version__ = version("utcstamp")
except PackageNotFoundError:
    # Running from a source tree without installed metadata
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Values
    "Duration",
    "MonotonicTime",
    "UtcTime",
    # Calendar
    "CalendarCycle",
    "TimeComponents",
    "compose",
    "decompose",
    "is_leap_year",
    # Codec
    "ParseResult",
    "format_iso8601",
    "parse_iso8601",
    # Sleeping
    "async_sleep_for",
    "async_sleep_until",
    "sleep_for",
    "sleep_until",
    # Clock
    "ClockPort",
    "Stopwatch",
    "SystemClock",
    # Errors
    "ErrorPayload",
    "InvariantError",
    "ParseError",
    "build_error_payload",
    # Logging
    "JsonFormatter",
    "configure_logging",
    # Settings
    "CalendarSettings",
    "LoggingSettings",
    "Settings",
]
