"""Error tiers and structured error payloads.

Two disjoint failure channels exist in utcstamp:

- **Recoverable** — malformed timestamp text.  The parser reports it
  as a :class:`~utcstamp._iso8601.ParseResult` carrying a message;
  callers who prefer exceptions get a :class:`ParseError`.
- **Fatal** — a violated internal invariant (clock failure, negative
  UTC time, cycle index out of bounds, year outside the cycle
  domain).  Raised as :class:`InvariantError` by :func:`ensure` and
  never converted into a parse result.

Payload schema produced by :func:`build_error_payload`::

    {
        "error_type": "parse_error",
        "message": "\\"1970-13-01T00:00:00.000000Z\\" invalid month",
        "timestamp": "2026-02-14T12:34:56.000000Z",
        "details": {}
    }
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:
    from utcstamp._utc import UtcTime

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvariantError(AssertionError):
    """An internal invariant was violated.

    Signals a defect in the caller or the host environment, not bad
    input data.  The offending values are kept in :attr:`values` for
    diagnosis.
    """

    def __init__(self, message: str, values: dict[str, object] | None = None) -> None:
        self.message = message
        self.values: dict[str, object] = dict(values or {})
        if self.values:
            rendered = ", ".join(f"{k}={v!r}" for k, v in self.values.items())
            super().__init__(f"{message} ({rendered})")
        else:
            super().__init__(message)


class ParseError(ValueError):
    """Timestamp text could not be parsed.

    Attributes:
        text: Pretty-printed rendering of the whole offending input.
        reason: The specific failure, e.g. ``"invalid month"``.
    """

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"{text} {reason}")


def fatal(message: str, **values: object) -> NoReturn:
    """Log and raise an :class:`InvariantError`.

    Keyword arguments are the offending values, attached to the error
    and logged at CRITICAL before raising.
    """
    error = InvariantError(message, values)
    logger.critical("Invariant violated: %s", error)
    raise error


def ensure(condition: bool, message: str, **values: object) -> None:
    """Call :func:`fatal` unless *condition* holds."""
    if not condition:
        fatal(message, **values)


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------

DEFAULT_ERROR_TYPES: dict[type[Exception], str] = {
    ParseError: "parse_error",
    InvariantError: "invariant_violation",
}


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    """Immutable structured error record, ready for JSON serialisation."""

    error_type: str
    message: str
    timestamp: str
    details: dict[str, object] = field(default_factory=dict)

    def to_json(self) -> str:
        """Serialise to a JSON string."""
        return json.dumps(asdict(self), default=repr)


# ---------------------------------------------------------------------------
# Payload builder
# ---------------------------------------------------------------------------


def build_error_payload(
    error: Exception,
    *,
    error_type_map: dict[type[Exception], str] | None = None,
    details: dict[str, object] | None = None,
    clock: Callable[[], UtcTime] | None = None,
) -> ErrorPayload:
    """Convert an exception into a structured :class:`ErrorPayload`.

    Looks up the exact class of the exception; subclasses are not matched.

    Args:
        error: The exception to convert.
        error_type_map: Mapping from exception types to machine-readable
            ``error_type`` strings.  Defaults to
            :data:`DEFAULT_ERROR_TYPES`; unmapped types become ``"error"``.
        details: Additional context to attach to the payload.  The
            values of an :class:`InvariantError` are merged in as well.
        clock: Callable returning a :class:`~utcstamp._utc.UtcTime`.
            Defaults to ``UtcTime.now``.

    Returns:
        A frozen dataclass ready for serialisation.
    """
    from utcstamp._utc import UtcTime

    resolved_map = error_type_map if error_type_map is not None else DEFAULT_ERROR_TYPES
    error_type = resolved_map.get(type(error), "error")
    now = clock() if clock is not None else UtcTime.now()

    merged: dict[str, object] = {}
    if isinstance(error, InvariantError):
        merged.update(error.values)
    if isinstance(error, ParseError):
        merged["reason"] = error.reason
    merged.update(details or {})

    return ErrorPayload(
        error_type=error_type,
        message=str(error),
        timestamp=now.to_iso8601(),
        details=merged,
    )
