"""Structured JSON log formatter and logging configuration.

:class:`JsonFormatter` emits one JSON object per log record on a single
line (JSON Lines / NDJSON).  Its ``timestamp`` field is rendered with
this library's own ISO-8601 profile, so log lines carry the same
microsecond ``...Z`` timestamps as the data they describe.

:func:`configure_logging` wires the root logger from
:class:`~utcstamp._settings.LoggingSettings`; the library modules
themselves only ever call ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

from utcstamp._settings import LoggingSettings
from utcstamp._utc import UtcTime

_ONE_MB = 1024 * 1024

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _record_time(record: logging.LogRecord) -> UtcTime:
    return UtcTime.from_usec(max(0, round(record.created * 1_000_000)))


class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects (NDJSON).

    Each record produces a JSON object with these fields:

    - ``timestamp`` — ``YYYY-MM-DDThh:mm:ss.ffffffZ``
    - ``level`` — Python log level name
    - ``logger`` — dotted logger name
    - ``message`` — the formatted log message
    - ``service`` — application name for log correlation
    - ``version`` — application version (omitted when empty)
    - ``exception`` — formatted traceback (only present when
      an exception is logged)
    - ``stack_info`` — stack trace (only present when
      ``stack_info=True``)

    Args:
        service: Application name included in every log line.
        version: Application version string.  Omitted from
            output when empty.
    """

    def __init__(
        self,
        *,
        service: str = "",
        version: str = "",
    ) -> None:
        super().__init__()
        self._service = service
        self._version = version

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _record_time(record).to_iso8601(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self._service,
        }

        if self._version:
            entry["version"] = self._version

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


def configure_logging(
    settings: LoggingSettings,
    *,
    service: str,
    version: str = "",
) -> None:
    """Configure the root logger from settings.

    Clears any existing handlers on the root logger, then installs a
    ``stderr`` stream handler and, when ``settings.file`` is set, a
    :class:`~logging.handlers.RotatingFileHandler`
    (``settings.max_file_size_mb`` per file, ``settings.backup_count``
    generations).

    Args:
        settings: Logging configuration (level, format, file).
        service: Application name passed to :class:`JsonFormatter`.
        version: Application version passed to :class:`JsonFormatter`.
    """
    root = logging.getLogger()

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if settings.format == "json":
        formatter: logging.Formatter = JsonFormatter(service=service, version=version)
    else:
        formatter = logging.Formatter(_TEXT_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if settings.file is not None:
        file_handler = RotatingFileHandler(
            settings.file,
            maxBytes=settings.max_file_size_mb * _ONE_MB,
            backupCount=settings.backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(settings.level)
