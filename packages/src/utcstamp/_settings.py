"""Configuration via pydantic-settings.

Configuration is loaded from environment variables prefixed with
``UTCSTAMP_`` and/or a ``.env`` file.  Nested models use ``__`` as the
delimiter, e.g. ``UTCSTAMP_LOGGING__LEVEL=DEBUG``.

The schema covers:

* **Logging** — level, format, optional file sink, rotation.
* **Calendar** — whether the cycle table is built at startup.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# -------------------------------------------------------------------
# Sub-models (BaseModel, NOT BaseSettings — nested via composition)
# -------------------------------------------------------------------


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file
    (size-based rotation, ``backup_count`` generations kept).  When
    ``None``, logs go to stderr only.

    The ``format`` field selects the output format:

    - ``"json"`` — one JSON object per line, for log aggregators.
    - ``"text"`` (default) — human-readable timestamped lines.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format, 'json' or 'text'.",
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description=(
            "Maximum log file size in megabytes before rotation. "
            "Only applies when ``file`` is set."
        ),
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


class CalendarSettings(BaseModel):
    """Calendar cycle table options.

    Environment variables::

        UTCSTAMP_CALENDAR__PREBUILD=true
    """

    prebuild: bool = Field(
        default=False,
        description=(
            "Build the 400-year cycle table at startup instead of on "
            "the first conversion."
        ),
    )


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings.

    Example ``.env``::

        UTCSTAMP_LOGGING__LEVEL=DEBUG
        UTCSTAMP_LOGGING__FORMAT=json
        UTCSTAMP_CALENDAR__PREBUILD=true
    """

    model_config = SettingsConfigDict(
        env_prefix="UTCSTAMP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
    calendar: CalendarSettings = Field(
        default_factory=CalendarSettings,
        description="Calendar cycle table options.",
    )
