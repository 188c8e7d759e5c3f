"""Command-line front end (Typer-based).

Provides :func:`build_cli`, which constructs a Typer app with global
options (``--version``, ``--log-level``, ``--log-format``,
``--env-file``) and the commands ``now``, ``parse``, ``format``,
``duration`` and ``diff``.
"""

from __future__ import annotations

import logging
from typing import Annotated, get_args

import typer
from pydantic import ValidationError

from utcstamp import __version__
from utcstamp._calendar import CalendarCycle
from utcstamp._duration import Duration
from utcstamp._errors import ParseError, build_error_payload
from utcstamp._iso8601 import ParseResult, parse_iso8601
from utcstamp._logging import configure_logging
from utcstamp._settings import LoggingSettings, Settings
from utcstamp._utc import UtcTime

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INPUT_ERROR = 2

# ---------------------------------------------------------------------------
# Allowed values (extracted from LoggingSettings Literal types)
# ---------------------------------------------------------------------------

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)
_VALID_LOG_FORMATS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["format"].annotation,
)

SERVICE_NAME = "utcstamp"


def _reject(result: ParseResult, *, as_json: bool) -> typer.Exit:
    """Report a failed parse on stderr and return the exit to raise."""
    if as_json:
        error = ParseError(result.text or '""', result.reason or "unknown error")
        typer.echo(build_error_payload(error).to_json(), err=True)
    else:
        typer.echo(result.error, err=True)
    return typer.Exit(EXIT_INPUT_ERROR)


def build_cli() -> typer.Typer:
    """Construct the ``utcstamp`` Typer application."""
    cli = typer.Typer(
        help=f"{SERVICE_NAME} v{__version__} — UTC timestamps, durations and ISO-8601 text",
    )

    # -- global options -----------------------------------------------------

    @cli.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        version_flag: Annotated[
            bool | None,
            typer.Option(
                "--version",
                is_eager=True,
                help="Show version and exit.",
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        log_format: Annotated[
            str | None,
            typer.Option("--log-format", help="Override log format."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        if version_flag:
            typer.echo(f"{SERVICE_NAME} v{__version__}")
            raise typer.Exit()

        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )

        if log_format is not None and log_format.lower() not in _VALID_LOG_FORMATS:
            raise typer.BadParameter(
                f"Invalid log format '{log_format}'. "
                f"Choose from: {', '.join(_VALID_LOG_FORMATS)}",
                param_hint="'--log-format'",
            )

        try:
            settings = Settings(_env_file=env_file)  # type: ignore[call-arg]
        except ValidationError as exc:
            typer.echo(f"Configuration error: {exc}", err=True)
            raise typer.Exit(EXIT_CONFIG_ERROR) from exc

        if log_level is not None:
            settings.logging = settings.logging.model_copy(
                update={"level": log_level.upper()},
            )
        if log_format is not None:
            settings.logging = settings.logging.model_copy(
                update={"format": log_format.lower()},
            )

        configure_logging(settings.logging, service=SERVICE_NAME, version=__version__)

        if settings.calendar.prebuild:
            CalendarCycle.get()

        ctx.obj = settings

        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

    # -- commands -------------------------------------------------------------

    @cli.command()
    def now(
        usec: Annotated[
            bool,
            typer.Option("--usec", help="Print raw microseconds since the epoch."),
        ] = False,
    ) -> None:
        """Print the current UTC time."""
        t = UtcTime.now()
        typer.echo(str(t.to_usec()) if usec else t.to_iso8601())

    @cli.command()
    def parse(
        text: Annotated[str, typer.Argument(help="ISO-8601 timestamp.")],
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Report failures as a JSON error payload."),
        ] = False,
    ) -> None:
        """Parse a timestamp and print microseconds since the epoch."""
        result = parse_iso8601(text)
        if result.value is None:
            raise _reject(result, as_json=as_json)
        typer.echo(str(result.value.to_usec()))

    @cli.command("format")
    def format_(
        usec: Annotated[
            int,
            typer.Argument(min=0, help="Microseconds since the epoch."),
        ],
    ) -> None:
        """Print a microsecond count as an ISO-8601 timestamp."""
        typer.echo(UtcTime.from_usec(usec).to_iso8601())

    @cli.command()
    def duration(
        usec: Annotated[int, typer.Argument(help="Microseconds.")],
    ) -> None:
        """Print a microsecond count as H:MM:SS.ffffff."""
        typer.echo(Duration.from_usec(usec).pretty_print())

    @cli.command()
    def diff(
        start: Annotated[str, typer.Argument(help="Earlier ISO-8601 timestamp.")],
        end: Annotated[str, typer.Argument(help="Later ISO-8601 timestamp.")],
    ) -> None:
        """Print END - START as H:MM:SS.ffffff."""
        parsed: list[UtcTime] = []
        for text in (start, end):
            result = parse_iso8601(text)
            if result.value is None:
                raise _reject(result, as_json=False)
            parsed.append(result.value)
        typer.echo(str(parsed[1] - parsed[0]))

    return cli


def main() -> None:
    """Console-script entry point."""
    build_cli()()
