#!/usr/bin/env python3
"""
bilicache_tool.cli.cli

Typer-based CLI that scans a Bilibili cache directory for ``entry.json``
files and runs each through the configured processing stages.

Examples
--------
Scan a cache directory with the default stage:

    bilicache-tool --input ./download --output ./out

Also require every entry to be a JSON object:

    bilicache-tool -i ./download -o ./out --stage non_empty --stage json_document
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Sequence
from enum import Enum

import click
import typer

from bilicache_tool.errors import BiliCacheError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="bilicache-tool",
    help="Discover and process entry.json files in a Bilibili cache directory.",
    add_completion=False,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class LogLevel(str, Enum):
    """Accepted values for ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def _configure_logging(level: LogLevel) -> None:
    """Send library logging to stderr at the requested level."""
    logging.basicConfig(level=level.value, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("bilicache_tool").setLevel(level.value)


def _print_run_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly fatal error.

    Parameters
    ----------
    exc : Exception
        Exception that ended the run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


@app.command()
def run_cmd(
    input_path: str = typer.Option(
        ...,
        "--input",
        "-i",
        envvar="BILICACHE_INPUT",
        help="Cache directory to scan for entry.json files.",
    ),
    output_path: str = typer.Option(
        ...,
        "--output",
        "-o",
        envvar="BILICACHE_OUTPUT",
        help="Root directory processing stages write into.",
    ),
    stage: list[str] | None = typer.Option(
        None,
        "--stage",
        help="Processing stage name (repeatable). Defaults to non_empty.",
    ),
    stage_module: list[str] | None = typer.Option(
        None,
        "--stage-module",
        help="Stage module import path or file path (repeatable).",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING,
        "--log-level",
        envvar="BILICACHE_LOG_LEVEL",
        case_sensitive=False,
        help="Logging level for diagnostics on stderr.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
) -> None:
    """Discover entry.json files under INPUT and process them one by one.

    Notes
    -----
    - Per-file failures are reported but do not change the exit code.
    - A missing input directory or an unknown stage exits with code 1.
    """
    _configure_logging(log_level)

    try:
        from bilicache_tool.api import process_cache_directory
        from bilicache_tool.infrastructure.reporters import ConsoleProgressReporter

        process_cache_directory(
            input_path,
            output_path,
            stage_names=stage or None,
            stage_modules=stage_module or None,
            reporter=ConsoleProgressReporter(),
        )
    except BiliCacheError as exc:
        raise typer.Exit(code=_print_run_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        logger.exception("Unexpected failure during run")
        raise typer.Exit(code=_print_run_error(exc, debug))


def main(argv: Sequence[str] | None = None) -> int:
    """Console entrypoint; argument errors exit with code 1.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code.
    """
    try:
        result = app(
            args=list(argv) if argv is not None else None,
            prog_name="bilicache-tool",
            standalone_mode=False,
        )
    except click.ClickException as exc:
        exc.show()
        return 1
    except click.exceptions.Abort:
        typer.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
