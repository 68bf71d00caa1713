"""Progress reporter implementations."""

from __future__ import annotations

import logging
from functools import singledispatchmethod

import typer

from bilicache_tool.application.events import (
    DiscoveryCompleted,
    ItemFinished,
    ItemRead,
    ItemStarted,
    NothingFound,
    RunEvent,
    RunFinished,
    RunStarted,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConsoleProgressReporter:
    """Render run events as human-readable console lines.

    Progress and results go to stdout; skipped discovery subtrees go to
    stderr.
    """

    def emit(self, event: RunEvent) -> None:
        """Render a single event."""
        self._render(event)

    @singledispatchmethod
    def _render(self, event: object) -> None:
        logger.debug("No console rendering for %r", event)

    @_render.register
    def _(self, event: RunStarted) -> None:
        typer.echo(f"Input : {event.options.input_root}")
        typer.echo(f"Output: {event.options.output_root}")

    @_render.register
    def _(self, event: DiscoveryCompleted) -> None:
        discovery = event.discovery
        for skipped in discovery.skipped:
            typer.echo(
                f"⚠ Skipped {skipped.path} ({skipped.reason}): {skipped.message}",
                err=True,
            )
        if not discovery.entries:
            return
        typer.echo(f"\nFound {len(discovery.entries)} entry.json file(s):")
        for entry in discovery.entries:
            typer.echo(f"  - {entry.relative_path}")

    @_render.register
    def _(self, event: NothingFound) -> None:
        typer.echo(f"\nNo entry.json files found under {event.root}")

    @_render.register
    def _(self, event: ItemStarted) -> None:
        typer.echo(f"\n[{event.index}/{event.total}] Processing: {event.entry.relative_path}")

    @_render.register
    def _(self, event: ItemRead) -> None:
        typer.echo(f"  Size: {event.size_bytes} bytes")
        typer.echo(f"  Modified: {event.last_modified.strftime(TIMESTAMP_FORMAT)}")
        typer.echo(f"  Directory: {event.relative_dir}")

    @_render.register
    def _(self, event: ItemFinished) -> None:
        if event.outcome.succeeded:
            typer.echo("  ✓ Done")
        else:
            typer.echo(f"  ✗ Failed: {event.outcome.error_message}")

    @_render.register
    def _(self, event: RunFinished) -> None:
        summary = event.summary
        typer.echo(
            f"\n✓ Processed {summary.total_discovered} file(s): "
            f"{summary.total_succeeded} succeeded, {summary.total_failed} failed"
        )


class LoggingProgressReporter:
    """Send run events to the ``logging`` module.

    Used when no reporter is supplied to the run use-case.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def emit(self, event: RunEvent) -> None:
        """Log a single event."""
        if isinstance(event, RunStarted):
            self._log.info(
                "Run started: input=%s output=%s",
                event.options.input_root,
                event.options.output_root,
            )
        elif isinstance(event, DiscoveryCompleted):
            self._log.info(
                "Discovery found %d entries under %s",
                len(event.discovery.entries),
                event.discovery.root,
            )
            for skipped in event.discovery.skipped:
                self._log.warning("Skipped %s: %s", skipped.path, skipped.message)
        elif isinstance(event, NothingFound):
            self._log.info("No entry.json files found under %s", event.root)
        elif isinstance(event, ItemStarted):
            self._log.info(
                "[%d/%d] %s", event.index, event.total, event.entry.relative_path
            )
        elif isinstance(event, ItemFinished) and not event.outcome.succeeded:
            self._log.warning(
                "[%d/%d] %s failed: %s",
                event.index,
                event.total,
                event.outcome.entry.relative_path,
                event.outcome.error_message,
            )
        elif isinstance(event, RunFinished):
            self._log.info(
                "Run finished: %d discovered, %d succeeded, %d failed",
                event.summary.total_discovered,
                event.summary.total_succeeded,
                event.summary.total_failed,
            )
