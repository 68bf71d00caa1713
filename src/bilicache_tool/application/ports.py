"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from bilicache_tool.application.events import RunEvent
from bilicache_tool.application.options import RunOptions
from bilicache_tool.application.results import (
    DiscoveredEntry,
    DiscoveryResult,
    FileContext,
)


class EntryDiscoverer(Protocol):
    """List entry files under a root directory."""

    def discover(self, root: Path) -> DiscoveryResult:
        """Return entries found under ``root`` and skipped subtrees."""


class FileContextReader(Protocol):
    """Load content and stat metadata for one discovered entry."""

    def read(self, entry: DiscoveredEntry, options: RunOptions) -> FileContext:
        """Raise ``ReadError`` when the file cannot be loaded."""


@runtime_checkable
class ProcessingStage(Protocol):
    """Per-file transformation step."""

    name: str

    def process(self, context: FileContext, options: RunOptions) -> None:
        """Raise on failure; returning means the stage succeeded."""


class ProgressReporter(Protocol):
    """Consume progress events."""

    def emit(self, event: RunEvent) -> None:
        """Render or record a single event."""
