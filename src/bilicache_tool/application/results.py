"""Application-layer result objects."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from bilicache_tool.application.options import RunOptions
from bilicache_tool.types import SkipReason


@dataclass(frozen=True)
class DiscoveredEntry:
    """Entry file located during discovery."""

    absolute_path: Path
    relative_path: Path


@dataclass(frozen=True)
class SkippedPath:
    """Subtree the discoverer could not list."""

    path: Path
    reason: SkipReason
    message: str


@dataclass(frozen=True)
class DiscoveryResult:
    """Entries found under ``root`` plus any subtrees that were skipped."""

    root: Path
    entries: tuple[DiscoveredEntry, ...] = ()
    skipped: tuple[SkippedPath, ...] = ()

    @property
    def complete(self) -> bool:
        """Return ``True`` when every subtree was listed."""
        return not self.skipped


@dataclass(frozen=True)
class FileContext:
    """Read-only snapshot of one entry file.

    Parameters
    ----------
    path : Path
        Absolute path of the entry file.
    relative_path : Path
        Path relative to the input root.
    content_bytes : bytes
        Raw file content.
    text : str
        Content decoded as UTF-8.
    size_bytes : int
        File size reported by ``stat``.
    last_modified : datetime
        Local modification time.
    relative_dir : Path
        Directory holding the file, relative to the input root.
    """

    path: Path
    relative_path: Path
    content_bytes: bytes = field(repr=False)
    text: str = field(repr=False)
    size_bytes: int
    last_modified: datetime
    relative_dir: Path


@dataclass(frozen=True)
class ProcessingOutcome:
    """Result of processing one discovered entry."""

    entry: DiscoveredEntry
    succeeded: bool
    error_message: str | None = None


@dataclass(frozen=True)
class RunSummary:
    """Totals derived from the outcome log."""

    total_discovered: int = 0
    total_succeeded: int = 0
    total_failed: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: Sequence[ProcessingOutcome]) -> RunSummary:
        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        return cls(
            total_discovered=len(outcomes),
            total_succeeded=succeeded,
            total_failed=len(outcomes) - succeeded,
        )


@dataclass(frozen=True)
class RunReport:
    """Structured outcome of a full run."""

    options: RunOptions
    discovery: DiscoveryResult
    outcomes: tuple[ProcessingOutcome, ...]
    summary: RunSummary
