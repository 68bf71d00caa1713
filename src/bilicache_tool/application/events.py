"""Progress events emitted by the run orchestrator and pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from bilicache_tool.application.options import RunOptions
from bilicache_tool.application.results import (
    DiscoveredEntry,
    DiscoveryResult,
    ProcessingOutcome,
    RunSummary,
)


@dataclass(frozen=True)
class RunStarted:
    options: RunOptions


@dataclass(frozen=True)
class DiscoveryCompleted:
    discovery: DiscoveryResult


@dataclass(frozen=True)
class NothingFound:
    root: Path


@dataclass(frozen=True)
class ItemStarted:
    """Emitted before an item is read; ``index`` is 1-based."""

    index: int
    total: int
    entry: DiscoveredEntry


@dataclass(frozen=True)
class ItemRead:
    """Emitted once an item's content and stat metadata are loaded."""

    index: int
    total: int
    entry: DiscoveredEntry
    size_bytes: int
    last_modified: datetime
    relative_dir: Path


@dataclass(frozen=True)
class ItemFinished:
    index: int
    total: int
    outcome: ProcessingOutcome


@dataclass(frozen=True)
class RunFinished:
    summary: RunSummary


type RunEvent = (
    RunStarted
    | DiscoveryCompleted
    | NothingFound
    | ItemStarted
    | ItemRead
    | ItemFinished
    | RunFinished
)
