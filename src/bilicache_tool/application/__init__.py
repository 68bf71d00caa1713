"""Application-layer use-cases, events and result objects."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from bilicache_tool.application.options import RunOptions
from bilicache_tool.application.ports import (
    EntryDiscoverer,
    FileContextReader,
    ProcessingStage,
    ProgressReporter,
)
from bilicache_tool.application.results import (
    DiscoveredEntry,
    DiscoveryResult,
    FileContext,
    ProcessingOutcome,
    RunReport,
    RunSummary,
    SkippedPath,
)
from bilicache_tool.types import PathLike


def build_run_options(input_path: PathLike, output_path: PathLike) -> RunOptions:
    """Build typed run options via lazy use-case import."""
    from bilicache_tool.application.use_cases import build_run_options as _impl

    return _impl(input_path, output_path)


def resolve_stages(
    stage_names: Iterable[str] | None = None,
    stage_modules: Iterable[str] | None = None,
) -> list[ProcessingStage]:
    """Resolve processing stages via lazy use-case import."""
    from bilicache_tool.application.use_cases import resolve_stages as _impl

    return _impl(stage_names=stage_names, stage_modules=stage_modules)


def run_cache_tool(
    options: RunOptions,
    *,
    discoverer: EntryDiscoverer | None = None,
    reader: FileContextReader | None = None,
    stages: Sequence[ProcessingStage] | None = None,
    reporter: ProgressReporter | None = None,
) -> RunReport:
    """Run discovery and processing via lazy use-case import."""
    from bilicache_tool.application.use_cases import run_cache_tool as _impl

    return _impl(
        options,
        discoverer=discoverer,
        reader=reader,
        stages=stages,
        reporter=reporter,
    )


__all__ = [
    "DiscoveredEntry",
    "DiscoveryResult",
    "FileContext",
    "ProcessingOutcome",
    "RunOptions",
    "RunReport",
    "RunSummary",
    "SkippedPath",
    "build_run_options",
    "resolve_stages",
    "run_cache_tool",
]
