"""Application use-cases orchestrating discovery and processing runs."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from bilicache_tool.adapters.discovery import FilesystemEntryDiscoverer
from bilicache_tool.adapters.readers import FilesystemContextReader
from bilicache_tool.application.events import (
    DiscoveryCompleted,
    ItemFinished,
    ItemRead,
    ItemStarted,
    NothingFound,
    RunFinished,
    RunStarted,
)
from bilicache_tool.application.options import RunOptions
from bilicache_tool.application.ports import (
    EntryDiscoverer,
    FileContextReader,
    ProcessingStage,
    ProgressReporter,
)
from bilicache_tool.application.results import (
    DiscoveredEntry,
    ProcessingOutcome,
    RunReport,
    RunSummary,
)
from bilicache_tool.errors import (
    ConfigurationError,
    InputPathError,
    ReadError,
    StageError,
    StageRegistryError,
)
from bilicache_tool.infrastructure.reporters import LoggingProgressReporter
from bilicache_tool.schemas import DEFAULT_STAGE_NAMES, RunConfig, StageResolutionConfig
from bilicache_tool.stages.registry import create_default_registry
from bilicache_tool.types import PathLike

logger = logging.getLogger(__name__)


def build_run_options(input_path: PathLike, output_path: PathLike) -> RunOptions:
    """Resolve user-supplied paths into absolute run options."""
    for label, raw in (("input", input_path), ("output", output_path)):
        if not str(raw).strip():
            raise ConfigurationError(f"The {label} path cannot be empty.")
    try:
        config = RunConfig(
            input_root=os.path.abspath(os.fspath(input_path)),
            output_root=os.path.abspath(os.fspath(output_path)),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid run parameters: {exc}") from exc
    return RunOptions(input_root=config.input_root, output_root=config.output_root)


def resolve_stages(
    stage_names: Iterable[str] | None = None,
    stage_modules: Iterable[str] | None = None,
) -> list[ProcessingStage]:
    """Use-case: turn stage names into registered stage instances."""
    try:
        config = StageResolutionConfig(
            stage_names=list(stage_names or DEFAULT_STAGE_NAMES),
            stage_modules=list(stage_modules or []),
        )
    except ValidationError as exc:
        raise StageRegistryError(f"Invalid stage selection: {exc}") from exc

    registry = create_default_registry(extra_modules=config.stage_modules)
    return [registry.get(name) for name in config.stage_names]


def process_entries(
    entries: Sequence[DiscoveredEntry],
    options: RunOptions,
    *,
    reader: FileContextReader,
    stages: Sequence[ProcessingStage],
    reporter: ProgressReporter,
) -> list[ProcessingOutcome]:
    """Use-case: process entries one at a time, in order, isolating failures.

    Parameters
    ----------
    entries : Sequence[DiscoveredEntry]
        Entries in discovery order.
    options : RunOptions
        Run roots forwarded to every stage.
    reader : FileContextReader
        Loads each entry immediately before its stages run.
    stages : Sequence[ProcessingStage]
        Stages applied in order; the first failure ends the item.
    reporter : ProgressReporter
        Receives ``ItemStarted``/``ItemRead``/``ItemFinished`` events.

    Returns
    -------
    list[ProcessingOutcome]
        One outcome per entry, in the same order as ``entries``.
    """
    total = len(entries)
    outcomes: list[ProcessingOutcome] = []
    for index, entry in enumerate(entries, start=1):
        reporter.emit(ItemStarted(index=index, total=total, entry=entry))
        outcome = _process_entry(
            index=index,
            total=total,
            entry=entry,
            options=options,
            reader=reader,
            stages=stages,
            reporter=reporter,
        )
        outcomes.append(outcome)
        reporter.emit(ItemFinished(index=index, total=total, outcome=outcome))
    return outcomes


def _process_entry(
    *,
    index: int,
    total: int,
    entry: DiscoveredEntry,
    options: RunOptions,
    reader: FileContextReader,
    stages: Sequence[ProcessingStage],
    reporter: ProgressReporter,
) -> ProcessingOutcome:
    try:
        context = reader.read(entry, options)
    except ReadError as exc:
        logger.warning("Read failed for %s: %s", entry.relative_path, exc.cause)
        return ProcessingOutcome(entry=entry, succeeded=False, error_message=str(exc))
    except Exception as exc:
        logger.exception("Reader raised unexpectedly for %s", entry.relative_path)
        return ProcessingOutcome(
            entry=entry,
            succeeded=False,
            error_message=f"read: {type(exc).__name__}: {exc}",
        )

    reporter.emit(
        ItemRead(
            index=index,
            total=total,
            entry=entry,
            size_bytes=context.size_bytes,
            last_modified=context.last_modified,
            relative_dir=context.relative_dir,
        )
    )

    for stage in stages:
        try:
            stage.process(context, options)
        except StageError as exc:
            logger.warning(
                "Stage %s failed for %s: %s", stage.name, entry.relative_path, exc
            )
            return ProcessingOutcome(
                entry=entry, succeeded=False, error_message=f"{stage.name}: {exc}"
            )
        except Exception as exc:
            logger.exception(
                "Stage %s raised unexpectedly for %s", stage.name, entry.relative_path
            )
            return ProcessingOutcome(
                entry=entry,
                succeeded=False,
                error_message=f"{stage.name}: {type(exc).__name__}: {exc}",
            )
    return ProcessingOutcome(entry=entry, succeeded=True)


def run_cache_tool(
    options: RunOptions,
    *,
    discoverer: EntryDiscoverer | None = None,
    reader: FileContextReader | None = None,
    stages: Sequence[ProcessingStage] | None = None,
    reporter: ProgressReporter | None = None,
) -> RunReport:
    """Use-case: validate the input root, discover entries, then process them.

    Discovery is fully materialized before the first item is processed.

    Raises
    ------
    InputPathError
        If ``options.input_root`` is missing or not a directory. No discovery
        happens in that case.
    """
    discoverer = discoverer or FilesystemEntryDiscoverer()
    reader = reader or FilesystemContextReader()
    stages = list(stages) if stages is not None else resolve_stages()
    reporter = reporter or LoggingProgressReporter()

    reporter.emit(RunStarted(options=options))

    root = options.input_root
    if not root.exists():
        raise InputPathError(root)
    if not root.is_dir():
        raise InputPathError(root, reason="is not a directory")

    discovery = discoverer.discover(root)
    reporter.emit(DiscoveryCompleted(discovery=discovery))

    outcomes: list[ProcessingOutcome] = []
    if discovery.entries:
        outcomes = process_entries(
            discovery.entries,
            options,
            reader=reader,
            stages=stages,
            reporter=reporter,
        )
    else:
        reporter.emit(NothingFound(root=root))

    summary = RunSummary.from_outcomes(outcomes)
    reporter.emit(RunFinished(summary=summary))
    return RunReport(
        options=options,
        discovery=discovery,
        outcomes=tuple(outcomes),
        summary=summary,
    )
