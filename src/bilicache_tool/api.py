"""Public directory-processing API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable

from bilicache_tool.application.ports import ProgressReporter
from bilicache_tool.application.results import RunReport
from bilicache_tool.application.use_cases import (
    build_run_options,
    resolve_stages,
    run_cache_tool,
)
from bilicache_tool.types import PathLike


def process_cache_directory(
    input_path: PathLike,
    output_path: PathLike,
    *,
    stage_names: Iterable[str] | None = None,
    stage_modules: Iterable[str] | None = None,
    reporter: ProgressReporter | None = None,
) -> RunReport:
    """Discover every ``entry.json`` under ``input_path`` and process it."""
    options = build_run_options(input_path, output_path)
    stages = resolve_stages(stage_names=stage_names, stage_modules=stage_modules)
    return run_cache_tool(options, stages=stages, reporter=reporter)
