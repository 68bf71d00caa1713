"""Discover and process Bilibili cache ``entry.json`` files."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from bilicache_tool.types import PathLike

if TYPE_CHECKING:
    from bilicache_tool.application.ports import ProgressReporter
    from bilicache_tool.application.results import RunReport

__version__ = "0.1.0"


def process_cache_directory(
    input_path: PathLike,
    output_path: PathLike,
    *,
    stage_names: Iterable[str] | None = None,
    stage_modules: Iterable[str] | None = None,
    reporter: ProgressReporter | None = None,
) -> RunReport:
    """Discover and process every ``entry.json`` below ``input_path``.

    Parameters
    ----------
    input_path : str | Path
        Existing cache directory to scan.
    output_path : str | Path
        Root directory handed to processing stages.
    stage_names : Iterable[str] | None, optional
        Stages to run for each entry. Defaults to ``("non_empty",)``.
    stage_modules : Iterable[str] | None, optional
        Import paths or file paths of modules providing extra stages.
    reporter : ProgressReporter | None, optional
        Receiver for progress events. Defaults to logging.

    Returns
    -------
    RunReport
        Discovery result, per-entry outcomes and summary.

    Raises
    ------
    InputPathError
        If ``input_path`` does not exist or is not a directory.
    StageRegistryError
        If a stage name or stage module cannot be resolved.
    """
    from .api import process_cache_directory as _impl

    return _impl(
        input_path,
        output_path,
        stage_names=stage_names,
        stage_modules=stage_modules,
        reporter=reporter,
    )


__all__ = ["process_cache_directory"]
