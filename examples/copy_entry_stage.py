#!/usr/bin/env python3
"""Example stage module that mirrors each entry.json into the output root.

Usage:

    bilicache-tool -i ./download -o ./out \
        --stage-module examples/copy_entry_stage.py --stage copy_entry
"""

from __future__ import annotations

import shutil

from bilicache_tool.application.options import RunOptions
from bilicache_tool.application.results import FileContext
from bilicache_tool.errors import StageError
from bilicache_tool.stages.registry import StageRegistry


class CopyEntryStage:
    """Copy the entry file to the same relative location under ``output_root``."""

    name = "copy_entry"

    def process(self, context: FileContext, options: RunOptions) -> None:
        """Copy ``context.path`` below ``options.output_root``.

        Parameters
        ----------
        context : FileContext
            Snapshot of the entry file.
        options : RunOptions
            Run roots; only ``output_root`` is written.

        Raises
        ------
        StageError
            If the destination cannot be written.
        """
        target = options.output_root / context.relative_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(context.path, target)
        except OSError as exc:
            raise StageError(f"Unable to copy {context.relative_path}: {exc}") from exc


def register_stages(registry: StageRegistry) -> None:
    """Register example stages."""
    registry.register(CopyEntryStage())
