"""Typed option objects shared across run use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunOptions:
    """Absolute input/output roots for one run.

    ``output_root`` is forwarded to stages and never read by the core.
    """

    input_root: Path
    output_root: Path
