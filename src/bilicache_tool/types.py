"""Shared type aliases used across modules."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

type PathLike = str | Path
type SkipReason = Literal["permission_denied", "not_found", "os_error"]
