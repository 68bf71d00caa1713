"""Exception hierarchy for cache discovery and processing."""

from __future__ import annotations

from pathlib import Path


class BiliCacheError(Exception):
    """Base class for tool errors.

    Attributes
    ----------
    exit_code : int
        Process exit code the CLI uses when the error ends a run.
    """

    exit_code: int = 1


class ConfigurationError(BiliCacheError):
    """Run configuration could not be validated."""


class InputPathError(BiliCacheError):
    """Input root is missing or is not a directory."""

    def __init__(self, path: Path, reason: str = "does not exist") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Input path {reason}: {path}")


class ReadError(BiliCacheError):
    """An entry file could not be read or decoded."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to read {path}: {cause}")


class StageError(BiliCacheError):
    """A processing stage rejected an entry file."""


class StageRegistryError(BiliCacheError):
    """Stage lookup or stage module loading failed."""
