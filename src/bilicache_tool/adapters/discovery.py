"""Recursive entry-file discovery on the local filesystem."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from bilicache_tool.application.results import (
    DiscoveredEntry,
    DiscoveryResult,
    SkippedPath,
)
from bilicache_tool.types import SkipReason

logger = logging.getLogger(__name__)

ENTRY_FILE_NAME = "entry.json"


def _skip_reason(exc: OSError) -> SkipReason:
    if isinstance(exc, PermissionError):
        return "permission_denied"
    if isinstance(exc, FileNotFoundError):
        return "not_found"
    return "os_error"


def _skipped_from_error(exc: OSError, fallback: Path) -> SkippedPath:
    path = Path(exc.filename) if exc.filename else fallback
    return SkippedPath(
        path=path,
        reason=_skip_reason(exc),
        message=exc.strerror or str(exc),
    )


class FilesystemEntryDiscoverer:
    """Find every regular file named ``entry.json`` below a root.

    Directories are visited top-down in sorted order so repeated calls on an
    unchanged tree return entries in the same order. A subtree that cannot be
    listed is recorded in ``DiscoveryResult.skipped`` and the walk continues.

    Parameters
    ----------
    file_name : str, default="entry.json"
        Exact (case-sensitive) file name to match.
    follow_symlinks : bool, default=False
        Whether to descend into symlinked directories.
    """

    def __init__(
        self,
        file_name: str = ENTRY_FILE_NAME,
        follow_symlinks: bool = False,
    ) -> None:
        self.file_name = file_name
        self.follow_symlinks = follow_symlinks

    def discover(self, root: Path) -> DiscoveryResult:
        """Walk ``root`` and collect matching entries.

        Parameters
        ----------
        root : Path
            Existing directory to scan.

        Returns
        -------
        DiscoveryResult
            Matching entries in walk order and any skipped subtrees.
        """
        root_path = Path(root)
        entries: list[DiscoveredEntry] = []
        skipped: list[SkippedPath] = []

        def _on_error(exc: OSError) -> None:
            item = _skipped_from_error(exc, root_path)
            logger.warning("Skipping %s (%s): %s", item.path, item.reason, item.message)
            skipped.append(item)

        for dirpath, dirnames, filenames in os.walk(
            root_path, onerror=_on_error, followlinks=self.follow_symlinks
        ):
            dirnames.sort()
            if self.file_name not in filenames:
                continue

            candidate = Path(dirpath) / self.file_name
            try:
                is_regular = candidate.is_file()
            except OSError as exc:
                _on_error(exc)
                continue
            if not is_regular:
                logger.debug("Ignoring non-regular %s", candidate)
                continue

            entries.append(
                DiscoveredEntry(
                    absolute_path=candidate,
                    relative_path=candidate.relative_to(root_path),
                )
            )

        logger.info(
            "Discovered %d %s file(s) under %s (%d skipped)",
            len(entries),
            self.file_name,
            root_path,
            len(skipped),
        )
        return DiscoveryResult(
            root=root_path,
            entries=tuple(entries),
            skipped=tuple(skipped),
        )
