"""File context loading for discovered entries."""

from __future__ import annotations

from datetime import datetime

from bilicache_tool.application.options import RunOptions
from bilicache_tool.application.results import DiscoveredEntry, FileContext
from bilicache_tool.errors import ReadError


class FilesystemContextReader:
    """Read an entry file's bytes, decoded text and stat metadata."""

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def read(self, entry: DiscoveredEntry, options: RunOptions) -> FileContext:
        """Load a snapshot of ``entry``.

        Parameters
        ----------
        entry : DiscoveredEntry
            Entry produced by discovery.
        options : RunOptions
            Current run options (unused by the filesystem reader).

        Returns
        -------
        FileContext
            Content and metadata of the entry file.

        Raises
        ------
        ReadError
            If the file vanished, is unreadable, or is not valid text.
        """
        del options
        path = entry.absolute_path
        try:
            content = path.read_bytes()
            stat = path.stat()
            text = content.decode(self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(path, exc) from exc

        return FileContext(
            path=path,
            relative_path=entry.relative_path,
            content_bytes=content,
            text=text,
            size_bytes=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
            relative_dir=entry.relative_path.parent,
        )
