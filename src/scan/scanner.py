# src/scan/scanner.py - v1
"""Directory scanner: one single-threaded walk of the source tree.

The walk is top-down, so every directory is listed before anything
beneath it, and entries within a directory are visited in name order.
Any unreadable entry aborts the scan; a partial scan is never returned.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from treecopy.core.errors import ScanError
from treecopy.core.models import ScanResult

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Collect every directory and file reachable under a root.

    Symbolic links are not followed: a link is recorded as a file with
    the size of the link itself.
    """

    def scan(self, root: str | Path) -> ScanResult:
        """Walk ``root`` and return the full inventory.

        Args:
            root: Source directory to scan.

        Returns:
            ScanResult with directories (root excluded), files, file count
            and total byte size.

        Raises:
            ScanError: If root does not exist, is not a directory, or any
                entry under it cannot be read.
        """
        root_str = os.fspath(root)
        if not os.path.exists(root_str):
            raise ScanError(root_str, "no such directory")
        if not os.path.isdir(root_str):
            raise ScanError(root_str, "not a directory")

        t0 = time.perf_counter()
        directories: list[str] = []
        files: list[str] = []
        total_bytes = 0

        pending = [root_str]
        while pending:
            current = pending.pop()
            subdirs: list[str] = []
            for entry in self._list_dir(current):
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    size = 0 if is_dir else entry.stat(follow_symlinks=False).st_size
                except OSError as exc:
                    raise ScanError(entry.path, exc.strerror or str(exc)) from exc

                if is_dir:
                    directories.append(entry.path)
                    subdirs.append(entry.path)
                else:
                    files.append(entry.path)
                    total_bytes += size
            # Reversed so the stack pops subdirectories in name order
            pending.extend(reversed(subdirs))

        logger.debug(
            "Scanned %s: %d files, %d directories, %d bytes in %.3fs",
            root_str, len(files), len(directories), total_bytes,
            time.perf_counter() - t0,
        )
        return ScanResult(
            root=root_str,
            file_count=len(files),
            total_bytes=total_bytes,
            directories=directories,
            files=files,
        )

    @staticmethod
    def _list_dir(path: str) -> list[os.DirEntry[str]]:
        """Read one directory's entries sorted by name."""
        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError as exc:
            raise ScanError(path, exc.strerror or str(exc)) from exc
        entries.sort(key=lambda e: e.name)
        return entries
