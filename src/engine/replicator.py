# src/engine/replicator.py - v1
"""Recreate source directories under the target root (engine phase 1)."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable
from pathlib import Path

from treecopy.core.errors import DirectoryCreateError

logger = logging.getLogger(__name__)


def target_path_for(source_root: str, target_root: str, path: str) -> str:
    """Map a path under ``source_root`` to the same relative path under ``target_root``."""
    relative = os.path.relpath(path, source_root)
    return os.path.normpath(os.path.join(target_root, relative))


class FolderReplicator:
    """Best-effort directory creation; a failed entry never stops the rest."""

    def __init__(self, source_root: str | Path, target_root: str | Path) -> None:
        self._source_root = os.fspath(source_root)
        self._target_root = os.fspath(target_root)
        self._lock = threading.Lock()
        self._failures = 0

    @property
    def failures(self) -> int:
        """Failed directories across every chunk handled so far."""
        with self._lock:
            return self._failures

    def replicate(self, chunk: Iterable[str]) -> int:
        """Create the target directory chain for each source directory.

        Returns:
            Number of directories in the chunk that could not be created.
        """
        failed = 0
        for folder in chunk:
            target = target_path_for(self._source_root, self._target_root, folder)
            try:
                self.create_directory(target)
            except DirectoryCreateError as exc:
                failed += 1
                logger.error("%s", exc, extra={"data": exc.log_data()})

        if failed:
            with self._lock:
                self._failures += failed
        return failed

    @staticmethod
    def create_directory(path: str) -> None:
        """``mkdir -p``; an existing directory is not an error."""
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateError(path, exc) from exc
