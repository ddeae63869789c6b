# src/engine/copier.py - v1
"""Stream file contents from source to target (engine phase 2).

Each copy opens and releases its own handles. Bytes move through a
bounded buffer so memory stays flat however many workers run at once.
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from treecopy.core.errors import (
    FileCopyError,
    FileCreateError,
    FileOpenError,
    FileTransferError,
)
from treecopy.engine.replicator import target_path_for

if TYPE_CHECKING:
    from treecopy.engine.progress import ProgressReporter

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 32 * 1024


def copy_file(src: str, dst: str, buffer_size: int = DEFAULT_BUFFER_SIZE) -> int:
    """Copy the bytes of ``src`` into ``dst``, truncating any existing file.

    Returns:
        Number of bytes written.

    Raises:
        FileOpenError: Source cannot be opened for reading.
        FileCreateError: Target cannot be created or truncated.
        FileCopyError: Reading or writing failed part way through.
    """
    try:
        fsrc = open(src, "rb")
    except OSError as exc:
        raise FileOpenError(src, exc) from exc

    with fsrc:
        try:
            if os.path.exists(dst) and os.path.samefile(src, dst):
                raise shutil.SameFileError(f"{src} and {dst} are the same file")
            fdst = open(dst, "wb")
        except OSError as exc:
            raise FileCreateError(dst, exc) from exc

        with fdst:
            try:
                shutil.copyfileobj(fsrc, fdst, length=buffer_size)
                return fdst.tell()
            except OSError as exc:
                raise FileCopyError(src, exc) from exc


class FileCopier:
    """Copies chunks of files and reports each one to the progress reporter."""

    def __init__(
        self,
        source_root: str | Path,
        target_root: str | Path,
        reporter: ProgressReporter,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._source_root = os.fspath(source_root)
        self._target_root = os.fspath(target_root)
        self._reporter = reporter
        self._buffer_size = buffer_size
        self._lock = threading.Lock()
        self._failures = 0

    @property
    def failures(self) -> int:
        """Failed files across every chunk handled so far."""
        with self._lock:
            return self._failures

    def copy_chunk(self, chunk: Iterable[str]) -> int:
        """Copy every file in ``chunk``, continuing past failures.

        The reporter advances once per file whether or not the copy
        succeeded, so the final count always matches the scan total.

        Returns:
            Number of files in the chunk that failed.
        """
        failed = 0
        for src in chunk:
            dst = target_path_for(self._source_root, self._target_root, src)
            nbytes = 0
            try:
                nbytes = copy_file(src, dst, self._buffer_size)
            except FileTransferError as exc:
                failed += 1
                logger.error("%s", exc, extra={"data": exc.log_data()})
            finally:
                self._reporter.increment(nbytes)

        if failed:
            with self._lock:
                self._failures += failed
        return failed
