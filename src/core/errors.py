# src/core/errors.py - v1
"""Exception hierarchy for scan, replication, copy and pool failures.

Only ScanError and SameTreeError are fatal to a run. Per-entry errors are
logged and skipped, and QueueFullError is recovered by running the chunk
on the caller.
"""

from __future__ import annotations


class TreeCopyError(Exception):
    """Base class for all treecopy errors."""


class ScanError(TreeCopyError):
    """Source root missing, not a directory, or an entry is unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot scan {path}: {reason}")


class SameTreeError(TreeCopyError):
    """Target resolves to the source directory itself."""

    def __init__(self, source: str, target: str) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Target {target} is the same directory as source {source}")


class EntryError(TreeCopyError):
    """A failure bound to a single directory or file entry."""

    action = "process"

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to {self.action} {path}{detail}")

    def log_data(self) -> dict[str, str]:
        """Structured fields for the ``data`` key of JSON log records."""
        data = {"action": self.action, "path": self.path}
        if self.cause is not None:
            data["error"] = str(self.cause)
        return data


class DirectoryCreateError(EntryError):
    action = "create directory"


class FileTransferError(EntryError):
    """Base for the per-file copy failures."""


class FileOpenError(FileTransferError):
    action = "open source file"


class FileCreateError(FileTransferError):
    action = "create target file"


class FileCopyError(FileTransferError):
    action = "copy file"


class QueueFullError(TreeCopyError):
    """No idle worker was ready to take a submitted task."""


class PoolClosedError(TreeCopyError):
    """Task submitted to a pool that has already been stopped."""
