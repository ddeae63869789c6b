# tests/unit/core/test_unit_errors.py - v1
"""Tests for core/errors.py - messages and hierarchy."""

from __future__ import annotations

from treecopy.core.errors import (
    DirectoryCreateError,
    EntryError,
    FileCopyError,
    FileCreateError,
    FileOpenError,
    FileTransferError,
    QueueFullError,
    SameTreeError,
    ScanError,
    TreeCopyError,
)


class TestHierarchy:
    def test_all_derive_from_base(self):
        for cls in (ScanError, SameTreeError, DirectoryCreateError, FileOpenError, QueueFullError):
            assert issubclass(cls, TreeCopyError)

    def test_file_errors_share_base(self):
        for cls in (FileOpenError, FileCreateError, FileCopyError):
            assert issubclass(cls, FileTransferError)
            assert issubclass(cls, EntryError)

    def test_directory_error_is_not_file_error(self):
        assert not issubclass(DirectoryCreateError, FileTransferError)


class TestMessages:
    def test_scan_error(self):
        err = ScanError("/src", "no such directory")
        assert err.path == "/src"
        assert str(err) == "Cannot scan /src: no such directory"

    def test_entry_error_includes_path_and_cause(self):
        cause = PermissionError(13, "Permission denied")
        err = FileOpenError("/src/a.txt", cause)
        assert err.path == "/src/a.txt"
        assert err.cause is cause
        assert "open source file /src/a.txt" in str(err)
        assert "Permission denied" in str(err)

    def test_entry_error_without_cause(self):
        assert str(DirectoryCreateError("/dst/x")) == "Failed to create directory /dst/x"

    def test_same_tree_error(self):
        err = SameTreeError("/src", "/src/.")
        assert err.source == "/src"
        assert err.target == "/src/."
        assert str(err) == "Target /src/. is the same directory as source /src"


class TestLogData:
    def test_with_cause(self):
        err = FileCreateError("/dst/a", PermissionError(13, "Permission denied"))
        data = err.log_data()
        assert data["action"] == "create target file"
        assert data["path"] == "/dst/a"
        assert "Permission denied" in data["error"]

    def test_without_cause(self):
        assert DirectoryCreateError("/dst/x").log_data() == {
            "action": "create directory", "path": "/dst/x",
        }
