# tests/unit/scan/test_unit_scanner.py - v1
"""Tests for scan.scanner - single-pass directory inventory."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from treecopy.core.errors import ScanError
from treecopy.scan.scanner import DirectoryScanner


class TestScanCounts:
    def test_scenario_counts(self, scenario_tree: Path):
        result = DirectoryScanner().scan(scenario_tree)
        assert result.file_count == 3
        assert result.total_bytes == 15
        assert result.folder_count == 3

    def test_lists_every_directory_once(self, scenario_tree: Path):
        result = DirectoryScanner().scan(scenario_tree)
        rel = sorted(os.path.relpath(d, scenario_tree) for d in result.directories)
        assert rel == ["a", os.path.join("a", "b"), "c"]

    def test_lists_every_file_once(self, scenario_tree: Path):
        result = DirectoryScanner().scan(scenario_tree)
        rel = sorted(os.path.relpath(f, scenario_tree) for f in result.files)
        assert rel == [
            os.path.join("a", "1.txt"),
            os.path.join("a", "b", "2.txt"),
            os.path.join("c", "3.txt"),
        ]
        assert len(set(result.files)) == len(result.files)

    def test_counts_match_filesystem(self, wide_tree: Path):
        result = DirectoryScanner().scan(wide_tree)
        regular = [p for p in wide_tree.rglob("*") if p.is_file()]
        assert result.file_count == len(regular)
        assert result.total_bytes == sum(p.stat().st_size for p in regular)

    def test_root_not_listed(self, scenario_tree: Path):
        result = DirectoryScanner().scan(scenario_tree)
        assert str(scenario_tree) not in result.directories

    def test_parent_listed_before_child(self, scenario_tree: Path):
        dirs = DirectoryScanner().scan(scenario_tree).directories
        assert dirs.index(str(scenario_tree / "a")) < dirs.index(
            str(scenario_tree / "a" / "b")
        )

    def test_empty_directory(self, tmp_path: Path):
        result = DirectoryScanner().scan(tmp_path)
        assert result.file_count == 0
        assert result.total_bytes == 0
        assert result.directories == []
        assert result.files == []

    def test_empty_subdirectories_are_listed(self, tmp_path: Path):
        (tmp_path / "x" / "y").mkdir(parents=True)
        result = DirectoryScanner().scan(tmp_path)
        assert result.folder_count == 2
        assert result.file_count == 0

    def test_accepts_str_root(self, scenario_tree: Path):
        result = DirectoryScanner().scan(str(scenario_tree))
        assert result.root == str(scenario_tree)


class TestScanErrors:
    def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(ScanError, match="no such directory"):
            DirectoryScanner().scan(tmp_path / "nonexistent")

    def test_file_root_raises(self, tmp_path: Path):
        f = tmp_path / "file.txt"
        f.write_bytes(b"x")
        with pytest.raises(ScanError, match="not a directory"):
            DirectoryScanner().scan(f)

    def test_unreadable_directory_aborts(self, tmp_path: Path, make_tree):
        make_tree(tmp_path, {"ok/a.txt": b"a", "locked/b.txt": b"b"})
        real_scandir = os.scandir

        def fake_scandir(path):
            if os.path.basename(path) == "locked":
                raise PermissionError(13, "Permission denied")
            return real_scandir(path)

        with patch("treecopy.scan.scanner.os.scandir", side_effect=fake_scandir):
            with pytest.raises(ScanError) as exc_info:
                DirectoryScanner().scan(tmp_path)

        assert exc_info.value.path.endswith("locked")
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestScanResultImmutability:
    def test_result_is_frozen(self, scenario_tree: Path):
        result = DirectoryScanner().scan(scenario_tree)
        with pytest.raises(Exception):
            result.file_count = 99
