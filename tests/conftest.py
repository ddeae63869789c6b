# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides real on-disk source trees under tmp_path and settings tuned for
tests (no progress bar, no backoff sleep). No network, no mocks of the
filesystem unless a test forces a failure path explicitly.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from treecopy.config.settings import Settings
from treecopy.logging.context import clear_context


def build_tree(root: Path, files: dict[str, bytes]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


def relative_files(root: Path) -> dict[str, bytes]:
    """Map every regular file under ``root`` to its content."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


# === FIXTURES: Sample trees ===


SCENARIO_FILES: dict[str, bytes] = {
    "a/1.txt": b"0123456789",
    "a/b/2.txt": b"abcde",
    "c/3.txt": b"",
}


@pytest.fixture
def scenario_tree(tmp_path: Path) -> Path:
    """Three files, 15 bytes, directories a, a/b and c."""
    return build_tree(tmp_path / "src", SCENARIO_FILES)


@pytest.fixture
def wide_tree(tmp_path: Path) -> Path:
    """Many small files spread over nested directories."""
    files = {
        f"d{i % 7}/sub{i % 3}/file_{i:03d}.bin": bytes([i % 256]) * (i * 13 % 700)
        for i in range(120)
    }
    files["empty.dat"] = b""
    files["big/blob.bin"] = bytes(range(256)) * 600  # spans several buffers
    return build_tree(tmp_path / "wide", files)


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    return tmp_path / "dst"


# === FIXTURES: Settings ===


@pytest.fixture
def test_settings() -> Settings:
    """Settings without progress rendering or backoff delays."""
    return Settings(
        _env_file=None,
        progress_enabled=False,
        submit_backoff_seconds=0.0,
    )


@pytest.fixture(autouse=True)
def _reset_logging():
    """Reset context variables and drop handlers added by setup_logging()."""
    clear_context()
    yield
    clear_context()
    root = logging.getLogger("treecopy")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def make_tree():
    """Factory fixture: make_tree(root, {relpath: bytes}) -> root."""
    return build_tree


@pytest.fixture
def read_tree():
    """Factory fixture: read_tree(root) -> {relpath: bytes}."""
    return relative_files
