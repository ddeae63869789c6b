# src/core/models.py - v1
"""Shared Pydantic models used across the scan, engine and API layers.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field


# === SCAN ===


class ScanResult(BaseModel):
    """Everything a single walk of the source tree produced.

    The source root itself is not listed in ``directories``; the engine
    creates the target root before replicating the tree below it.
    """

    model_config = ConfigDict(frozen=True)

    root: str
    file_count: int = 0
    total_bytes: int = 0
    directories: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def folder_count(self) -> int:
        return len(self.directories)


# === RUN ===


class CopyRequest(BaseModel):
    """Validated input triple for one copy run."""

    source: Path
    target: Path
    workers: int = Field(gt=0)


class PhaseTiming(BaseModel):
    """Elapsed wall time of one engine phase."""

    name: str
    elapsed_seconds: float


class CopyResult(BaseModel):
    """Summary counters returned once a run reaches its terminal state."""

    source: str
    target: str
    workers: int
    file_count: int
    total_bytes: int
    folder_count: int
    files_completed: int = 0
    bytes_copied: int = 0
    files_failed: int = 0
    folders_failed: int = 0
    fallback_runs: int = 0  # chunks run on the caller after a full pool
    phases: list[PhaseTiming] = Field(default_factory=list)
    elapsed_seconds: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        """True when no directory or file entry failed."""
        return self.files_failed == 0 and self.folders_failed == 0

    def phase(self, name: str) -> PhaseTiming | None:
        for timing in self.phases:
            if timing.name == name:
                return timing
        return None
