# src/engine/orchestrator.py - v1
"""Copy engine: scan, then replicate folders, then copy files.

Drives the run in strictly ordered phases:
  Scan:     single-threaded walk of the source (fatal on failure)
  Phase 1:  folder replication across a worker pool, drained by stop()
  Phase 2:  file copy across a fresh pool, with live progress

The worker count sizes every pool and sets the chunk-size target. When a
submit finds no idle worker, the engine waits a fixed backoff and runs the
chunk on the calling thread, so every chunk is processed exactly once.
"""

from __future__ import annotations

import contextvars
import logging
import time
import uuid
from collections.abc import Callable, Sequence
from contextlib import nullcontext
from datetime import datetime, timezone

from tqdm.contrib.logging import logging_redirect_tqdm

from treecopy.config.settings import Settings
from treecopy.core.errors import QueueFullError, SameTreeError
from treecopy.core.models import CopyRequest, CopyResult, PhaseTiming, ScanResult
from treecopy.engine.copier import FileCopier
from treecopy.engine.partitioner import partition
from treecopy.engine.pool import WorkerPool
from treecopy.engine.progress import ProgressReporter
from treecopy.engine.replicator import FolderReplicator
from treecopy.logging.context import set_phase_context, set_run_context
from treecopy.scan.scanner import DirectoryScanner

logger = logging.getLogger(__name__)

PHASE_SCAN = "scan"
PHASE_FOLDERS = "folders"
PHASE_FILES = "files"

_IEC_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def format_bytes(value: int) -> str:
    """Human-readable size in IEC units, e.g. ``1.5 MiB``."""
    size = float(value)
    for unit in _IEC_UNITS:
        if abs(size) < 1024 or unit == _IEC_UNITS[-1]:
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_IEC_UNITS[-1]}"


class CopyEngine:
    """Replicates one directory tree onto another.

    Args:
        settings: Application settings. Loaded from the environment if None.
        scanner: Directory scanner (injectable for tests).
        sleep: Backoff function used before a synchronous fallback.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        scanner: DirectoryScanner | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings or Settings()
        self._scanner = scanner or DirectoryScanner()
        self._sleep = sleep
        self.fallback_runs = 0

    def run(self, request: CopyRequest) -> CopyResult:
        """Execute a full copy run.

        Run and phase context are set in a copy of the caller's context, so
        they are gone once this returns.

        Returns:
            CopyResult with counters and per-phase timings. Per-entry
            failures are counted there, never raised.

        Raises:
            SameTreeError: If the target resolves to the source directory.
            ScanError: If the source cannot be scanned. Nothing has been
                created under the target at that point.
        """
        if request.target.resolve() == request.source.resolve():
            raise SameTreeError(str(request.source), str(request.target))
        return contextvars.copy_context().run(self._run, request)

    def _run(self, request: CopyRequest) -> CopyResult:
        source = str(request.source)
        target = str(request.target)
        workers = request.workers
        self.fallback_runs = 0

        set_run_context(_generate_run_id())
        start = time.perf_counter()
        phases: list[PhaseTiming] = []

        # --- Scan ---
        set_phase_context(PHASE_SCAN)
        scan = self._scanner.scan(source)
        request.target.mkdir(parents=True, exist_ok=True)
        phases.append(PhaseTiming(name=PHASE_SCAN, elapsed_seconds=_since(start)))
        logger.info(
            "Size %s of total files / folders: %d / %d. Elapsed time: %.3fs",
            format_bytes(scan.total_bytes), scan.file_count, scan.folder_count,
            phases[-1].elapsed_seconds,
        )

        # --- Phase 1: folders ---
        set_phase_context(PHASE_FOLDERS)
        phase_start = time.perf_counter()
        replicator = FolderReplicator(source, target)
        self._drain(
            partition(scan.directories, workers), replicator.replicate, workers,
            PHASE_FOLDERS,
        )
        phases.append(PhaseTiming(name=PHASE_FOLDERS, elapsed_seconds=_since(phase_start)))
        logger.info(
            "Created all folders in destination. Elapsed time: %.3fs",
            _since(start),
        )

        # --- Phase 2: files ---
        set_phase_context(PHASE_FILES)
        phase_start = time.perf_counter()
        reporter, copier = self._copy_files(scan, source, target, workers)
        phases.append(PhaseTiming(name=PHASE_FILES, elapsed_seconds=_since(phase_start)))

        elapsed = _since(start)
        set_phase_context(None)
        logger.info("Total elapsed time: %.3fs", elapsed)

        result = CopyResult(
            source=source,
            target=target,
            workers=workers,
            file_count=scan.file_count,
            total_bytes=scan.total_bytes,
            folder_count=scan.folder_count,
            files_completed=reporter.counter.completed,
            bytes_copied=reporter.counter.bytes_copied,
            files_failed=copier.failures,
            folders_failed=replicator.failures,
            fallback_runs=self.fallback_runs,
            phases=phases,
            elapsed_seconds=elapsed,
        )
        if not result.succeeded:
            logger.warning(
                "Finished with failures: %d folders, %d files",
                result.folders_failed, result.files_failed,
            )
        return result

    def _copy_files(
        self, scan: ScanResult, source: str, target: str, workers: int,
    ) -> tuple[ProgressReporter, FileCopier]:
        root_logger = logging.getLogger("treecopy")
        # Route console log lines through tqdm so they do not break the bar
        redirect = (
            logging_redirect_tqdm(loggers=[root_logger])
            if self._settings.progress_enabled and root_logger.handlers
            else nullcontext()
        )
        with redirect:
            reporter = ProgressReporter(
                scan.file_count,
                enabled=self._settings.progress_enabled,
                min_interval=self._settings.progress_min_interval,
            )
            copier = FileCopier(
                source, target, reporter,
                buffer_size=self._settings.copy_buffer_size,
            )
            try:
                self._drain(
                    partition(scan.files, workers), copier.copy_chunk, workers,
                    PHASE_FILES,
                )
            finally:
                reporter.finish()
        return reporter, copier

    def _drain(
        self,
        chunks: Sequence[list[str]],
        handler: Callable[[list[str]], object],
        workers: int,
        name: str,
    ) -> None:
        """Run ``handler`` over every chunk on a pool, then wait for it to drain."""
        if not chunks:
            return

        with WorkerPool(workers, name=name) as pool:
            for chunk in chunks:
                try:
                    pool.submit(_bind(handler, chunk))
                except QueueFullError:
                    self.fallback_runs += 1
                    logger.debug(
                        "No idle %s worker; running %d entries on caller after %.1fs",
                        name, len(chunk), self._settings.submit_backoff_seconds,
                    )
                    self._sleep(self._settings.submit_backoff_seconds)
                    handler(chunk)


def _bind(handler: Callable[[list[str]], object], chunk: list[str]) -> Callable[[], object]:
    def task() -> object:
        return handler(chunk)

    return task


def _since(start: float) -> float:
    return round(time.perf_counter() - start, 3)


def _generate_run_id() -> str:
    """Run ID: yyyymmdd_hhmmss_{uuid4_short}."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{ts}_{uuid.uuid4().hex[:8]}"
