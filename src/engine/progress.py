# src/engine/progress.py - v1
"""Thread-safe progress counting and the live tqdm indicator."""

from __future__ import annotations

import threading

from tqdm import tqdm

BAR_FORMAT = "{desc} {n_fmt}/{total_fmt} [{bar}] {percentage:3.0f}% {elapsed}"


class ProgressCounter:
    """Files completed against a precomputed total, plus bytes copied.

    ``completed`` is clamped at ``total`` so the invariant
    ``completed <= total`` holds even if a caller over-reports.
    """

    def __init__(self, total: int) -> None:
        if total < 0:
            raise ValueError("total must be >= 0")
        self._lock = threading.Lock()
        self._total = total
        self._completed = 0
        self._bytes_copied = 0

    @property
    def total(self) -> int:
        return self._total

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    @property
    def bytes_copied(self) -> int:
        with self._lock:
            return self._bytes_copied

    @property
    def done(self) -> bool:
        with self._lock:
            return self._completed >= self._total

    def increment(self, nbytes: int = 0) -> int:
        """Record one finished file. Returns how many files it advanced (0 or 1)."""
        with self._lock:
            self._bytes_copied += nbytes
            if self._completed >= self._total:
                return 0
            self._completed += 1
            return 1


class ProgressReporter:
    """Owns a ProgressCounter and mirrors it onto a tqdm bar.

    tqdm throttles redraws by ``min_interval``, so per-file updates never
    wait on terminal output.
    """

    def __init__(
        self,
        total: int,
        enabled: bool = True,
        min_interval: float = 0.1,
        description: str = "Copying",
    ) -> None:
        self.counter = ProgressCounter(total)
        self._bar_lock = threading.Lock()
        self._finished = False
        self._bar = tqdm(
            total=total,
            desc=description,
            unit="file",
            bar_format=BAR_FORMAT,
            mininterval=min_interval,
            disable=not enabled,
            leave=True,
        )

    @property
    def finished(self) -> bool:
        return self._finished

    def increment(self, nbytes: int = 0) -> None:
        """Advance by one file; safe to call from any worker thread."""
        advanced = self.counter.increment(nbytes)
        if advanced:
            with self._bar_lock:
                self._bar.update(advanced)

    def finish(self) -> None:
        """Close the bar. Later calls are no-ops."""
        with self._bar_lock:
            if self._finished:
                return
            self._finished = True
            self._bar.close()
