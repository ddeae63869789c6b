# src/engine/partitioner.py - v1
"""Split path lists into contiguous chunks, roughly one per worker."""

from __future__ import annotations

import math
from collections.abc import Sequence


def chunk_size(total: int, worker_count: int) -> int:
    """Target chunk size: total / worker_count rounded half-up.

    Returns 0 when no sensible size exists (no workers or the quotient
    rounds down to nothing); ``partition`` then yields a single chunk.
    """
    if worker_count <= 0 or total <= 0:
        return 0
    return int(math.floor(total / worker_count + 0.5))


def partition(paths: Sequence[str], worker_count: int) -> list[list[str]]:
    """Split ``paths`` into contiguous, non-overlapping chunks.

    Concatenating the chunks in order reproduces ``paths`` exactly. The
    chunk count is ``ceil(len(paths) / size)``, which can differ from
    ``worker_count`` when the division is not exact.

    Args:
        paths: Ordered list of paths.
        worker_count: Number of workers the chunks are meant for.

    Returns:
        List of chunks; empty when ``paths`` is empty.
    """
    if not paths:
        return []

    size = chunk_size(len(paths), worker_count)
    if size == 0:
        return [list(paths)]

    return [list(paths[i:i + size]) for i in range(0, len(paths), size)]
