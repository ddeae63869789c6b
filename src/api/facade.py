# src/api/facade.py - v1
"""Public API facade: single entry point for copying a tree.

Usage:
    from treecopy.api.facade import copy_tree
    result = copy_tree("/data/src", "/data/dst", workers=8)

    # or, from async code
    result = await copy_tree_async("/data/src", "/data/dst")
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from treecopy.config.settings import Settings
from treecopy.core.models import CopyRequest, CopyResult
from treecopy.engine.orchestrator import CopyEngine

logger = logging.getLogger(__name__)


def copy_tree(
    source: str | Path,
    target: str | Path,
    workers: int | None = None,
    settings: Settings | None = None,
) -> CopyResult:
    """Copy every directory and file under ``source`` into ``target``.

    Args:
        source: Existing source directory.
        target: Target directory, created if absent.
        workers: Worker count. Falls back to ``settings.workers`` if None.
        settings: Global settings. Loaded from environment if None.

    Returns:
        CopyResult with counts, sizes and per-phase timings.

    Raises:
        ScanError: If the source cannot be scanned.
        pydantic.ValidationError: If ``workers`` is not a positive integer.
    """
    settings = settings or Settings()
    request = CopyRequest(
        source=Path(source),
        target=Path(target),
        workers=workers if workers is not None else settings.workers,
    )
    logger.info(
        "Copying %s -> %s with %d workers",
        request.source, request.target, request.workers,
    )
    return CopyEngine(settings=settings).run(request)


async def copy_tree_async(
    source: str | Path,
    target: str | Path,
    workers: int | None = None,
    settings: Settings | None = None,
) -> CopyResult:
    """Run copy_tree() in a worker thread without blocking the event loop."""
    return await asyncio.to_thread(copy_tree, source, target, workers, settings)
