# src/engine/pool.py - v1
"""Fixed-size thread pool with a non-blocking handoff.

``submit`` only succeeds when an idle worker is waiting for work; otherwise
it raises QueueFullError immediately and the caller decides what to do.
``stop`` closes the pool and waits until every accepted task has finished,
which makes it the barrier between engine phases.

Usage:
    with WorkerPool(4) as pool:
        pool.submit(task)
    # every accepted task has completed here
"""

from __future__ import annotations

import contextvars
import logging
import threading
from collections import deque
from typing import Callable

from treecopy.core.errors import PoolClosedError, QueueFullError

logger = logging.getLogger(__name__)

Task = Callable[[], object]


class WorkerPool:
    """A pool of ``worker_count`` daemon threads pulling from one FIFO.

    Tasks run inside a copy of the submitting thread's contextvars, so
    logging context set by the caller is visible in worker log records.
    """

    def __init__(self, worker_count: int, name: str = "worker") -> None:
        if worker_count <= 0:
            raise ValueError("worker_count must be > 0")

        self._cond = threading.Condition()
        self._pending: deque[tuple[contextvars.Context, Task]] = deque()
        # Workers waiting for work and not yet promised a pending task
        self._idle = 0
        self._live = 0
        self._closed = False
        self._threads: list[threading.Thread] = []

        for i in range(worker_count):
            thread = threading.Thread(
                target=self._work, name=f"{name}-{i}", daemon=True,
            )
            self._threads.append(thread)
            with self._cond:
                self._live += 1
            thread.start()

        # Return only once every worker can accept a handoff
        with self._cond:
            self._cond.wait_for(lambda: self._idle == worker_count)

        logger.debug("Started pool %r with %d workers", name, worker_count)

    @property
    def worker_count(self) -> int:
        return len(self._threads)

    @property
    def live_workers(self) -> int:
        """Workers that have not exited yet."""
        with self._cond:
            return self._live

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def submit(self, task: Task) -> None:
        """Hand ``task`` to an idle worker without blocking.

        Raises:
            QueueFullError: If no worker is idle right now.
            PoolClosedError: If ``stop`` has already been called.
        """
        with self._cond:
            if self._closed:
                raise PoolClosedError("pool is stopped")
            if self._idle <= 0:
                raise QueueFullError("task queue is full")
            self._idle -= 1
            self._pending.append((contextvars.copy_context(), task))
            self._cond.notify_all()

    def stop(self) -> None:
        """Close the pool and block until every worker has exited.

        Safe to call more than once.
        """
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _work(self) -> None:
        while True:
            with self._cond:
                self._idle += 1
                self._cond.notify_all()
                self._cond.wait_for(lambda: self._pending or self._closed)
                if self._pending:
                    # submit() already took this worker out of the idle count
                    ctx, task = self._pending.popleft()
                else:
                    self._idle -= 1
                    self._live -= 1
                    return

            try:
                ctx.run(task)
            except Exception:
                logger.exception("Task failed in %s", threading.current_thread().name)
