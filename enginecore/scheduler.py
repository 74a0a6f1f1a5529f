"""A thread pool that runs submitted tasks in priority order."""

from __future__ import annotations

import heapq
import itertools
import os
import threading
from collections.abc import Callable
from concurrent.futures import Future
from enum import IntEnum
from typing import Any, Optional


class TaskPriority(IntEnum):
    """Task priority; higher values run first."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3  # system-level tasks


class AsyncScheduler:
    """Runs tasks on worker threads, highest priority first, oldest first within a priority.

    After :meth:`shutdown` the workers finish every task already queued and
    further submissions are refused.
    """

    _instance: Optional["AsyncScheduler"] = None
    _instance_lock = threading.Lock()

    def __init__(self, threads: int = 2) -> None:
        if threads < 0:
            raise ValueError("thread count must not be negative")
        self._condition = threading.Condition()
        self._tasks: list[tuple[int, int, Callable[[], None]]] = []
        self._sequence = itertools.count()
        self._stop = False
        self._workers = [
            threading.Thread(target=self._worker, name=f"scheduler-{n}", daemon=True)
            for n in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    @staticmethod
    def get_instance() -> "AsyncScheduler":
        """Return the process-wide scheduler, with one worker per CPU."""
        with AsyncScheduler._instance_lock:
            if AsyncScheduler._instance is None:
                AsyncScheduler._instance = AsyncScheduler(os.cpu_count() or 1)
            return AsyncScheduler._instance

    def submit(
        self,
        func: Callable[..., Any],
        priority: TaskPriority,
        *args: Any,
        **kwargs: Any,
    ) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a future for its result."""
        priority = TaskPriority(priority)
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except BaseException as exc:  # delivered through the future
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._condition:
            if self._stop:
                raise RuntimeError("submit on stopped AsyncScheduler")
            heapq.heappush(self._tasks, (-int(priority), next(self._sequence), run))
            self._condition.notify()
        return future

    def shutdown(self) -> None:
        """Stop accepting tasks, drain the queue and join the workers."""
        with self._condition:
            self._stop = True
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "AsyncScheduler":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    def _worker(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._stop or bool(self._tasks))
                if self._stop and not self._tasks:
                    return
                _, _, run = heapq.heappop(self._tasks)
            run()