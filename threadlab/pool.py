"""A fixed-size pool of worker threads fed from a shared task queue."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, List

_log = logging.getLogger(__name__)


class ThreadPool:
    """Runs submitted callables on a fixed set of worker threads.

    Shutting down lets the workers finish every task already queued before
    they exit.
    """

    def __init__(self, threads: int) -> None:
        if threads < 1:
            raise ValueError("a pool needs at least one worker thread")
        self._tasks: Deque[Callable[[], Any]] = deque()
        self._cond = threading.Condition()
        self._stopping = False
        self._workers: List[threading.Thread] = [
            threading.Thread(target=self._work, name=f"pool-worker-{n}", daemon=True)
            for n in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    def _work(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._stopping or bool(self._tasks))
                if not self._tasks:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception:
                _log.exception("task raised an exception in the thread pool")

    def enqueue(self, task: Callable[[], Any]) -> None:
        """Queue ``task`` to be run by the next idle worker."""
        with self._cond:
            if self._stopping:
                raise RuntimeError("cannot enqueue on a pool that has been shut down")
            self._tasks.append(task)
            self._cond.notify()

    def shutdown(self) -> None:
        """Stop accepting tasks, run what is queued, and wait for the workers."""
        with self._cond:
            self._stopping = True
            self._cond.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()