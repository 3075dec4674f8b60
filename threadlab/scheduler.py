"""Run callables after a delay on a single background thread."""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from datetime import timedelta
from typing import Any, Callable, List, Tuple, Union

_log = logging.getLogger(__name__)

Delay = Union[float, int, timedelta]


class TaskScheduler:
    """Executes scheduled tasks in order of their due time.

    Tasks due at the same moment run in the order they were scheduled.
    Closing the scheduler discards tasks that have not yet become due.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, Callable[[], Any]]] = []
        self._sequence = itertools.count()
        self._cond = threading.Condition()
        self._stopped = False
        self._worker = threading.Thread(target=self._run, name="task-scheduler", daemon=True)
        self._worker.start()

    def _run(self) -> None:
        with self._cond:
            while not self._stopped:
                if not self._heap:
                    self._cond.wait()
                    continue
                due = self._heap[0][0]
                now = time.monotonic()
                if now < due:
                    self._cond.wait(due - now)
                    continue
                _, _, task = heapq.heappop(self._heap)
                self._cond.release()
                try:
                    task()
                except Exception:
                    _log.exception("scheduled task raised an exception")
                finally:
                    self._cond.acquire()

    def schedule(self, task: Callable[[], Any], delay: Delay) -> None:
        """Run ``task`` once ``delay`` (seconds or a timedelta) has passed."""
        seconds = delay.total_seconds() if isinstance(delay, timedelta) else float(delay)
        with self._cond:
            if self._stopped:
                raise RuntimeError("cannot schedule on a closed scheduler")
            heapq.heappush(
                self._heap, (time.monotonic() + seconds, next(self._sequence), task)
            )
            self._cond.notify()

    def close(self) -> None:
        """Stop the background thread; pending tasks are dropped."""
        with self._cond:
            self._stopped = True
            self._heap.clear()
            self._cond.notify_all()
        if threading.current_thread() is not self._worker:
            self._worker.join()

    def __enter__(self) -> "TaskScheduler":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()