"""Threads that hand results to each other: futures, condition variables, queues and locks."""

from __future__ import annotations

import queue
import random
import threading
import time
from concurrent.futures import Future
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple


def odd_sum(start: int, end: int) -> int:
    """Sum the odd integers from ``start`` to ``end`` inclusive."""
    return sum(n for n in range(start, end + 1) if n & 1)


def even_sum(start: int, end: int) -> int:
    """Sum the even integers from ``start`` to ``end`` inclusive."""
    return sum(n for n in range(start, end + 1) if not n & 1)


def split_sums(start: int, end: int) -> Tuple[int, int]:
    """Compute the even and odd sums of a range on two threads; return ``(even, odd)``."""
    results = {}

    def run(key: str, func: Callable[[int, int], int]) -> None:
        results[key] = func(start, end)

    threads = [
        threading.Thread(target=run, args=("even", even_sum)),
        threading.Thread(target=run, args=("odd", odd_sum)),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results["even"], results["odd"]


def _in_background(func: Callable[[], Any], name: str) -> "Future[Any]":
    future: "Future[Any]" = Future()
    future.set_running_or_notify_cancel()

    def run() -> None:
        try:
            future.set_result(func())
        except BaseException as exc:
            future.set_exception(exc)

    threading.Thread(target=run, name=name, daemon=True).start()
    return future


def async_odd_sum(start: int, end: int) -> "Future[int]":
    """Start summing the odd integers of a range on a new thread; return its future."""
    return _in_background(lambda: odd_sum(start, end), "odd-sum")


def square_later(x: int, delay: float = 1.0) -> "Future[int]":
    """Return a future that receives ``x * x`` from a worker thread after ``delay`` seconds."""

    def compute() -> int:
        time.sleep(delay)
        return x * x

    return _in_background(compute, "square")


class Account:
    """A balance that withdrawals wait on until some money has been deposited."""

    def __init__(self, balance: int = 0) -> None:
        self._balance = balance
        self._cond = threading.Condition()

    @property
    def balance(self) -> int:
        with self._cond:
            return self._balance

    def deposit(self, amount: int) -> int:
        """Add ``amount`` and wake one waiting withdrawal; return the new balance."""
        with self._cond:
            self._balance += amount
            self._cond.notify()
            return self._balance

    def withdraw(self, amount: int, timeout: Optional[float] = None) -> bool:
        """Wait for a non-zero balance, then take ``amount`` if it is covered.

        Returns True if the money was deducted and False if the balance was too low.
        Raises TimeoutError if the balance stays at zero for ``timeout`` seconds.
        """
        with self._cond:
            if not self._cond.wait_for(lambda: self._balance != 0, timeout):
                raise TimeoutError("balance stayed at zero")
            if self._balance >= amount:
                self._balance -= amount
                return True
            return False


def _check_capacity(capacity: int) -> None:
    if capacity < 1:
        raise ValueError("capacity must be at least 1")


def produce_consume(
    total: int = 10, capacity: int = 10, seed: Optional[int] = None
) -> Tuple[List[int], List[int]]:
    """A producer sends ``total`` random numbers from 1 to 100 through a bounded FIFO buffer.

    Returns ``(produced, consumed)`` in the order each side saw them.
    """
    _check_capacity(capacity)
    rng = random.Random(seed)
    buffer: "queue.Queue[int]" = queue.Queue(maxsize=capacity)
    produced: List[int] = []
    consumed: List[int] = []

    def producer() -> None:
        for _ in range(total):
            number = rng.randint(1, 100)
            produced.append(number)
            buffer.put(number)

    def consumer() -> None:
        for _ in range(total):
            consumed.append(buffer.get())

    threads = [threading.Thread(target=producer), threading.Thread(target=consumer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return produced, consumed


def lifo_produce_consume(count: int = 100, capacity: int = 50) -> Tuple[List[int], List[int]]:
    """A producer pushes ``count`` down to 1 into a bounded buffer; a consumer takes from its back.

    Returns ``(produced, consumed)``; the consumer always takes the newest item present.
    """
    _check_capacity(capacity)
    buffer: "queue.LifoQueue[int]" = queue.LifoQueue(maxsize=capacity)
    produced: List[int] = []
    consumed: List[int] = []

    def producer() -> None:
        for value in range(count, 0, -1):
            buffer.put(value)
            produced.append(value)

    def consumer() -> None:
        for _ in range(count):
            consumed.append(buffer.get())

    threads = [threading.Thread(target=producer), threading.Thread(target=consumer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return produced, consumed


def alternate_even_odd(limit: int = 20) -> List[Tuple[str, int]]:
    """Two threads take turns counting from 1 to ``limit``: one says odd numbers, one even."""
    cond = threading.Condition()
    current = 1
    log: List[Tuple[str, int]] = []

    def run(label: str, parity: int) -> None:
        nonlocal current
        while True:
            with cond:
                cond.wait_for(lambda: current > limit or current % 2 == parity)
                if current > limit:
                    return
                log.append((label, current))
                current += 1
                cond.notify_all()

    threads = [
        threading.Thread(target=run, args=("Even", 0)),
        threading.Thread(target=run, args=("Odd", 1)),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return log


class ReadWriteLock:
    """Many readers at once, or one writer alone; waiting writers go before new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock shared for the body of a ``with`` block."""
        with self._cond:
            self._cond.wait_for(lambda: not self._writing and not self._writers_waiting)
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock exclusively for the body of a ``with`` block."""
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(lambda: not self._writing and not self._readers)
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class StoppableWorker:
    """Calls ``work`` repeatedly on a thread, pausing ``interval`` seconds, until stopped."""

    def __init__(self, work: Callable[[], Any], interval: float = 0.5) -> None:
        self._work = work
        self._interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._iterations = 0

    @property
    def iterations(self) -> int:
        """How many times ``work`` has run."""
        with self._lock:
            return self._iterations

    def _run(self) -> None:
        while not self._stop.is_set():
            self._work()
            with self._lock:
                self._iterations += 1
            self._stop.wait(self._interval)

    def start(self) -> None:
        """Start the worker thread; a worker can be started only once."""
        if self._thread is not None:
            raise RuntimeError("worker has already been started")
        self._thread = threading.Thread(target=self._run, name="stoppable-worker", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the worker to stop and wait for it to finish its current round."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()