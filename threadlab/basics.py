"""Small thread exercises: starting, joining, detaching, locking and limiting threads."""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, List, Sequence, Tuple

from threadlab.primitives import Barrier


def _run_all(target: Callable[..., Any], argument_sets: Iterable[Tuple[Any, ...]]) -> None:
    threads = [threading.Thread(target=target, args=args) for args in argument_sets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def greet_from_threads(count: int) -> List[str]:
    """Start ``count`` threads that each produce a greeting; return them by thread number."""
    greetings: dict = {}
    lock = threading.Lock()

    def greet(ident: int) -> None:
        with lock:
            greetings[ident] = f"Hello from thread {ident}"

    _run_all(greet, ((ident,) for ident in range(1, count + 1)))
    return [greetings[ident] for ident in sorted(greetings)]


def count_down(start: int) -> List[int]:
    """Count down from ``start`` on a worker thread, yielding ``start - 1`` down to 0."""
    seen: List[int] = []

    def run(x: int) -> None:
        while x > 0:
            x -= 1
            seen.append(x)

    _run_all(run, [(start,)])
    return seen


def run_detached(task: Callable[[], Any]) -> threading.Thread:
    """Start ``task`` on a daemon thread and return without waiting for it."""
    thread = threading.Thread(target=task, daemon=True)
    thread.start()
    return thread


def unsafe_increment(threads: int, iterations: int) -> int:
    """Increment a shared counter from several threads without a lock.

    Updates can be lost, so the result is at most ``threads * iterations``.
    """
    counter = 0

    def work() -> None:
        nonlocal counter
        for _ in range(iterations):
            current = counter
            counter = current + 1

    _run_all(work, (() for _ in range(threads)))
    return counter


def locked_increment(threads: int, iterations: int) -> int:
    """Increment a shared counter from several threads, holding a lock for each step."""
    counter = 0
    lock = threading.Lock()

    def work() -> None:
        nonlocal counter
        for _ in range(iterations):
            with lock:
                counter += 1

    _run_all(work, (() for _ in range(threads)))
    return counter


def guarded_runs(names: Sequence[str], steps: int) -> List[Tuple[str, int]]:
    """Each named thread holds one lock for its whole loop of ``steps``.

    Every step bumps a shared value twice and records it between the bumps,
    so the recorded values run 1, 3, 5, ... and each thread's entries are contiguous.
    """
    lock = threading.Lock()
    shared = 0
    log: List[Tuple[str, int]] = []

    def run(name: str) -> None:
        nonlocal shared
        with lock:
            for _ in range(steps):
                shared += 1
                log.append((name, shared))
                shared += 1

    _run_all(run, ((name,) for name in names))
    return log


def recursive_countdown(names: Sequence[str], depth: int) -> List[Tuple[str, int]]:
    """Each named thread re-enters a reentrant lock ``depth + 1`` times, logging a shared count.

    A negative depth records nothing.
    """
    lock = threading.RLock()
    shared = 0
    log: List[Tuple[str, int]] = []

    def descend(name: str, level: int) -> None:
        nonlocal shared
        if level < 0:
            return
        with lock:
            log.append((name, shared))
            shared += 1
            descend(name, level - 1)

    _run_all(descend, ((name, depth) for name in names))
    return log


def try_lock_round(threads: int) -> int:
    """Let each thread try once to take a lock without waiting; return how many succeeded."""
    lock = threading.Lock()
    successes = 0
    tally = threading.Lock()

    def attempt() -> None:
        nonlocal successes
        if lock.acquire(blocking=False):
            try:
                with tally:
                    successes += 1
            finally:
                lock.release()

    _run_all(attempt, (() for _ in range(threads)))
    return successes


def limited_concurrency(workers: int, permits: int, hold: float) -> int:
    """Run ``workers`` threads that each hold one of ``permits`` for ``hold`` seconds.

    Returns the largest number of threads seen holding a permit at once.
    """
    if permits < 1:
        raise ValueError("permits must be at least 1")
    semaphore = threading.BoundedSemaphore(permits)
    guard = threading.Lock()
    active = 0
    peak = 0
    release_gate = threading.Event()

    def work() -> None:
        nonlocal active, peak
        with semaphore:
            with guard:
                active += 1
                peak = max(peak, active)
            release_gate.wait(hold)
            with guard:
                active -= 1

    _run_all(work, (() for _ in range(workers)))
    return peak


def deadlock_demo(timeout: float) -> bool:
    """Two threads take two locks in opposite order; return True if both got stuck.

    Each thread gives up on its second lock after ``timeout`` seconds, so the
    demonstration always finishes.
    """
    first, second = threading.Lock(), threading.Lock()
    holding = Barrier(2)
    attempted = Barrier(2)
    outcomes: List[bool] = []
    tally = threading.Lock()

    def task(own: threading.Lock, other: threading.Lock) -> None:
        with own:
            holding.wait()
            got = other.acquire(timeout=timeout)
            attempted.wait()
            if got:
                other.release()
        with tally:
            outcomes.append(got)

    _run_all(task, [(first, second), (second, first)])
    return not any(outcomes)


def ordered_locking(threads: int) -> int:
    """Threads take two locks in one fixed order; return how many finished their work."""
    locks = sorted((threading.Lock(), threading.Lock()), key=id)
    completed = 0

    def task() -> None:
        nonlocal completed
        with locks[0], locks[1]:
            completed += 1

    _run_all(task, (() for _ in range(threads)))
    return completed