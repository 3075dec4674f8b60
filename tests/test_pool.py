import threading

import pytest

from threadlab.pool import ThreadPool
from threadlab.primitives import ThreadSafeVector


def _contents(vec):
    return [vec[i] for i in range(len(vec))]


@pytest.mark.timeout(10)
def test_all_tasks_run_before_shutdown_returns():
    results = ThreadSafeVector()

    def make(i):
        def task():
            results.append(i)
        return task

    with ThreadPool(4) as pool:
        for i in range(8):
            pool.enqueue(make(i))
    assert len(results) == 8
    assert sorted(_contents(results)) == list(range(8))
    with pytest.raises(RuntimeError):
        pool.enqueue(lambda: None)


@pytest.mark.timeout(10)
def test_queued_tasks_are_drained_on_shutdown():
    gate = threading.Event()
    results = []

    pool = ThreadPool(1)
    pool.enqueue(lambda: gate.wait(5))
    for i in range(5):
        pool.enqueue(lambda i=i: results.append(i))
    gate.set()
    pool.shutdown()
    assert results == [0, 1, 2, 3, 4]


@pytest.mark.timeout(10)
def test_workers_run_concurrently():
    barrier = threading.Barrier(3, timeout=5)
    idents = ThreadSafeVector()
    failures = ThreadSafeVector()

    def task():
        try:
            barrier.wait()
        except threading.BrokenBarrierError:
            failures.append(True)
        idents.append(threading.get_ident())

    with ThreadPool(3) as pool:
        for _ in range(3):
            pool.enqueue(task)
    assert len(failures) == 0
    assert len(idents) == 3
    assert len(set(_contents(idents))) == 3
    with pytest.raises(RuntimeError):
        pool.enqueue(task)


@pytest.mark.timeout(10)
def test_enqueue_after_shutdown_raises():
    pool = ThreadPool(2)
    pool.shutdown()
    with pytest.raises(RuntimeError):
        pool.enqueue(lambda: None)


@pytest.mark.timeout(10)
def test_failing_task_does_not_stop_worker():
    results = []

    def boom():
        raise ValueError("boom")

    with ThreadPool(1) as pool:
        pool.enqueue(boom)
        pool.enqueue(lambda: results.append("after"))
    assert results == ["after"]


@pytest.mark.timeout(10)
def test_shutdown_twice_keeps_results():
    results = []
    pool = ThreadPool(2)
    pool.enqueue(lambda: results.append(1))
    pool.shutdown()
    pool.shutdown()
    assert results == [1]


def test_zero_threads_rejected():
    with pytest.raises(ValueError):
        ThreadPool(0)