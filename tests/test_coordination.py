import threading

import pytest

from threadlab.coordination import (
    Account,
    ReadWriteLock,
    StoppableWorker,
    alternate_even_odd,
    async_odd_sum,
    even_sum,
    lifo_produce_consume,
    odd_sum,
    produce_consume,
    split_sums,
    square_later,
)
from threadlab.primitives import Counter

pytestmark = pytest.mark.timeout(20)


def test_odd_sum_of_source_range():
    assert odd_sum(0, 5) == 9


@pytest.mark.parametrize("start,end", [(0, 5), (0, 100), (3, 17), (10, 9)])
def test_even_and_odd_sums_cover_the_range(start, end):
    assert even_sum(start, end) + odd_sum(start, end) == sum(range(start, end + 1))


def test_split_sums_matches_sequential_sums():
    assert split_sums(0, 1000) == (even_sum(0, 1000), odd_sum(0, 1000))


def test_async_odd_sum_resolves_to_odd_sum():
    assert async_odd_sum(0, 5).result(timeout=5) == odd_sum(0, 5)


def test_square_later_delivers_square():
    assert square_later(5, 0.01).result(timeout=5) == 25


def test_deposit_releases_waiting_withdrawal():
    account = Account()
    outcome = []
    waiter = threading.Thread(target=lambda: outcome.append(account.withdraw(500, timeout=5)))
    waiter.start()
    account.deposit(500)
    waiter.join()
    assert outcome == [True]
    assert account.balance == 0


def test_withdraw_more_than_balance_is_refused():
    account = Account()
    assert account.deposit(100) == 100
    assert account.withdraw(500, timeout=1) is False
    assert account.balance == 100


def test_withdraw_times_out_on_empty_balance():
    with pytest.raises(TimeoutError):
        Account().withdraw(10, timeout=0.05)


def test_produce_consume_preserves_order():
    produced, consumed = produce_consume(10, 3, seed=1)
    assert len(produced) == 10
    assert consumed == produced
    assert all(1 <= n <= 100 for n in produced)


def test_produce_consume_is_reproducible_with_seed():
    first_produced, first_consumed = produce_consume(8, 2, seed=42)
    second_produced, second_consumed = produce_consume(8, 2, seed=42)
    assert len(first_produced) == 8
    assert first_produced == second_produced
    assert first_consumed == second_consumed == first_produced


def test_produce_consume_rejects_zero_capacity():
    with pytest.raises(ValueError):
        produce_consume(5, 0)


def test_lifo_produce_consume_consumes_everything():
    produced, consumed = lifo_produce_consume(100, 50)
    assert produced == list(range(100, 0, -1))
    assert sorted(consumed) == sorted(produced)


def test_lifo_rejects_zero_capacity():
    with pytest.raises(ValueError):
        lifo_produce_consume(5, 0)


def test_alternate_even_odd_counts_in_turn():
    log = alternate_even_odd(20)
    assert [n for _, n in log] == list(range(1, 21))
    assert all(label == ("Odd" if n % 2 else "Even") for label, n in log)


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    meeting = threading.Barrier(2, timeout=5)
    inside = Counter()

    def reader():
        with lock.read():
            meeting.wait()
            inside.increment()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert meeting.broken is False
    assert inside.value() == 2


def test_writer_waits_for_reader():
    lock = ReadWriteLock()
    written = threading.Event()
    writes = Counter()

    def writer():
        with lock.write():
            writes.increment()
            written.set()

    with lock.read():
        thread = threading.Thread(target=writer)
        thread.start()
        assert not written.wait(0.1)
        assert writes.value() == 0
    assert written.wait(5)
    thread.join()
    assert writes.value() == 1


def test_stoppable_worker_stops():
    ran = threading.Event()
    calls = []

    def work():
        calls.append(1)
        if len(calls) >= 2:
            ran.set()

    worker = StoppableWorker(work, interval=0.01)
    worker.start()
    assert ran.wait(5)
    worker.stop()
    stopped_at = worker.iterations
    assert stopped_at >= 2
    ran.clear()
    assert not ran.wait(0.05)
    assert worker.iterations == stopped_at


def test_stoppable_worker_cannot_start_twice():
    worker = StoppableWorker(lambda: None, interval=0.01)
    worker.start()
    try:
        with pytest.raises(RuntimeError):
            worker.start()
    finally:
        worker.stop()