# threadlab

Thread-safe building blocks, a thread pool, a delayed-task scheduler and a
set of short threading demonstrations. Everything is built on Python's
standard `threading`, `queue` and `concurrent.futures` modules. There are no
third-party dependencies.

## Install

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Building blocks

### `threadlab.primitives`

- `Counter`: `increment()` adds one under a lock, and `value()` returns the count.
- `ThreadSafeVector`: `append(value)`, `vec[i]` and `len(vec)`, all under a
  lock. An index outside `0 .. len-1` raises `IndexError`. This includes
  negative indexes.
- `ThreadSafeQueue`: FIFO. `put(item)` wakes one waiting consumer.
  `get(timeout=None)` blocks until an item is there. If the timeout passes
  first, it raises `TimeoutError`.
- `Barrier(count)`: `wait()` blocks until `count` threads have called it. The
  barrier then resets for reuse. A count below 1 raises `ValueError`.
- `ConcurrentStack`: LIFO with `push(value)`, `pop()` and `len()`. `pop()` on
  an empty stack raises `IndexError`.

### `threadlab.pool.ThreadPool`

`ThreadPool(threads)` starts a fixed number of worker threads.

- `enqueue(task)` queues a callable that takes no arguments.
- `shutdown()` stops the pool from taking new tasks. The workers run every
  task already queued and then exit, and `shutdown()` waits for them.
- Calling `enqueue` after `shutdown()` raises `RuntimeError`.
- If a task raises an exception, the exception is logged and the worker keeps
  running.
- The pool is also a context manager, which calls `shutdown()` on exit.

```python
from threadlab.pool import ThreadPool
from threadlab.primitives import Counter

counter = Counter()
with ThreadPool(4) as pool:
    for _ in range(8):
        pool.enqueue(counter.increment)
print(counter.value())  # 8
```

### `threadlab.scheduler.TaskScheduler`

A single background thread runs callables once their delay has passed.

- `schedule(task, delay)` takes the delay in seconds or as a
  `datetime.timedelta`.
- The earliest deadline runs first. Tasks that share a deadline run in the
  order they were scheduled.
- `close()` stops the thread and **drops tasks that are not yet due**.
- Calling `schedule` after `close()` raises `RuntimeError`.
- The scheduler is also a context manager, which calls `close()` on exit.

```python
import time
from threadlab.scheduler import TaskScheduler

with TaskScheduler() as scheduler:
    scheduler.schedule(lambda: print("Task A"), 0.5)
    scheduler.schedule(lambda: print("Task B"), 0.1)
    time.sleep(1)  # B prints, then A
```

### `threadlab.sorting.parallel_quicksort`

`parallel_quicksort(values, threshold=1000)` sorts a mutable sequence in place.
It partitions around the last element. When both sides of a partition hold
more than `threshold` elements, the left side is sorted on a new thread. A
negative threshold raises `ValueError`.

## Demonstrations

Each function shows one idea and returns what happened, so you can inspect the
result.

### `threadlab.basics`

- `greet_from_threads(count)`: one greeting per thread, ordered by thread number.
- `count_down(start)`: counts `start - 1` down to `0` on a worker thread.
- `run_detached(task)`: starts `task` on a daemon thread and returns the thread
  without waiting.
- `unsafe_increment(threads, iterations)` and `locked_increment(threads, iterations)`:
  a shared counter without a lock, which can lose updates, and with a lock.
- `guarded_runs(names, steps)`: each thread holds a lock for its whole loop.
- `recursive_countdown(names, depth)`: each thread re-enters a reentrant lock.
- `try_lock_round(threads)`: each thread tries a non-blocking acquire. The
  function returns how many succeeded.
- `limited_concurrency(workers, permits, hold)`: a bounded semaphore. The
  function returns the peak number of threads that held a permit at once.
- `deadlock_demo(timeout)`: two threads take two locks in opposite order.
  Acquires time out, so the demo always ends. It returns `True` if both
  threads got stuck.
- `ordered_locking(threads)`: locks are always taken in one fixed order. The
  function returns how many threads finished.

### `threadlab.coordination`

- `odd_sum`, `even_sum` and `split_sums(start, end)`: inclusive range sums.
  `split_sums` computes the two sums on two threads and returns
  `(even, odd)`.
- `async_odd_sum(start, end)` and `square_later(x, delay=1.0)` return
  `concurrent.futures.Future` objects that a worker thread fills in.
- `Account`: `deposit(amount)` returns the new balance.
  `withdraw(amount, timeout=None)` waits for a non-zero balance. It returns
  `True` if the amount was deducted and `False` if the balance is too low.
  If the balance stays at zero until the timeout, it raises `TimeoutError`.
  The `balance` property reads the balance.
- `produce_consume(total=10, capacity=10, seed=None)`: random numbers from 1 to
  100 pass through a bounded FIFO buffer. Returns `(produced, consumed)`.
- `lifo_produce_consume(count=100, capacity=50)`: the same with a LIFO buffer.
- `alternate_even_odd(limit=20)`: two threads take turns from 1 to `limit`.
  Returns `("Odd", n)` and `("Even", n)` entries.
- `ReadWriteLock`: `with lock.read():` is shared and `with lock.write():` is
  exclusive. Waiting writers go ahead of new readers.
- `StoppableWorker(work, interval=0.5)`: `start()` calls `work` repeatedly on
  a thread. `stop()` asks it to stop and waits. `iterations` counts the runs.
  Calling `start()` a second time raises `RuntimeError`.

## Command line

    threadlab [VALUE] [--detach]

The command prints `Main`, starts a thread that prints `Function : VALUE`
(the default is 10), and then prints `Done`. By default it waits for the
thread before printing `Done`. With `--detach` it does not wait, and the
thread runs as a daemon.

## What it does not do

The demonstrations live in memory and return their results. Apart from the
small command above, they have no command-line front end. Nothing is saved to
disk.