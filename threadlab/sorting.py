"""Quicksort that sorts large partitions on separate threads."""

from __future__ import annotations

import threading
from typing import Any, List, MutableSequence

DEFAULT_THRESHOLD = 1000


def _partition(values: MutableSequence[Any], left: int, right: int) -> int:
    pivot = values[right]
    store = left
    for j in range(left, right):
        if values[j] < pivot:
            values[store], values[j] = values[j], values[store]
            store += 1
    values[store], values[right] = values[right], values[store]
    return store


def _sort_range(values: MutableSequence[Any], left: int, right: int, threshold: int) -> None:
    pending = [(left, right)]
    workers: List[threading.Thread] = []
    while pending:
        lo, hi = pending.pop()
        if lo >= hi:
            continue
        mid = _partition(values, lo, hi)
        left_part = (lo, mid - 1)
        right_part = (mid + 1, hi)
        if mid - lo > threshold and hi - mid > threshold:
            worker = threading.Thread(
                target=_sort_range, args=(values, *left_part, threshold)
            )
            worker.start()
            workers.append(worker)
        else:
            pending.append(left_part)
        pending.append(right_part)
    for worker in workers:
        worker.join()


def parallel_quicksort(values: MutableSequence[Any], threshold: int = DEFAULT_THRESHOLD) -> None:
    """Sort ``values`` in place, handing partitions larger than ``threshold`` to threads."""
    if threshold < 0:
        raise ValueError("threshold must not be negative")
    _sort_range(values, 0, len(values) - 1, threshold)