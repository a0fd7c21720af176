# tests/test_parallel.py
"""
Worker pool: block splitting, ordered partials, exception propagation.
"""

from __future__ import annotations

import threading

import pytest

from kmeanspp import InvalidArgumentError
from kmeanspp.utils.parallel import WorkerPool, split_range, flatten


@pytest.mark.parametrize("n_items,n_blocks", [(10, 3), (3, 8), (1, 1), (100, 7), (8, 8)])
def test_split_range_covers_every_index_once(n_items, n_blocks):
    blocks = split_range(n_items, n_blocks)
    assert len(blocks) == min(n_items, n_blocks)
    assert flatten([list(b) for b in blocks]) == list(range(n_items))
    sizes = [len(b) for b in blocks]
    assert max(sizes) - min(sizes) <= 1


def test_split_range_empty():
    assert split_range(0, 4) == []


@pytest.mark.parametrize("n_workers", [1, 2, 5])
def test_map_keeps_input_order(n_workers):
    pool = WorkerPool(n_workers)
    assert pool.map(lambda i: i * i, 23) == [i * i for i in range(23)]


def test_map_reduce_combines_worker_partials():
    pool = WorkerPool(4)
    total = pool.map_reduce(lambda block: sum(block), lambda acc, part: acc + part, 1000, 0)
    assert total == sum(range(1000))


def test_for_each_visits_each_index_once():
    pool = WorkerPool(3)
    seen = []
    lock = threading.Lock()

    def visit(i):
        with lock:
            seen.append(i)

    pool.for_each(visit, 50)
    assert sorted(seen) == list(range(50))


def test_worker_exceptions_propagate():
    pool = WorkerPool(2)

    def explode(i):
        if i == 7:
            raise RuntimeError("boom")
        return i

    with pytest.raises(RuntimeError, match="boom"):
        pool.map(explode, 10)


def test_invalid_worker_count():
    with pytest.raises(InvalidArgumentError):
        WorkerPool(0)


def test_default_worker_count_follows_torch():
    # conftest pins torch to one thread
    assert WorkerPool().n_workers == 1


def test_executor_is_reused_until_closed():
    pool = WorkerPool(n_workers=3)
    names = pool.map_blocks(lambda block: threading.current_thread().name, 9)
    executor = pool._executor
    assert executor is not None
    assert all(name.startswith("kmeanspp") for name in names)

    pool.map(lambda i: i, 9)
    assert pool._executor is executor

    pool.close()
    assert pool._executor is None
    # Closed pools start a fresh executor on demand
    assert pool.map(lambda i: i * 2, 4) == [0, 2, 4, 6]
    pool.close()


def test_context_manager_closes_executor():
    with WorkerPool(n_workers=2) as pool:
        assert pool.map(lambda i: i + 1, 5) == [1, 2, 3, 4, 5]
        assert pool._executor is not None
    assert pool._executor is None


def test_single_worker_never_starts_threads():
    pool = WorkerPool(n_workers=1)
    pool.map(lambda i: i, 10)
    assert pool._executor is None
