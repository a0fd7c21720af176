"""
Worker pool for the data-parallel loops of the clustering core.

Every phase (per point, per centroid, per block of dimensions) is split into
contiguous index blocks. Each block runs as one task and produces its own
partial result; partials are returned in block order and combined by the
caller after the pool has joined. No worker ever writes to a shared
accumulator.
"""

from typing import Callable, List, TypeVar, Optional, Iterable
from concurrent.futures import ThreadPoolExecutor

from .device import get_default_num_workers
from ..base.exceptions import InvalidArgumentError

T = TypeVar('T')


def split_range(n_items: int, n_blocks: int) -> List[range]:
    """Split ``range(n_items)`` into at most ``n_blocks`` contiguous blocks.

    Block sizes differ by at most one; empty blocks are dropped.
    """
    if n_items <= 0:
        return []
    n_blocks = max(1, min(n_blocks, n_items))
    base, extra = divmod(n_items, n_blocks)
    blocks = []
    start = 0
    for b in range(n_blocks):
        stop = start + base + (1 if b < extra else 0)
        blocks.append(range(start, stop))
        start = stop
    return blocks


class WorkerPool:
    """Thread pool that maps a function over contiguous index blocks.

    With a single worker the blocks run inline on the calling thread.
    Otherwise one executor is created on first use and reused by every
    later call until :meth:`close`.

    Examples
    --------
    >>> with WorkerPool(n_workers=4) as pool:
    ...     partials = pool.map_blocks(lambda block: sum(block), 10)
    >>> sum(partials)
    45
    """

    def __init__(self, n_workers: Optional[int] = None):
        """
        Args:
            n_workers: Number of threads (None for torch's thread count)
        """
        if n_workers is None:
            n_workers = get_default_num_workers()
        if n_workers <= 0:
            raise InvalidArgumentError(f"n_workers must be positive, got {n_workers}")
        self.n_workers = n_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.n_workers,
                                                thread_name_prefix='kmeanspp')
        return self._executor

    def map_blocks(self, fn: Callable[[range], T], n_items: int) -> List[T]:
        """Run ``fn`` once per block of ``range(n_items)``.

        Returns:
            Partial results in block order
        """
        blocks = split_range(n_items, self.n_workers)
        if len(blocks) <= 1 or self.n_workers == 1:
            return [fn(block) for block in blocks]

        executor = self._get_executor()
        futures = [executor.submit(fn, block) for block in blocks]
        # result() re-raises worker exceptions on the calling thread
        return [future.result() for future in futures]

    def map_reduce(self, fn: Callable[[range], T],
                   combine: Callable[[T, T], T],
                   n_items: int,
                   initial: T) -> T:
        """Map over blocks, then fold the partials sequentially in block order."""
        result = initial
        for partial in self.map_blocks(fn, n_items):
            result = combine(result, partial)
        return result

    def for_each(self, fn: Callable[[int], None], n_items: int) -> None:
        """Call ``fn(i)`` for every index; each index is visited by exactly one worker."""
        def run_block(block: range) -> None:
            for i in block:
                fn(i)

        self.map_blocks(run_block, n_items)

    def map(self, fn: Callable[[int], T], n_items: int) -> List[T]:
        """Return ``[fn(i) for i in range(n_items)]`` computed block-parallel."""
        def run_block(block: range) -> List[T]:
            return [fn(i) for i in block]

        return flatten(self.map_blocks(run_block, n_items))

    def close(self) -> None:
        """Shut down the executor; a later call creates a new one."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> 'WorkerPool':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"WorkerPool(n_workers={self.n_workers})"


def flatten(blocks: Iterable[List[T]]) -> List[T]:
    """Concatenate per-block result lists in order."""
    out: List[T] = []
    for block in blocks:
        out.extend(block)
    return out
