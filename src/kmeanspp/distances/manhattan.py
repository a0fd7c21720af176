"""Manhattan (L1) distance metric."""

from torch import Tensor

from .chunked import ChunkedDistance


class ManhattanDistance(ChunkedDistance):
    """Manhattan distance ``sum_i |a_i - b_i|``."""

    name = 'manhattan'

    def reduce_chunks(self, chunks: Tensor) -> Tensor:
        return chunks.abs().sum(dim=1)

    def accumulate(self, accumulator: float, difference: float) -> float:
        return accumulator + abs(difference)

    def combine(self, partials: Tensor, tail: float) -> float:
        return partials.sum().item() + tail
