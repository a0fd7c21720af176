"""Chebyshev (L-infinity) distance metric."""

from torch import Tensor

from .chunked import ChunkedDistance


class ChebyshevDistance(ChunkedDistance):
    """Chebyshev distance ``max_i |a_i - b_i|``.

    Absolute differences are non-negative, so 0 is the identity of the
    running max; zero-dimensional points are at distance 0.
    """

    name = 'chebyshev'

    def reduce_chunks(self, chunks: Tensor) -> Tensor:
        return chunks.abs().amax(dim=1)

    def accumulate(self, accumulator: float, difference: float) -> float:
        return max(accumulator, abs(difference))

    def combine(self, partials: Tensor, tail: float) -> float:
        if partials.numel() == 0:
            return tail
        return max(partials.max().item(), tail)
