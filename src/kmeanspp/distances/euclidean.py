"""
Euclidean distance metric for clustering.

The default metric of the k-means++ clusterizer.
"""

import math
from torch import Tensor

from .chunked import ChunkedDistance


class EuclideanDistance(ChunkedDistance):
    """Euclidean distance ``sqrt(sum_i (a_i - b_i)^2)``."""

    name = 'euclidean'

    def reduce_chunks(self, chunks: Tensor) -> Tensor:
        return (chunks * chunks).sum(dim=1)

    def accumulate(self, accumulator: float, difference: float) -> float:
        return accumulator + difference * difference

    def combine(self, partials: Tensor, tail: float) -> float:
        return partials.sum().item() + tail

    def finalize(self, value: float) -> float:
        return math.sqrt(value)
