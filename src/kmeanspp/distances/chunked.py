"""
Chunked reduction shared by the point-to-point metrics.

The difference vector is split into fixed-width chunks, one SIMD register
wide. All full chunks are reduced at once by a vectorised torch operation,
giving one partial accumulator per chunk. The remaining tail dimensions are
walked sequentially, and partials and tail are then combined with the
metric's associative operation (sum or max).
"""

from abc import abstractmethod
from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric, ClusterablePoint
from ..base.exceptions import DimensionMismatchError, InvalidArgumentError
from ..utils.device import get_simd_lane_count


def check_same_dimension(a: ClusterablePoint, b: ClusterablePoint) -> None:
    """Raise DimensionMismatchError unless both points have the same dimension."""
    if a.dimension != b.dimension:
        raise DimensionMismatchError(
            f"Point dimensions are not equal: {a.dimension} != {b.dimension}"
        )


class ChunkedDistance(DistanceMetric):
    """Distance computed as chunk partials + sequential tail + final combine.

    Subclasses provide the per-chunk reduction, the per-element tail step and
    the final transform. The difference ``a - b`` is computed once and only
    squared or absolute-valued afterwards, so swapping the arguments yields
    bit-identical results.
    """

    def __init__(self, lane_width: Optional[int] = None):
        """
        Args:
            lane_width: Chunk width in dimensions (None for the CPU's float64
                SIMD lane count)
        """
        if lane_width is None:
            lane_width = get_simd_lane_count(torch.float64)
        if lane_width <= 0:
            raise InvalidArgumentError(f"lane_width must be positive, got {lane_width}")
        self.lane_width = lane_width

    @abstractmethod
    def reduce_chunks(self, chunks: Tensor) -> Tensor:
        """Reduce an (n_chunks, lane_width) difference block to (n_chunks,) partials."""
        pass

    @abstractmethod
    def accumulate(self, accumulator: float, difference: float) -> float:
        """Fold one tail difference into the running accumulator."""
        pass

    @abstractmethod
    def combine(self, partials: Tensor, tail: float) -> float:
        """Combine chunk partials with the tail accumulator."""
        pass

    def finalize(self, value: float) -> float:
        return value

    def compute(self, a: ClusterablePoint, b: ClusterablePoint) -> float:
        check_same_dimension(a, b)

        diff = a.coordinates - b.coordinates
        n_chunks = diff.shape[0] // self.lane_width
        split = n_chunks * self.lane_width

        if n_chunks > 0:
            partials = self.reduce_chunks(diff[:split].reshape(n_chunks, self.lane_width))
        else:
            partials = diff.new_empty(0)

        tail = 0.0
        for value in diff[split:].tolist():
            tail = self.accumulate(tail, value)

        return self.finalize(self.combine(partials, tail))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(lane_width={self.lane_width})"
