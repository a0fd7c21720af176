"""
Per-dimension bounds of the input points.

Used only by seeding, to draw the synthetic first centroid inside the
bounding box of the data.
"""

from typing import List, Optional, Sequence, Tuple
import torch
from torch import Tensor

from ..base.interfaces import ClusterablePoint
from ..base.data_structures import DimensionInterval
from ..base.exceptions import InvalidArgumentError
from ..utils.parallel import WorkerPool


def _combine_bounds(accumulated: Optional[Tuple[Tensor, Tensor]],
                    partial: Tuple[Tensor, Tensor]) -> Tuple[Tensor, Tensor]:
    if accumulated is None:
        return partial
    return torch.minimum(accumulated[0], partial[0]), torch.maximum(accumulated[1], partial[1])


def compute_dimension_intervals(points: Sequence[ClusterablePoint],
                                pool: Optional[WorkerPool] = None) -> List[DimensionInterval]:
    """Compute the ``(min, max)`` interval of every dimension over all points.

    Each worker reduces its own block of points; block results are merged
    after the pool joins.

    Args:
        points: Non-empty sequence of points of equal dimension
        pool: Worker pool (None for a default pool)

    Returns:
        One DimensionInterval per dimension
    """
    if len(points) == 0:
        raise InvalidArgumentError("Cannot compute bounds of an empty point collection")
    if pool is None:
        pool = WorkerPool()

    def block_bounds(block: range) -> Tuple[Tensor, Tensor]:
        coords = torch.stack([points[i].coordinates for i in block])
        return coords.amin(dim=0), coords.amax(dim=0)

    low, high = pool.map_reduce(block_bounds, _combine_bounds, len(points), None)
    return [DimensionInterval(lo, hi) for lo, hi in zip(low.tolist(), high.tolist())]
