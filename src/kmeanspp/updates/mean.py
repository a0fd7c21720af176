"""
Mean update strategy for centroid-based clustering.
"""

from typing import Optional, List, Sequence, Tuple
from dataclasses import dataclass, field
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater, ClusterablePoint, MetricFunc, PointFactory
from ..base.data_structures import Point
from ..base.exceptions import InvalidArgumentError
from ..utils.parallel import WorkerPool


def mean_coordinates(points: Sequence[ClusterablePoint]) -> Tensor:
    """Coordinate-wise mean of a non-empty group of points."""
    if len(points) == 0:
        raise InvalidArgumentError("Mean of an empty point group is undefined")
    return torch.stack([p.coordinates for p in points]).mean(dim=0)


@dataclass
class UpdateResult:
    """Outcome of one update step."""

    centroids: List[ClusterablePoint]
    residual: float
    empty_slots: List[int] = field(default_factory=list)


class MeanUpdater(ParameterUpdater):
    """Replaces every centroid by the mean of the points assigned to it.

    Centroid objects are never mutated: each updated slot receives a new
    point from ``point_factory``. A slot without members keeps its previous
    centroid, contributes nothing to the residual and is reported in
    ``UpdateResult.empty_slots``.
    """

    def update(self, points: Sequence[ClusterablePoint],
               centroids: Sequence[ClusterablePoint],
               metric: MetricFunc,
               pool: Optional[WorkerPool] = None,
               point_factory: PointFactory = Point,
               **kwargs) -> UpdateResult:
        """Update all centroid slots.

        Args:
            points: Points with current assignments
            centroids: Current centroids, slot order
            metric: Distance used to measure centroid movement
            pool: Worker pool (None for a default pool)
            point_factory: Builds an empty point for each new centroid

        Returns:
            New centroids, residual (sum of per-slot movement) and empty slots
        """
        if pool is None:
            pool = WorkerPool()

        members: List[List[ClusterablePoint]] = [[] for _ in centroids]
        for point in points:
            members[point.centroid_index].append(point)

        def update_block(block: range) -> Tuple[List[ClusterablePoint], float, List[int]]:
            new_centroids = []
            partial_residual = 0.0
            empty = []
            for k in block:
                old = centroids[k]
                if len(members[k]) == 0:
                    new_centroids.append(old)
                    empty.append(k)
                    continue
                centroid = point_factory()
                centroid.replace_coordinates(mean_coordinates(members[k]))
                new_centroids.append(centroid)
                partial_residual += metric(centroid, old)
            return new_centroids, partial_residual, empty

        result = UpdateResult(centroids=[], residual=0.0)
        for new_centroids, partial_residual, empty in pool.map_blocks(update_block, len(centroids)):
            result.centroids.extend(new_centroids)
            result.residual += partial_residual
            result.empty_slots.extend(empty)

        return result
