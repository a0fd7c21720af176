"""
Hard assignment strategy for the Lloyd iterator.

Assigns each point to its nearest centroid based on the distance metric.
"""

from typing import Optional, Sequence, Tuple
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterablePoint, MetricFunc
from ..utils.parallel import WorkerPool


def nearest_centroid(point: ClusterablePoint, centroids: Sequence[ClusterablePoint],
                     metric: MetricFunc) -> Tuple[int, float]:
    """Scan centroids in slot order and return ``(slot, distance)`` of the closest.

    Ties keep the first slot seen.
    """
    best_slot = -1
    best_distance = float('inf')
    for k, centroid in enumerate(centroids):
        distance = metric(point, centroid)
        if distance < best_distance:
            best_slot = k
            best_distance = distance
    return best_slot, best_distance


class NearestCentroidAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to the nearest centroid.

    Each point has exactly one writer per call, so points are assigned
    block-parallel.
    """

    def compute_assignments(self, points: Sequence[ClusterablePoint],
                            centroids: Sequence[ClusterablePoint],
                            metric: MetricFunc,
                            pool: Optional[WorkerPool] = None,
                            **kwargs) -> Tensor:
        """Assign each point to nearest centroid.

        Args:
            points: (n,) points; ``centroid_index`` is overwritten
            centroids: K centroids in slot order
            metric: Distance function
            pool: Worker pool (None for a default pool)

        Returns:
            (n,) long tensor of slot indices
        """
        if pool is None:
            pool = WorkerPool()

        def assign(i: int) -> int:
            slot, _ = nearest_centroid(points[i], centroids, metric)
            points[i].centroid_index = slot
            return slot

        return torch.tensor(pool.map(assign, len(points)), dtype=torch.long)
