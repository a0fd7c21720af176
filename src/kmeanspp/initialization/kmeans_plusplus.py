"""
K-means++ initialization strategy.

Fills the K centroid slots one after another. Each new centroid is an input
point drawn with probability proportional to its distance from the centroid
it is currently assigned to, so points far from every existing centroid are
the likeliest seeds.
"""

from typing import List, Optional, Sequence
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterablePoint, MetricFunc, PointFactory
from ..base.data_structures import Point, DimensionInterval
from ..base.exceptions import InvalidArgumentError
from ..updates.mean import mean_coordinates
from ..utils.parallel import WorkerPool
from .bounds import compute_dimension_intervals


def weighted_choice(weights: Tensor, generator: Optional[torch.Generator] = None) -> int:
    """Draw an index with probability proportional to ``weights``.

    A threshold is drawn uniformly from ``[0, sum(weights))`` and the
    cumulative sum is walked in index order; the first index whose cumulative
    weight exceeds the threshold wins, so zero-weight entries are never
    drawn. If every weight is zero the draw is index 0.

    Args:
        weights: (n,) non-negative weights
        generator: Random source

    Returns:
        Selected index
    """
    # Draw before the zero check so the generator advances the same way on every call
    u = torch.rand(1, generator=generator, dtype=torch.float64).item()

    cumulative = torch.cumsum(weights.to(torch.float64), dim=0)
    total = cumulative[-1].item()
    if total <= 0.0:
        return 0

    threshold = torch.tensor([u * total], dtype=torch.float64)
    index = int(torch.searchsorted(cumulative, threshold, right=True).item())

    # Rounding can push the threshold onto the total; fall back to the last drawable index
    last_positive = int(torch.nonzero(weights > 0)[-1].item())
    return min(index, last_positive)


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ seeding.

    Algorithm:
    1. Slot 0: with K > 1, a synthetic point drawn uniformly from the bounding
       box of the data; with K == 1, the mean of all points. Every point is
       assigned to slot 0.
    2. Slot i > 0: weight every point by its distance to its assigned
       centroid, draw one point by weight and copy it into slot i, then move
       each point that is strictly closer to the new centroid.
    """

    def __init__(self, verbose: int = 0):
        """
        Args:
            verbose: Verbosity level (2 prints every chosen seed)
        """
        self.verbose = verbose

    def initialize(self, points: Sequence[ClusterablePoint], n_clusters: int,
                   metric: MetricFunc,
                   bounds: Optional[List[DimensionInterval]] = None,
                   generator: Optional[torch.Generator] = None,
                   pool: Optional[WorkerPool] = None,
                   point_factory: PointFactory = Point,
                   **kwargs) -> List[ClusterablePoint]:
        """Initialize centroids using k-means++.

        Args:
            points: (n,) input points; assignments are written in place
            n_clusters: Number of centroids K
            metric: Distance function
            bounds: Per-dimension intervals (computed if not given)
            generator: Random source owned by the caller
            pool: Worker pool (None for a default pool)
            point_factory: Builds an empty point for each centroid

        Returns:
            List of K centroids in slot order
        """
        n_points = len(points)
        if n_clusters <= 0:
            raise InvalidArgumentError(f"n_clusters must be positive, got {n_clusters}")
        if n_clusters > n_points:
            raise InvalidArgumentError(f"Cannot create {n_clusters} clusters from {n_points} points")

        if pool is None:
            pool = WorkerPool()
        if bounds is None:
            bounds = compute_dimension_intervals(points, pool)

        centroids = [self._first_centroid(points, n_clusters, bounds, generator, pool, point_factory)]

        for slot in range(1, n_clusters):
            centroids.append(
                self._next_centroid(points, centroids, slot, metric, generator, pool, point_factory)
            )

        return centroids

    def _first_centroid(self, points: Sequence[ClusterablePoint], n_clusters: int,
                        bounds: List[DimensionInterval],
                        generator: Optional[torch.Generator],
                        pool: WorkerPool,
                        point_factory: PointFactory) -> ClusterablePoint:
        if n_clusters > 1:
            low = torch.tensor([interval.low for interval in bounds], dtype=torch.float64)
            width = torch.tensor([interval.width for interval in bounds], dtype=torch.float64)
            coordinates = low + width * torch.rand(len(bounds), generator=generator, dtype=torch.float64)
        else:
            # A single cluster is the global mean of the data
            coordinates = mean_coordinates(points)

        centroid = point_factory()
        centroid.replace_coordinates(coordinates)

        def assign_first(i: int) -> None:
            points[i].centroid_index = 0

        pool.for_each(assign_first, len(points))

        if self.verbose >= 2:
            print(f"Seed 0: {centroid.coordinates.tolist()}")

        return centroid

    def _next_centroid(self, points: Sequence[ClusterablePoint],
                       centroids: List[ClusterablePoint],
                       slot: int,
                       metric: MetricFunc,
                       generator: Optional[torch.Generator],
                       pool: WorkerPool,
                       point_factory: PointFactory) -> ClusterablePoint:
        def distance_to_assigned(i: int) -> float:
            point = points[i]
            return metric(point, centroids[point.centroid_index])

        distances = pool.map(distance_to_assigned, len(points))

        # Sequential scan; must not be parallelised to keep the draw deterministic
        chosen = weighted_choice(torch.tensor(distances, dtype=torch.float64), generator)

        centroid = point_factory()
        centroid.replace_coordinates(points[chosen].coordinates)

        def reassign(i: int) -> None:
            if metric(points[i], centroid) < distances[i]:
                points[i].centroid_index = slot

        pool.for_each(reassign, len(points))

        if self.verbose >= 2:
            print(f"Seed {slot}: point {chosen} (weight {distances[chosen]:.6f})")

        return centroid
