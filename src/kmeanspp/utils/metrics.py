"""
Clustering evaluation metrics.

Silhouette analysis over a converged partition, computed with the same
distance function the partition was built with.
"""

from typing import Optional, Sequence
import torch
from torch import Tensor

from ..base.interfaces import ClusterablePoint, MetricFunc
from ..base.data_structures import Partition
from .parallel import WorkerPool


def mean_distance(point: ClusterablePoint, members: Sequence[ClusterablePoint],
                  metric: MetricFunc) -> float:
    """Mean distance from ``point`` to every member (``point`` itself included if present)."""
    total = 0.0
    for other in members:
        total += metric(point, other)
    return total / len(members)


def silhouette_value(a: float, b: Optional[float]) -> float:
    """Silhouette coefficient from intra (a) and nearest-cluster (b) distances.

    ``b`` is None when no other non-empty cluster exists; the coefficient is
    then 0, as it is when both distances are 0.
    """
    if b is None:
        return 0.0
    denominator = max(a, b)
    if denominator == 0.0:
        return 0.0
    return (b - a) / denominator


def silhouette_coefficients(points: Sequence[ClusterablePoint], partition: Partition,
                            metric: MetricFunc,
                            pool: Optional[WorkerPool] = None) -> Tensor:
    """Compute the silhouette coefficient of every point.

    For a point p in cluster C, ``a(p)`` is the mean distance to all members
    of C (p included in the count) and ``b(p)`` the smallest mean distance
    to the members of any other non-empty cluster.

    Args:
        points: Points in input order, assigned as in ``partition``
        partition: Converged partition
        metric: Distance function
        pool: Worker pool (None for a default pool)

    Returns:
        (n,) float64 tensor with values in [-1, 1]
    """
    if pool is None:
        pool = WorkerPool()

    clusters = [partition.members(k) for k in range(len(partition))]

    def coefficient(i: int) -> float:
        point = points[i]
        own = point.centroid_index
        a = mean_distance(point, clusters[own], metric)

        b = None
        for k, members in enumerate(clusters):
            if k == own or len(members) == 0:
                continue
            distance = mean_distance(point, members, metric)
            if b is None or distance < b:
                b = distance

        return silhouette_value(a, b)

    values = pool.map(coefficient, len(points))
    return torch.tensor(values, dtype=torch.float64)


def mean_silhouette(coefficients: Tensor) -> float:
    """Mean of the signed silhouette coefficients."""
    if coefficients.numel() == 0:
        return 0.0
    return coefficients.mean().item()


def negative_silhouette_fraction(coefficients: Tensor) -> float:
    """Fraction of points whose silhouette coefficient is negative."""
    if coefficients.numel() == 0:
        return 0.0
    return (coefficients < 0).double().mean().item()
