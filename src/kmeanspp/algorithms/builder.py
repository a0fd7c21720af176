"""
Builder pattern for configuring a k-means++ clustering run.

Provides a fluent interface for collecting run parameters before the
clusterizer is constructed (and seeded) on a concrete point collection.
"""

from typing import Optional, Union, Sequence, Any, Dict
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import MetricFunc, PointFactory, ConvergenceCriterion
from ..base.data_structures import Point
from ..base.exceptions import InvalidArgumentError
from ..distances import get_metric
from .kmeans_plusplus import KMeansPlusPlus


class ClusteringBuilder:
    """Fluent builder for :class:`KMeansPlusPlus`.

    Examples
    --------
    >>> clusterizer = (ClusteringBuilder()
    ...     .with_metric('manhattan')
    ...     .with_max_iter(200)
    ...     .with_tolerance(1e-9)
    ...     .with_random_state(7)
    ...     .build(n_clusters=3, points=points))
    """

    def __init__(self):
        """Initialize builder with defaults."""
        self._metric: Union[str, MetricFunc] = 'euclidean'
        self._metric_kwargs: Dict[str, Any] = {}
        self._max_iter = 1000
        self._tol = 0.0
        self._convergence_criterion: Optional[ConvergenceCriterion] = None
        self._random_state = None
        self._n_workers = None
        self._point_factory: PointFactory = Point
        self._verbose = 0

    def with_metric(self, metric: Union[str, MetricFunc], **kwargs) -> 'ClusteringBuilder':
        """Set the distance metric by name or callable.

        Keyword arguments (e.g. ``lane_width``) are passed to named metrics.
        """
        if kwargs and not isinstance(metric, str):
            raise InvalidArgumentError("Metric options are only accepted with a metric name")
        self._metric = metric
        self._metric_kwargs = kwargs
        return self

    def with_max_iter(self, max_iter: int) -> 'ClusteringBuilder':
        """Set the Lloyd iteration cap."""
        self._max_iter = max_iter
        return self

    def with_tolerance(self, tol: float) -> 'ClusteringBuilder':
        """Converge once the residual is at most ``tol`` (0 for exact)."""
        self._tol = tol
        return self

    def with_convergence(self, criterion: ConvergenceCriterion) -> 'ClusteringBuilder':
        """Replace the residual criterion with a custom one."""
        self._convergence_criterion = criterion
        return self

    def with_random_state(self, random_state: Optional[Union[int, torch.Generator]]) -> 'ClusteringBuilder':
        """Set the seed or generator used for seeding."""
        self._random_state = random_state
        return self

    def with_workers(self, n_workers: Optional[int]) -> 'ClusteringBuilder':
        """Set the number of worker threads."""
        self._n_workers = n_workers
        return self

    def with_point_factory(self, point_factory: PointFactory) -> 'ClusteringBuilder':
        """Set the factory used to create centroids."""
        self._point_factory = point_factory
        return self

    def with_verbose(self, verbose: int = 1) -> 'ClusteringBuilder':
        """Set verbosity level."""
        self._verbose = verbose
        return self

    def build(self, n_clusters: int,
              points: Union[Sequence[Any], Tensor, np.ndarray]) -> KMeansPlusPlus:
        """Construct and seed the clusterizer.

        Args:
            n_clusters: Number of centroids K
            points: Input points

        Returns:
            Seeded KMeansPlusPlus instance
        """
        metric = get_metric(self._metric, **self._metric_kwargs)

        clusterizer = KMeansPlusPlus(
            n_clusters=n_clusters,
            points=points,
            metric=metric,
            max_iter=self._max_iter,
            tol=self._tol,
            random_state=self._random_state,
            n_workers=self._n_workers,
            point_factory=self._point_factory,
            convergence_criterion=self._convergence_criterion,
            verbose=self._verbose
        )

        return clusterizer


def create_kmeanspp(n_clusters: int,
                    points: Union[Sequence[Any], Tensor, np.ndarray],
                    metric: Union[str, MetricFunc] = 'euclidean',
                    **kwargs) -> KMeansPlusPlus:
    """Create a k-means++ clusterizer.

    Args:
        n_clusters: Number of centroids
        points: Input points
        metric: Metric name or callable
        **kwargs: Additional KMeansPlusPlus parameters

    Returns:
        Seeded KMeansPlusPlus instance
    """
    return KMeansPlusPlus(n_clusters=n_clusters, points=points, metric=metric, **kwargs)
