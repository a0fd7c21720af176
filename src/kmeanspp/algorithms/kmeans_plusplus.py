"""
K-means++ clusterizer.

Seeds K centroids with k-means++ at construction, runs Lloyd's algorithm on
demand and scores the converged partition with silhouette coefficients.
"""

from typing import Optional, Union, Sequence, Tuple, Any, Set
import numpy as np
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import MetricFunc, PointFactory, ConvergenceCriterion
from ..base.data_structures import Point
from ..base.exceptions import InvalidArgumentError
from ..distances import euclidean, get_metric
from ..assignments.hard import NearestCentroidAssignment
from ..updates.mean import MeanUpdater
from ..initialization.bounds import compute_dimension_intervals
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..utils.convergence import ResidualThreshold
from ..utils.metrics import silhouette_coefficients, mean_silhouette
from ..utils.parallel import WorkerPool
from ..utils.validation import (
    validate_points, check_n_clusters, check_max_iter, check_tolerance, check_random_state
)


class KMeansPlusPlus(BaseClusteringAlgorithm):
    """K-means clustering with k-means++ seeding and silhouette analysis.

    Construction validates the arguments, computes the per-dimension bounds
    of the points and seeds all K centroids. Clustering itself runs lazily
    on the first call to :meth:`get_clusters` or any silhouette method.

    Parameters
    ----------
    n_clusters : int
        Number of centroids K, positive and at most the number of points
    points : sequence of points, or (n, d) tensor / ndarray
        Input points; raw coordinate rows are wrapped in :class:`Point`.
        Points are updated in place with their centroid slot.
    metric : callable or str, default=euclidean
        Distance between two points, or one of 'euclidean', 'manhattan',
        'chebyshev'
    max_iter : int, default=1000
        Maximum number of Lloyd iterations
    tol : float, default=0.0
        Largest residual counted as converged. 0 keeps the exact policy:
        converge only once no centroid moves at all.
    random_state : int or torch.Generator, optional
        Seed or generator for k-means++ seeding
    n_workers : int, optional
        Worker threads for the data-parallel phases
    point_factory : callable, default=Point
        Builds an empty point; used for every centroid the clusterizer creates
    convergence_criterion : ConvergenceCriterion, optional
        Replaces the residual threshold built from ``tol``; kept across
        :meth:`set_params`
    verbose : int, default=0
        Verbosity level

    Attributes
    ----------
    centroids_ : list of points
        Current centroids in slot order
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Current centroid coordinates
    labels_ : Tensor of shape (n_samples,) or None
        Slot of every point after a successful run
    dimension_intervals_ : list of DimensionInterval
        Per-dimension bounds of the input points
    n_iter_ : int
        Number of iterations of the last run
    converged_ : bool
        Whether the last run converged
    history_ : list of IterationRecord
        Residual and empty slots of every iteration of the last run
    empty_cluster_events_ : list of EmptyClusterEvent
        Slots that had no members during the last run

    Examples
    --------
    >>> from kmeanspp import KMeansPlusPlus, Point
    >>> points = [Point([x]) for x in (0.0, 0.0, 0.0, 10.0, 10.0, 10.0)]
    >>> clusterizer = KMeansPlusPlus(2, points, random_state=0)
    >>> ok, score = clusterizer.perform_silhouette_analysis()
    >>> ok, round(score, 3)
    (True, 1.0)
    """

    def __init__(self,
                 n_clusters: int,
                 points: Union[Sequence[Any], Tensor, np.ndarray],
                 metric: Union[MetricFunc, str] = euclidean,
                 max_iter: int = 1000,
                 tol: float = 0.0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 n_workers: Optional[int] = None,
                 point_factory: PointFactory = Point,
                 convergence_criterion: Optional[ConvergenceCriterion] = None,
                 verbose: int = 0):
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            tol=tol,
            verbose=verbose,
            random_state=random_state,
            n_workers=n_workers
        )
        self.points_ = validate_points(points)
        self._validate_params()

        self.metric = get_metric(metric)
        self.point_factory = point_factory
        self._custom_criterion = convergence_criterion
        self.generator = check_random_state(random_state)

        self._create_components()
        self._initialize_centroids()

    def _validate_params(self) -> None:
        check_n_clusters(self.n_clusters, len(self.points_))
        check_max_iter(self.max_iter)
        check_tolerance(self.tol)
        if self.n_workers is not None and self.n_workers <= 0:
            raise InvalidArgumentError(f"n_workers must be positive, got {self.n_workers}")

    def _create_components(self) -> None:
        """Create k-means++ specific components."""
        self.pool = WorkerPool(self.n_workers)
        self.assignment_strategy = NearestCentroidAssignment()
        self.update_strategy = MeanUpdater()
        self.initialization_strategy = KMeansPlusPlusInit(verbose=self.verbose)
        self.convergence_criterion = self._make_convergence_criterion()

    def _make_convergence_criterion(self) -> ConvergenceCriterion:
        if self._custom_criterion is not None:
            return self._custom_criterion
        return ResidualThreshold(tol=self.tol)

    def _update_components(self, changed: Set[str]) -> None:
        if 'tol' in changed:
            self.convergence_criterion = self._make_convergence_criterion()
        if 'verbose' in changed:
            self.initialization_strategy.verbose = self.verbose

    def _initialize_centroids(self) -> None:
        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        self.dimension_intervals_ = compute_dimension_intervals(self.points_, self.pool)
        self.centroids_ = self.initialization_strategy.initialize(
            self.points_,
            self.n_clusters,
            self.metric,
            bounds=self.dimension_intervals_,
            generator=self.generator,
            pool=self.pool,
            point_factory=self.point_factory
        )

    @property
    def dimension(self) -> int:
        """Dimension shared by all points."""
        return self.points_[0].dimension

    def get_silhouette_coeffs(self) -> Optional[Tensor]:
        """Silhouette coefficient of every point.

        Runs clustering first if no partition exists yet.

        Returns:
            (n,) float64 tensor in input order, or None if clustering did not
            converge
        """
        partition = self.get_clusters()
        if partition is None:
            return None
        return silhouette_coefficients(self.points_, partition, self.metric, self.pool)

    def perform_silhouette_analysis(self) -> Tuple[bool, float]:
        """Aggregate silhouette score of the partition.

        The score is the mean of the signed per-point coefficients.

        Returns:
            (True, mean coefficient), or (False, -1.0) if clustering did not
            converge
        """
        coefficients = self.get_silhouette_coeffs()
        if coefficients is None:
            return False, -1.0
        return True, mean_silhouette(coefficients)

    def predict(self, points: Union[Sequence[Any], Tensor, np.ndarray]) -> Tensor:
        """Slot of the nearest current centroid for new points.

        The given points are not modified.
        """
        copies = [Point(p.coordinates) for p in validate_points(points)]
        return self.assignment_strategy.compute_assignments(
            copies, self.centroids_, self.metric, pool=self.pool
        )

    def close(self) -> None:
        """Release the worker threads; the clusterizer stays usable."""
        self.pool.close()

    def __enter__(self) -> 'KMeansPlusPlus':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return (f"KMeansPlusPlus(n_clusters={self.n_clusters}, n_points={len(self.points_)}, "
                f"metric={self.metric!r}, max_iter={self.max_iter}, tol={self.tol})")
