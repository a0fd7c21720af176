"""
Base class for the k-means++ clusterizer.

Provides the Lloyd skeleton: alternate assignment and update steps until the
convergence criterion is met or the iteration cap is reached, then expose the
resulting partition.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Sequence, Set
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    ClusterablePoint, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, MetricFunc
)
from .data_structures import Partition, IterationRecord, EmptyClusterEvent
from .exceptions import InvalidArgumentError, ConvergenceWarning, EmptyClusterWarning


class BaseClusteringAlgorithm:
    """Base class implementing the assign/update loop.

    Subclasses need to specify (in ``_create_components``):
    - Assignment strategy
    - Parameter update strategy
    - Initialization strategy
    - Convergence criterion
    - Worker pool

    and must fill ``points_``, ``metric`` and ``centroids_`` before clustering.
    """

    # Parameters that may be changed after construction
    _mutable_params = ('max_iter', 'tol', 'verbose')

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 1000,
                 tol: float = 0.0,
                 verbose: int = 0,
                 random_state: Optional[Any] = None,
                 n_workers: Optional[int] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum Lloyd iterations per run
            tol: Convergence tolerance on the residual (0 for exact)
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for seeding
            n_workers: Worker threads (None for torch's thread count)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.verbose = verbose
        self.random_state = random_state
        self.n_workers = n_workers

        # These will be set by subclasses
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.pool = None
        self.metric: Optional[MetricFunc] = None
        self.point_factory = None

        # Algorithm state
        self.points_: List[ClusterablePoint] = []
        self.centroids_: List[ClusterablePoint] = []
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[IterationRecord] = []
        self.empty_cluster_events_: List[EmptyClusterEvent] = []
        self._partition: Optional[Partition] = None

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.update_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        - self.pool
        """
        pass

    def _validate_params(self) -> None:
        """Check the current parameters; subclasses raise InvalidArgumentError."""
        pass

    def get_clusters(self) -> Optional[Partition]:
        """Return the partition, running Lloyd's algorithm if needed.

        The partition is memoised once clustering converges.

        Returns:
            Mapping from centroid to assigned points, or None if the
            iteration cap was reached first
        """
        if self._partition is not None:
            return self._partition

        if not self._define_clusters():
            return None

        self._partition = Partition(self.centroids_, self.points_)
        return self._partition

    def _define_clusters(self) -> bool:
        """Run Lloyd iterations from the current centroids.

        Returns:
            True if the run converged
        """
        self.convergence_criterion.reset()
        self.converged_ = False
        self.n_iter_ = 0
        self.history_ = []
        self.empty_cluster_events_ = []

        start_time = time.time()

        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # Assignment step
            self.assignment_strategy.compute_assignments(
                self.points_, self.centroids_, self.metric, pool=self.pool
            )

            # Update step
            result = self.update_strategy.update(
                self.points_, self.centroids_, self.metric,
                pool=self.pool, point_factory=self.point_factory
            )
            self.centroids_ = result.centroids
            self._report_empty_clusters(iteration, result.empty_slots)

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'residual': result.residual
            })

            iter_time = time.time() - iter_start_time
            self.history_.append(IterationRecord(
                iteration=iteration,
                residual=result.residual,
                empty_slots=list(result.empty_slots),
                metadata={'time': iter_time}
            ))
            self.n_iter_ = iteration + 1

            # Logging
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: residual = {result.residual:.6f} "
                      f"({iter_time:.3f}s)")

            if converged:
                # Final pass so the partition reflects the final centroid positions
                self.assignment_strategy.compute_assignments(
                    self.points_, self.centroids_, self.metric, pool=self.pool
                )
                self.converged_ = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        total_time = time.time() - start_time

        if self.verbose:
            if not self.converged_:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations",
                              ConvergenceWarning)
            print(f"Total clustering time: {total_time:.3f}s")

        return self.converged_

    def _report_empty_clusters(self, iteration: int, empty_slots: Sequence[int]) -> None:
        for slot in empty_slots:
            self.empty_cluster_events_.append(EmptyClusterEvent(iteration=iteration, slot=slot))
            warnings.warn(f"Empty cluster at iteration {iteration}: slot {slot} "
                          f"kept its previous centroid", EmptyClusterWarning)

    @property
    def cluster_centers_(self) -> Tensor:
        """(K, d) tensor of the current centroids."""
        return torch.stack([c.coordinates for c in self.centroids_])

    @property
    def labels_(self) -> Optional[Tensor]:
        """(n,) slot of every point, or None before a successful run."""
        if self._partition is None:
            return None
        return self._partition.labels

    @property
    def residual_(self) -> Optional[float]:
        """Residual of the last iteration run."""
        if not self.history_:
            return None
        return self.history_[-1].residual

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'n_workers': self.n_workers
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set run parameters that do not invalidate the seeding.

        Only ``max_iter``, ``tol`` and ``verbose`` can be changed once the
        centroids are seeded.
        """
        for key in params:
            if key not in self._mutable_params:
                raise InvalidArgumentError(
                    f"Cannot change '{key}' after construction; "
                    f"settable parameters are {list(self._mutable_params)}"
                )
        previous = {key: getattr(self, key) for key in params}
        for key, value in params.items():
            setattr(self, key, value)
        try:
            self._validate_params()
        except InvalidArgumentError:
            for key, value in previous.items():
                setattr(self, key, value)
            raise
        self._update_components(set(params))
        return self

    def _update_components(self, changed: Set[str]) -> None:
        """Refresh the components that depend on the changed parameters.

        The default rebuilds everything; subclasses narrow this so that
        components configured by the caller survive.
        """
        self._create_components()
