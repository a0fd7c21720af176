"""
Core interfaces for the k-means++ clustering core.

This module defines the abstract base classes that all components must implement,
so the clusterizer can be driven by any point type, metric, or strategy that
honours these contracts.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Iterable, List, Callable, Sequence
from torch import Tensor


class ClusterablePoint(ABC):
    """Capability set the clustering core needs from a point.

    A point is a fixed-length coordinate vector plus a mutable assignment.
    The assignment is an index into the clusterizer's centroid array rather
    than a reference to the centroid object, since centroid objects are
    replaced on every update step and only the slot index is stable.
    """

    centroid_index: Optional[int]

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Number of coordinates."""
        pass

    @abstractmethod
    def coordinate(self, index: int) -> float:
        """Return a single coordinate.

        Raises:
            IndexOutOfRangeError: If index is outside [0, dimension)
        """
        pass

    @property
    @abstractmethod
    def coordinates(self) -> Tensor:
        """(dimension,) float64 tensor of coordinates."""
        pass

    @abstractmethod
    def replace_coordinates(self, values: Iterable[float]) -> None:
        """Overwrite all coordinates; the new length becomes the dimension."""
        pass


PointFactory = Callable[[], ClusterablePoint]


class DistanceMetric(ABC):
    """Abstract base class for point-to-point distances.

    Implementations must be non-negative, symmetric, zero on identical points
    and satisfy the triangle inequality up to floating-point rounding.
    """

    name: str = 'metric'

    @abstractmethod
    def compute(self, a: ClusterablePoint, b: ClusterablePoint) -> float:
        """Compute the distance between two points of equal dimension.

        Raises:
            DimensionMismatchError: If the dimensions differ
        """
        pass

    def __call__(self, a: ClusterablePoint, b: ClusterablePoint) -> float:
        return self.compute(a, b)


MetricFunc = Callable[[ClusterablePoint, ClusterablePoint], float]


class InitializationStrategy(ABC):
    """Abstract base class for centroid seeding strategies."""

    @abstractmethod
    def initialize(self, points: Sequence[ClusterablePoint], n_clusters: int,
                   metric: MetricFunc, **kwargs) -> List[ClusterablePoint]:
        """Produce the initial centroids.

        Args:
            points: Input points; their assignments are updated in place
            n_clusters: Number of centroids K
            metric: Distance function
            **kwargs: Strategy-specific parameters

        Returns:
            List of K centroids, slot order
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-centroid assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Sequence[ClusterablePoint],
                            centroids: Sequence[ClusterablePoint],
                            metric: MetricFunc, **kwargs) -> Tensor:
        """Assign every point to a centroid slot.

        Returns:
            (n,) long tensor of slot indices; points are updated in place
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, points: Sequence[ClusterablePoint],
               centroids: Sequence[ClusterablePoint],
               metric: MetricFunc, **kwargs) -> Any:
        """Recompute centroids from the current assignments."""
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
