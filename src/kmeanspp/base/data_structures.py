"""
Core data structures for the k-means++ clustering core.

This module provides the concrete point type, the per-dimension bounds used
for seeding, the partition returned to callers, and the records kept for each
Lloyd iteration.
"""

from typing import Optional, List, Dict, Any, Iterable, Iterator, Mapping, Sequence, Union
from dataclasses import dataclass, field
import numpy as np
import torch
from torch import Tensor

from .interfaces import ClusterablePoint
from .exceptions import IndexOutOfRangeError, InvalidArgumentError


CoordinateLike = Union[Tensor, np.ndarray, Iterable[float], ClusterablePoint]


def as_coordinate_tensor(values: Optional[CoordinateLike]) -> Tensor:
    """Convert coordinate input into a fresh 1D float64 tensor."""
    if values is None:
        return torch.empty(0, dtype=torch.float64)
    if isinstance(values, ClusterablePoint):
        return values.coordinates.clone()
    if isinstance(values, Tensor):
        tensor = values.detach().to(dtype=torch.float64).clone()
    elif isinstance(values, np.ndarray):
        tensor = torch.from_numpy(np.array(values, dtype=np.float64))
    else:
        try:
            tensor = torch.tensor([float(v) for v in values], dtype=torch.float64)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Cannot read coordinates from {values!r}: {e}") from e

    if tensor.dim() == 0:
        tensor = tensor.reshape(1)
    if tensor.dim() != 1:
        raise InvalidArgumentError(f"Expected 1D coordinates, got {tensor.dim()}D")
    return tensor


class Point(ClusterablePoint):
    """Fixed-length coordinate vector with a mutable centroid assignment.

    Coordinates are stored as a float64 tensor. ``Point()`` builds an empty
    point, which is how the clustering core fabricates new centroids before
    filling them with :meth:`replace_coordinates`.

    Points compare and hash by identity so centroids can key a
    :class:`Partition`.
    """

    def __init__(self, values: Optional[CoordinateLike] = None):
        """
        Args:
            values: Coordinates (sequence, ndarray, tensor or another point)
        """
        self._coordinates = as_coordinate_tensor(values)
        self.centroid_index: Optional[int] = None

    @property
    def dimension(self) -> int:
        return self._coordinates.shape[0]

    @property
    def coordinates(self) -> Tensor:
        return self._coordinates

    def coordinate(self, index: int) -> float:
        if index < 0 or index >= self.dimension:
            raise IndexOutOfRangeError(
                f"Coordinate {index} out of range for dimension {self.dimension}"
            )
        return self._coordinates[index].item()

    def replace_coordinates(self, values: CoordinateLike) -> None:
        self._coordinates = as_coordinate_tensor(values)

    def copy(self) -> 'Point':
        """Copy coordinates into a new, unassigned point of the same type."""
        return type(self)(self._coordinates)

    def tolist(self) -> List[float]:
        return self._coordinates.tolist()

    def __getitem__(self, index: int) -> float:
        return self.coordinate(index)

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[float]:
        return iter(self.tolist())

    def __repr__(self) -> str:
        return f"Point({self.tolist()}, centroid_index={self.centroid_index})"


@dataclass(frozen=True)
class DimensionInterval:
    """Closed ``[low, high]`` range of one coordinate over the input points."""

    low: float
    high: float

    @property
    def width(self) -> float:
        return self.high - self.low

    def __iter__(self):
        yield self.low
        yield self.high


@dataclass(frozen=True)
class EmptyClusterEvent:
    """A centroid slot that kept its previous position because it had no members."""

    iteration: int
    slot: int


@dataclass
class IterationRecord:
    """State captured after one Lloyd iteration."""

    iteration: int
    residual: float
    empty_slots: List[int] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class Partition(Mapping):
    """Mapping from centroid to the points currently assigned to it.

    Keys are the centroid objects in slot order; every slot is present, empty
    slots map to an empty list. Members keep the input order of the points.
    """

    def __init__(self, centroids: Sequence[ClusterablePoint],
                 points: Sequence[ClusterablePoint]):
        """
        Args:
            centroids: Centroids in slot order
            points: All input points with a valid ``centroid_index``
        """
        self._centroids = list(centroids)
        self._members: List[List[ClusterablePoint]] = [[] for _ in self._centroids]
        labels = []
        for point in points:
            slot = point.centroid_index
            if slot is None or slot < 0 or slot >= len(self._centroids):
                raise InvalidArgumentError(f"Point has no valid centroid assignment: {slot}")
            self._members[slot].append(point)
            labels.append(slot)
        self._labels = torch.tensor(labels, dtype=torch.long)
        self._slots = {id(c): k for k, c in enumerate(self._centroids)}

    def __getitem__(self, centroid: ClusterablePoint) -> List[ClusterablePoint]:
        return self._members[self.slot_of(centroid)]

    def __iter__(self) -> Iterator[ClusterablePoint]:
        return iter(self._centroids)

    def __len__(self) -> int:
        return len(self._centroids)

    def __contains__(self, centroid: object) -> bool:
        return id(centroid) in self._slots

    def slot_of(self, centroid: ClusterablePoint) -> int:
        """Slot index of a centroid key."""
        try:
            return self._slots[id(centroid)]
        except KeyError:
            raise KeyError(centroid) from None

    def members(self, slot: int) -> List[ClusterablePoint]:
        """Points assigned to the given slot."""
        return self._members[slot]

    @property
    def centroids(self) -> List[ClusterablePoint]:
        return list(self._centroids)

    @property
    def labels(self) -> Tensor:
        """(n,) slot index of every point, input order."""
        return self._labels.clone()

    @property
    def sizes(self) -> Tensor:
        """(K,) number of members per slot."""
        return torch.tensor([len(m) for m in self._members], dtype=torch.long)

    @property
    def n_points(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"Partition(n_clusters={len(self)}, sizes={self.sizes.tolist()})"
