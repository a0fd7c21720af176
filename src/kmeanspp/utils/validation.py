"""
Input validation utilities.

Checks the parameters of a clustering run before any work is done. Every
failure raises :class:`~kmeanspp.base.exceptions.InvalidArgumentError`.
"""

from typing import Optional, Union, List, Sequence, Any
import numbers
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import ClusterablePoint
from ..base.data_structures import Point
from ..base.exceptions import InvalidArgumentError


def validate_points(points: Union[Sequence[Any], Tensor, np.ndarray]) -> List[ClusterablePoint]:
    """Validate input points and wrap raw coordinates in :class:`Point`.

    Args:
        points: Sequence of points, coordinate sequences or scalars (1D
            points), or an (n, d) tensor / array

    Returns:
        List of points, input order

    Raises:
        InvalidArgumentError: If there are no points or dimensions differ
    """
    if isinstance(points, (Tensor, np.ndarray)):
        if points.ndim == 1:
            points = points.reshape(-1, 1)
        elif points.ndim != 2:
            raise InvalidArgumentError(f"Expected 2D array of points, got {points.ndim}D")

    validated = []
    for p in points:
        if isinstance(p, ClusterablePoint):
            validated.append(p)
        elif isinstance(p, numbers.Real):
            # Flat sequence of scalars: one 1D point per value
            validated.append(Point([p]))
        else:
            validated.append(Point(p))

    if len(validated) == 0:
        raise InvalidArgumentError("Point collection is empty")

    dimension = validated[0].dimension
    if dimension == 0:
        raise InvalidArgumentError("Points must have at least one coordinate")
    for i, p in enumerate(validated):
        if p.dimension != dimension:
            raise InvalidArgumentError(
                f"All points must have dimension {dimension}, point {i} has {p.dimension}"
            )
        if not bool(torch.isfinite(p.coordinates).all()):
            raise InvalidArgumentError(f"Point {i} contains NaN or infinite coordinates")

    return validated


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        InvalidArgumentError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, numbers.Integral):
        raise InvalidArgumentError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise InvalidArgumentError(f"Centroid count can only be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise InvalidArgumentError(f"Point count ({n_samples}) must not be smaller than "
                                   f"centroid count ({n_clusters})")


def check_max_iter(max_iter: int) -> None:
    """Validate the Lloyd iteration cap."""
    if isinstance(max_iter, bool) or not isinstance(max_iter, numbers.Integral):
        raise InvalidArgumentError(f"max_iter must be int, got {type(max_iter)}")
    if max_iter <= 0:
        raise InvalidArgumentError(f"Maximum iteration count can only be positive, got {max_iter}")


def check_tolerance(tol: float) -> None:
    """Validate the convergence tolerance (0 means exact convergence)."""
    if not isinstance(tol, numbers.Real) or tol != tol or tol < 0:
        raise InvalidArgumentError(f"tol must be a non-negative number, got {tol}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create generator from random state.

    Args:
        random_state: Seed, generator, or None for a nondeterministic seed

    Returns:
        Generator owned by the caller for the lifetime of the run
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, numbers.Integral) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise InvalidArgumentError(f"random_state must be int or Generator, got {type(random_state)}")
