"""Assignment strategies for clustering algorithms."""

from .hard import NearestCentroidAssignment, nearest_centroid

__all__ = [
    'NearestCentroidAssignment',
    'nearest_centroid'
]
