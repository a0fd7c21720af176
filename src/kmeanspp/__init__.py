"""
kmeanspp: k-means++ clustering over fixed-dimension points.

This package implements:
- k-means++ seeding driven by a pluggable distance metric
- Lloyd's assignment/update iterations until no centroid moves
- Silhouette analysis of the converged partition
- Euclidean, Manhattan and Chebyshev metrics with chunked reductions

Example usage:
    >>> from kmeanspp import KMeansPlusPlus, Point, manhattan
    >>>
    >>> points = [Point([x, 2 * x]) for x in range(20)]
    >>> clusterizer = KMeansPlusPlus(3, points, metric=manhattan, random_state=0)
    >>>
    >>> # Partition: centroid -> member points
    >>> partition = clusterizer.get_clusters()
    >>>
    >>> # Mean silhouette coefficient
    >>> ok, score = clusterizer.perform_silhouette_analysis()
"""

__version__ = '0.1.0'

# Import main algorithm
from .algorithms.kmeans_plusplus import KMeansPlusPlus
from .algorithms.builder import ClusteringBuilder, create_kmeanspp

# Metrics
from .distances import (
    EuclideanDistance,
    ManhattanDistance,
    ChebyshevDistance,
    euclidean,
    manhattan,
    chebyshev,
    get_metric
)

# Convenience imports
from .base import (
    ClusterablePoint,
    Point,
    Partition,
    DimensionInterval,
    IterationRecord,
    EmptyClusterEvent,
    KMeansPPError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    ConvergenceWarning,
    EmptyClusterWarning
)

__all__ = [
    # Algorithm
    'KMeansPlusPlus',

    # Builder
    'ClusteringBuilder',
    'create_kmeanspp',

    # Metrics
    'EuclideanDistance',
    'ManhattanDistance',
    'ChebyshevDistance',
    'euclidean',
    'manhattan',
    'chebyshev',
    'get_metric',

    # Core data structures
    'ClusterablePoint',
    'Point',
    'Partition',
    'DimensionInterval',
    'IterationRecord',
    'EmptyClusterEvent',

    # Errors and warnings
    'KMeansPPError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'IndexOutOfRangeError',
    'ConvergenceWarning',
    'EmptyClusterWarning',

    # Version
    '__version__'
]
