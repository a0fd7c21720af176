"""Base classes and interfaces for the k-means++ clustering core."""

from .interfaces import (
    ClusterablePoint,
    DistanceMetric,
    MetricFunc,
    PointFactory,
    InitializationStrategy,
    AssignmentStrategy,
    ParameterUpdater,
    ConvergenceCriterion
)

from .data_structures import (
    Point,
    DimensionInterval,
    Partition,
    IterationRecord,
    EmptyClusterEvent
)

from .exceptions import (
    KMeansPPError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    ConvergenceWarning,
    EmptyClusterWarning
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'ClusterablePoint',
    'DistanceMetric',
    'MetricFunc',
    'PointFactory',
    'InitializationStrategy',
    'AssignmentStrategy',
    'ParameterUpdater',
    'ConvergenceCriterion',

    # Data structures
    'Point',
    'DimensionInterval',
    'Partition',
    'IterationRecord',
    'EmptyClusterEvent',

    # Errors and warnings
    'KMeansPPError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'IndexOutOfRangeError',
    'ConvergenceWarning',
    'EmptyClusterWarning',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
