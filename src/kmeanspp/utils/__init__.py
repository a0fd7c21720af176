"""Utility functions for the k-means++ clustering core."""

from .convergence import (
    ResidualThreshold,
    MaxIterations
)

from .metrics import (
    mean_distance,
    silhouette_value,
    silhouette_coefficients,
    mean_silhouette,
    negative_silhouette_fraction
)

from .validation import (
    validate_points,
    check_n_clusters,
    check_max_iter,
    check_tolerance,
    check_random_state
)

from .parallel import (
    WorkerPool,
    split_range,
    flatten
)

from .device import (
    get_cpu_capability,
    get_simd_lane_count,
    get_default_num_workers
)

__all__ = [
    # Convergence criteria
    'ResidualThreshold',
    'MaxIterations',

    # Metrics
    'mean_distance',
    'silhouette_value',
    'silhouette_coefficients',
    'mean_silhouette',
    'negative_silhouette_fraction',

    # Validation
    'validate_points',
    'check_n_clusters',
    'check_max_iter',
    'check_tolerance',
    'check_random_state',

    # Worker pool
    'WorkerPool',
    'split_range',
    'flatten',

    # CPU capability
    'get_cpu_capability',
    'get_simd_lane_count',
    'get_default_num_workers'
]
