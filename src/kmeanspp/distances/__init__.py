"""Distance metrics for clustering algorithms."""

from typing import Union

from ..base.interfaces import DistanceMetric, MetricFunc
from ..base.exceptions import InvalidArgumentError
from .chunked import ChunkedDistance, check_same_dimension
from .euclidean import EuclideanDistance
from .manhattan import ManhattanDistance
from .chebyshev import ChebyshevDistance

# Shared instances using the detected lane width
euclidean = EuclideanDistance()
manhattan = ManhattanDistance()
chebyshev = ChebyshevDistance()

_METRICS = {
    'euclidean': EuclideanDistance,
    'euclidian': EuclideanDistance,
    'l2': EuclideanDistance,
    'manhattan': ManhattanDistance,
    'l1': ManhattanDistance,
    'chebyshev': ChebyshevDistance,
    'linf': ChebyshevDistance,
}


def get_metric(metric: Union[str, MetricFunc], **kwargs) -> MetricFunc:
    """Resolve a metric name or pass a callable through.

    Args:
        metric: Name ('euclidean', 'manhattan', 'chebyshev' or an alias) or
            a callable taking two points
        **kwargs: Constructor arguments for named metrics (e.g. lane_width)

    Returns:
        Distance function
    """
    if isinstance(metric, str):
        try:
            metric_class = _METRICS[metric.lower()]
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown metric: {metric}. Choose from {sorted(set(_METRICS))}"
            ) from None
        return metric_class(**kwargs)
    if callable(metric):
        return metric
    raise InvalidArgumentError(f"metric must be a name or callable, got {type(metric)}")


__all__ = [
    'DistanceMetric',
    'ChunkedDistance',
    'EuclideanDistance',
    'ManhattanDistance',
    'ChebyshevDistance',
    'check_same_dimension',
    'euclidean',
    'manhattan',
    'chebyshev',
    'get_metric',
]
