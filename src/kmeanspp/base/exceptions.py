"""
Exceptions and warnings raised by the k-means++ clustering core.

Malformed input (cluster count, iteration cap, dimensions) is a programmer
error and raises. Recoverable conditions such as non-convergence or an empty
cluster are reported through return values and warnings instead.
"""


class KMeansPPError(Exception):
    """Base class for all errors raised by kmeanspp."""


class InvalidArgumentError(KMeansPPError, ValueError):
    """Raised when a clustering run is constructed with invalid parameters."""


class DimensionMismatchError(KMeansPPError, ValueError):
    """Raised when two points of different dimension are compared."""


class IndexOutOfRangeError(KMeansPPError, IndexError):
    """Raised on coordinate access outside ``[0, dimension)``."""


class ConvergenceWarning(UserWarning):
    """Lloyd iterations hit the iteration cap before the residual reached tolerance."""


class EmptyClusterWarning(RuntimeWarning):
    """A centroid slot received no points during an update step."""
