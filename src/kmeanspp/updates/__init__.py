"""Update strategies for cluster centroids."""

from .mean import MeanUpdater, UpdateResult, mean_coordinates

__all__ = [
    'MeanUpdater',
    'UpdateResult',
    'mean_coordinates'
]
