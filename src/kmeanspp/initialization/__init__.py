"""Initialization strategies for the k-means++ clusterizer."""

from .bounds import compute_dimension_intervals
from .kmeans_plusplus import KMeansPlusPlusInit, weighted_choice

__all__ = [
    'compute_dimension_intervals',
    'KMeansPlusPlusInit',
    'weighted_choice'
]
