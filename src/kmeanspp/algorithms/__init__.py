"""Clustering algorithms."""

from .kmeans_plusplus import KMeansPlusPlus
from .builder import ClusteringBuilder, create_kmeanspp

__all__ = [
    'KMeansPlusPlus',
    'ClusteringBuilder',
    'create_kmeanspp'
]
