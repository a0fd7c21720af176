"""
End-to-end clustering runs on small, well-understood datasets.
"""

import numpy as np
import pytest
import torch

from kmeanspp import KMeansPlusPlus, EmptyClusterWarning, Point
from kmeanspp.utils.metrics import negative_silhouette_fraction
from utils import time_block, perm_invariant_accuracy, points_from
from data_gen import make_blobs, make_grid_clusters


def test_two_coincident_groups():
    """Three copies of 0 and three of 10 split cleanly with perfect silhouette."""
    points = [Point([x]) for x in (0.0, 0.0, 0.0, 10.0, 10.0, 10.0)]
    clusterizer = KMeansPlusPlus(2, points, random_state=0)

    ok, score = clusterizer.perform_silhouette_analysis()

    assert ok is True
    assert score == pytest.approx(1.0)
    assert sorted(clusterizer.cluster_centers_.flatten().tolist()) == [0.0, 10.0]
    labels = clusterizer.labels_.tolist()
    assert labels[:3] == [labels[0]] * 3
    assert labels[3:] == [1 - labels[0]] * 3


def test_identical_points_leave_empty_slots():
    points = points_from([[3.0, -1.0]] * 5)
    clusterizer = KMeansPlusPlus(3, points, random_state=0)

    with pytest.warns(EmptyClusterWarning):
        partition = clusterizer.get_clusters()

    assert partition is not None
    assert clusterizer.n_iter_ == 1
    assert partition.sizes.tolist() == [5, 0, 0]
    assert {e.slot for e in clusterizer.empty_cluster_events_} == {1, 2}
    assert all(c.tolist() == [3.0, -1.0] for c in partition)
    assert clusterizer.get_silhouette_coeffs().tolist() == [0.0] * 5
    assert clusterizer.perform_silhouette_analysis() == (True, 0.0)


@pytest.mark.parametrize("metric", ["euclidean", "manhattan", "chebyshev"])
def test_separated_blobs_are_recovered(metric):
    X, y = make_blobs(centers=[[0.0, 0.0, 0.0], [20.0, 20.0, 20.0]], n_per=100, std=0.5, seed=7)
    clusterizer = KMeansPlusPlus(2, X, metric=metric, random_state=7, n_workers=2)

    with time_block("blobs", {"n": len(X), "K": 2, "metric": metric}):
        ok, score = clusterizer.perform_silhouette_analysis()

    assert ok
    assert score > 0.9
    acc = perm_invariant_accuracy(clusterizer.labels_.numpy(), split_index=100)
    assert acc == 1.0

    centers = clusterizer.cluster_centers_.numpy()
    centers = centers[np.argsort(centers[:, 0])]
    np.testing.assert_allclose(centers, [[0.0] * 3, [20.0] * 3], atol=0.5)


def test_grid_clusters_in_high_dimension():
    X, y = make_grid_clusters(n_per=5, spacing=100.0, dim=17)
    clusterizer = KMeansPlusPlus(2, torch.from_numpy(X), random_state=1)

    coeffs = clusterizer.get_silhouette_coeffs()

    assert coeffs is not None
    assert negative_silhouette_fraction(coeffs) == 0.0
    assert perm_invariant_accuracy(clusterizer.labels_.numpy(), split_index=5) == 1.0


def test_many_clusters_stay_within_bounds(rng):
    X = rng.uniform(-3.0, 7.0, size=(300, 4))
    clusterizer = KMeansPlusPlus(8, X, random_state=2)

    partition = clusterizer.get_clusters()

    assert partition is not None
    assert int(partition.sizes.sum()) == 300
    centers = clusterizer.cluster_centers_
    assert bool((centers >= -3.0).all()) and bool((centers <= 7.0).all())
    coeffs = clusterizer.get_silhouette_coeffs()
    assert bool(((coeffs >= -1.0) & (coeffs <= 1.0)).all())
