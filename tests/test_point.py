# tests/test_point.py
"""
Point collaborator: coordinate access, bulk replacement, empty construction.
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from kmeanspp import Point, IndexOutOfRangeError, InvalidArgumentError


def test_empty_point_has_no_coordinates():
    p = Point()
    assert p.dimension == 0
    assert p.centroid_index is None
    assert p.coordinates.dtype == torch.float64


def test_coordinate_access_and_bounds():
    p = Point([1.5, -2.0, 3.25])
    assert p.dimension == 3
    assert p.coordinate(0) == 1.5
    assert p[2] == 3.25
    assert list(p) == [1.5, -2.0, 3.25]

    with pytest.raises(IndexOutOfRangeError):
        p.coordinate(3)
    with pytest.raises(IndexOutOfRangeError):
        p[-1]
    # Also catchable as a plain IndexError
    with pytest.raises(IndexError):
        Point().coordinate(0)


def test_replace_coordinates_changes_dimension():
    p = Point()
    p.replace_coordinates([4.0, 5.0])
    assert p.dimension == 2
    assert p.tolist() == [4.0, 5.0]

    p.replace_coordinates(torch.tensor([1.0, 2.0, 3.0]))
    assert p.dimension == 3
    assert p.coordinates.dtype == torch.float64


def test_construction_from_various_inputs():
    from_np = Point(np.array([1, 2, 3]))
    from_tensor = Point(torch.tensor([1.0, 2.0, 3.0], dtype=torch.float32))
    from_strings = Point(["1", "2.0", " 3 "])

    for p in (from_np, from_tensor, from_strings):
        assert p.tolist() == [1.0, 2.0, 3.0]
        assert p.coordinates.dtype == torch.float64

    with pytest.raises(InvalidArgumentError):
        Point(np.zeros((2, 2)))
    with pytest.raises(InvalidArgumentError):
        Point(2.5)
    with pytest.raises(InvalidArgumentError):
        Point(["x", "y"])


def test_copies_do_not_share_storage():
    source = torch.tensor([1.0, 2.0], dtype=torch.float64)
    p = Point(source)
    source[0] = 99.0
    assert p[0] == 1.0

    q = p.copy()
    q.centroid_index = 3
    assert q.tolist() == p.tolist()
    assert q is not p
    assert p.centroid_index is None


def test_copy_keeps_point_type():
    class Centroid(Point):
        pass

    c = Centroid([4.0, 5.0])
    dup = c.copy()
    assert type(dup) is Centroid
    assert dup.tolist() == [4.0, 5.0]
    assert dup is not c


def test_points_hash_by_identity():
    a = Point([1.0])
    b = Point([1.0])
    assert a != b
    assert len({a, b}) == 2
