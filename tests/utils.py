# tests/utils.py
"""
Small, reusable helpers used across the kmeanspp test suite.

Functions:
- points_from(rows): wrap coordinate rows in kmeanspp.Point.
- naive_distance(name, a, b): straight-line reference metric on plain lists.
- perm_invariant_accuracy(y_pred, split_index): best accuracy over label swap for 2-way splits.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
"""

from __future__ import annotations

import json
import math
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Sequence

import numpy as np

from kmeanspp import Point


def points_from(rows: Iterable[Iterable[float]]) -> List[Point]:
    """Wrap every coordinate row in a Point."""
    return [Point(list(row)) for row in rows]


def naive_distance(name: str, a: Sequence[float], b: Sequence[float]) -> float:
    """Reference metrics written as plain Python loops."""
    diffs = [x - y for x, y in zip(a, b)]
    if name == "euclidean":
        return math.sqrt(sum(d * d for d in diffs))
    if name == "manhattan":
        return sum(abs(d) for d in diffs)
    if name == "chebyshev":
        return max((abs(d) for d in diffs), default=0.0)
    raise ValueError(f"unknown metric {name}")


def perm_invariant_accuracy(y_pred: np.ndarray, split_index: int) -> float:
    """
    Best accuracy over label swaps for 2-way synthetic datasets where the
    first `split_index` points belong to class 0 and the rest to class 1.
    """
    y_pred = np.asarray(y_pred)
    if y_pred.ndim != 1:
        raise ValueError(f"y_pred must be 1D, got shape {y_pred.shape}")
    n = y_pred.size
    first = y_pred[:split_index]
    second = y_pred[split_index:]

    # Map A: first→0, second→1
    acc_a = (np.sum(first == 0) + np.sum(second == 1)) / max(1, n)
    # Map B: first→1, second→0
    acc_b = (np.sum(first == 1) + np.sum(second == 0)) / max(1, n)
    return float(max(acc_a, acc_b))


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] cluster {"n":400,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        meta_str = " " + json.dumps(meta, separators=(",", ":")) if meta else ""
        print(f"[timing] {label}{meta_str} {dt:.3f}s")
