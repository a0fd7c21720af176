# tests/test_convergence.py
"""
Convergence criteria behavior.

Covers:
- ResidualThreshold: exact-zero default, epsilon tolerance, patience
- MaxIterations: never converges
"""

from __future__ import annotations

import pytest

from kmeanspp import InvalidArgumentError
from kmeanspp.utils.convergence import ResidualThreshold, MaxIterations


def test_exact_policy_requires_zero_residual():
    crit = ResidualThreshold()
    assert crit.check({"iteration": 0, "residual": 1e-300}) is False
    assert crit.check({"iteration": 1, "residual": 0.0}) is True


def test_tolerance_accepts_small_residuals():
    crit = ResidualThreshold(tol=1e-6)
    assert crit.check({"iteration": 0, "residual": 1e-3}) is False
    assert crit.check({"iteration": 1, "residual": 1e-6}) is True


def test_patience_needs_consecutive_stable_iterations():
    crit = ResidualThreshold(tol=0.1, patience=2)
    assert crit.check({"iteration": 0, "residual": 0.05}) is False  # stable_count = 1
    assert crit.check({"iteration": 1, "residual": 0.5}) is False   # reset
    assert crit.check({"iteration": 2, "residual": 0.0}) is False   # stable_count = 1
    assert crit.check({"iteration": 3, "residual": 0.0}) is True    # stable_count = 2


def test_history_and_reset():
    crit = ResidualThreshold(tol=0.0, patience=2)
    crit.check({"iteration": 0, "residual": 0.0})
    assert crit.history == [{"iteration": 0, "residual": 0.0}]

    crit.reset()
    assert crit.history == []
    # Stable count restarted, one zero is not enough
    assert crit.check({"iteration": 0, "residual": 0.0}) is False


def test_invalid_parameters():
    with pytest.raises(InvalidArgumentError):
        ResidualThreshold(tol=-1.0)
    with pytest.raises(InvalidArgumentError):
        ResidualThreshold(patience=0)


def test_max_iterations_never_converges():
    crit = MaxIterations()
    assert crit.check({"iteration": 0, "residual": 0.0}) is False
