"""
Convergence criteria for the Lloyd iterator.

The default policy declares convergence only when no centroid moved at all
(residual exactly zero). A positive tolerance relaxes this for continuous
data where the last bits of a mean may keep flickering.
"""

from typing import Dict, Any

from ..base.interfaces import ConvergenceCriterion
from ..base.exceptions import InvalidArgumentError


class ResidualThreshold(ConvergenceCriterion):
    """Convergence when the summed centroid movement is at most ``tol``."""

    def __init__(self, tol: float = 0.0, patience: int = 1):
        """
        Args:
            tol: Largest residual still counted as converged (0 for exact)
            patience: Number of consecutive converged iterations required
        """
        super().__init__()
        if tol < 0:
            raise InvalidArgumentError(f"tol must be non-negative, got {tol}")
        if patience <= 0:
            raise InvalidArgumentError(f"patience must be positive, got {patience}")
        self.tol = tol
        self.patience = patience
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if centroids have stopped moving."""
        residual = current_state['residual']

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'residual': residual
        })

        if residual <= self.tol:
            self._stable_count += 1
        else:
            self._stable_count = 0

        return self._stable_count >= self.patience

    def reset(self):
        super().reset()
        self._stable_count = 0


class MaxIterations(ConvergenceCriterion):
    """Never converges; the run ends at the iteration cap."""

    def check(self, current_state: Dict[str, Any]) -> bool:
        return False
