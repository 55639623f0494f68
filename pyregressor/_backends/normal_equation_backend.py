"""
Normal equation backend.

Closed-form least squares through the dense matrix primitives.
"""

import logging
import numpy as np
from typing import Optional

from .._core.lm_solver import solve_normal_equation
from .._core.scaling import ScalingParameters
from .._utils import add_dummy_features
from ..cancellation import CancellationToken
from .base import BackendBase, FitResult, check_training_data, default_family, summarize_fit

logger = logging.getLogger(__name__)


class NormalEquationBackend(BackendBase):
    """
    Solve θ = (XᵗX)⁻¹ Xᵗ y directly.

    Only the gaussian family has a closed-form solution. Features are
    never scaled.
    """

    def __init__(self):
        self.name = "normal_equation"

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        family=None,
        token: Optional[CancellationToken] = None,
    ) -> FitResult:
        """
        Fit linear model via the normal equation.

        Raises
        ------
        InvalidTrainingSetError
            If X is empty, ragged or non-numeric, or y does not match it.
        NonInvertibleError
            If XᵗX is singular (collinear features).
        """
        family = default_family(family)
        if getattr(family, "name", None) != "gaussian":
            raise ValueError(
                f"normal equation only solves the gaussian family, got {getattr(family, 'name', family)!r}; "
                f"use the gradient_descent backend"
            )

        X, y = check_training_data(X, y)
        X_work = add_dummy_features(X)

        coef = solve_normal_equation(X_work, y, token)
        result = summarize_fit(X_work, y, coef, family, ScalingParameters.identity(X.shape[1]))
        logger.debug("Normal equation fit: %d examples, R²=%.4f", len(y), result.accuracy)
        return result

    def get_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': self.name,
            'method': 'normal equation, LU inverse',
            'library': f'NumPy {np.__version__}',
        }
