"""
Gradient descent backend.

Scales the features, adds the dummy column, then runs a stepper under the
configured convergence policy.
"""

import logging
import warnings
import numpy as np
from typing import Optional

from .._core.gradient_descent import run_gradient_descent
from .._core.scaling import scale_design_matrix
from .._utils import add_dummy_features
from ..cancellation import CancellationToken
from ..options import Options
from .base import BackendBase, FitResult, check_training_data, default_family, summarize_fit
from .scaling_check import check_feature_scaling

logger = logging.getLogger(__name__)


class GradientDescentBackend(BackendBase):
    """
    Iterative backend for the gaussian and binomial families.

    Parameters
    ----------
    options : Options
        Learning rate, variant, convergence policy and scaling
    """

    def __init__(self, options: Options):
        if not isinstance(options, Options):
            raise TypeError(f"options must be an Options instance, got {type(options).__name__}")
        self.name = "gradient_descent"
        self.options = options

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        family=None,
        token: Optional[CancellationToken] = None,
    ) -> FitResult:
        """
        Fit by gradient descent.

        Accuracy is computed on the scaled design matrix the coefficients
        were trained on.

        Raises
        ------
        InvalidTrainingSetError
            If X is empty, ragged or non-numeric, or y does not match it.
        InvalidDesignMatrixError
            If a column cannot be scaled.
        CannotConvergeError
            If descent diverges.
        """
        family = default_family(family)
        X, y = check_training_data(X, y)

        suitability = check_feature_scaling(X, self.options.scaling)
        for message in suitability['warnings']:
            warnings.warn(message, UserWarning, stacklevel=2)

        scaled = scale_design_matrix(self.options.scaling, X)
        X_work = add_dummy_features(scaled.X)

        coef = run_gradient_descent(X_work, y, family, self.options, token)
        result = summarize_fit(X_work, y, coef, family, scaled.parameters)
        logger.debug("Gradient descent fit: %d examples, accuracy=%.4f", len(y), result.accuracy)
        return result

    def get_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': self.name,
            'method': f'gradient descent ({self.options})',
            'library': f'NumPy {np.__version__}',
        }
