"""
Gradient descent runner: stepper plus convergence policy.
"""

import logging
import numpy as np
from typing import Optional

from ..cancellation import CancellationToken
from ..options import Options
from .converger import new_converger
from .stepper import new_stepper

logger = logging.getLogger(__name__)


def run_gradient_descent(
    X: np.ndarray,
    y: np.ndarray,
    family,
    options: Options,
    token: Optional[CancellationToken] = None,
) -> np.ndarray:
    """
    Train coefficients by gradient descent.

    Parameters
    ----------
    X : ndarray, shape (m, n)
        Design matrix, already scaled and WITH the dummy column
    y : ndarray, shape (m,)
    family : Family
        Supplies the hypothesis and the cost
    options : Options
    token : CancellationToken, optional

    Returns
    -------
    coefficients : ndarray, shape (n,)

    Raises
    ------
    CannotConvergeError
        If descent diverges.
    """
    stepper = new_stepper(options.variant, family, X, y, options.learning_rate)
    converger = new_converger(
        options.convergence_type,
        options.convergence_indicator,
        family.cost,
        options.max_iterations,
    )
    logger.debug("Running gradient descent (%s)", options)
    return converger(stepper, token)
