"""
Normal equation solver.

θ = (XᵗX)⁻¹ Xᵗ y computed with the dense matrix primitives, so every step
honours the cancellation token and any failure aborts the whole chain.
"""

import logging
import numpy as np
from typing import Optional

from ..cancellation import CancellationToken
from .matrix import inverse, multiply, multiply_by_vector, transpose

logger = logging.getLogger(__name__)


def solve_normal_equation(
    X: np.ndarray,
    y: np.ndarray,
    token: Optional[CancellationToken] = None,
) -> np.ndarray:
    """
    Solve the least squares problem in closed form.

    Parameters
    ----------
    X : ndarray, shape (m, n)
        Design matrix (WITH the dummy column)
    y : ndarray, shape (m,)
        Target vector
    token : CancellationToken, optional
        Checked by every matrix primitive

    Returns
    -------
    coefficients : ndarray, shape (n,)

    Raises
    ------
    NonInvertibleError
        If XᵗX is singular under LU with adjacent pivoting (e.g.
        collinear features).
    """
    Xt = transpose(X, token)
    XtX = multiply(Xt, X, token)
    XtX_inv = inverse(XtX, token)
    pseudo_inverse = multiply(XtX_inv, Xt, token)
    coefficients = multiply_by_vector(pseudo_inverse, y, token)
    logger.debug("Solved normal equation for %d coefficients", coefficients.shape[0])
    return coefficients
