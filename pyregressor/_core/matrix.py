"""
Dense matrix primitives used by the normal equation.

Every operation copies its inputs, validates shapes, and polls an optional
cancellation token once per outer-loop iteration (row, column, or
decomposition step).
"""

import logging
from typing import Optional

import numpy as np

from .._utils import check_array, is_regular
from ..cancellation import CancellationToken, check
from ..exceptions import DimensionMismatchError, InvalidMatrixError, NonInvertibleError

logger = logging.getLogger(__name__)


def transpose(X, token: Optional[CancellationToken] = None) -> np.ndarray:
    """
    Transpose a matrix.

    Raises
    ------
    InvalidMatrixError
        If X is empty or ragged.
    """
    X = check_array(X)
    m, n = X.shape
    Xt = np.empty((n, m), dtype=np.float64)
    for i in range(m):
        check(token)
        Xt[:, i] = X[i]
    return Xt


def multiply(A, B, token: Optional[CancellationToken] = None) -> np.ndarray:
    """
    Matrix product A·B.

    Raises
    ------
    InvalidMatrixError
        If either operand is empty or ragged.
    DimensionMismatchError
        If cols(A) != rows(B).
    """
    A = check_array(A, 'A')
    B = check_array(B, 'B')
    if A.shape[1] != B.shape[0]:
        raise DimensionMismatchError(
            f"cannot multiply {A.shape[0]}x{A.shape[1]} by {B.shape[0]}x{B.shape[1]}"
        )
    C = np.empty((A.shape[0], B.shape[1]), dtype=np.float64)
    for i in range(A.shape[0]):
        check(token)
        C[i] = A[i] @ B
    return C


def multiply_by_vector(A, v, token: Optional[CancellationToken] = None) -> np.ndarray:
    """
    Matrix-vector product A·v.

    Raises
    ------
    InvalidMatrixError
        If A is empty or ragged, or v is not a vector.
    DimensionMismatchError
        If cols(A) != len(v).
    """
    A = check_array(A, 'A')
    try:
        v = np.array(v, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidMatrixError("v must be a vector of numbers") from e
    if v.ndim != 1:
        raise InvalidMatrixError("v must be 1-dimensional")
    if A.shape[1] != v.shape[0]:
        raise DimensionMismatchError(
            f"cannot multiply {A.shape[0]}x{A.shape[1]} matrix by vector of length {v.shape[0]}"
        )
    w = np.empty(A.shape[0], dtype=np.float64)
    for i in range(A.shape[0]):
        check(token)
        w[i] = A[i] @ v
    return w


def inverse(A, token: Optional[CancellationToken] = None) -> np.ndarray:
    """
    Invert a square matrix via LU decomposition.

    Algorithm
    ---------
    1. Decompose P·A = L·U in place (L below the diagonal with an implicit
       unit diagonal, U on and above it). Pivoting is restricted to
       swapping the pivot row with the next row when the pivot is exactly
       zero; there is no search for the largest pivot.
    2. Solve L·U·x = P[:, i] for each column i by forward and back
       substitution.

    The restricted pivoting is adequate for well-conditioned inputs such as
    XᵗX of a full-rank design matrix, but it is not a general-purpose
    numerically stable inverse: an invertible matrix whose zero pivot can
    only be fixed by a non-adjacent row is reported as non-invertible.

    Raises
    ------
    InvalidMatrixError
        If A is empty or ragged.
    NonInvertibleError
        If A is not square or a zero pivot remains after pivoting.
    """
    a = check_array(A, 'A')
    n = a.shape[0]
    if a.shape[1] != n:
        raise NonInvertibleError(f"matrix must be square, got {a.shape[0]}x{a.shape[1]}")

    p = np.eye(n)

    for k in range(n - 1):
        check(token)
        if a[k, k] == 0:
            logger.debug("Zero pivot at %d, swapping rows %d and %d", k, k, k + 1)
            a[[k, k + 1]] = a[[k + 1, k]]
            p[[k, k + 1]] = p[[k + 1, k]]
        if a[k, k] == 0:
            raise NonInvertibleError(f"zero pivot at step {k}")
        a[k + 1:, k] /= a[k, k]
        a[k + 1:, k + 1:] -= np.outer(a[k + 1:, k], a[k, k + 1:])

    if a[n - 1, n - 1] == 0:
        raise NonInvertibleError(f"zero pivot at step {n - 1}")

    inv = np.empty((n, n), dtype=np.float64)
    x = np.empty(n, dtype=np.float64)
    for i in range(n):
        check(token)
        b = p[:, i]
        # Forward substitution, L has a unit diagonal
        for r in range(n):
            x[r] = b[r] - a[r, :r] @ x[:r]
        # Back substitution
        for r in range(n - 1, -1, -1):
            x[r] = (x[r] - a[r, r + 1:] @ x[r + 1:]) / a[r, r]
        inv[:, i] = x
    return inv


__all__ = [
    "is_regular",
    "transpose",
    "multiply",
    "multiply_by_vector",
    "inverse",
]
