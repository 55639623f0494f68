"""
Utility functions.
"""

import numpy as np

from .exceptions import InvalidFeatureVectorError, InvalidMatrixError


def is_regular(X) -> bool:
    """True if X is a non-empty sequence of rows of equal, non-zero length."""
    if isinstance(X, np.ndarray):
        return X.ndim == 2 and X.shape[0] > 0 and X.shape[1] > 0
    try:
        rows = list(X)
    except TypeError:
        return False
    if not rows:
        return False
    try:
        n = len(rows[0])
    except TypeError:
        return False
    if n == 0:
        return False
    for row in rows:
        try:
            if len(row) != n:
                return False
        except TypeError:
            return False
    return True


def check_array(X, name='X', dtype=np.float64, error=InvalidMatrixError):
    """Validate matrix input and return a float64 copy."""
    if not is_regular(X):
        raise error(f"{name} must be a non-empty matrix with rows of equal length")
    try:
        X = np.array(X, dtype=dtype)
    except (TypeError, ValueError) as e:
        raise error(f"{name} must contain only numbers") from e
    if X.ndim != 2:
        raise error(f"{name} must be 2-dimensional")
    return X


def check_vector(y, name='y', dtype=np.float64, error=InvalidFeatureVectorError):
    """Validate vector input and return a float64 copy."""
    try:
        y = np.array(y, dtype=dtype)
    except (TypeError, ValueError) as e:
        raise error(f"{name} must be a 1-dimensional sequence of numbers") from e
    if y.ndim != 1:
        raise error(f"{name} must be 1-dimensional")
    return y


def add_dummy(x: np.ndarray) -> np.ndarray:
    """Prepend the dummy feature (1) to a feature vector."""
    return np.concatenate(([1.0], np.asarray(x, dtype=np.float64)))


def add_dummy_features(X: np.ndarray) -> np.ndarray:
    """Prepend a column of ones to a design matrix."""
    X = np.asarray(X, dtype=np.float64)
    return np.column_stack([np.ones(X.shape[0]), X])
