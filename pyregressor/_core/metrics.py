"""
Accuracy metrics.
"""

import numpy as np


def r_squared(y: np.ndarray, fitted: np.ndarray) -> float:
    """
    Coefficient of determination, 1 - SSR/SST.

    A constant target has no variance to explain and scores 0.0.
    """
    y = np.asarray(y, dtype=np.float64)
    fitted = np.asarray(fitted, dtype=np.float64)
    ssr = np.sum((y - fitted) ** 2)
    sst = np.sum((y - np.mean(y)) ** 2)
    if sst == 0:
        return 0.0
    return float(1 - ssr / sst)


def round_half_up(p: np.ndarray) -> np.ndarray:
    return np.floor(np.asarray(p, dtype=np.float64) + 0.5)


def classification_accuracy(y: np.ndarray, probabilities: np.ndarray) -> float:
    """Fraction of examples whose rounded probability equals the target."""
    y = np.asarray(y, dtype=np.float64)
    return float(np.mean(round_half_up(probabilities) == y))


__all__ = ["r_squared", "round_half_up", "classification_accuracy"]
