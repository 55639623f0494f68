"""
Feature scaling checker.

Determines whether raw features are scaled well enough for gradient
descent to have a chance with a single learning rate.
"""

import numpy as np
from typing import Dict, List

from ..options import ScalingTechnique

# Largest tolerated ratio between column ranges of unscaled features
SCALE_RATIO_LIMIT = 1e4


def check_feature_scaling(X: np.ndarray, scaling: ScalingTechnique) -> Dict:
    """
    Check if gradient descent can run on these features as configured.

    Parameters
    ----------
    X : ndarray, shape (m, n)
        Design matrix (WITHOUT dummy column)
    scaling : ScalingTechnique
        Technique that will be applied before descent

    Returns
    -------
    dict with keys:
        - suitable: bool
        - scale_ratio: float
        - warnings: list[str]
    """
    X = np.asarray(X, dtype=np.float64)
    ranges = X.max(axis=0) - X.min(axis=0)
    ranges = ranges[ranges > 0]

    if len(ranges) < 2:
        scale_ratio = 1.0
    else:
        scale_ratio = float(ranges.max() / ranges.min())

    warning_messages: List[str] = []
    if scaling is ScalingTechnique.NONE and scale_ratio > SCALE_RATIO_LIMIT:
        warning_messages.append(
            f"Poor feature scaling detected (range ratio: {scale_ratio:.2e}). "
            f"Gradient descent is likely to diverge or stall; "
            f"consider scaling='standardization'."
        )

    return {
        'suitable': not warning_messages,
        'scale_ratio': scale_ratio,
        'warnings': warning_messages,
    }
