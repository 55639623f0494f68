"""
Exception hierarchy.

Every error raised by the engine derives from ``RegressionError`` and from
the builtin exception that best describes it, so callers can catch either
the specific class, the package base class, or the builtin.
"""

import numpy as np


class RegressionError(Exception):
    """Base class for all pyregressor errors."""


# Matrix primitives

class InvalidMatrixError(RegressionError, ValueError):
    """Matrix is empty or irregular (rows of different length)."""


class DimensionMismatchError(RegressionError, ValueError):
    """Operand shapes are incompatible for multiplication."""


class NonInvertibleError(RegressionError, np.linalg.LinAlgError):
    """Matrix is not square, or is singular under LU with adjacent pivoting."""


# Data

class InvalidFeatureVectorError(RegressionError, ValueError):
    """Feature vector length disagrees with coefficients or scaling parameters."""


class InvalidTrainingSetError(RegressionError, ValueError):
    """Training set rows, columns and targets are inconsistent."""


class InvalidDesignMatrixError(RegressionError, ValueError):
    """Design matrix cannot be scaled (zero range or zero deviation column)."""


class InvalidScalingParametersError(RegressionError, ValueError):
    """Scaling mean and spread vectors have different lengths."""


class DataFormatError(RegressionError, ValueError):
    """Training data could not be parsed as numbers."""


# Configuration

class InvalidOptionsError(RegressionError, ValueError):
    """Training option has an out-of-range value."""


class UnsupportedVariantError(RegressionError, ValueError):
    """Unknown gradient descent variant."""


class UnsupportedConvergenceTypeError(RegressionError, ValueError):
    """Unknown convergence type."""


class UnsupportedScalingTechniqueError(RegressionError, ValueError):
    """Unknown feature scaling technique."""


# Training

class CannotConvergeError(RegressionError, ArithmeticError):
    """
    Gradient descent diverged.

    Raised when a coefficient becomes NaN or infinite, or when the cost
    increases between two steps under automatic convergence. It usually
    means the learning rate is too large or the features are poorly scaled.
    """


class CancelledError(RegressionError):
    """Computation was cancelled before it finished."""


class DeadlineExceededError(CancelledError, TimeoutError):
    """Computation was cancelled because its deadline passed."""


class NotTrainedError(RegressionError, RuntimeError):
    """Model was queried before training completed."""


__all__ = [
    "RegressionError",
    "InvalidMatrixError",
    "DimensionMismatchError",
    "NonInvertibleError",
    "InvalidFeatureVectorError",
    "InvalidTrainingSetError",
    "InvalidDesignMatrixError",
    "InvalidScalingParametersError",
    "DataFormatError",
    "InvalidOptionsError",
    "UnsupportedVariantError",
    "UnsupportedConvergenceTypeError",
    "UnsupportedScalingTechniqueError",
    "CannotConvergeError",
    "CancelledError",
    "DeadlineExceededError",
    "NotTrainedError",
]
