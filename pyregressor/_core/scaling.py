"""
Feature scaling.

Scaling parameters are computed once on a training design matrix (without
the dummy column) and reused on every feature vector the model sees later.
"""

from dataclasses import dataclass

import numpy as np

from .._utils import check_array
from ..exceptions import (
    InvalidDesignMatrixError,
    InvalidFeatureVectorError,
    InvalidScalingParametersError,
)
from ..options import ScalingTechnique, as_scaling_technique


@dataclass(frozen=True)
class ScalingParameters:
    """
    Per-feature shift ``u`` and spread ``s``.

    A feature vector is mapped into training space as ``(x - u) / s``.
    """
    u: np.ndarray
    s: np.ndarray

    def __post_init__(self):
        u = np.array(self.u, dtype=np.float64)
        s = np.array(self.s, dtype=np.float64)
        if u.ndim != 1 or s.ndim != 1 or u.shape != s.shape:
            raise InvalidScalingParametersError(
                f"u and s must be vectors of equal length, got {u.shape} and {s.shape}"
            )
        u.setflags(write=False)
        s.setflags(write=False)
        object.__setattr__(self, 'u', u)
        object.__setattr__(self, 's', s)

    @classmethod
    def identity(cls, n_features: int) -> "ScalingParameters":
        return cls(np.zeros(n_features), np.ones(n_features))

    @property
    def n_features(self) -> int:
        return self.u.shape[0]

    @property
    def is_identity(self) -> bool:
        return bool(np.all(self.u == 0) and np.all(self.s == 1))


@dataclass(frozen=True)
class ScalingResult:
    """Scaled design matrix and the parameters that produced it."""
    X: np.ndarray
    parameters: ScalingParameters


def scale_design_matrix(technique, X) -> ScalingResult:
    """
    Scale every column of a design matrix.

    Parameters
    ----------
    technique : ScalingTechnique or str
        ``none``, ``normalization`` (divide by range) or ``standardization``
        (divide by population standard deviation).
    X : array-like
        Design matrix without the dummy column.

    Returns
    -------
    ScalingResult

    Raises
    ------
    InvalidMatrixError
        If X is empty or ragged.
    InvalidDesignMatrixError
        If a column has zero range or zero deviation.
    UnsupportedScalingTechniqueError
        If ``technique`` is unknown.
    """
    technique = as_scaling_technique(technique)
    X = check_array(X)
    m, n = X.shape

    if technique is ScalingTechnique.NONE:
        return ScalingResult(X, ScalingParameters.identity(n))

    u = X.mean(axis=0)
    if technique is ScalingTechnique.NORMALIZATION:
        s = X.max(axis=0) - X.min(axis=0)
        what = "range"
    else:
        # population deviation, divides by m
        s = np.sqrt(((X - u) ** 2).sum(axis=0) / m)
        what = "standard deviation"

    zero = np.flatnonzero(s == 0)
    if zero.size:
        raise InvalidDesignMatrixError(
            f"cannot apply {technique.value}: zero {what} in column(s) {zero.tolist()}"
        )

    return ScalingResult((X - u) / s, ScalingParameters(u, s))


def scale(x, parameters: ScalingParameters) -> np.ndarray:
    """
    Map a feature vector (or a matrix of them, row-wise) into training space.

    Raises
    ------
    InvalidFeatureVectorError
        If the feature count disagrees with the parameters.
    """
    x = np.array(x, dtype=np.float64)
    if x.ndim not in (1, 2) or x.shape[-1] != parameters.n_features:
        raise InvalidFeatureVectorError(
            f"expected {parameters.n_features} features, got shape {x.shape}"
        )
    return (x - parameters.u) / parameters.s


def descale_coefficients(coefficients, parameters: ScalingParameters) -> np.ndarray:
    """
    Express coefficients trained on scaled features in raw feature space.

    Both the linear and the logistic hypotheses depend on the features only
    through ``θ·[1, (x - u) / s]``, so the same transform applies:
    ``θ_j / s_j`` for the features and ``θ_0 - Σ θ_j u_j / s_j`` for the
    intercept.
    """
    theta = np.array(coefficients, dtype=np.float64)
    if theta.shape != (parameters.n_features + 1,):
        raise InvalidFeatureVectorError(
            f"expected {parameters.n_features + 1} coefficients, got shape {theta.shape}"
        )
    raw = np.empty_like(theta)
    raw[1:] = theta[1:] / parameters.s
    raw[0] = theta[0] - np.sum(raw[1:] * parameters.u)
    return raw


__all__ = [
    "ScalingParameters",
    "ScalingResult",
    "scale_design_matrix",
    "scale",
    "descale_coefficients",
]
