"""
Hypothesis and cost families.

A family is the capability the gradient-descent engine is parameterised
with: ``hypothesis(x, coefficients)`` and ``cost(X, y, coefficients)``.
Any object providing those two methods can be passed in its place.
"""

import numpy as np
from abc import ABC, abstractmethod
from scipy.special import expit

from ..exceptions import InvalidFeatureVectorError


class Family(ABC):
    """
    Base class for hypothesis/cost families.

    ``discrete`` marks families whose targets are class labels; their fits
    are scored by classification accuracy instead of R².
    """

    discrete = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Family name."""
        pass

    @abstractmethod
    def linkinv(self, eta: np.ndarray) -> np.ndarray:
        """Inverse link: μ = g⁻¹(η)"""
        pass

    @abstractmethod
    def cost(self, X: np.ndarray, y: np.ndarray, coefficients: np.ndarray) -> float:
        """Cost J(θ) over a training set."""
        pass

    def linear_predictor(self, x, coefficients) -> np.ndarray:
        """η = x·θ for one feature vector or each row of a matrix."""
        x = np.asarray(x, dtype=np.float64)
        coefficients = np.asarray(coefficients, dtype=np.float64)
        if x.ndim not in (1, 2) or x.shape[-1] != coefficients.shape[0]:
            raise InvalidFeatureVectorError(
                f"feature vector of shape {x.shape} does not match "
                f"{coefficients.shape[0]} coefficients"
            )
        return x @ coefficients

    def hypothesis(self, x, coefficients):
        """Prediction h(x) = g⁻¹(x·θ)."""
        eta = self.linear_predictor(x, coefficients)
        if np.ndim(eta) == 0:
            return float(self.linkinv(np.atleast_1d(eta))[0])
        return self.linkinv(eta)


class Gaussian(Family):
    """Gaussian family with identity link and squared-error cost."""

    @property
    def name(self) -> str:
        return "gaussian"

    def linkinv(self, eta: np.ndarray) -> np.ndarray:
        return eta

    def cost(self, X, y, coefficients) -> float:
        residuals = self.hypothesis(X, coefficients) - y
        return float(residuals @ residuals / (2 * len(y)))


class Binomial(Family):
    """Binomial family with logit link and cross-entropy cost."""

    discrete = True

    # Linear predictor is clamped outside these bounds
    THRESH = 30.0
    MTHRESH = -30.0
    EPS = np.finfo(np.float64).eps

    @property
    def name(self) -> str:
        return "binomial"

    def linkinv(self, eta: np.ndarray) -> np.ndarray:
        mu = expit(eta)
        mu[eta < self.MTHRESH] = self.EPS
        mu[eta > self.THRESH] = 1 - self.EPS
        return mu

    def cost(self, X, y, coefficients) -> float:
        mu = self.hypothesis(X, coefficients)
        return float(-np.mean(y * np.log(mu) + (1 - y) * np.log(1 - mu)))


def get_family(name: str) -> Family:
    """Return a family instance by name (``gaussian`` or ``binomial``)."""
    families = {"gaussian": Gaussian, "binomial": Binomial}
    if name not in families:
        raise ValueError(f"Unknown family: {name}. Available: {list(families)}")
    return families[name]()


__all__ = ["Family", "Gaussian", "Binomial", "get_family"]
