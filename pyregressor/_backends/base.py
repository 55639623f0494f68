"""
Abstract base classes for backends.

Defines the interface all solver backends must implement.
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Optional
from dataclasses import dataclass

from .._core.families import Gaussian
from .._core.metrics import classification_accuracy, r_squared
from .._core.scaling import ScalingParameters
from .._utils import check_array, check_vector
from ..cancellation import CancellationToken
from ..exceptions import InvalidTrainingSetError


@dataclass
class FitResult:
    """Complete training results."""
    coef: np.ndarray              # Coefficients in trained space, intercept first
    accuracy: float               # R², or classification accuracy for discrete families
    scaling: ScalingParameters    # Maps raw features into trained space
    fitted_values: np.ndarray     # h(x) for every training example
    residuals: np.ndarray         # y - fitted_values
    family: str = "gaussian"


class BackendBase(ABC):
    """Abstract base class for all backends."""

    name: str = "base"

    @abstractmethod
    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        family=None,
        token: Optional[CancellationToken] = None,
    ) -> FitResult:
        """
        Train coefficients - complete computation.

        Parameters
        ----------
        X : ndarray, shape (m, n)
            Design matrix (WITHOUT dummy column)
        y : ndarray, shape (m,)
            Target vector
        family : Family, optional
            Hypothesis and cost; defaults to Gaussian
        token : CancellationToken, optional
            Polled at loop boundaries

        Returns
        -------
        FitResult
        """
        pass

    @abstractmethod
    def get_info(self) -> dict:
        """Get backend information."""
        pass


def check_training_data(X, y):
    """
    Validate backend input and return float64 copies of X and y.

    Raises
    ------
    InvalidTrainingSetError
        If X is empty, ragged or non-numeric, or y does not match its rows.
    """
    X = check_array(X, error=InvalidTrainingSetError)
    y = check_vector(y, error=InvalidTrainingSetError)
    if len(y) != X.shape[0]:
        raise InvalidTrainingSetError(
            f"y has {len(y)} values but X has {X.shape[0]} rows"
        )
    return X, y


def summarize_fit(X_trained, y, coef, family, scaling) -> FitResult:
    """
    Evaluate trained coefficients on the design matrix they were trained on.

    ``X_trained`` carries the dummy column and any scaling. Families with
    ``discrete = True`` are scored by classification accuracy, all others
    by R².
    """
    name = getattr(family, "name", type(family).__name__.lower())
    fitted = family.hypothesis(X_trained, coef)
    if getattr(family, "discrete", False):
        accuracy = classification_accuracy(y, fitted)
    else:
        accuracy = r_squared(y, fitted)
    return FitResult(
        coef=coef,
        accuracy=accuracy,
        scaling=scaling,
        fitted_values=fitted,
        residuals=y - fitted,
        family=name,
    )


def default_family(family):
    return Gaussian() if family is None else family
