"""
Gradient descent steppers.

A ``Stepper`` holds the state of one descent run. The step rule is a plain
function selected by the variant tag:

    θ' = θ - α · Σ_i (h(x_i, θ) - y_i) · x_i

summed over the whole design matrix for batch descent, and over the single
example under the cursor for stochastic descent.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from ..exceptions import CannotConvergeError, InvalidFeatureVectorError, InvalidTrainingSetError
from ..options import GradientDescentVariant, as_variant

logger = logging.getLogger(__name__)


@dataclass
class Stepper:
    """
    Gradient descent state.

    Attributes
    ----------
    variant : GradientDescentVariant
    family : object
        Provides ``hypothesis(x, coefficients)``.
    X : ndarray of shape (m, n)
        Design matrix, dummy column included.
    y : ndarray of shape (m,)
    learning_rate : float
    coefficients : ndarray of shape (n,)
    cursor : int
        Index of the next example for stochastic descent.
    """
    variant: GradientDescentVariant
    family: Any
    X: np.ndarray
    y: np.ndarray
    learning_rate: float
    coefficients: np.ndarray = None
    cursor: int = 0
    steps: int = field(default=0, init=False)

    def __post_init__(self):
        self.variant = as_variant(self.variant)
        self.X = np.array(self.X, dtype=np.float64)
        self.y = np.array(self.y, dtype=np.float64)
        if self.X.ndim != 2 or self.y.ndim != 1 or self.X.shape[0] != self.y.shape[0]:
            raise InvalidTrainingSetError(
                f"design matrix {self.X.shape} and target vector {self.y.shape} disagree"
            )
        if self.X.shape[0] == 0:
            raise InvalidTrainingSetError("training set is empty")
        if self.coefficients is None:
            self.coefficients = np.zeros(self.X.shape[1])
        else:
            self.coefficients = np.array(self.coefficients, dtype=np.float64)
        if self.coefficients.shape != (self.X.shape[1],):
            raise InvalidFeatureVectorError(
                f"expected {self.X.shape[1]} coefficients, got shape {self.coefficients.shape}"
            )

    def take_step(self) -> np.ndarray:
        """
        Advance one step and return the new coefficients.

        Raises
        ------
        CannotConvergeError
            If a coefficient becomes NaN or infinite. The state is left
            unchanged.
        """
        step = _STEPS[self.variant]
        with np.errstate(over='ignore', invalid='ignore'):
            coefficients, cursor = step(self)
        if not np.all(np.isfinite(coefficients)):
            raise CannotConvergeError(
                f"coefficients diverged after {self.steps} steps; "
                f"try a smaller learning rate than {self.learning_rate:g} or scale the features"
            )
        self.coefficients = coefficients
        self.cursor = cursor
        self.steps += 1
        return coefficients.copy()

    def current_coefficients(self) -> np.ndarray:
        return self.coefficients.copy()

    def design_matrix(self) -> np.ndarray:
        return self.X

    def target_vector(self) -> np.ndarray:
        return self.y


def _batch_step(state: Stepper) -> Tuple[np.ndarray, int]:
    h = state.family.hypothesis(state.X, state.coefficients)
    gradient = state.X.T @ (h - state.y)
    return state.coefficients - state.learning_rate * gradient, state.cursor


def _stochastic_step(state: Stepper) -> Tuple[np.ndarray, int]:
    x = state.X[state.cursor]
    h = state.family.hypothesis(x, state.coefficients)
    gradient = (h - state.y[state.cursor]) * x
    cursor = (state.cursor + 1) % state.X.shape[0]
    return state.coefficients - state.learning_rate * gradient, cursor


_STEPS: Dict[GradientDescentVariant, Callable[[Stepper], Tuple[np.ndarray, int]]] = {
    GradientDescentVariant.BATCH: _batch_step,
    GradientDescentVariant.STOCHASTIC: _stochastic_step,
}


def new_stepper(
    variant,
    family,
    X,
    y,
    learning_rate: float,
    coefficients: Optional[np.ndarray] = None,
) -> Stepper:
    """
    Create a stepper for ``variant``.

    Raises
    ------
    UnsupportedVariantError
        If ``variant`` is not ``batch`` or ``stochastic``.
    """
    stepper = Stepper(as_variant(variant), family, X, y, learning_rate, coefficients)
    logger.debug("New %s stepper: %d examples, %d coefficients, learning rate %g",
                 stepper.variant.value, *stepper.X.shape, learning_rate)
    return stepper


__all__ = ["GradientDescentVariant", "Stepper", "new_stepper"]
