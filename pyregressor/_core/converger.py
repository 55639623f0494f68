"""
Convergence policies driving a stepper.

- iterative: exactly N steps.
- automatic: step until the relative cost decrease ``1 - J(θ') / J(θ)``
  falls below a threshold. A cost increase aborts training with
  ``CannotConvergeError``.

Both loops check the cancellation token before every step.
"""

import logging
import math
from typing import Callable, Optional

import numpy as np

from ..cancellation import CancellationToken, check
from ..exceptions import CannotConvergeError
from ..options import ConvergenceType, as_convergence_type

logger = logging.getLogger(__name__)

CostFunction = Callable[[np.ndarray, np.ndarray, np.ndarray], float]


def converge_after(stepper, iterations: int, token: Optional[CancellationToken] = None) -> np.ndarray:
    """
    Take exactly ``iterations`` steps and return the coefficients.

    A failing step aborts immediately and its error propagates.
    """
    for _ in range(int(iterations)):
        check(token)
        stepper.take_step()
    logger.debug("Converged after %d iterations", iterations)
    return stepper.current_coefficients()


def converge_automatically(
    stepper,
    cost: CostFunction,
    threshold: float,
    token: Optional[CancellationToken] = None,
    max_iterations: Optional[int] = None,
) -> np.ndarray:
    """
    Step until the relative cost decrease drops below ``threshold``.

    Parameters
    ----------
    stepper : Stepper
        Any object with ``take_step``, ``current_coefficients``,
        ``design_matrix`` and ``target_vector``.
    cost : callable
        ``cost(X, y, coefficients) -> float``.
    threshold : float
        Stop once ``1 - new_cost / old_cost < threshold``.
    token : CancellationToken, optional
    max_iterations : int, optional
        Give up after this many steps.

    Returns
    -------
    ndarray
        Coefficients after the last step.

    Raises
    ------
    CannotConvergeError
        If the cost increases, becomes non-finite, or ``max_iterations``
        is reached.
    """
    X = stepper.design_matrix()
    y = stepper.target_vector()
    steps = 0

    while True:
        check(token)
        if max_iterations is not None and steps >= max_iterations:
            raise CannotConvergeError(
                f"no convergence within {max_iterations} iterations (threshold {threshold:g})"
            )

        old = stepper.current_coefficients()
        stepper.take_step()
        steps += 1
        new = stepper.current_coefficients()

        old_cost = cost(X, y, old)
        new_cost = cost(X, y, new)
        if not math.isfinite(new_cost):
            raise CannotConvergeError(f"cost became {new_cost} after {steps} iterations")
        if old_cost == 0:
            logger.debug("Exact fit after %d iterations", steps)
            return new

        r = 1 - new_cost / old_cost
        if r < 0:
            raise CannotConvergeError(
                f"cost increased from {old_cost:g} to {new_cost:g} at iteration {steps}; "
                f"the learning rate is probably too large"
            )
        if r < threshold:
            logger.debug("Converged after %d iterations, cost %g", steps, new_cost)
            return new


def new_converger(convergence_type, indicator: float, cost: Optional[CostFunction] = None,
                  max_iterations: Optional[int] = None) -> Callable:
    """
    Build a converger ``(stepper, token=None) -> coefficients``.

    ``indicator`` is the iteration count for iterative convergence and the
    threshold for automatic convergence.

    Raises
    ------
    UnsupportedConvergenceTypeError
        If ``convergence_type`` is unknown.
    """
    convergence_type = as_convergence_type(convergence_type)

    if convergence_type is ConvergenceType.ITERATIVE:
        def converger(stepper, token=None):
            return converge_after(stepper, int(indicator), token)
    else:
        if cost is None:
            raise ValueError("automatic convergence requires a cost function")

        def converger(stepper, token=None):
            return converge_automatically(stepper, cost, indicator, token, max_iterations)

    return converger


__all__ = [
    "ConvergenceType",
    "converge_after",
    "converge_automatically",
    "new_converger",
]
