"""
Backend selection and management.

Provides a unified interface over the closed-form and the iterative solver.
"""

from typing import Optional

from ..options import Options
from .base import BackendBase, FitResult
from .gradient_descent_backend import GradientDescentBackend
from .normal_equation_backend import NormalEquationBackend
from .scaling_check import check_feature_scaling

_BACKENDS = ('normal_equation', 'gradient_descent')


def get_backend(backend: str = 'normal_equation', options: Optional[Options] = None) -> BackendBase:
    """
    Get solver backend.

    Parameters
    ----------
    backend : str
        Backend selection:
        - 'normal_equation': closed-form least squares (linear only)
        - 'gradient_descent': batch or stochastic descent, needs ``options``

    options : Options, optional
        Gradient descent configuration

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('normal_equation')

    >>> opts = Options.with_iterative_convergence(0.01, 'batch', 1000)
    >>> backend = get_backend('gradient_descent', opts)
    """
    if backend == 'normal_equation':
        return NormalEquationBackend()

    elif backend == 'gradient_descent':
        if options is None:
            raise ValueError(
                "gradient_descent backend requires options.\n"
                "Use Options.with_iterative_convergence(...) or "
                "Options.with_automatic_convergence(...)"
            )
        return GradientDescentBackend(options)

    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: {', '.join(repr(b) for b in _BACKENDS)}"
        )


def list_available_backends() -> list:
    """List names of available backends."""
    return list(_BACKENDS)


# Export main interface
__all__ = [
    'get_backend',
    'list_available_backends',
    'BackendBase',
    'FitResult',
    'NormalEquationBackend',
    'GradientDescentBackend',
    'check_feature_scaling',
]
