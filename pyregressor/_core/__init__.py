"""
Core algorithms (backend-agnostic).
"""

from .matrix import is_regular, transpose, multiply, multiply_by_vector, inverse
from .scaling import (
    ScalingParameters,
    ScalingResult,
    scale_design_matrix,
    scale,
    descale_coefficients,
)
from .families import Family, Gaussian, Binomial, get_family
from .stepper import Stepper, new_stepper
from .converger import converge_after, converge_automatically, new_converger
from .metrics import r_squared, classification_accuracy
from .lm_solver import solve_normal_equation
from .gradient_descent import run_gradient_descent

__all__ = [
    "is_regular",
    "transpose",
    "multiply",
    "multiply_by_vector",
    "inverse",
    "ScalingParameters",
    "ScalingResult",
    "scale_design_matrix",
    "scale",
    "descale_coefficients",
    "Family",
    "Gaussian",
    "Binomial",
    "get_family",
    "Stepper",
    "new_stepper",
    "converge_after",
    "converge_automatically",
    "new_converger",
    "r_squared",
    "classification_accuracy",
    "solve_normal_equation",
    "run_gradient_descent",
]
