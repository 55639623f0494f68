"""
Training options for gradient descent.

Options are immutable and passed by value into the engine.
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .exceptions import (
    InvalidOptionsError,
    UnsupportedConvergenceTypeError,
    UnsupportedScalingTechniqueError,
    UnsupportedVariantError,
)


class GradientDescentVariant(Enum):
    """How many examples contribute to a single step."""
    BATCH = "batch"              # whole training set per step
    STOCHASTIC = "stochastic"    # one example per step, cycling


class ConvergenceType(Enum):
    """When gradient descent stops."""
    ITERATIVE = "iterative"      # after a fixed number of steps
    AUTOMATIC = "automatic"      # when the relative cost decrease drops below a threshold


class ScalingTechnique(Enum):
    """Feature scaling applied before gradient descent."""
    NONE = "none"
    NORMALIZATION = "normalization"        # (x - mean) / (max - min)
    STANDARDIZATION = "standardization"    # (x - mean) / population std


def _coerce(enum_cls, value, error_cls):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(repr(m.value) for m in enum_cls)
        raise error_cls(f"Unsupported {enum_cls.__name__}: {value!r}. Valid options: {valid}") from None


def as_variant(value: Union[str, GradientDescentVariant]) -> GradientDescentVariant:
    return _coerce(GradientDescentVariant, value, UnsupportedVariantError)


def as_convergence_type(value: Union[str, ConvergenceType]) -> ConvergenceType:
    return _coerce(ConvergenceType, value, UnsupportedConvergenceTypeError)


def as_scaling_technique(value: Union[str, ScalingTechnique]) -> ScalingTechnique:
    return _coerce(ScalingTechnique, value, UnsupportedScalingTechniqueError)


@dataclass(frozen=True)
class Options:
    """
    Gradient descent configuration.

    Attributes
    ----------
    learning_rate : float
        Step size, finite and > 0.
    variant : GradientDescentVariant
        Batch or stochastic stepping.
    convergence_type : ConvergenceType
        Iterative (fixed step count) or automatic (cost threshold).
    convergence_indicator : float
        Number of steps for iterative convergence, relative cost-decrease
        threshold for automatic convergence.
    scaling : ScalingTechnique
        Feature scaling applied before training.
    max_iterations : int, optional
        Hard cap on steps under automatic convergence. ``None`` means
        no cap.

    Examples
    --------
    >>> opts = Options.with_iterative_convergence(0.01, 'batch', 1000)
    >>> opts = Options.with_automatic_convergence(
    ...     0.001, GradientDescentVariant.STOCHASTIC, 1e-6,
    ...     scaling='standardization')
    """
    learning_rate: float
    variant: GradientDescentVariant
    convergence_type: ConvergenceType
    convergence_indicator: float
    scaling: ScalingTechnique = ScalingTechnique.NONE
    max_iterations: Optional[int] = None

    def __post_init__(self):
        # frozen: normalize enum fields through object.__setattr__
        object.__setattr__(self, 'variant', as_variant(self.variant))
        object.__setattr__(self, 'convergence_type', as_convergence_type(self.convergence_type))
        object.__setattr__(self, 'scaling', as_scaling_technique(self.scaling))
        self.validate()

    @classmethod
    def with_iterative_convergence(
        cls,
        learning_rate: float,
        variant: Union[str, GradientDescentVariant],
        iterations: int,
        scaling: Union[str, ScalingTechnique] = ScalingTechnique.NONE,
    ) -> "Options":
        """Options that stop after exactly ``iterations`` steps."""
        return cls(
            learning_rate=learning_rate,
            variant=variant,
            convergence_type=ConvergenceType.ITERATIVE,
            convergence_indicator=iterations,
            scaling=scaling,
        )

    @classmethod
    def with_automatic_convergence(
        cls,
        learning_rate: float,
        variant: Union[str, GradientDescentVariant],
        threshold: float,
        scaling: Union[str, ScalingTechnique] = ScalingTechnique.NONE,
        max_iterations: Optional[int] = None,
    ) -> "Options":
        """Options that stop once the relative cost decrease falls below ``threshold``."""
        return cls(
            learning_rate=learning_rate,
            variant=variant,
            convergence_type=ConvergenceType.AUTOMATIC,
            convergence_indicator=threshold,
            scaling=scaling,
            max_iterations=max_iterations,
        )

    @property
    def iterations(self) -> int:
        """Step count of an iterative configuration."""
        return int(self.convergence_indicator)

    @property
    def threshold(self) -> float:
        """Threshold of an automatic configuration."""
        return float(self.convergence_indicator)

    def validate(self) -> None:
        """
        Check numeric fields.

        Raises
        ------
        InvalidOptionsError
            If a value is out of range.
        """
        lr = self.learning_rate
        if isinstance(lr, bool) or not isinstance(lr, numbers.Real) or not math.isfinite(lr) or lr <= 0:
            raise InvalidOptionsError(f"learning_rate must be a finite number > 0, got {lr!r}")

        ci = self.convergence_indicator
        if isinstance(ci, bool) or not isinstance(ci, numbers.Real) or not math.isfinite(ci):
            raise InvalidOptionsError(f"convergence_indicator must be a finite number, got {ci!r}")

        if self.convergence_type is ConvergenceType.ITERATIVE:
            if ci < 0 or int(ci) != ci:
                raise InvalidOptionsError(
                    f"iteration count must be a non-negative integer, got {ci!r}"
                )
        elif ci <= 0:
            raise InvalidOptionsError(f"threshold must be > 0, got {ci!r}")

        mi = self.max_iterations
        if mi is not None and (isinstance(mi, bool) or not isinstance(mi, numbers.Integral) or mi < 0):
            raise InvalidOptionsError(f"max_iterations must be a non-negative integer, got {mi!r}")

    def __str__(self):
        if self.convergence_type is ConvergenceType.ITERATIVE:
            conv = f"iterative, {self.iterations} steps"
        else:
            conv = f"automatic, threshold={self.threshold:g}"
        return (
            f"learning rate: {self.learning_rate:g}, variant: {self.variant.value}, "
            f"convergence: {conv}, scaling: {self.scaling.value}"
        )


__all__ = [
    "GradientDescentVariant",
    "ConvergenceType",
    "ScalingTechnique",
    "Options",
    "as_variant",
    "as_convergence_type",
    "as_scaling_technique",
]
