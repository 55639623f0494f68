"""
PyRegressor: linear and logistic regression with a normal equation solver
and batch/stochastic gradient descent.
"""

import logging

__version__ = "1.0.0"

# Import main user-facing API
from .lm import lm, LinearModel
from .glm import logit, LogisticModel
from .options import (
    Options,
    GradientDescentVariant,
    ConvergenceType,
    ScalingTechnique,
)
from .training_set import TrainingSet
from .cancellation import CancellationToken, run_with_timeout
from .exceptions import *  # noqa: F401,F403
from .exceptions import __all__ as _exceptions_all

# Import backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'lm',
    'LinearModel',
    'logit',
    'LogisticModel',
    'Options',
    'GradientDescentVariant',
    'ConvergenceType',
    'ScalingTechnique',
    'TrainingSet',
    'CancellationToken',
    'run_with_timeout',
    'get_backend',
    'list_available_backends',
] + list(_exceptions_all)
