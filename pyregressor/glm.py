"""
Logistic regression API.

Binomial family trained by gradient descent.
"""

import warnings
import numpy as np
from typing import List

from ._backends import get_backend
from ._core.families import Binomial
from ._core.metrics import round_half_up
from ._model import RegressionModel
from .options import Options


class LogisticModel(RegressionModel):
    """
    Binary classifier with a sigmoid hypothesis.

    Examples
    --------
    >>> opts = Options.with_automatic_convergence(
    ...     0.1, 'batch', 1e-2, scaling='standardization')
    >>> model = LogisticModel(opts).fit(X, y)
    >>> model.accuracy()          # fraction classified correctly
    >>> model.predict([2.5, 7])   # 0 or 1
    >>> model.predict_proba([2.5, 7])
    """

    kind = "logistic regression"

    def __init__(self, options: Options):
        """
        Parameters
        ----------
        options : Options
            Gradient descent configuration
        """
        super().__init__(get_backend('gradient_descent', options), Binomial())

    @property
    def options(self) -> Options:
        return self.backend.options

    def _check_targets(self, y: np.ndarray) -> None:
        if not np.all((y == 0) | (y == 1)):
            warnings.warn(
                f"Logistic regression expects targets in {{0, 1}}, got values "
                f"{np.unique(y)[:10].tolist()}. Accuracy compares rounded probabilities "
                f"with the targets as given.",
                UserWarning,
                stacklevel=3,
            )

    def predict_proba(self, features):
        """Probability of class 1 for a feature vector or each row of a matrix."""
        return self.predict_response(features)

    def predict(self, features):
        """
        Predict class labels.

        Probabilities are rounded half up, so 0.5 is class 1.

        Returns
        -------
        int or ndarray of int
        """
        p = self.predict_proba(features)
        if np.ndim(p) == 0:
            return int(round_half_up(p))
        return round_half_up(p).astype(np.int64)

    def _fit_lines(self) -> List[str]:
        return [f"Classification accuracy: {self.accuracy():.4f}"]

    def __repr__(self):
        if not self.trained:
            return "LogisticModel(untrained)"
        return f"LogisticModel(n={self.n_obs}, p={len(self.feature_names)}, accuracy={self.accuracy():.3f})"


def logit(y, X=None, data=None, options: Options = None, **kwargs):
    """
    Fit logistic regression model (convenience function).

    Parameters
    ----------
    y : str or array
        Response variable (0/1)
    X : list of str or array
        Predictor variables
    data : DataFrame, optional
        Dataset
    options : Options
        Gradient descent configuration
    **kwargs
        ``token`` and ``timeout`` go to ``fit``

    Returns
    -------
    LogisticModel
        Fitted model object
    """
    if options is None:
        raise ValueError("logit requires options, e.g. Options.with_iterative_convergence(0.1, 'batch', 100)")
    return LogisticModel(options).fit(X, y, data=data, **kwargs)


__all__ = ["LogisticModel", "logit"]
