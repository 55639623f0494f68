"""
Linear regression with R-style interface and output.
"""

import numpy as np
import pandas as pd
from typing import List, Optional, Union

from ._backends import get_backend
from ._core.families import Gaussian
from ._model import RegressionModel
from .options import Options


class LinearModel(RegressionModel):
    """
    Linear regression model.

    Trains with the normal equation by default, or with gradient descent
    when ``backend='gradient_descent'`` and ``options`` are given.

    Examples
    --------
    >>> import pandas as pd
    >>> from pyregressor import lm, LinearModel, Options
    >>>
    >>> data = pd.read_csv('housing.csv')
    >>>
    >>> # Closed form
    >>> model = lm(y='price', X=['size', 'bedrooms'], data=data)
    >>> model.summary()
    >>>
    >>> # Gradient descent on standardized features
    >>> opts = Options.with_automatic_convergence(
    ...     0.01, 'batch', 1e-6, scaling='standardization')
    >>> model = LinearModel('gradient_descent', opts).fit(X, y)
    >>> model.coef            # Named coefficients, raw feature space
    >>> model.accuracy()      # R²
    >>> model.predict([1650, 3])
    """

    kind = "linear regression"

    def __init__(self, backend: str = 'normal_equation', options: Optional[Options] = None):
        """
        Parameters
        ----------
        backend : str
            'normal_equation' or 'gradient_descent'
        options : Options, optional
            Required for gradient descent
        """
        super().__init__(get_backend(backend, options), Gaussian())
        self.require_overdetermined = backend == 'normal_equation'

    @property
    def r_squared(self) -> float:
        """Coefficient of determination on the training set."""
        return self.accuracy()

    def predict(self, features: Union[pd.DataFrame, np.ndarray, List[float]]):
        """
        Predict response for new data.

        Parameters
        ----------
        features : array-like or DataFrame
            One raw feature vector, or a matrix with one row per example.
            A DataFrame must have columns matching the training features.

        Returns
        -------
        float or ndarray
            Prediction for a vector, array of predictions for a matrix
        """
        return self.predict_response(features)

    def _fit_lines(self) -> List[str]:
        return [f"Multiple R-squared:      {self.r_squared:.4f}"]

    def __repr__(self):
        if not self.trained:
            return f"LinearModel(backend={self.backend.name!r}, untrained)"
        return f"LinearModel(n={self.n_obs}, p={len(self.feature_names)}, R²={self.r_squared:.3f})"


def lm(y, X=None, data=None, **kwargs):
    """
    Fit linear regression model (convenience function).

    Parameters
    ----------
    y : str or array
        Response variable
    X : list of str or array
        Predictor variables
    data : DataFrame, optional
        Dataset
    **kwargs
        ``backend`` and ``options`` go to LinearModel, ``token`` and
        ``timeout`` to ``fit``

    Returns
    -------
    LinearModel
        Fitted model object

    Examples
    --------
    >>> model = lm(y='mpg', X=['wt', 'hp'], data=mtcars)
    >>> model.summary()
    >>>
    >>> new_cars = pd.DataFrame({'wt': [3.0, 3.5], 'hp': [110, 150]})
    >>> model.predict(new_cars)
    """
    token = kwargs.pop('token', None)
    timeout = kwargs.pop('timeout', None)
    model = LinearModel(**kwargs)
    return model.fit(X, y, data=data, token=token, timeout=timeout)


__all__ = ["LinearModel", "lm"]
