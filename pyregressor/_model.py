"""
Trained model query surface shared by linear and logistic regression.
"""

import logging
import numpy as np
import pandas as pd
from typing import List, Optional

from ._backends import BackendBase, FitResult
from ._core.scaling import ScalingParameters, descale_coefficients, scale
from ._utils import add_dummy_features
from .cancellation import CancellationToken, run_with_timeout
from .exceptions import InvalidFeatureVectorError, NotTrainedError
from .training_set import TrainingSet

logger = logging.getLogger(__name__)


def parse_inputs(y, X, data: Optional[pd.DataFrame] = None) -> TrainingSet:
    """
    Resolve R-style ``y``/``X`` arguments into a training set.

    ``y`` is a column name or a vector, ``X`` a list of column names or a
    matrix. Names require ``data``.
    """
    if isinstance(y, TrainingSet):
        return y

    if isinstance(y, str):
        if data is None:
            raise ValueError("Must provide data when y is a string")
        if X is None:
            X = [c for c in data.columns if c != y]
        if isinstance(X, list) and all(isinstance(x, str) for x in X):
            return TrainingSet.from_dataframe(data, y, X)
        return TrainingSet(X, data[y].values, target_name=y)

    if isinstance(X, list) and X and all(isinstance(x, str) for x in X):
        if data is None:
            raise ValueError("Must provide data when X is list of strings")
        return TrainingSet(data[X].values, y, feature_names=list(X))

    if isinstance(X, pd.DataFrame):
        return TrainingSet(X.values, np.asarray(y), feature_names=[str(c) for c in X.columns])

    return TrainingSet(X, y)


class RegressionModel:
    """
    Base class for trained regression models.

    Subclasses choose the backend and family; this class owns training,
    prediction and the query methods. All queries raise
    ``NotTrainedError`` until ``fit`` succeeds.
    """

    kind = "regression"
    # Normal equation and logistic regression need more examples than features
    require_overdetermined = True

    def __init__(self, backend: BackendBase, family):
        self.backend = backend
        self.family = family
        self._result: Optional[FitResult] = None
        self._training_set: Optional[TrainingSet] = None

    # Training

    def fit(
        self,
        X,
        y=None,
        data: Optional[pd.DataFrame] = None,
        token: Optional[CancellationToken] = None,
        timeout: Optional[float] = None,
    ):
        """
        Train the model.

        Parameters
        ----------
        X : array-like, list of str, or TrainingSet
            Design matrix (WITHOUT dummy column), column names in ``data``,
            or a complete training set
        y : array-like or str, optional
            Target vector or column name; omitted with a TrainingSet
        data : DataFrame, optional
        token : CancellationToken, optional
            Cancels training from another thread
        timeout : float, optional
            Seconds after which training is cancelled with
            ``DeadlineExceededError``

        Returns
        -------
        self

        Raises
        ------
        InvalidTrainingSetError
        NonInvertibleError, CannotConvergeError, CancelledError
            Propagated from the backend. The model stays untrained.
        """
        self._result = None
        self._training_set = None

        training_set = X if isinstance(X, TrainingSet) else parse_inputs(y, X, data)
        if self.require_overdetermined:
            training_set.require_overdetermined()
        self._check_targets(training_set.y)

        result = run_with_timeout(
            self.backend.fit, timeout,
            training_set.features(), training_set.y, self.family,
            token=token,
        )

        self._training_set = training_set
        self._result = result
        logger.debug("Trained %r", self)
        return self

    def _check_targets(self, y: np.ndarray) -> None:
        pass

    # Queries

    @property
    def trained(self) -> bool:
        return self._result is not None

    def _require_trained(self) -> FitResult:
        if self._result is None:
            raise NotTrainedError(f"{type(self).__name__} has not been trained; call fit() first")
        return self._result

    def coefficients(self) -> np.ndarray:
        """Coefficients in trained (scaled) feature space, intercept first."""
        return self._require_trained().coef.copy()

    def accuracy(self) -> float:
        return self._require_trained().accuracy

    def scaling_parameters(self) -> ScalingParameters:
        return self._require_trained().scaling

    @property
    def feature_names(self) -> List[str]:
        self._require_trained()
        return list(self._training_set.feature_names)

    @property
    def var_names(self) -> List[str]:
        return ['Intercept'] + self.feature_names

    @property
    def coef(self) -> pd.Series:
        """Named coefficients in raw feature space (pandas Series)."""
        result = self._require_trained()
        raw = descale_coefficients(result.coef, result.scaling)
        return pd.Series(raw, index=self.var_names)

    @property
    def fitted_values(self) -> np.ndarray:
        return self._require_trained().fitted_values.copy()

    @property
    def residuals(self) -> np.ndarray:
        return self._require_trained().residuals.copy()

    @property
    def n_obs(self) -> int:
        self._require_trained()
        return self._training_set.n_examples

    def _linear_input(self, features) -> np.ndarray:
        result = self._require_trained()
        if isinstance(features, pd.DataFrame):
            features = features[self.feature_names].values
        x = np.asarray(features, dtype=np.float64)
        if x.ndim not in (1, 2):
            raise InvalidFeatureVectorError(f"expected a feature vector or matrix, got shape {x.shape}")
        x = scale(x, result.scaling)
        return np.concatenate(([1.0], x)) if x.ndim == 1 else add_dummy_features(x)

    def predict_response(self, features):
        """
        Hypothesis value for one feature vector or each row of a matrix.

        Raw features are scaled with the training parameters first.

        Raises
        ------
        InvalidFeatureVectorError
            If the feature count disagrees with the model.
        """
        x = self._linear_input(features)
        return self.family.hypothesis(x, self._result.coef)

    def predict(self, features):
        return self.predict_response(features)

    # Display

    def _summary_lines(self) -> List[str]:
        result = self._require_trained()
        ts = self._training_set
        lines = [
            "",
            "=" * 80,
            f"{self.kind.upper()} RESULTS",
            "=" * 80,
            "",
            f"Dependent variable: {ts.target_name}",
            f"Number of observations: {ts.n_examples}",
            f"Number of features: {ts.n_features}",
            f"Backend: {self.backend.name}",
        ]
        options = getattr(self.backend, 'options', None)
        if options is not None:
            lines.append(f"Options: {options}")
        lines.append("")

        residual_summary = pd.Series(result.residuals).describe()
        lines += [
            "Residuals:",
            f"  Min:    {residual_summary['min']:>10.4f}",
            f"  1Q:     {residual_summary['25%']:>10.4f}",
            f"  Median: {residual_summary['50%']:>10.4f}",
            f"  3Q:     {residual_summary['75%']:>10.4f}",
            f"  Max:    {residual_summary['max']:>10.4f}",
            "",
            "Coefficients:",
            "-" * 80,
            f"{'Variable':<20} {'Estimate':>14} {'Trained':>14}",
            "-" * 80,
        ]
        raw = self.coef
        for name, trained in zip(self.var_names, result.coef):
            lines.append(f"{name:<20} {raw[name]:>14.4f} {trained:>14.4f}")
        lines.append("-" * 80)
        if not result.scaling.is_identity:
            lines.append("Trained: coefficients on scaled features")
        lines.append("")
        return lines

    def summary(self):
        """Print summary of the trained model."""
        print("\n".join(self._summary_lines() + self._fit_lines() + ["=" * 80, ""]))

    def _fit_lines(self) -> List[str]:
        return [f"Accuracy: {self.accuracy():.4f}"]
