"""
Training set construction and ingestion.

A training set is a design matrix X (one row per example, no dummy column
unless added with ``with_dummy_features``) and a target vector y.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ._utils import add_dummy_features, is_regular
from .exceptions import DataFormatError, InvalidTrainingSetError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainingSet:
    """
    Labeled examples.

    Parameters
    ----------
    X : array-like, shape (m, n)
        Design matrix
    y : array-like, shape (m,)
        Target vector
    feature_names : list of str, optional
        Defaults to ``x1 .. xn``
    target_name : str
    has_dummy : bool
        True if the first column of X is the dummy feature

    Raises
    ------
    InvalidTrainingSetError
        If X is empty or ragged, y is not a vector, or their lengths
        disagree.
    """
    X: np.ndarray
    y: np.ndarray
    feature_names: Optional[List[str]] = None
    target_name: str = 'y'
    has_dummy: bool = False

    def __post_init__(self):
        if not is_regular(self.X):
            raise InvalidTrainingSetError("design matrix must be non-empty with rows of equal length")
        try:
            X = np.array(self.X, dtype=np.float64)
            y = np.array(self.y, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidTrainingSetError(f"training set must be numeric: {e}") from e
        if X.ndim != 2 or y.ndim != 1:
            raise InvalidTrainingSetError(
                f"expected a 2-d design matrix and a 1-d target vector, got {X.shape} and {y.shape}"
            )
        if X.shape[0] != y.shape[0]:
            raise InvalidTrainingSetError(
                f"design matrix has {X.shape[0]} rows but target vector has {y.shape[0]} values"
            )
        if not (np.all(np.isfinite(X)) and np.all(np.isfinite(y))):
            raise InvalidTrainingSetError("training set contains NaN or infinite values")

        names = self.feature_names
        n_features = X.shape[1] - int(self.has_dummy)
        if names is None:
            names = [f'x{i + 1}' for i in range(n_features)]
        elif len(names) != n_features:
            raise InvalidTrainingSetError(
                f"{len(names)} feature names given for {n_features} features"
            )

        X.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, 'X', X)
        object.__setattr__(self, 'y', y)
        object.__setattr__(self, 'feature_names', list(names))

    @property
    def n_examples(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        """Feature count, dummy column excluded."""
        return self.X.shape[1] - int(self.has_dummy)

    def features(self) -> np.ndarray:
        """Design matrix without the dummy column."""
        return self.X[:, 1:] if self.has_dummy else self.X

    def with_dummy_features(self) -> "TrainingSet":
        """Prepend the dummy column. Returns ``self`` if it is already there."""
        if self.has_dummy:
            return self
        return TrainingSet(
            add_dummy_features(self.X), self.y,
            feature_names=self.feature_names,
            target_name=self.target_name,
            has_dummy=True,
        )

    def require_overdetermined(self) -> None:
        """
        Require more examples than features.

        Raises
        ------
        InvalidTrainingSetError
        """
        if self.n_examples <= self.n_features:
            raise InvalidTrainingSetError(
                f"need more examples than features, got {self.n_examples} examples "
                f"and {self.n_features} features"
            )

    @classmethod
    def from_examples(cls, examples: Iterable[Tuple[Sequence[float], float]]) -> "TrainingSet":
        """Build from ``(features, target)`` pairs."""
        examples = list(examples)
        if not examples:
            raise InvalidTrainingSetError("no examples given")
        X = [list(features) for features, _ in examples]
        y = [target for _, target in examples]
        return cls(X, y)

    @classmethod
    def from_dataframe(
        cls,
        data: pd.DataFrame,
        y: str,
        X: Optional[List[str]] = None,
    ) -> "TrainingSet":
        """
        Select columns from a DataFrame.

        Parameters
        ----------
        data : DataFrame
        y : str
            Target column
        X : list of str, optional
            Feature columns. Defaults to every column except ``y``.
        """
        if X is None:
            X = [c for c in data.columns if c != y]
        missing = [c for c in [y, *X] if c not in data.columns]
        if missing:
            raise KeyError(f"columns not found in data: {missing}")
        try:
            X_values = data[X].astype(np.float64).values
            y_values = data[y].astype(np.float64).values
        except (TypeError, ValueError) as e:
            raise DataFormatError(f"non-numeric values in data: {e}") from e
        return cls(X_values, y_values, feature_names=[str(c) for c in X], target_name=str(y))

    @classmethod
    def from_csv(cls, path: Union[str, Path], header: bool = False, **kwargs) -> "TrainingSet":
        """
        Read a numeric CSV file, last column is the target.

        Parameters
        ----------
        path : str or Path
        header : bool
            Whether the first line holds column names
        **kwargs
            Passed to ``pandas.read_csv``

        Raises
        ------
        DataFormatError
            If the file is empty, has fewer than two columns, or holds a
            non-numeric cell.
        """
        try:
            df = pd.read_csv(path, header=0 if header else None, **kwargs)
        except pd.errors.EmptyDataError as e:
            raise DataFormatError(f"{path}: no data") from e
        except pd.errors.ParserError as e:
            raise DataFormatError(f"{path}: {e}") from e

        if df.shape[0] == 0 or df.shape[1] < 2:
            raise DataFormatError(f"{path}: need at least one row with a feature and a target")

        try:
            values = df.apply(pd.to_numeric, errors='raise').to_numpy(dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise DataFormatError(f"{path}: non-numeric value: {e}") from e

        names = [str(c) for c in df.columns[:-1]] if header else None
        target = str(df.columns[-1]) if header else 'y'
        logger.debug("Read %d examples with %d features from %s", values.shape[0], values.shape[1] - 1, path)
        return cls(values[:, :-1], values[:, -1], feature_names=names, target_name=target)

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame(self.features(), columns=self.feature_names)
        df[self.target_name] = self.y
        return df

    def __len__(self):
        return self.n_examples

    def __repr__(self):
        return f"TrainingSet(m={self.n_examples}, n={self.n_features})"


__all__ = ["TrainingSet"]
