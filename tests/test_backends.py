"""
Test solver backends.

- Normal equation: closed form, gaussian family only
- Gradient descent: batch/stochastic descent with scaling
"""

import warnings

import pytest
import numpy as np
from numpy.testing import assert_allclose

from pyregressor import Options
from pyregressor._backends import (
    FitResult,
    GradientDescentBackend,
    NormalEquationBackend,
    check_feature_scaling,
    get_backend,
    list_available_backends,
)
from pyregressor._core.families import Binomial, Family
from pyregressor.exceptions import (
    CannotConvergeError,
    InvalidDesignMatrixError,
    InvalidTrainingSetError,
    NonInvertibleError,
)
from pyregressor.options import ScalingTechnique


class TestBackendSelection:
    """Test backend factory."""

    def test_list_backends(self):
        backends = list_available_backends()
        assert isinstance(backends, list)
        assert backends == ['normal_equation', 'gradient_descent']

    def test_default_backend(self):
        backend = get_backend()
        assert isinstance(backend, NormalEquationBackend)
        assert backend.name == 'normal_equation'

    def test_gradient_descent_backend(self):
        opts = Options.with_iterative_convergence(0.01, 'batch', 10)
        backend = get_backend('gradient_descent', opts)
        assert isinstance(backend, GradientDescentBackend)
        assert backend.options is opts

    def test_gradient_descent_requires_options(self):
        with pytest.raises(ValueError):
            get_backend('gradient_descent')

    def test_gradient_descent_rejects_non_options(self):
        with pytest.raises(TypeError):
            GradientDescentBackend({'learning_rate': 0.1})

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            get_backend('qr')

    def test_info(self):
        info = get_backend('normal_equation').get_info()
        assert info['backend'] == 'normal_equation'
        opts = Options.with_iterative_convergence(0.01, 'batch', 10)
        info = get_backend('gradient_descent', opts).get_info()
        assert info['backend'] == 'gradient_descent'
        assert 'batch' in info['method']


class TestNormalEquationBackend:
    """Test closed-form backend."""

    def test_simple_regression(self):
        """Test simple regression against NumPy least squares."""
        backend = get_backend('normal_equation')

        np.random.seed(42)
        n, p = 100, 3
        X = np.random.randn(n, p)
        beta_true = np.array([1.0, 2.0, -1.5])
        y = X @ beta_true + 0.1 * np.random.randn(n)

        result = backend.fit(X, y)

        # Check result structure
        assert isinstance(result, FitResult)
        assert result.coef.shape == (p + 1,)  # +1 for intercept
        assert result.residuals.shape == (n,)
        assert result.fitted_values.shape == (n,)
        assert result.family == 'gaussian'
        assert result.scaling.is_identity

        expected, *_ = np.linalg.lstsq(np.column_stack([np.ones(n), X]), y, rcond=None)
        assert_allclose(result.coef, expected, rtol=1e-8, atol=1e-10)
        assert_allclose(result.residuals, y - result.fitted_values)
        assert 0.99 < result.accuracy <= 1.0

    def test_perfect_fit(self):
        X = np.array([[1.0], [2.0], [3.0], [4.0]])
        y = 2 + 3 * X[:, 0]
        result = NormalEquationBackend().fit(X, y)
        assert_allclose(result.coef, [2, 3], atol=1e-10)
        assert result.accuracy == pytest.approx(1.0)

    def test_collinear_features(self):
        X = np.array([[1.0, 2.0], [2.0, 4.0], [3.0, 6.0], [4.0, 8.0]])
        y = np.array([1.0, 2.0, 3.0, 4.0])
        with pytest.raises(NonInvertibleError):
            NormalEquationBackend().fit(X, y)

    def test_binomial_rejected(self):
        X = np.array([[1.0], [2.0], [3.0]])
        with pytest.raises(ValueError, match="gradient_descent"):
            NormalEquationBackend().fit(X, np.array([0.0, 1.0, 1.0]), Binomial())


class TestGradientDescentBackend:
    """Test iterative backend."""

    def test_matches_normal_equation(self):
        np.random.seed(42)
        n = 50
        X = np.random.randn(n, 2) * [1.0, 3.0] + [5.0, -2.0]
        y = 1.0 + X @ [0.5, -2.0] + 0.1 * np.random.randn(n)

        opts = Options.with_iterative_convergence(0.005, 'batch', 2000, scaling='standardization')
        gd = GradientDescentBackend(opts).fit(X, y)
        ne = NormalEquationBackend().fit(X, y)

        assert gd.accuracy == pytest.approx(ne.accuracy, abs=1e-8)
        assert_allclose(gd.fitted_values, ne.fitted_values, rtol=1e-6)
        assert not gd.scaling.is_identity

    def test_scaling_parameters_recorded(self):
        X = np.array([[1.0], [2.0], [3.0], [4.0]])
        y = np.array([1.0, 2.0, 3.0, 4.0])
        opts = Options.with_iterative_convergence(0.01, 'batch', 10, scaling='normalization')
        result = GradientDescentBackend(opts).fit(X, y)
        assert_allclose(result.scaling.u, [2.5])
        assert_allclose(result.scaling.s, [3.0])

    def test_constant_column_cannot_be_scaled(self):
        X = np.array([[1.0, 7.0], [2.0, 7.0], [3.0, 7.0]])
        opts = Options.with_iterative_convergence(0.01, 'batch', 10, scaling='standardization')
        with pytest.raises(InvalidDesignMatrixError):
            GradientDescentBackend(opts).fit(X, np.array([1.0, 2.0, 3.0]))

    def test_divergence(self):
        X = np.array([[100.0, 200.0], [300.0, 400.0], [550.0, 6660.0]])
        y = np.array([333.0, 777.0, 1212.0])
        opts = Options.with_automatic_convergence(0.6, 'batch', 1e-3)
        with pytest.raises(CannotConvergeError):
            GradientDescentBackend(opts).fit(X, y)

    def test_poor_scaling_warns(self):
        np.random.seed(0)
        X = np.column_stack([np.random.rand(20), 1e6 * np.random.rand(20)])
        y = np.random.rand(20)
        opts = Options.with_iterative_convergence(1e-20, 'batch', 1)
        with pytest.warns(UserWarning, match="standardization"):
            GradientDescentBackend(opts).fit(X, y)

    def test_scaled_features_do_not_warn(self):
        np.random.seed(0)
        X = np.column_stack([np.random.rand(20), 1e6 * np.random.rand(20)])
        y = np.random.rand(20)
        opts = Options.with_iterative_convergence(0.01, 'batch', 1, scaling='standardization')
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            GradientDescentBackend(opts).fit(X, y)


class TestFeatureScalingCheck:
    """Test the unscaled-feature check."""

    def test_single_feature(self):
        check = check_feature_scaling(np.array([[1.0], [1e9]]), ScalingTechnique.NONE)
        assert check['suitable']
        assert check['scale_ratio'] == 1.0

    def test_ratio(self):
        X = np.array([[0.0, 0.0], [1.0, 1e5]])
        check = check_feature_scaling(X, ScalingTechnique.NONE)
        assert check['scale_ratio'] == pytest.approx(1e5)
        assert not check['suitable']
        assert len(check['warnings']) == 1

    def test_scaling_requested(self):
        X = np.array([[0.0, 0.0], [1.0, 1e5]])
        check = check_feature_scaling(X, ScalingTechnique.STANDARDIZATION)
        assert check['suitable']
        assert check['warnings'] == []


def _all_backends():
    opts = Options.with_iterative_convergence(0.01, 'batch', 10)
    return [get_backend('normal_equation'), get_backend('gradient_descent', opts)]


class TestBackendInputValidation:
    """Backends reject malformed training data before solving."""

    @pytest.mark.parametrize("backend", _all_backends(), ids=lambda b: b.name)
    @pytest.mark.parametrize("X, y", [
        ([[1, 2], [3]], [1, 2]),
        (np.empty((0, 2)), np.empty(0)),
        ([], []),
        ([["a", "b"], ["c", "d"], ["e", "f"]], [1, 2, 3]),
        ([[1.0], [2.0], [3.0]], [1.0, 2.0]),
        ([[1.0], [2.0], [3.0]], [[1.0], [2.0], [3.0]]),
    ], ids=["ragged", "empty-array", "empty-list", "non-numeric", "length-mismatch", "2d-target"])
    def test_invalid_training_data(self, backend, X, y):
        with pytest.raises(InvalidTrainingSetError):
            backend.fit(X, y)


class Hinge(Family):
    """Discrete family without a binomial name."""

    discrete = True

    @property
    def name(self):
        return "hinge"

    def linkinv(self, eta):
        return (eta >= 0).astype(np.float64)

    def cost(self, X, y, coefficients):
        return float(np.mean(self.hypothesis(X, coefficients) != y))


class TestAccuracyMetric:
    """Metric follows the family's discrete flag."""

    def test_discrete_family_scored_by_classification(self):
        X = np.array([[-2.0], [-1.0], [1.0], [2.0]])
        y = np.array([0.0, 0.0, 1.0, 1.0])
        # zero coefficients predict class 1 everywhere: half right, R² would be -1
        opts = Options.with_iterative_convergence(0.1, 'batch', 0)
        result = GradientDescentBackend(opts).fit(X, y, Hinge())
        assert result.family == 'hinge'
        assert result.accuracy == 0.5

    def test_family_flags(self):
        assert Binomial.discrete
        assert not Family.discrete
