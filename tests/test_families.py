"""
Test hypothesis and cost families.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from pyregressor._core.families import Binomial, Gaussian, get_family
from pyregressor._core.metrics import classification_accuracy, r_squared, round_half_up
from pyregressor._utils import add_dummy
from pyregressor.exceptions import InvalidFeatureVectorError


class TestGaussian:
    """Identity hypothesis with squared-error cost."""

    def test_hypothesis_vector(self):
        assert Gaussian().hypothesis([1, 2, 3], [0.5, 1, -1]) == pytest.approx(-0.5)

    def test_hypothesis_matrix(self):
        X = np.array([[1, 2], [1, 4]])
        assert_allclose(Gaussian().hypothesis(X, [1, 2]), [5, 9])

    def test_hypothesis_length_mismatch(self):
        with pytest.raises(InvalidFeatureVectorError):
            Gaussian().hypothesis([1, 2, 3], [1, 2])

    def test_cost(self):
        X = np.array([[1, 1], [1, 2], [1, 3]], dtype=float)
        y = np.array([1, 2, 3], dtype=float)
        assert Gaussian().cost(X, y, [0, 1]) == pytest.approx(0.0)
        # residuals 1, 2, 3: (1 + 4 + 9) / (2 * 3)
        assert Gaussian().cost(X, y, [0, 0]) == pytest.approx(14 / 6)


class TestBinomial:
    """Sigmoid hypothesis with cross-entropy cost."""

    @pytest.mark.parametrize("coefficients, x, want", [
        ([17, 0.2], [5], 1),
        ([-997, 5, 0.5], [1.2, 21], 0),
        ([2.73, 10, 0.5, 1], [0.1, 2, 6], 1),
        ([-55, 1, 2, 0.5, 0.3333], [12, 3, 14, 0], 0),
    ])
    def test_predicted_class(self, coefficients, x, want):
        p = Binomial().hypothesis(add_dummy(x), coefficients)
        assert int(round_half_up(p)) == want

    def test_hypothesis_length_mismatch(self):
        with pytest.raises(InvalidFeatureVectorError):
            Binomial().hypothesis(add_dummy([1, 2]), [1, 2])

    def test_sigmoid_at_zero(self):
        assert Binomial().hypothesis([1, 0], [0, 5]) == pytest.approx(0.5)

    def test_linkinv_clamped(self):
        mu = Binomial().linkinv(np.array([-1000.0, -31.0, 0.0, 31.0, 1000.0]))
        assert mu[0] == Binomial.EPS
        assert mu[1] == Binomial.EPS
        assert mu[2] == 0.5
        assert mu[3] == 1 - Binomial.EPS
        assert mu[4] == 1 - Binomial.EPS

    def test_cost_finite_when_saturated(self):
        X = np.array([[1, 100.0], [1, -100.0]])
        y = np.array([0.0, 1.0])
        cost = Binomial().cost(X, y, [0, 1])
        assert np.isfinite(cost)
        assert cost > 30

    def test_cost_of_uninformed_model(self):
        X = np.array([[1, 2.0], [1, -2.0]])
        y = np.array([0.0, 1.0])
        assert Binomial().cost(X, y, [0, 0]) == pytest.approx(np.log(2))


class TestGetFamily:

    def test_by_name(self):
        assert isinstance(get_family('gaussian'), Gaussian)
        assert get_family('binomial').name == 'binomial'

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_family('poisson')


class TestMetrics:
    """Accuracy metrics."""

    def test_r_squared_perfect(self):
        y = np.array([1.0, 2.0, 3.0])
        assert r_squared(y, y) == 1.0

    def test_r_squared_mean_model(self):
        y = np.array([1.0, 2.0, 3.0])
        assert r_squared(y, np.full(3, 2.0)) == pytest.approx(0.0)

    def test_r_squared_constant_target(self):
        y = np.array([4.0, 4.0, 4.0])
        assert r_squared(y, np.array([4.0, 3.0, 5.0])) == 0.0

    def test_round_half_up(self):
        assert_allclose(round_half_up([0.49, 0.5, 0.51, 1.5, 2.5]), [0, 1, 1, 2, 3])

    def test_classification_accuracy(self):
        y = np.array([0, 1, 1, 0])
        p = np.array([0.2, 0.5, 0.4, 0.1])
        assert classification_accuracy(y, p) == 0.75
