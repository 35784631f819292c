# tests/test_frequency.py

"""
Tests for the frequency-domain engines.

Spectral densities are checked against scipy's frequency response and
closed-form AR(1) results; autocovariances are checked against analytic
values and statsmodels' ARMA autocovariance.
"""

import warnings

import numpy as np
import pytest
from hypothesis import given, settings
from scipy import signal
from statsmodels.tsa.arima_process import arma_acovf

from armakit import ARMA
from armakit.core.config import set_config
from armakit.core.exceptions import NumericWarning, ParameterError
from armakit.models.frequency import (
    autocovariance, evaluate_polynomial, frequency_grid, frequency_response,
    spectral_density
)
from tests.conftest import ar1_coefficients, assert_array_equal, coefficient_lists, noise_scales


class TestPolynomialEvaluation:
    """Tests for polynomial evaluation and the frequency grid."""

    def test_constant_term_first(self):
        z = np.array([0.0, 1.0, 2.0, 1j])
        values = evaluate_polynomial([1.0, -0.5, 0.25], z)
        assert_array_equal(values, 1.0 - 0.5 * z + 0.25 * z ** 2)

    def test_full_circle_grid(self):
        w = frequency_grid(1200)
        assert len(w) == 1200
        assert w[0] == 0.0
        assert w[-1] == pytest.approx(2 * np.pi)
        assert np.all(np.diff(w) > 0)

    def test_half_circle_grid(self):
        w = frequency_grid(300, two_pi=False)
        assert len(w) == 300
        assert w[-1] == pytest.approx(np.pi)

    @pytest.mark.parametrize("res", [0, -10, 2.5])
    def test_invalid_resolution(self, res):
        with pytest.raises(ParameterError):
            frequency_grid(res)


class TestFrequencyResponse:
    """Tests for the transfer function on the unit circle."""

    def test_matches_scipy_freqz(self, arma12_process):
        w = frequency_grid(512, two_pi=False)
        _, expected = signal.freqz(b=arma12_process.ma_poly, a=arma12_process.ar_poly, worN=w)
        h = frequency_response(arma12_process.ar_poly, arma12_process.ma_poly, w)
        assert_array_equal(h, expected, atol=1e-10)

    def test_white_noise_is_flat(self):
        w = frequency_grid(64)
        h = frequency_response([1.0], [1.0], w)
        assert_array_equal(h, np.ones(64))

    @given(coefficient_lists, coefficient_lists)
    @settings(deadline=None)
    def test_agrees_with_scipy(self, phi, theta):
        lp = ARMA(phi, theta)
        w = frequency_grid(128)
        _, expected = signal.freqz(b=lp.ma_poly, a=lp.ar_poly, worN=w)
        h = frequency_response(lp.ar_poly, lp.ma_poly, w)
        assert_array_equal(h, expected, rtol=1e-8, atol=1e-8)


class TestSpectralDensity:
    """Tests for the power spectral density."""

    def test_default_grid(self, arma12_process):
        w, spect = arma12_process.spectral_density()
        assert len(w) == len(spect) == 1200
        assert w[-1] == pytest.approx(2 * np.pi)

    def test_half_circle(self, arma12_process):
        w, spect = arma12_process.spectral_density(res=100, two_pi=False)
        assert len(spect) == 100
        assert w[-1] == pytest.approx(np.pi)

    def test_configured_resolution(self, arma12_process):
        set_config("models", "spectral_resolution", 256)
        w, spect = arma12_process.spectral_density()
        assert len(w) == len(spect) == 256

    def test_white_noise_density(self, white_noise_process):
        _, spect = white_noise_process.spectral_density(res=50)
        assert_array_equal(spect, np.full(50, 4.0))

    def test_ar1_closed_form(self, ar1_process):
        w, spect = ar1_process.spectral_density(res=400)
        expected = 1.0 / (1.0 - 2 * 0.5 * np.cos(w) + 0.25)
        assert_array_equal(spect, expected, rtol=1e-10)

    def test_symmetric_about_pi(self, ar2_process):
        _, spect = ar2_process.spectral_density(res=1001)
        assert_array_equal(spect, spect[::-1], rtol=1e-9)

    def test_module_function_matches_method(self, arma12_process):
        w1, s1 = arma12_process.spectral_density(res=200)
        w2, s2 = spectral_density(arma12_process.ar_poly, arma12_process.ma_poly, 1.0, res=200)
        assert_array_equal(w1, w2)
        assert_array_equal(s1, s2)

    @given(coefficient_lists, coefficient_lists, noise_scales)
    @settings(deadline=None)
    def test_density_is_nonnegative(self, phi, theta, sigma):
        """sigma^2 |h|^2 is nonnegative wherever it is finite."""
        lp = ARMA(phi, theta, sigma)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NumericWarning)
            _, spect = lp.spectral_density(res=200)
        finite = spect[np.isfinite(spect)]
        assert np.all(finite >= 0)

    def test_unit_root_warns(self):
        lp = ARMA(1.0)
        with pytest.warns(NumericWarning, match="singular"):
            w, spect = lp.spectral_density(res=100)
        assert not np.isfinite(spect[0])
        assert np.all(np.isfinite(spect[1:-1]))
        assert len(w) == 100


class TestAutocovariance:
    """Tests for the autocovariance sequence."""

    def test_default_length(self, arma12_process):
        assert len(arma12_process.autocovariance()) == 16

    def test_configured_length(self, arma12_process):
        set_config("models", "num_autocov", 5)
        assert len(arma12_process.autocovariance()) == 5

    def test_white_noise(self, white_noise_process):
        acov = white_noise_process.autocovariance(num_autocov=10)
        assert acov[0] == pytest.approx(4.0, rel=1e-2)
        assert_array_equal(acov[1:], np.zeros(9), atol=1e-2)

    def test_ar1_analytic(self, ar1_process):
        acov = ar1_process.autocovariance(num_autocov=10)
        expected = 0.5 ** np.arange(10) / (1 - 0.25)
        assert_array_equal(acov, expected, rtol=0, atol=1e-2)

    @given(ar1_coefficients.filter(lambda a: abs(a) < 0.8))
    @settings(deadline=None, max_examples=30)
    def test_ar1_analytic_property(self, a):
        acov = ARMA(a).autocovariance(num_autocov=6)
        expected = a ** np.arange(6) / (1 - a ** 2)
        assert_array_equal(acov, expected, rtol=0, atol=5e-2)

    def test_matches_statsmodels(self, arma12_process):
        expected = arma_acovf(arma12_process.ar_poly, arma12_process.ma_poly,
                              nobs=8, sigma2=arma12_process.sigma ** 2)
        acov = arma12_process.autocovariance(num_autocov=8)
        assert_array_equal(acov, expected, rtol=0, atol=1e-2)

    def test_variance_scales_with_sigma_squared(self):
        a1 = ARMA([0.3, 0.1], 0.4, 1.0).autocovariance(num_autocov=4)
        a3 = ARMA([0.3, 0.1], 0.4, 3.0).autocovariance(num_autocov=4)
        assert_array_equal(a3, 9.0 * a1, rtol=1e-10)

    def test_result_is_real(self, arma12_process):
        assert np.isrealobj(arma12_process.autocovariance())

    def test_half_resolution_is_allowed(self, arma12_process):
        assert len(arma12_process.autocovariance(num_autocov=600)) == 600

    def test_exceeding_half_resolution_raises(self, arma12_process):
        with pytest.raises(ParameterError, match="half the spectral resolution"):
            arma12_process.autocovariance(num_autocov=601)

    def test_bound_follows_configured_resolution(self, arma12_process):
        set_config("models", "spectral_resolution", 40)
        assert len(arma12_process.autocovariance(num_autocov=20)) == 20
        with pytest.raises(ParameterError):
            arma12_process.autocovariance(num_autocov=21)

    def test_non_strict_bound_warns(self, arma12_process):
        set_config("numerical", "strict_autocovariance_bound", False)
        with pytest.warns(NumericWarning, match="aliased"):
            acov = arma12_process.autocovariance(num_autocov=700)
        assert len(acov) == 700

    def test_non_strict_beyond_resolution_is_periodic(self):
        with pytest.warns(NumericWarning):
            acov = autocovariance([1.0, -0.5], [1.0], 1.0, num_autocov=25, res=10, strict=False)
        assert len(acov) == 25
        assert_array_equal(acov[10:20], acov[:10])

    @pytest.mark.parametrize("num_autocov", [0, -2])
    def test_non_positive_length(self, arma12_process, num_autocov):
        with pytest.raises(ParameterError):
            arma12_process.autocovariance(num_autocov=num_autocov)
