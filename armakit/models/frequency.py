# armakit/models/frequency.py
"""
Frequency-domain characterization of ARMA processes.

This module evaluates the transfer function of an ARMA process on the unit
circle, turns it into a spectral density, and recovers the autocovariance
sequence from the spectral density through an inverse FFT.

The functions take the filtering-form polynomials and the noise scale
directly rather than a process object so that each stage can be exercised on
its own; :class:`armakit.models.arma.ARMA` wraps them with its own
coefficients and configured defaults.

Functions:
    evaluate_polynomial: Evaluate a polynomial, constant term first
    frequency_grid: Uniform grid over the full or half circle
    frequency_response: Complex transfer function on a frequency grid
    spectral_density: Power spectral density on a uniform grid
    autocovariance: Autocovariance sequence from the spectral density
"""

import logging
from typing import Tuple

import numpy as np
from numpy.polynomial import polynomial as P

from armakit.core.exceptions import raise_parameter_error, warn_numeric
from armakit.core.types import ComplexVector, Polynomial, SpectralSample, Vector
from armakit.core.validation import validate_integer

# Set up module-level logger
logger = logging.getLogger("armakit.models.frequency")


def evaluate_polynomial(coefficients: Polynomial, z: np.ndarray) -> np.ndarray:
    """Evaluate c_0 + c_1 z + ... + c_n z^n at every point of ``z``.

    Args:
        coefficients: Polynomial coefficients, constant term first
        z: Evaluation points (complex)

    Returns:
        np.ndarray: Polynomial values, same shape as ``z``
    """
    return P.polyval(z, coefficients)


def frequency_grid(res: int, two_pi: bool = True) -> Vector:
    """Uniformly spaced angular frequencies.

    The grid spans [0, 2*pi] when ``two_pi`` is true and [0, pi] otherwise,
    endpoints included.

    Args:
        res: Number of frequencies
        two_pi: Whether to cover the full circle

    Returns:
        np.ndarray: Frequencies of length ``res``
    """
    res = validate_integer(res, "res", lower_bound=1)
    w_max = 2 * np.pi if two_pi else np.pi
    return np.linspace(0, w_max, res)


def frequency_response(ar_poly: Polynomial,
                       ma_poly: Polynomial,
                       w: Vector) -> ComplexVector:
    """Transfer function h(w) = ma_poly(e^{-iw}) / ar_poly(e^{-iw}).

    Where the AR polynomial vanishes on the grid the corresponding value is
    complex infinity or NaN; no error is raised here.

    Args:
        ar_poly: AR polynomial [1, -phi_1, ..., -phi_p]
        ma_poly: MA polynomial [1, theta_1, ..., theta_q]
        w: Angular frequencies

    Returns:
        np.ndarray: Complex frequency response, same length as ``w``
    """
    z = np.exp(-1j * np.asarray(w, dtype=np.float64))
    numerator = evaluate_polynomial(ma_poly, z)
    denominator = evaluate_polynomial(ar_poly, z)
    with np.errstate(divide="ignore", invalid="ignore"):
        return numerator / denominator


def spectral_density(ar_poly: Polynomial,
                     ma_poly: Polynomial,
                     sigma: float,
                     res: int = 1200,
                     two_pi: bool = True) -> SpectralSample:
    """Power spectral density sigma^2 |h(w)|^2 on a uniform grid.

    Args:
        ar_poly: AR polynomial [1, -phi_1, ..., -phi_p]
        ma_poly: MA polynomial [1, theta_1, ..., theta_q]
        sigma: Innovation standard deviation
        res: Number of frequencies
        two_pi: Span [0, 2*pi] if true, [0, pi] otherwise

    Returns:
        Tuple[np.ndarray, np.ndarray]: Frequencies and density values,
        paired by index

    Warns:
        NumericWarning: If the AR polynomial vanishes on the grid, in which
            case the affected density values are inf or NaN
    """
    w = frequency_grid(res, two_pi)
    h = frequency_response(ar_poly, ma_poly, w)
    with np.errstate(invalid="ignore", over="ignore"):
        spect = sigma ** 2 * np.abs(h) ** 2

    singular = ~np.isfinite(spect)
    if np.any(singular):
        n_singular = int(np.sum(singular))
        logger.warning(
            f"Spectral density diverges at {n_singular} of {res} frequencies; "
            "the AR polynomial has a root on the unit circle"
        )
        warn_numeric(
            "Spectral density is singular on the frequency grid",
            operation="spectral_density",
            issue="AR polynomial root on the sampled frequencies",
            value=w[singular]
        )

    logger.debug(f"Computed spectral density on {res} frequencies")
    return w, spect


def autocovariance(ar_poly: Polynomial,
                   ma_poly: Polynomial,
                   sigma: float,
                   num_autocov: int = 16,
                   res: int = 1200,
                   strict: bool = True) -> Vector:
    """Autocovariance sequence via the inverse FFT of the spectral density.

    The density is sampled on the full circle with ``res`` points, inverse
    transformed, and the real part truncated to ``num_autocov`` lags. Index 0
    is the variance.

    The inverse transform has period ``res`` and the autocovariance is
    symmetric about lag 0, so only lags up to ``res // 2`` are free of
    aliasing.

    Args:
        ar_poly: AR polynomial [1, -phi_1, ..., -phi_p]
        ma_poly: MA polynomial [1, theta_1, ..., theta_q]
        sigma: Innovation standard deviation
        num_autocov: Number of lags to return
        res: Resolution of the spectral density grid
        strict: Raise when ``num_autocov`` exceeds ``res // 2``; otherwise warn
            and return the aliased values

    Returns:
        np.ndarray: Autocovariances at lags 0, ..., num_autocov-1

    Raises:
        ParameterError: If ``num_autocov`` is not a positive integer, or
            exceeds ``res // 2`` while ``strict`` is true
    """
    num_autocov = validate_integer(num_autocov, "num_autocov", lower_bound=1)
    res = validate_integer(res, "res", lower_bound=1)

    max_lags = res // 2
    if num_autocov > max_lags:
        if strict:
            raise_parameter_error(
                f"num_autocov ({num_autocov}) exceeds half the spectral "
                f"resolution ({max_lags}); higher lags would be aliased",
                param_name="num_autocov",
                param_value=num_autocov,
                constraint=f"<= res // 2 = {max_lags}"
            )
        warn_numeric(
            f"Autocovariances beyond lag {max_lags - 1} are aliased",
            operation="autocovariance",
            issue="num_autocov exceeds res // 2",
            value=num_autocov
        )

    _, spect = spectral_density(ar_poly, ma_poly, sigma, res=res, two_pi=True)
    acov = np.real(np.fft.ifft(spect))

    if num_autocov > res:
        # Periodic extension of the inverse transform
        return np.resize(acov, num_autocov)
    return acov[:num_autocov]
