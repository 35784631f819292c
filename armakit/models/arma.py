# armakit/models/arma.py
"""
Scalar ARMA(p,q) processes.

This module implements the process model

    X_t = phi_1 X_{t-1} + ... + phi_p X_{t-p}
          + e_t + theta_1 e_{t-1} + ... + theta_q e_{t-q},

with e_t i.i.d. N(0, sigma^2), and the four representations derived from
it: the spectral density, the autocovariance sequence, the impulse response
(Wold) coefficients, and simulated paths.

The process is an immutable value. Every query recomputes its result from
the stored coefficients; defaults for the resolution and horizons come from
the ``models`` configuration section at call time.

Example:
    >>> from armakit import ARMA
    >>> lp = ARMA(0.5, [0.0, -0.8], 1.0)
    >>> lp.impulse_response(5)
    array([ 1.    ,  0.5   , -0.55  , -0.275 , -0.1375])
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np
from numpy.polynomial import polynomial as P

from armakit.core.config import get_models_config, get_numerical_config
from armakit.core.exceptions import raise_parameter_error
from armakit.core.types import CoefficientLike, RandomState, SpectralSample, Vector
from armakit.core.validation import (
    validate_coefficients, validate_innovations, validate_integer, validate_positive
)
from armakit.models import frequency
from armakit.models._numba_core import (
    convolve_innovations, convolve_innovations_numpy,
    impulse_response_recursion, impulse_response_recursion_numpy
)

# Set up module-level logger
logger = logging.getLogger("armakit.models.arma")


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class ARMA:
    """Scalar ARMA(p,q) process with Gaussian innovations.

    ``phi`` and ``theta`` each accept a scalar or a sequence; a scalar is a
    process of order one. Empty sequences give orders of zero. Stability and
    invertibility are not required: any finite coefficients are accepted,
    and :attr:`is_stationary` / :attr:`is_invertible` report them.

    Two processes compare equal when their normalized coefficients and noise
    scale are equal, so ``ARMA(0.5) == ARMA([0.5], 0.0, 1)``.

    Attributes:
        phi: AR coefficients phi_1, ..., phi_p
        theta: MA coefficients theta_1, ..., theta_q
        sigma: Standard deviation of the innovations
        p: Number of AR coefficients
        q: Number of MA coefficients
        ma_poly: MA polynomial in filtering form, [1, theta_1, ..., theta_q]
        ar_poly: AR polynomial in filtering form, [1, -phi_1, ..., -phi_p]

    Raises:
        ParameterError: If a coefficient is not finite or sigma is not positive
        DimensionError: If a coefficient argument has more than one dimension
    """

    phi: CoefficientLike
    theta: CoefficientLike = 0.0
    sigma: float = 1.0
    p: int = field(init=False)
    q: int = field(init=False)
    ma_poly: np.ndarray = field(init=False, repr=False)
    ar_poly: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        phi = validate_coefficients(self.phi, "phi")
        theta = validate_coefficients(self.theta, "theta")
        sigma = validate_positive(self.sigma, "sigma")

        # Frozen dataclass: normalized values are written through object.__setattr__
        object.__setattr__(self, "phi", _read_only(phi))
        object.__setattr__(self, "theta", _read_only(theta))
        object.__setattr__(self, "sigma", sigma)
        object.__setattr__(self, "p", len(phi))
        object.__setattr__(self, "q", len(theta))
        object.__setattr__(self, "ma_poly", _read_only(np.concatenate(([1.0], theta))))
        object.__setattr__(self, "ar_poly", _read_only(np.concatenate(([1.0], -phi))))

        logger.debug(f"Constructed ARMA({self.p}, {self.q}) with sigma={sigma}")

    # ------------------------------------------------------------------
    # Properties of the polynomials
    # ------------------------------------------------------------------

    @property
    def ar_roots(self) -> np.ndarray:
        """Roots of the AR polynomial 1 - phi_1 z - ... - phi_p z^p."""
        return P.polyroots(P.polytrim(self.ar_poly))

    @property
    def ma_roots(self) -> np.ndarray:
        """Roots of the MA polynomial 1 + theta_1 z + ... + theta_q z^q."""
        return P.polyroots(P.polytrim(self.ma_poly))

    @property
    def is_stationary(self) -> bool:
        """Whether every AR root lies strictly outside the unit circle."""
        return bool(np.all(np.abs(self.ar_roots) > 1.0))

    @property
    def is_invertible(self) -> bool:
        """Whether every MA root lies strictly outside the unit circle."""
        return bool(np.all(np.abs(self.ma_roots) > 1.0))

    # ------------------------------------------------------------------
    # Frequency domain
    # ------------------------------------------------------------------

    def spectral_density(self,
                         res: Optional[int] = None,
                         two_pi: bool = True) -> SpectralSample:
        """Compute the spectral density of the process.

        The density at angular frequency w is sigma^2 |h(w)|^2 with
        h(w) = ma_poly(e^{-iw}) / ar_poly(e^{-iw}).

        Args:
            res: Number of frequencies; defaults to ``models.spectral_resolution``
            two_pi: Span [0, 2*pi] if true, [0, pi] otherwise

        Returns:
            Tuple[np.ndarray, np.ndarray]: Frequencies and density values

        Warns:
            NumericWarning: If the AR polynomial has a root on the grid
        """
        if res is None:
            res = get_models_config().spectral_resolution

        return frequency.spectral_density(
            self.ar_poly, self.ma_poly, self.sigma, res=res, two_pi=two_pi
        )

    def autocovariance(self, num_autocov: Optional[int] = None) -> Vector:
        """Compute the autocovariance sequence of the process.

        Computed from the spectral density on the default full-circle grid
        through an inverse FFT. Index 0 is the variance.

        Args:
            num_autocov: Number of lags; defaults to ``models.num_autocov``.
                Must not exceed half the grid resolution unless
                ``numerical.strict_autocovariance_bound`` is switched off.

        Returns:
            np.ndarray: Autocovariances at lags 0, ..., num_autocov-1

        Raises:
            ParameterError: If num_autocov is not positive or exceeds the bound
        """
        models_config = get_models_config()
        if num_autocov is None:
            num_autocov = models_config.num_autocov

        return frequency.autocovariance(
            self.ar_poly, self.ma_poly, self.sigma,
            num_autocov=num_autocov,
            res=models_config.spectral_resolution,
            strict=get_numerical_config().strict_autocovariance_bound
        )

    # ------------------------------------------------------------------
    # Time domain
    # ------------------------------------------------------------------

    def impulse_response(self, impulse_length: Optional[int] = None) -> Vector:
        """Compute the impulse response (Wold) coefficients.

        psi[0] = 1 and psi[j] = theta_j + sum_{i=1..min(j,p)} phi_i psi[j-i],
        with theta_j = 0 beyond the MA order.

        Args:
            impulse_length: Number of coefficients; defaults to
                ``models.impulse_length``. Must be at least the AR order p
                and at least 1.

        Returns:
            np.ndarray: psi[0], ..., psi[impulse_length-1]

        Raises:
            ParameterError: If impulse_length is smaller than the number of
                AR coefficients or not positive
        """
        if impulse_length is None:
            impulse_length = get_models_config().impulse_length

        impulse_length = validate_integer(impulse_length, "impulse_length")
        if impulse_length < self.p:
            raise_parameter_error(
                "Impulse length must be greater than number of AR coefficients",
                param_name="impulse_length",
                param_value=impulse_length,
                constraint=f">= p = {self.p}"
            )
        impulse_length = validate_integer(impulse_length, "impulse_length", lower_bound=1)

        phi = np.array(self.phi)
        theta = np.array(self.theta)
        if get_numerical_config().use_numba:
            psi = impulse_response_recursion(phi, theta, impulse_length)
        else:
            psi = impulse_response_recursion_numpy(phi, theta, impulse_length)

        logger.debug(f"Computed {impulse_length} impulse response coefficients")
        return psi

    def simulation(self,
                   ts_length: Optional[int] = None,
                   impulse_length: Optional[int] = None,
                   random_state: RandomState = None,
                   innovations: Optional[Vector] = None) -> Vector:
        """Simulate a path of the process under Gaussian innovations.

        The path is the truncated MA(infinity) representation applied to
        ``ts_length + impulse_length`` innovations:

            X[t] = sum_{k=0..J-1} psi[k] * eps[t + J - 1 - k]

        where J = impulse_length and eps = sigma * z for standard-normal
        draws z.

        Args:
            ts_length: Length of the path; defaults to ``models.ts_length``
            impulse_length: Truncation of the impulse response; defaults to
                ``models.impulse_length``
            random_state: Seed or ``numpy.random.Generator`` used to draw z
                when ``innovations`` is not given. ``None`` draws from a fresh
                unseeded generator.
            innovations: Pre-drawn standard-normal values z of length
                ``ts_length + impulse_length``; takes precedence over
                ``random_state``

        Returns:
            np.ndarray: Simulated path of length ts_length

        Raises:
            ParameterError: If ts_length is not positive, or impulse_length
                violates the impulse response bounds
            DimensionError: If innovations has the wrong length
        """
        models_config = get_models_config()
        if ts_length is None:
            ts_length = models_config.ts_length
        if impulse_length is None:
            impulse_length = models_config.impulse_length

        ts_length = validate_integer(ts_length, "ts_length", lower_bound=1)
        psi = self.impulse_response(impulse_length)
        n_draws = ts_length + len(psi)

        if innovations is None:
            if isinstance(random_state, np.random.Generator):
                rng = random_state
            else:
                rng = np.random.default_rng(random_state)
            z = rng.standard_normal(n_draws)
        else:
            z = validate_innovations(innovations, n_draws)

        epsilon = self.sigma * z

        if get_numerical_config().use_numba:
            path = convolve_innovations(psi, epsilon, ts_length)
        else:
            path = convolve_innovations_numpy(psi, epsilon, ts_length)

        logger.debug(f"Simulated {ts_length} observations from ARMA({self.p}, {self.q})")
        return path

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert the process to a dictionary of plain Python values.

        Returns:
            Dict[str, Any]: Coefficients, orders, noise scale and polynomials
        """
        return {
            "phi": self.phi.tolist(),
            "theta": self.theta.tolist(),
            "sigma": self.sigma,
            "p": self.p,
            "q": self.q,
            "ma_poly": self.ma_poly.tolist(),
            "ar_poly": self.ar_poly.tolist(),
        }

    def summary(self) -> str:
        """Generate a text summary of the process.

        Returns:
            str: A formatted string describing the process
        """
        header = f"ARMA({self.p}, {self.q}) Process\n"
        header += "=" * (len(header) - 1) + "\n\n"

        body = ""
        for i, value in enumerate(self.phi, start=1):
            body += f"  phi_{i}: {value:.6f}\n"
        for i, value in enumerate(self.theta, start=1):
            body += f"  theta_{i}: {value:.6f}\n"
        body += f"  sigma: {self.sigma:.6f}\n\n"

        body += f"Stationary: {self.is_stationary}\n"
        body += f"Invertible: {self.is_invertible}\n"

        return header + body

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ARMA):
            return NotImplemented
        return (np.array_equal(self.phi, other.phi)
                and np.array_equal(self.theta, other.theta)
                and self.sigma == other.sigma)

    def __hash__(self) -> int:
        return hash((tuple(self.phi.tolist()), tuple(self.theta.tolist()), self.sigma))

    def __str__(self) -> str:
        return self.summary()

    def __repr__(self) -> str:
        return f"ARMA(phi={self.phi.tolist()}, theta={self.theta.tolist()}, sigma={self.sigma})"
