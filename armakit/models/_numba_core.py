"""
Numba-accelerated core functions for ARMA process computations.

This module provides the two time-domain kernels of the toolbox:
- the linear recurrence producing the impulse response (Wold) coefficients
  of an ARMA(p,q) process
- the sliding-window weighted sum that turns scaled innovations into a
  sampled path

Both are compiled with Numba's just-in-time compiler. Each kernel has a
plain NumPy counterpart with identical semantics, used when Numba
acceleration is switched off in the configuration.
"""

import logging

import numpy as np
from numba import jit

# Set up module-level logger
logger = logging.getLogger("armakit.models._numba_core")

# ============================================================================
# Impulse response
# ============================================================================

@jit(nopython=True, cache=True)
def impulse_response_recursion(phi: np.ndarray,
                               theta: np.ndarray,
                               impulse_length: int) -> np.ndarray:
    """
    Compute impulse response coefficients by linear recurrence.

    psi[0] = 1 and, for j >= 1,

        psi[j] = theta_j + sum_{i=1..min(j,p)} phi_i * psi[j-i]

    where theta_j is zero beyond the MA order. This is the power-series
    expansion of ma_poly(z) / ar_poly(z).

    Args:
        phi: Autoregressive coefficients phi_1, ..., phi_p
        theta: Moving average coefficients theta_1, ..., theta_q
        impulse_length: Number of coefficients to compute

    Returns:
        np.ndarray: psi[0], ..., psi[impulse_length-1]
    """
    p = len(phi)
    q = len(theta)
    psi = np.zeros(impulse_length)
    psi[0] = 1.0

    for j in range(1, impulse_length):
        if j <= q:
            psi[j] = theta[j - 1]
        for i in range(1, min(j, p) + 1):
            psi[j] += phi[i - 1] * psi[j - i]

    return psi


def impulse_response_recursion_numpy(phi: np.ndarray,
                                     theta: np.ndarray,
                                     impulse_length: int) -> np.ndarray:
    """
    NumPy implementation of :func:`impulse_response_recursion`.
    """
    p = len(phi)
    theta_pad = np.zeros(impulse_length)
    n_ma = min(len(theta), impulse_length - 1)
    theta_pad[1:n_ma + 1] = theta[:n_ma]

    psi = np.zeros(impulse_length)
    psi[0] = 1.0
    for j in range(1, impulse_length):
        k = min(j, p)
        # phi_1..phi_k against psi[j-1], ..., psi[j-k]
        psi[j] = theta_pad[j] + np.dot(phi[:k], psi[j - 1::-1][:k])

    return psi


# ============================================================================
# Simulation
# ============================================================================

@jit(nopython=True, cache=True)
def convolve_innovations(psi: np.ndarray,
                         epsilon: np.ndarray,
                         ts_length: int) -> np.ndarray:
    """
    Weight scaled innovations by the impulse response over a sliding window.

        X[t] = sum_{k=0..J-1} psi[k] * epsilon[t + J - 1 - k]

    for t = 0, ..., ts_length-1, where J = len(psi). psi[0] multiplies the
    newest innovation in the window.

    Args:
        psi: Impulse response coefficients, length J
        epsilon: Innovations scaled by the noise standard deviation,
            length at least ts_length + J - 1
        ts_length: Number of observations to produce

    Returns:
        np.ndarray: Simulated path of length ts_length
    """
    J = len(psi)
    X = np.zeros(ts_length)

    for t in range(ts_length):
        total = 0.0
        for k in range(J):
            total += psi[k] * epsilon[t + J - 1 - k]
        X[t] = total

    return X


def convolve_innovations_numpy(psi: np.ndarray,
                               epsilon: np.ndarray,
                               ts_length: int) -> np.ndarray:
    """
    NumPy implementation of :func:`convolve_innovations`.
    """
    return np.convolve(epsilon, psi, mode="valid")[:ts_length]
