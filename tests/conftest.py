'''
Pytest configuration and fixtures for the armakit test suite.

Provides seeded random number generators, reference processes and
hypothesis strategies for process coefficients. Configuration is reset to
defaults after every test so that tests changing defaults do not leak.
'''

import numpy as np
import pytest
from hypothesis import strategies as st

from armakit import ARMA
from armakit.core.config import reset_config


# ---- Configuration isolation ----

@pytest.fixture(autouse=True)
def default_config():
    """Restore the default configuration after each test."""
    yield
    reset_config()


# ---- Basic Data Generation Fixtures ----

@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


# ---- Process Fixtures ----

@pytest.fixture
def arma12_process() -> ARMA:
    """ARMA(1,2) process with phi=0.5, theta=[0.0, -0.8], sigma=1."""
    return ARMA(0.5, [0.0, -0.8], 1.0)


@pytest.fixture
def ar1_process() -> ARMA:
    """AR(1) process with phi=0.5 and no moving average part."""
    return ARMA(0.5)


@pytest.fixture
def white_noise_process() -> ARMA:
    """White noise with standard deviation 2."""
    return ARMA([], [], 2.0)


@pytest.fixture
def ar2_process() -> ARMA:
    """Stationary AR(2) process with complex roots."""
    return ARMA([1.2, -0.5], 0.3, 0.7)


# ---- Hypothesis strategies ----

coefficient_lists = st.lists(
    st.floats(min_value=-0.9, max_value=0.9, allow_nan=False, allow_infinity=False),
    min_size=0,
    max_size=4
)

ar1_coefficients = st.floats(min_value=-0.95, max_value=0.95, allow_nan=False, allow_infinity=False)

noise_scales = st.floats(min_value=0.1, max_value=5.0, allow_nan=False, allow_infinity=False)


# ---- Utility Functions for Tests ----

def assert_array_equal(actual, expected, rtol=1e-7, atol=1e-7, err_msg=""):
    """Assert that two arrays are equal within tolerance."""
    np.testing.assert_allclose(actual, expected, rtol=rtol, atol=atol, err_msg=err_msg)
