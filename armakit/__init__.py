# armakit/__init__.py
"""
armakit - Scalar ARMA process toolbox

Tools for characterizing a scalar ARMA(p,q) process analytically and by
simulation. A process is built from its autoregressive coefficients, moving
average coefficients and innovation scale, and can then be queried for:
- its spectral density on a uniform frequency grid
- its autocovariance sequence
- its impulse response (Wold) coefficients
- simulated paths under Gaussian innovations

Example:
    >>> from armakit import ARMA
    >>> lp = ARMA(phi=0.5, theta=[0.0, -0.8], sigma=1.0)
    >>> w, spect = lp.spectral_density(two_pi=False)
    >>> acov = lp.autocovariance(num_autocov=10)
    >>> psi = lp.impulse_response(impulse_length=30)
    >>> x = lp.simulation(ts_length=90, random_state=42)
"""

import os
import logging
from typing import Union

# Set up package-wide logger
logger = logging.getLogger("armakit")

from .version import __version__, __title__, __description__, __license__

from . import core
from . import models
from .core.config import initialize_config
from .core.exceptions import (
    ArmaKitError, ParameterError, DimensionError, ConfigurationError,
    ArmaKitWarning, NumericWarning
)
from .models.arma import ARMA


def get_version() -> str:
    """
    Return the version of armakit.

    Returns:
        str: Version string in format MAJOR.MINOR.PATCH
    """
    return __version__


def set_log_level(level: Union[str, int]) -> None:
    """
    Set the logging level for armakit.

    Args:
        level: Logging level, either as string ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
              or as an integer constant from the logging module
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)
    logger.debug(f"Log level set to {logging.getLevelName(level)}")


# Initialize the package
initialize_config()

_env_log_level = os.environ.get("ARMAKIT_LOG_LEVEL")
if _env_log_level:
    set_log_level(_env_log_level)

__all__ = [
    # Subpackages
    'core',
    'models',

    # Process model
    'ARMA',

    # Exceptions and warnings
    'ArmaKitError',
    'ParameterError',
    'DimensionError',
    'ConfigurationError',
    'ArmaKitWarning',
    'NumericWarning',

    # Public functions
    'get_version',
    'set_log_level',

    # Version info
    '__version__',
]

logger.debug(f"armakit v{__version__} initialized")
