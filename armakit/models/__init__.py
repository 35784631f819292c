# armakit/models/__init__.py
"""
armakit Models Module

The ARMA process model and the engines that characterize it:
- ``arma``: the immutable :class:`ARMA` process and its query methods
- ``frequency``: transfer function, spectral density and autocovariance
- ``_numba_core``: compiled impulse response and simulation kernels
"""

import logging

# Set up module-level logger
logger = logging.getLogger("armakit.models")

from . import frequency
from .arma import ARMA
from .frequency import (
    frequency_grid,
    frequency_response,
    spectral_density,
    autocovariance
)

__all__ = [
    'ARMA',
    'frequency',
    'frequency_grid',
    'frequency_response',
    'spectral_density',
    'autocovariance',
]
