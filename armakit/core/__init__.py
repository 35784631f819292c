"""
armakit Core Module

Shared infrastructure for the process model and its engines: the exception
hierarchy, input validation, type aliases, and configuration management.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("armakit.core")

from .exceptions import (
    ArmaKitError,
    ParameterError,
    DimensionError,
    ConfigurationError,
    ArmaKitWarning,
    NumericWarning
)

from .validation import (
    validate_coefficients,
    validate_positive,
    validate_integer,
    validate_innovations
)

from .config import (
    get_config,
    set_config,
    reset_config,
    save_config,
    initialize_config,
    get_models_config,
    get_numerical_config,
    ConfigManager
)

# Define what's available when using "from armakit.core import *"
__all__ = [
    # Exceptions
    'ArmaKitError',
    'ParameterError',
    'DimensionError',
    'ConfigurationError',
    'ArmaKitWarning',
    'NumericWarning',

    # Validation
    'validate_coefficients',
    'validate_positive',
    'validate_integer',
    'validate_innovations',

    # Configuration
    'get_config',
    'set_config',
    'reset_config',
    'save_config',
    'initialize_config',
    'get_models_config',
    'get_numerical_config',
    'ConfigManager',
]
