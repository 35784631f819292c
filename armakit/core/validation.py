# armakit/core/validation.py

"""
Validation utilities for armakit.

This module holds the input checks shared by the process model and the
query operations: normalization of scalar-or-sequence coefficient arguments,
positivity checks for scalars, integer bounds for horizons and resolutions,
and length checks for injected innovation arrays. Each check returns the
normalized value so callers can validate and convert in one step.
"""

import numbers
from typing import Any, Optional

import numpy as np

from armakit.core.exceptions import raise_dimension_error, raise_parameter_error
from armakit.core.types import CoefficientLike, Vector


def validate_coefficients(coefficients: CoefficientLike,
                          param_name: str = "coefficients") -> Vector:
    """Normalize a scalar-or-sequence coefficient argument to a 1-D array.

    A scalar becomes a length-1 array; a sequence keeps its order. Empty
    sequences are allowed and describe a process of order zero.

    Args:
        coefficients: Scalar, sequence of scalars, or 1-D array
        param_name: Name of the argument for error messages

    Returns:
        np.ndarray: Float64 copy of the coefficients

    Raises:
        DimensionError: If the input has more than one dimension
        ParameterError: If any coefficient is not a finite real number
    """
    try:
        array = np.array(coefficients, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise_parameter_error(
            f"{param_name} must be a real scalar or a sequence of real numbers",
            param_name=param_name,
            param_value=coefficients,
            constraint="real-valued",
            details=str(e)
        )

    if array.ndim == 0:
        array = array.reshape(1)
    elif array.ndim != 1:
        raise_dimension_error(
            f"{param_name} must be a scalar or 1-dimensional, got {array.ndim} dimensions",
            array_name=param_name,
            expected_shape="scalar or 1D vector",
            actual_shape=array.shape
        )

    if not np.all(np.isfinite(array)):
        raise_parameter_error(
            f"{param_name} contains non-finite values",
            param_name=param_name,
            param_value=array.tolist(),
            constraint="finite"
        )

    return array


def validate_positive(value: Any, param_name: str) -> float:
    """Validate that a scalar is a finite, strictly positive real number.

    Raises:
        ParameterError: If the value is not positive and finite
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise_parameter_error(
            f"Parameter {param_name} must be a real number, got {type(value).__name__}",
            param_name=param_name,
            param_value=value,
            constraint="real-valued"
        )

    value = float(value)
    if not np.isfinite(value) or value <= 0:
        raise_parameter_error(
            f"Parameter {param_name} must be positive and finite, got {value}",
            param_name=param_name,
            param_value=value,
            constraint="> 0"
        )

    return value


def validate_integer(value: Any,
                     param_name: str,
                     lower_bound: Optional[int] = None,
                     upper_bound: Optional[int] = None,
                     constraint: Optional[str] = None) -> int:
    """Validate that a value is an integer within inclusive bounds.

    Args:
        value: Value to validate
        param_name: Name of the parameter for error messages
        lower_bound: Smallest allowed value, or None for no lower bound
        upper_bound: Largest allowed value, or None for no upper bound
        constraint: Description of the bound used in the error message;
            defaults to the numeric bound itself

    Returns:
        int: The validated value

    Raises:
        ParameterError: If the value is not an integer or is out of bounds
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise_parameter_error(
            f"Parameter {param_name} must be an integer, got {type(value).__name__}",
            param_name=param_name,
            param_value=value,
            constraint="integer"
        )

    value = int(value)

    if lower_bound is not None and value < lower_bound:
        raise_parameter_error(
            f"Parameter {param_name} must be >= {lower_bound}, got {value}",
            param_name=param_name,
            param_value=value,
            constraint=constraint or f">= {lower_bound}"
        )

    if upper_bound is not None and value > upper_bound:
        raise_parameter_error(
            f"Parameter {param_name} must be <= {upper_bound}, got {value}",
            param_name=param_name,
            param_value=value,
            constraint=constraint or f"<= {upper_bound}"
        )

    return value


def validate_innovations(innovations: Any,
                         expected_length: int,
                         array_name: str = "innovations") -> Vector:
    """Validate an injected array of standard-normal draws.

    Args:
        innovations: Array-like of draws
        expected_length: Required number of draws
        array_name: Name of the array for error messages

    Returns:
        np.ndarray: Float64 1-D copy of the draws

    Raises:
        DimensionError: If the array is not 1-D or has the wrong length
        ParameterError: If any draw is not finite
    """
    array = np.array(innovations, dtype=np.float64)

    if array.ndim != 1:
        raise_dimension_error(
            f"{array_name} must be 1-dimensional, got {array.ndim} dimensions",
            array_name=array_name,
            expected_shape="1D vector",
            actual_shape=array.shape
        )

    if len(array) != expected_length:
        raise_dimension_error(
            f"{array_name} has length {len(array)}, expected {expected_length}",
            array_name=array_name,
            expected_shape=f"vector of length {expected_length}",
            actual_shape=array.shape
        )

    if not np.all(np.isfinite(array)):
        raise_parameter_error(
            f"{array_name} contains non-finite values",
            param_name=array_name,
            constraint="finite"
        )

    return array
