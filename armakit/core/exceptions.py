'''
Custom exception and warning classes for armakit.

Fatal problems (bad arguments, wrong array lengths, bad configuration) raise
an :class:`ArmaKitError` subclass. Non-fatal numerical problems, such as a
singular frequency response or aliased autocovariances, are reported through
:class:`NumericWarning` so the computed values still reach the caller.

Every error and warning carries a primary message, optional details and a
context dictionary naming the offending argument, its value and the violated
constraint. All three are folded into the text shown to the user.
'''

from typing import Any, Dict, Iterable, Optional, Tuple, Union
import inspect
from pathlib import Path

import numpy as np

# Arrays larger than this are summarized by shape in warning context
_MAX_ARRAY_CONTEXT = 10


def _format_message(message: str,
                    details: Optional[str],
                    context: Dict[str, Any]) -> str:
    """Fold details and context entries into a single message."""
    parts = [message]
    if details:
        parts.append(f"Details: {details}")
    if context:
        parts.append("Context:\n" + "\n".join(f"  {k}: {v}" for k, v in context.items()))
    return "\n\n".join(parts)


def _merge_context(context: Optional[Dict[str, Any]],
                   entries: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """Copy ``context`` and add every labelled entry that is set."""
    merged = dict(context or {})
    for label, value in entries:
        if value is None or (isinstance(value, str) and not value):
            continue
        merged[label] = value
    return merged


def _caller_location() -> Optional[str]:
    """File and line of the first frame outside this module."""
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
        if frame is None:
            return None
        return f"{Path(frame.f_code.co_filename).name}:{frame.f_lineno}"
    finally:
        del frame  # Avoid reference cycles


class ArmaKitError(Exception):
    """Base exception class for all armakit errors.

    Attributes:
        message: The primary error message
        details: Additional details about the error
        context: Contextual information about the error
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        self.context = context or {}

        full_message = _format_message(message, details, self.context)
        location = _caller_location()
        if location:
            full_message += f"\n\nLocation: {location}"

        super().__init__(full_message)


class ParameterError(ArmaKitError):
    """Invalid process coefficients or query arguments.

    Raised when a coefficient is not finite, the noise scale is not positive,
    or a requested horizon or lag count violates its bound.
    """

    def __init__(self,
                 message: str,
                 param_name: Optional[str] = None,
                 param_value: Optional[Any] = None,
                 constraint: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.param_name = param_name
        self.param_value = param_value
        self.constraint = constraint

        super().__init__(message, details, _merge_context(context, [
            ("Parameter", param_name),
            ("Value", param_value),
            ("Constraint", constraint),
        ]))


class DimensionError(ArmaKitError):
    """An array argument has the wrong number of dimensions or length."""

    def __init__(self,
                 message: str,
                 array_name: Optional[str] = None,
                 expected_shape: Optional[Union[Tuple[int, ...], str]] = None,
                 actual_shape: Optional[Tuple[int, ...]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.array_name = array_name
        self.expected_shape = expected_shape
        self.actual_shape = actual_shape

        super().__init__(message, details, _merge_context(context, [
            ("Array", array_name),
            ("Expected Shape", expected_shape),
            ("Actual Shape", actual_shape),
        ]))


class ConfigurationError(ArmaKitError):
    """A configuration section, option or value is not acceptable."""

    def __init__(self,
                 message: str,
                 config_file: Optional[Union[str, Path]] = None,
                 setting: Optional[str] = None,
                 value: Optional[Any] = None,
                 issue: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.config_file = config_file
        self.setting = setting
        self.value = value
        self.issue = issue

        super().__init__(message, details, _merge_context(context, [
            ("Config File", str(config_file) if config_file else None),
            ("Setting", setting),
            ("Value", value),
            ("Issue", issue),
        ]))


class ArmaKitWarning(Warning):
    """Base warning class for all armakit warnings.

    Attributes:
        message: The primary warning message
        details: Additional details about the warning
        context: Contextual information about the warning
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(_format_message(message, details, self.context))


class NumericWarning(ArmaKitWarning):
    """Numerical issue that does not stop a computation.

    Used when a spectral density sample diverges because the AR polynomial
    vanishes on the frequency grid, or when aliased autocovariances are
    returned because the strict lag bound has been switched off.

    Attributes:
        operation: The operation where the issue was detected
        issue: Description of the numerical issue
        value: The value that may cause numerical issues
    """

    def __init__(self,
                 message: str,
                 operation: Optional[str] = None,
                 issue: Optional[str] = None,
                 value: Optional[Any] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.operation = operation
        self.issue = issue
        self.value = value

        if isinstance(value, np.ndarray) and value.size > _MAX_ARRAY_CONTEXT:
            shown = f"Array with shape {value.shape}"
        else:
            shown = value

        super().__init__(message, details, _merge_context(context, [
            ("Operation", operation),
            ("Issue", issue),
            ("Value", shown),
        ]))


def raise_parameter_error(message: str,
                          param_name: Optional[str] = None,
                          param_value: Optional[Any] = None,
                          constraint: Optional[str] = None,
                          details: Optional[str] = None,
                          context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a :class:`ParameterError`."""
    raise ParameterError(message, param_name, param_value, constraint, details, context)


def raise_dimension_error(message: str,
                          array_name: Optional[str] = None,
                          expected_shape: Optional[Union[Tuple[int, ...], str]] = None,
                          actual_shape: Optional[Tuple[int, ...]] = None,
                          details: Optional[str] = None,
                          context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a :class:`DimensionError`."""
    raise DimensionError(message, array_name, expected_shape, actual_shape, details, context)


def warn_numeric(message: str,
                 operation: Optional[str] = None,
                 issue: Optional[str] = None,
                 value: Optional[Any] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
    """Issue a :class:`NumericWarning` attributed to the caller's caller.

    Args:
        message: The primary warning message
        operation: The operation where the issue was detected
        issue: Description of the numerical issue
        value: The value that may cause numerical issues
        details: Additional details about the warning
        context: Additional contextual information
    """
    import warnings
    warnings.warn(
        NumericWarning(message, operation, issue, value, details, context),
        stacklevel=3
    )
