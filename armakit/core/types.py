# armakit/core/types.py

"""
Core type annotations for armakit.

Type aliases shared by the process model, the frequency-domain engines and
the simulation engine.
"""

from typing import Any, Dict, Literal, Sequence, Tuple, Union

import numpy as np

# NumPy array aliases
Vector = np.ndarray  # 1D array
ComplexVector = np.ndarray  # 1D complex array

# Coefficient input: a single scalar or an ordered sequence of scalars
Scalar = Union[int, float, np.integer, np.floating]
CoefficientLike = Union[Scalar, Sequence[Scalar], np.ndarray]

# Polynomial in filtering form, constant term first
Polynomial = np.ndarray

# Injected noise source: a seed, a generator, or nothing for a fresh generator
RandomState = Union[None, int, np.random.Generator]

# Derived outputs
SpectralSample = Tuple[Vector, Vector]  # (frequencies, densities)

# Configuration types
ConfigDict = Dict[str, Dict[str, Any]]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
