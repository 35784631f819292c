# armakit/version.py
"""
armakit Version Information

Version information and metadata for armakit, accessible programmatically
via ``armakit.__version__``.

armakit follows semantic versioning (MAJOR.MINOR.PATCH).
"""

from typing import Any, Dict, Tuple

# Version components
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# Full version string
__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"

# Package metadata
__title__ = "armakit"
__description__ = "Spectral, autocovariance, impulse response and simulation tools for scalar ARMA processes"
__license__ = "MIT"

# Python version requirements
__python_requires__ = ">=3.9"

# Package dependencies
__dependencies__ = {
    "numpy": ">=1.26.0",
    "numba": ">=0.58.0",
}


def get_version_info() -> Dict[str, Any]:
    """
    Get detailed version information about armakit.

    Returns:
        Dict containing the version string, its components, the supported
        Python versions and the runtime dependencies.
    """
    return {
        "version": __version__,
        "major": VERSION_MAJOR,
        "minor": VERSION_MINOR,
        "patch": VERSION_PATCH,
        "python_requires": __python_requires__,
        "dependencies": __dependencies__,
        "license": __license__
    }


def get_version_components() -> Tuple[int, int, int]:
    """
    Get the version components as a tuple.

    Returns:
        Tuple of (major, minor, patch) version components
    """
    return (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)
