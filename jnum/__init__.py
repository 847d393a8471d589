"""
jnum: generic linear algebra, spline interpolation and Gaussian beam
algebra for scientific data processing.
"""

__version__ = "0.1.0"

from jnum.core.base.exceptions import JnumError
from jnum.core.config import get_config, set_config, NumericsConfig
from jnum.core.math import Real, Complex, Vector2D, Vector3D
from jnum.core.matrix import GenericVector, GenericMatrix, GenericSquareMatrix, LUDecomposition
from jnum.core.data import CubicSpline, SplineSet, BicubicSpline, GaussianPSF

# Public API
__all__ = [
    "__version__",
    "JnumError",
    "get_config",
    "set_config",
    "NumericsConfig",
    "Real",
    "Complex",
    "Vector2D",
    "Vector3D",
    "GenericVector",
    "GenericMatrix",
    "GenericSquareMatrix",
    "LUDecomposition",
    "CubicSpline",
    "SplineSet",
    "BicubicSpline",
    "GaussianPSF",
]


def get_version():
    """Get the version string."""
    return __version__
