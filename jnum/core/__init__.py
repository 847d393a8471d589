"""
Core functionality for jnum.

This module provides the foundational components (exceptions, validation,
configuration and logging) together with the numerical value types,
generic matrices, splines and Gaussian beams built on them.
"""

from jnum.core.base import (
    JnumError,
    ValidationError,
    ConfigurationError,
    ShapeError,
    SingularMatrixError,
    DeconvolutionError,
    FitsHeaderError,
)
from jnum.core.config import (
    NumericsConfig,
    get_config,
    set_config,
    reset_config,
    update_config,
    ConfigManager,
)
from jnum.core.log_manager import LogManager, PerformanceLogger
from jnum.core.math import AlgebraElement, Real, Complex, Vector2D, Vector3D
from jnum.core.matrix import (
    GenericVector,
    GenericMatrix,
    MatrixIterator,
    GenericSquareMatrix,
    LUDecomposition,
)
from jnum.core.data import (
    CubicSpline,
    SplineSet,
    BicubicSpline,
    interpolate_1d,
    interpolate_2d,
    GaussianPSF,
)

__all__ = [
    # Exceptions
    "JnumError",
    "ValidationError",
    "ConfigurationError",
    "ShapeError",
    "SingularMatrixError",
    "DeconvolutionError",
    "FitsHeaderError",
    # Configuration
    "NumericsConfig",
    "get_config",
    "set_config",
    "reset_config",
    "update_config",
    "ConfigManager",
    # Logging
    "LogManager",
    "PerformanceLogger",
    # Value types
    "AlgebraElement",
    "Real",
    "Complex",
    "Vector2D",
    "Vector3D",
    # Matrices
    "GenericVector",
    "GenericMatrix",
    "MatrixIterator",
    "GenericSquareMatrix",
    "LUDecomposition",
    # Data
    "CubicSpline",
    "SplineSet",
    "BicubicSpline",
    "interpolate_1d",
    "interpolate_2d",
    "GaussianPSF",
]
