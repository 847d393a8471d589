"""
Base classes and validation with minimal dependencies.

The exception hierarchy and the argument and configuration validators that
the numerical modules build upon.
"""

from .exceptions import (
    JnumError,
    ValidationError,
    ConfigurationError,
    ShapeError,
    SingularMatrixError,
    DeconvolutionError,
    FitsHeaderError,
    validate_type,
    validate_positive,
)
from .validation import (
    Validator,
    ConfigValidator,
    validate_fwhm,
    validate_matrix_data,
    validate_image,
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
    "validate_type",
    "validate_positive",
    # Validation
    "Validator",
    "ConfigValidator",
    "validate_fwhm",
    "validate_matrix_data",
    "validate_image",
]
