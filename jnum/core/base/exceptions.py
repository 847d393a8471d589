"""
Exception hierarchy for jnum.

Every error raised by the package derives from ``JnumError``. The concrete
classes also derive from the built-in exception a caller would otherwise
expect (``ShapeError`` is a ``ValueError``, ``SingularMatrixError`` a
``RuntimeError``), so existing ``except`` clauses keep working.
"""

from typing import Optional, Any, Dict, Tuple, Union


class JnumError(Exception):
    """Base exception for all jnum errors.

    Keyword context given by the subclasses is collected in ``details`` and
    appended to the message.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """Initialize jnum error.

        Parameters
        ----------
        message : str
            Primary error message
        details : dict, optional
            Context such as the matrix size or offending field
        cause : Exception, optional
            Lower-level exception being translated
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        text = self.message
        if self.details:
            text += " (Details: " + ", ".join(f"{k}={v}" for k, v in self.details.items()) + ")"
        if self.cause:
            text += f" (Caused by: {self.cause})"
        return text

    def add_detail(self, key: str, value: Any) -> "JnumError":
        """Attach one more piece of context; returns self for chaining."""
        self.details[key] = value
        return self

    def get_detail(self, key: str, default: Any = None) -> Any:
        return self.details.get(key, default)


class ValidationError(JnumError, ValueError):
    """Raised when an argument has an unusable value or type."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Any] = None, **kwargs):
        details = kwargs.pop('details', {})
        if field is not None:
            details['field'] = field
        if value is not None:
            details['value'] = value

        super().__init__(message, details=details, **kwargs)
        self.field = field
        self.value = value


class ConfigurationError(JnumError):
    """Raised for invalid numerical settings or unreadable config files."""

    def __init__(self, message: str, config_file: Optional[str] = None,
                 parameter: Optional[str] = None, **kwargs):
        """Initialize configuration error.

        Parameters
        ----------
        message : str
            Error message
        config_file : str, optional
            Configuration file being read or written
        parameter : str, optional
            Name of the rejected ``NumericsConfig`` field
        **kwargs
            Passed on to ``JnumError``
        """
        details = kwargs.pop('details', {})
        if config_file is not None:
            details['config_file'] = config_file
        if parameter is not None:
            details['parameter'] = parameter

        super().__init__(message, details=details, **kwargs)
        self.config_file = config_file
        self.parameter = parameter


class ShapeError(JnumError, ValueError):
    """Raised when a matrix or vector does not have the required shape.

    Typical causes are ragged row data, non-square matrices passed where
    a square matrix is required, or operands with non-conforming sizes.
    """

    def __init__(self, message: str, shape: Optional[Tuple[int, ...]] = None,
                 expected: Optional[Union[Tuple[int, ...], str]] = None, **kwargs):
        details = kwargs.pop('details', {})
        if shape is not None:
            details['shape'] = shape
        if expected is not None:
            details['expected'] = expected

        super().__init__(message, details=details, **kwargs)
        self.shape = shape
        self.expected = expected


class SingularMatrixError(JnumError, RuntimeError):
    """Raised when a matrix cannot be decomposed or inverted.

    This is the illegal-state condition of the elimination routines: either
    an entire row is null before pivoting, or a pivot cannot be found.
    """

    def __init__(self, message: str, size: Optional[int] = None,
                 pivot: Optional[int] = None, **kwargs):
        """Initialize singular matrix error.

        Parameters
        ----------
        message : str
            Error message
        size : int, optional
            Size of the matrix
        pivot : int, optional
            Row or column index at which the failure occurred
        **kwargs
            Passed on to ``JnumError``
        """
        details = kwargs.pop('details', {})
        if size is not None:
            details['size'] = size
        if pivot is not None:
            details['pivot'] = pivot

        super().__init__(message, details=details, **kwargs)
        self.size = size
        self.pivot = pivot


class DeconvolutionError(JnumError, ArithmeticError):
    """Raised in strict mode when a PSF deconvolution has no real solution."""

    def __init__(self, message: str, psf: Optional[str] = None,
                 kernel: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if psf is not None:
            details['psf'] = psf
        if kernel is not None:
            details['kernel'] = kernel

        super().__init__(message, details=details, **kwargs)
        self.psf = psf
        self.kernel = kernel


class FitsHeaderError(JnumError, KeyError):
    """Raised when a FITS header lacks a required keyword."""

    def __init__(self, message: str, keyword: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if keyword is not None:
            details['keyword'] = keyword

        super().__init__(message, details=details, **kwargs)
        self.keyword = keyword

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return JnumError.__str__(self)


def validate_type(value: Any, expected_type: type, name: str) -> Any:
    """Return ``value`` if it is an instance of ``expected_type``.

    Raises
    ------
    ValidationError
        Naming the parameter and both types otherwise
    """
    if not isinstance(value, expected_type):
        raise ValidationError(
            f"Parameter '{name}' must be a {expected_type.__name__}, got {type(value).__name__}",
            field=name, value=value
        )
    return value


def validate_positive(value: Union[int, float], name: str) -> Union[int, float]:
    """Return ``value`` if it is strictly positive (NaN is rejected)."""
    if not value > 0:
        raise ValidationError(f"Parameter '{name}' must be positive, got {value}",
                              field=name, value=value)
    return value
