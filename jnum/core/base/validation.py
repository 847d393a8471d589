"""
Validation utilities for numeric arguments and configuration.

``ConfigValidator`` checks raw configuration dictionaries against a schema
and collects messages; the functions check FWHM values, nested matrix rows
and 2-D images, raising on the first problem.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union, Tuple, Type
import math
import numpy as np

from .exceptions import ValidationError, ShapeError


class Validator(ABC):
    """Abstract base class for validators."""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    @abstractmethod
    def validate(self, data: Any) -> bool:
        """Validate the given data.

        Parameters
        ----------
        data : Any
            Data to validate

        Returns
        -------
        bool
            True if validation passes, False otherwise
        """
        pass

    def get_errors(self) -> List[str]:
        """Get validation error messages."""
        return self.errors.copy()

    def get_warnings(self) -> List[str]:
        """Get validation warning messages."""
        return self.warnings.copy()

    def clear_messages(self) -> None:
        """Clear all error and warning messages."""
        self.errors.clear()
        self.warnings.clear()

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


class ConfigValidator(Validator):
    """Validator for configuration dictionaries against a schema.

    The schema is a dictionary with optional ``required`` (list of keys),
    ``types`` (key to type or tuple of types) and ``validators``
    (key to predicate) entries.
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None, strict: bool = True):
        """Initialize config validator.

        Parameters
        ----------
        schema : dict, optional
            Validation schema
        strict : bool
            If True, unknown fields are reported as warnings
        """
        super().__init__()
        self.schema = schema or {}
        self.strict = strict

    def validate(self, config: Dict[str, Any]) -> bool:
        """Validate configuration dictionary.

        Parameters
        ----------
        config : dict
            Configuration to validate

        Returns
        -------
        bool
            True if validation passes
        """
        self.clear_messages()

        if not isinstance(config, dict):
            self.add_error(f"Configuration must be a dictionary, got {type(config).__name__}")
            return False

        if not self._check_required_fields(config):
            return False

        if not self._validate_field_types(config):
            return False

        if not self._validate_field_values(config):
            return False

        if self.strict:
            self._check_unknown_fields(config)

        return not self.has_errors()

    def _check_required_fields(self, config: Dict[str, Any]) -> bool:
        required_fields = self.schema.get('required', [])
        missing_fields = [field for field in required_fields if field not in config]

        if missing_fields:
            self.add_error(f"Missing required fields: {missing_fields}")
            return False

        return True

    def _validate_field_types(self, config: Dict[str, Any]) -> bool:
        field_types = self.schema.get('types', {})
        is_valid = True

        for field, expected_type in field_types.items():
            if field in config:
                value = config[field]
                if not self._check_type(value, expected_type):
                    self.add_error(
                        f"Field '{field}' has type {type(value).__name__}, "
                        f"expected {self._type_name(expected_type)}"
                    )
                    is_valid = False

        return is_valid

    def _validate_field_values(self, config: Dict[str, Any]) -> bool:
        validators = self.schema.get('validators', {})
        is_valid = True

        for field, validator_func in validators.items():
            if field in config:
                try:
                    if not validator_func(config[field]):
                        self.add_error(f"Field '{field}' failed validation")
                        is_valid = False
                except (TypeError, ValueError) as e:
                    self.add_error(f"Validation of field '{field}' raised exception: {e}")
                    is_valid = False

        return is_valid

    def _check_unknown_fields(self, config: Dict[str, Any]) -> None:
        known_fields = set()
        known_fields.update(self.schema.get('required', []))
        known_fields.update(self.schema.get('types', {}).keys())
        known_fields.update(self.schema.get('validators', {}).keys())
        known_fields.update(self.schema.get('optional', []))

        unknown_fields = set(config.keys()) - known_fields
        if unknown_fields:
            self.add_warning(f"Unknown fields (will be ignored): {sorted(unknown_fields)}")

    def _check_type(self, value: Any, expected_type: Union[Type, Tuple[Type, ...]]) -> bool:
        # bool is an int subclass; do not let True pass as a number
        if isinstance(value, bool):
            types = expected_type if isinstance(expected_type, tuple) else (expected_type,)
            return bool in types
        return isinstance(value, expected_type)

    def _type_name(self, type_spec: Union[Type, Tuple[Type, ...]]) -> str:
        if isinstance(type_spec, tuple):
            names = [t.__name__ for t in type_spec]
            return " or ".join(names)
        else:
            return type_spec.__name__


def validate_fwhm(value: float, name: str = "fwhm") -> float:
    """Validate a Gaussian full-width half-maximum.

    Raises
    ------
    ValidationError
        If the value is negative or NaN
    """
    value = float(value)
    if math.isnan(value) or value < 0.0:
        raise ValidationError(f"Parameter '{name}' must be a non-negative size, got {value}",
                              field=name, value=value)
    return value


def validate_matrix_data(data: Any) -> Tuple[int, int]:
    """Validate nested row data for a rectangular matrix.

    Returns
    -------
    tuple
        (rows, cols)

    Raises
    ------
    ShapeError
        If the data is empty or ragged
    """
    if data is None or len(data) == 0:
        raise ShapeError("Matrix data must contain at least one row", shape=(0,))
    cols = len(data[0])
    if cols == 0:
        raise ShapeError("Matrix rows must contain at least one element", shape=(len(data), 0))
    for i, row in enumerate(data):
        if len(row) != cols:
            raise ShapeError(f"Row {i} has {len(row)} columns, expected {cols}",
                             shape=(len(data), len(row)), expected=(len(data), cols))
    return len(data), cols


def validate_image(image: Any, name: str = "image") -> np.ndarray:
    """Validate a 2D data array and return it as a float ndarray."""
    array = np.asarray(image, dtype=float)
    if array.ndim != 2:
        raise ShapeError(f"Parameter '{name}' must be 2-dimensional, got {array.ndim} dimensions",
                         shape=array.shape, expected="2D")
    return array
