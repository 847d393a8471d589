"""
Configuration settings and management for jnum.

This module provides centralized configuration of the numerical policies
(pivot substitution, deconvolution clamping, tolerances) and of logging,
with validation and environment variable support. Configuration uses a
dataclass for clean, type-safe handling.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional
from pathlib import Path
import logging

from ..base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Global configuration instance
_global_config: Optional["NumericsConfig"] = None


@dataclass
class NumericsConfig:
    """Configuration of numerical policies and logging.

    Attributes
    ----------
    lu_tiny_value : float
        Scale of the identity element substituted for a null pivot during
        LU decomposition.
    strict_pivoting : bool
        Raise ``SingularMatrixError`` instead of substituting a null pivot.
    strict_deconvolution : bool
        Raise ``DeconvolutionError`` instead of clamping an invalid PSF
        deconvolution to zero size.
    gauss_zero_tolerance : float
        Relative magnitude below which elements count as zero when
        estimating matrix rank.
    beam_extent_sigmas : float
        Default half-extent, in standard deviations, of rendered beam kernels.
    log_level : str
        Logging level name.
    log_file : Path, optional
        Log file, if file logging is wanted.
    """

    # LU decomposition
    lu_tiny_value: float = 1e-20
    strict_pivoting: bool = False

    # Gauss-Jordan elimination
    gauss_zero_tolerance: float = 1e-12

    # PSF algebra
    strict_deconvolution: bool = False
    beam_extent_sigmas: float = 3.0

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Post-initialization validation and setup."""
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises
        ------
        ConfigurationError
            If any configuration parameter is invalid
        """
        errors = []

        if not self.lu_tiny_value > 0:
            errors.append("lu_tiny_value must be positive")

        if not 0 < self.gauss_zero_tolerance < 1:
            errors.append("gauss_zero_tolerance must be between 0 and 1")

        if not self.beam_extent_sigmas > 0:
            errors.append("beam_extent_sigmas must be positive")

        for flag in ("strict_pivoting", "strict_deconvolution"):
            if not isinstance(getattr(self, flag), bool):
                errors.append(f"{flag} must be a boolean")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if not isinstance(self.log_level, str) or self.log_level.upper() not in valid_log_levels:
            errors.append(f"log_level must be one of {valid_log_levels}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns
        -------
        dict
            Dictionary representation of configuration
        """
        result = {}
        for key, value in self.__dict__.items():
            if isinstance(value, Path):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NumericsConfig":
        """Create configuration from dictionary.

        Parameters
        ----------
        data : dict
            Dictionary containing configuration data

        Returns
        -------
        NumericsConfig
            New configuration instance

        Raises
        ------
        ConfigurationError
            If the dictionary contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration parameters: {sorted(unknown)}")

        data = dict(data)
        if data.get('log_file') is not None:
            data['log_file'] = Path(data['log_file'])

        return cls(**data)

    def update(self, **kwargs) -> None:
        """Update configuration parameters.

        Parameters
        ----------
        **kwargs
            Configuration parameters to update

        Raises
        ------
        ConfigurationError
            If unknown parameter or validation fails; the configuration is
            left unchanged
        """
        known = {f.name for f in fields(self)}
        for key in kwargs:
            if key not in known:
                raise ConfigurationError(f"Unknown configuration parameter: {key}", parameter=key)

        # Validated in __post_init__ before anything is written back
        candidate = replace(self, **kwargs)
        for f in fields(self):
            setattr(self, f.name, getattr(candidate, f.name))

    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.log_level.upper())


def get_config() -> NumericsConfig:
    """Get the global configuration instance.

    Returns
    -------
    NumericsConfig
        Global configuration instance
    """
    global _global_config
    if _global_config is None:
        _global_config = NumericsConfig()
    return _global_config


def set_config(config: NumericsConfig) -> None:
    """Set the global configuration instance.

    Parameters
    ----------
    config : NumericsConfig
        Configuration instance to set as global

    Raises
    ------
    TypeError
        If config is not a NumericsConfig instance
    """
    global _global_config
    if not isinstance(config, NumericsConfig):
        raise TypeError("config must be a NumericsConfig instance")
    config.validate()
    _global_config = config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _global_config
    _global_config = NumericsConfig()


def update_config(**kwargs) -> None:
    """Update global configuration parameters.

    Parameters
    ----------
    **kwargs
        Configuration parameters to update
    """
    config = get_config()
    config.update(**kwargs)


def load_config_from_env() -> NumericsConfig:
    """Load configuration from environment variables.

    Returns
    -------
    NumericsConfig
        Configuration loaded from environment
    """
    config = NumericsConfig()

    env_mapping = {
        'JNUM_LU_TINY_VALUE': 'lu_tiny_value',
        'JNUM_STRICT_PIVOTING': 'strict_pivoting',
        'JNUM_GAUSS_ZERO_TOLERANCE': 'gauss_zero_tolerance',
        'JNUM_STRICT_DECONVOLUTION': 'strict_deconvolution',
        'JNUM_BEAM_EXTENT_SIGMAS': 'beam_extent_sigmas',
        'JNUM_LOG_LEVEL': 'log_level',
        'JNUM_LOG_FILE': 'log_file',
    }

    updates = {}
    for env_var, attr_name in env_mapping.items():
        if env_var in os.environ:
            value = os.environ[env_var]

            try:
                if attr_name == 'log_file':
                    if value:
                        updates[attr_name] = Path(value)
                elif attr_name in ['lu_tiny_value', 'gauss_zero_tolerance', 'beam_extent_sigmas']:
                    updates[attr_name] = float(value)
                elif attr_name in ['strict_pivoting', 'strict_deconvolution']:
                    updates[attr_name] = value.lower() in ('true', '1', 'yes', 'on')
                else:
                    updates[attr_name] = value
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_var}: {value!r}",
                                         parameter=attr_name, cause=e)

    if updates:
        config.update(**updates)
        logger.info(f"Updated configuration from environment variables: {list(updates.keys())}")

    return config


# Configuration schema for validation of raw dictionaries
CONFIG_SCHEMA = {
    'numerics': {
        'required': [],
        'types': {
            'lu_tiny_value': (int, float),
            'strict_pivoting': bool,
            'gauss_zero_tolerance': (int, float),
            'strict_deconvolution': bool,
            'beam_extent_sigmas': (int, float),
            'log_level': str,
            'log_file': (str, Path, type(None)),
        },
        'validators': {
            'lu_tiny_value': lambda x: x > 0,
            'gauss_zero_tolerance': lambda x: 0 < x < 1,
            'beam_extent_sigmas': lambda x: x > 0,
            'log_level': lambda x: x.upper() in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        }
    },
}
