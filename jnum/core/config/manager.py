"""
Configuration manager for jnum.

This module provides utilities for loading, validating, saving and caching
numerics configuration files.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union, Tuple
import logging

from ..base.exceptions import ConfigurationError
from ..base.validation import ConfigValidator
from .settings import NumericsConfig, CONFIG_SCHEMA
from .loader import ConfigLoader, YAMLConfigLoader, JSONConfigLoader


class ConfigManager:
    """Manager for configuration loading and validation.

    A configuration file holds the ``NumericsConfig`` fields either at the
    top level or under a ``numerics`` section.
    """

    SECTION = 'numerics'

    def __init__(self):
        """Initialize the configuration manager."""
        self.loaders = {
            '.yaml': YAMLConfigLoader(),
            '.yml': YAMLConfigLoader(),
            '.json': JSONConfigLoader(),
        }
        self.validator = ConfigValidator(CONFIG_SCHEMA[self.SECTION])
        self._config_cache: Dict[str, NumericsConfig] = {}
        self._last_modified: Dict[str, float] = {}

    def register_loader(self, extension: str, loader: ConfigLoader) -> None:
        """Register a new configuration loader.

        Parameters
        ----------
        extension : str
            File extension (including the dot)
        loader : ConfigLoader
            Loader instance for this file type
        """
        self.loaders[extension.lower()] = loader
        logging.debug(f"Registered config loader for {extension}")

    def load_config(self, config_path: Union[str, Path], use_cache: bool = True) -> NumericsConfig:
        """Load configuration from file.

        Parameters
        ----------
        config_path : str or Path
            Path to configuration file
        use_cache : bool
            Whether to use cached configuration if available

        Returns
        -------
        NumericsConfig
            Loaded and validated configuration

        Raises
        ------
        ConfigurationError
            If configuration cannot be loaded or is invalid
        """
        config_path = Path(config_path)
        cache_key = str(config_path.resolve())

        if use_cache and self._is_cached_valid(config_path, cache_key):
            logging.debug(f"Using cached configuration for {config_path}")
            return self._config_cache[cache_key]

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}",
                                     config_file=str(config_path))

        loader = self._get_loader(config_path)
        config_data = self._extract_section(loader.load(config_path))

        if not self.validator.validate(config_data):
            errors = self.validator.get_errors()
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}",
                                     config_file=str(config_path))

        for warning in self.validator.get_warnings():
            logging.warning(f"Config warning: {warning}")

        known = NumericsConfig.__dataclass_fields__.keys()
        config = NumericsConfig.from_dict({k: v for k, v in config_data.items() if k in known})

        if use_cache:
            self._config_cache[cache_key] = config
            self._last_modified[cache_key] = config_path.stat().st_mtime

        logging.info(f"Successfully loaded numerics configuration from {config_path}")
        return config

    def save_config(self, config: NumericsConfig, config_path: Union[str, Path],
                    overwrite: bool = False) -> None:
        """Save configuration to file.

        Parameters
        ----------
        config : NumericsConfig
            Configuration to save
        config_path : str or Path
            Output path
        overwrite : bool
            Whether to overwrite existing files

        Raises
        ------
        ConfigurationError
            If save operation fails
        """
        config_path = Path(config_path)

        if config_path.exists() and not overwrite:
            raise ConfigurationError(
                f"Configuration file already exists: {config_path}. Use overwrite=True to replace.",
                config_file=str(config_path))

        loader = self._get_loader(config_path)
        loader.save({self.SECTION: config.to_dict()}, config_path)
        logging.info(f"Configuration saved to {config_path}")

    def create_default_config(self, output_path: Optional[Union[str, Path]] = None) -> NumericsConfig:
        """Create and optionally save the default configuration."""
        config = NumericsConfig()

        if output_path is not None:
            self.save_config(config, output_path, overwrite=True)
            logging.info(f"Default numerics configuration saved to {output_path}")

        return config

    def validate_config_file(self, config_path: Union[str, Path]) -> Tuple[bool, List[str], List[str]]:
        """Validate a configuration file without loading it.

        Parameters
        ----------
        config_path : str or Path
            Path to configuration file

        Returns
        -------
        tuple
            (is_valid, errors, warnings)
        """
        config_path = Path(config_path)

        if not config_path.exists():
            return False, [f"Configuration file not found: {config_path}"], []

        suffix = config_path.suffix.lower()
        if suffix not in self.loaders:
            return False, [f"Unsupported file format: {suffix}"], []

        try:
            config_data = self._extract_section(self.loaders[suffix].load(config_path))
        except ConfigurationError as e:
            return False, [f"Validation failed: {e}"], []

        is_valid = self.validator.validate(config_data)
        return is_valid, self.validator.get_errors(), self.validator.get_warnings()

    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self._config_cache.clear()
        self._last_modified.clear()
        logging.debug("Configuration cache cleared")

    def get_cache_info(self) -> Dict[str, Any]:
        """Get information about the configuration cache."""
        return {
            'cached_configs': len(self._config_cache),
            'cache_keys': list(self._config_cache.keys()),
        }

    def _get_loader(self, config_path: Path) -> ConfigLoader:
        suffix = config_path.suffix.lower()
        if suffix not in self.loaders:
            available = list(self.loaders.keys())
            raise ConfigurationError(f"Unsupported configuration file format: {suffix}. Available: {available}",
                                     config_file=str(config_path))
        return self.loaders[suffix]

    def _extract_section(self, data: Dict[str, Any]) -> Dict[str, Any]:
        section = data.get(self.SECTION)
        if isinstance(section, dict):
            return section
        return data

    def _is_cached_valid(self, config_path: Path, cache_key: str) -> bool:
        """Check if cached configuration is still valid.

        Parameters
        ----------
        config_path : Path
            Path to configuration file
        cache_key : str
            Cache key for the configuration

        Returns
        -------
        bool
            True if cached config is valid
        """
        if cache_key not in self._config_cache:
            return False

        try:
            current_mtime = config_path.stat().st_mtime
            cached_mtime = self._last_modified.get(cache_key, 0)
            return current_mtime <= cached_mtime
        except OSError:
            # File doesn't exist or can't be accessed
            return False
