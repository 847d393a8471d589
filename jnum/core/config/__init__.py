"""
Configuration management for jnum.

This module provides the numerics configuration dataclass, file loaders
and environment variable overrides.
"""

from .settings import (
    NumericsConfig,
    get_config,
    set_config,
    reset_config,
    update_config,
    load_config_from_env,
    CONFIG_SCHEMA,
)
from .loader import (
    ConfigLoader,
    JSONConfigLoader,
    YAMLConfigLoader,
    get_config_loader,
)
from .manager import ConfigManager

__all__ = [
    # Settings
    "NumericsConfig",
    "get_config",
    "set_config",
    "reset_config",
    "update_config",
    "load_config_from_env",
    "CONFIG_SCHEMA",
    # Loaders
    "ConfigLoader",
    "JSONConfigLoader",
    "YAMLConfigLoader",
    "get_config_loader",
    # Manager
    "ConfigManager",
]
