"""Configuration module for gridplace.

This module provides:
- Pydantic models for configuration validation
- YAML config file loading and discovery
- Default configuration values
- Environment variable expansion
- Clear error messages for config issues
"""

from gridplace.config.defaults import DEFAULT_CONFIG
from gridplace.config.loader import (
    BoundsConfig,
    Config,
    ConfigError,
    ConfigKeyError,
    ConfigSyntaxError,
    ConfigValidationError,
    GridConfig,
    LoggingConfig,
    PreviewConfig,
    get_config_path,
    load_config,
)

__all__ = [
    "Config",
    "BoundsConfig",
    "ConfigError",
    "ConfigKeyError",
    "ConfigSyntaxError",
    "ConfigValidationError",
    "GridConfig",
    "LoggingConfig",
    "PreviewConfig",
    "DEFAULT_CONFIG",
    "get_config_path",
    "load_config",
]
