"""
Configuration package for WallRotate.
"""

from .main import Config, DEFAULT_CONFIG_TOML
from .dataclasses import (
    RotationConfig,
    WallpaperConfig,
    LoggingConfig,
    parse_patterns,
)
from ..exceptions import ConfigError, ConfigValidationError
