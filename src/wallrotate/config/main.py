"""
Main Config class for WallRotate.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Mapping
from dataclasses import dataclass, field

try:
    import tomli
except ImportError:
    raise ImportError("Required package 'tomli' not found. Install with: pip install tomli")

from ..exceptions import ConfigError

from .dataclasses import (
    RotationConfig,
    WallpaperConfig,
    LoggingConfig,
)
from .validation import (
    validate_toml_structure,
    validate_log_level,
    rotation_overrides_from_env,
)


DEFAULT_CONFIG_TOML = """\
# WallRotate configuration

[rotation]
# Seconds between rotation rounds
interval = 1800
# Directories to scan for wallpapers (required)
paths = ["~/Pictures/wallpapers"]
# Descend into subdirectories
recursive = false
# Semicolon-delimited glob patterns, or a list
pattern = "*.jpg;*.jpeg;*.png"
# Randomize the pool after every scan
shuffle = true
# head: take files in pool order, random: pick a random file each time
selection = "head"

[wallpaper]
# swww, swaybg, hyprpaper, feh, nitrogen or "custom:<command {path} {name} {index}>"
command = "swww"
timeout = 30
# Uncomment to skip compositor detection
# monitors = ["DP-1", "HDMI-A-1"]

[logging]
level = "INFO"
"""


@dataclass
class Config:
    """
    Main configuration class for WallRotate.

    Configuration is loaded from a TOML file with WALLROTATE_* environment
    variable overrides for the [rotation] section.
    """

    rotation: RotationConfig
    wallpaper: WallpaperConfig = field(default_factory=WallpaperConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Optional[Path] = None  # File the config was read from, if any

    def __post_init__(self) -> None:
        """Validate settings that span sections."""
        validate_log_level(self.logging.level)

    @classmethod
    def get_config_dir(cls) -> Path:
        """
        Get user configuration directory.

        Uses XDG_CONFIG_HOME if set, otherwise defaults to ~/.config.
        """
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "wallrotate"
        return Path.home() / ".config" / "wallrotate"

    @classmethod
    def get_config_file(cls) -> Path:
        """Get default config file path."""
        return cls.get_config_dir() / "config.toml"

    @classmethod
    def initialize_config(cls, config_file: Optional[Path] = None) -> bool:
        """
        Write a starter config file if none exists.

        Existing user files are never overwritten.

        Returns:
            True if a new file was written
        """
        logger = logging.getLogger(__name__)
        target = config_file or cls.get_config_file()

        if target.exists():
            logger.debug(f"Config already exists at {target}, leaving it untouched")
            return False

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
            os.chmod(target, 0o644)  # rw-r--r--
        except OSError as e:
            raise ConfigError(f"Failed to write default config to {target}: {e}")

        logger.info(f"Wrote default config: {target}")
        return True

    @classmethod
    def read_toml(cls, config_file: Path) -> Dict[str, Any]:
        """
        Read and structurally validate a TOML config file.

        Raises:
            ConfigError: If the file cannot be parsed or has unknown keys
        """
        try:
            with open(config_file, 'rb') as f:
                config_dict = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_file}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to read config file {config_file}: {e}")

        validate_toml_structure(config_dict, config_file)
        return config_dict

    @classmethod
    def from_dict(
        cls,
        config_dict: Mapping[str, Any],
        source: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> 'Config':
        """
        Build a Config from parsed sections plus environment overrides.

        Raises:
            ConfigError: If [rotation] paths is missing after overrides
        """
        rotation_dict = {
            str(k).lower(): v for k, v in config_dict.get('rotation', {}).items()
        }
        rotation_dict.update(rotation_overrides_from_env(environ))

        if not rotation_dict.get('paths'):
            where = f" in {source}" if source else ""
            raise ConfigError(
                f"Missing setting for 'paths'{where}.\n"
                "Add a [rotation] section with paths = [\"/path/to/wallpapers\"] "
                "or set WALLROTATE_PATHS."
            )

        return cls(
            rotation=RotationConfig.from_dict(rotation_dict),
            wallpaper=WallpaperConfig(**config_dict.get('wallpaper', {})),
            logging=LoggingConfig(**config_dict.get('logging', {})),
            source=source,
        )

    @classmethod
    def load(
        cls,
        config_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> 'Config':
        """
        Load configuration from TOML file.

        A missing file is not an error by itself; the rotation paths may
        still come from WALLROTATE_PATHS.

        Args:
            config_file: Optional path to config TOML file
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Config instance with loaded settings

        Raises:
            ConfigError: If the file is invalid or paths are not configured
        """
        logger = logging.getLogger(__name__)

        if not config_file:
            config_file = cls.get_config_file()

        config_dict: Dict[str, Any] = {}
        source = None
        if config_file.exists():
            config_dict = cls.read_toml(config_file)
            source = config_file
            logger.info(f"Loaded config from {config_file}")
        else:
            logger.warning(f"Config file not found: {config_file}")

        return cls.from_dict(config_dict, source=source, environ=environ)
