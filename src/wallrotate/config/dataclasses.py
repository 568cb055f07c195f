"""
Configuration dataclasses for WallRotate.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import ConfigError, ConfigValidationError


DEFAULT_INTERVAL = 30 * 60
DEFAULT_PATTERN = "*"
PATTERN_SEPARATOR = ";"
SELECTION_POLICIES = ("head", "random")


def parse_patterns(value: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    """
    Normalize the pattern setting into a tuple of glob patterns.

    Accepts the legacy semicolon-delimited string ("*.jpg;*.png") or a list.
    Empty fragments are dropped; an empty result falls back to "*".
    """
    if value is None:
        return (DEFAULT_PATTERN,)
    if isinstance(value, str):
        fragments = value.split(PATTERN_SEPARATOR)
    else:
        fragments = [str(v) for v in value]
    patterns = tuple(p.strip() for p in fragments if p.strip())
    return patterns or (DEFAULT_PATTERN,)


@dataclass(frozen=True)
class RotationConfig:
    """
    Immutable rotation settings, read once at startup.

    Keys are looked up case-insensitively by from_dict(), so both the
    TOML spelling (interval, paths) and the legacy spelling
    (Interval, Paths) are accepted.
    """
    paths: Tuple[str, ...]
    interval: int = DEFAULT_INTERVAL  # seconds between rounds
    recursive: bool = False
    patterns: Tuple[str, ...] = (DEFAULT_PATTERN,)
    shuffle: bool = False
    selection: str = "head"  # head | random

    def __post_init__(self) -> None:
        if not self.paths:
            raise ConfigError(
                "Missing setting for 'paths'. "
                "Add paths = [\"~/Pictures/wallpapers\"] to the [rotation] section."
            )
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise ConfigValidationError(
                f"Interval must be an integer number of seconds, got {self.interval!r}"
            )
        if self.interval <= 0:
            raise ConfigValidationError(
                f"Interval ({self.interval}s) must be positive."
            )
        if self.selection not in SELECTION_POLICIES:
            raise ConfigValidationError(
                f"Invalid selection policy: {self.selection}\n"
                f"Must be one of: {list(SELECTION_POLICIES)}"
            )

    @property
    def pattern(self) -> str:
        """Patterns joined back into the legacy semicolon form."""
        return PATTERN_SEPARATOR.join(self.patterns)

    def get_paths(self) -> List[Path]:
        """Get configured paths as absolute Path objects."""
        return [Path(p).expanduser().absolute() for p in self.paths]

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> 'RotationConfig':
        """
        Create RotationConfig from a key/value mapping.

        Expects format:
        {
            "interval": 1800,
            "paths": ["~/Pictures/wallpapers"],
            "recursive": false,
            "pattern": "*.jpg;*.png",
            "shuffle": true,
            "selection": "head"
        }

        Raises:
            ConfigError: If paths is missing
        """
        values = {str(k).lower(): v for k, v in config_dict.items()}

        paths = values.get("paths")
        if paths is None:
            raise ConfigError("Missing setting for 'paths'.")
        if isinstance(paths, str):
            paths = [paths]

        interval = values.get("interval")
        return cls(
            paths=tuple(str(p) for p in paths),
            interval=DEFAULT_INTERVAL if interval is None else interval,
            recursive=bool(values.get("recursive", False)),
            patterns=parse_patterns(values.get("pattern")),
            shuffle=bool(values.get("shuffle", False)),
            selection=str(values.get("selection", "head")).lower(),
        )


@dataclass
class WallpaperConfig:
    """Wallpaper setter settings."""
    command: str = "swww"  # Setter name or "custom:<template>"
    timeout: int = 30  # Seconds allowed for one external setter call
    monitors: Optional[List[str]] = None  # Fixed monitor list, skips detection

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigValidationError(
                f"Wallpaper command timeout ({self.timeout}s) must be positive."
            )
        if self.monitors is not None and not all(isinstance(m, str) for m in self.monitors):
            raise ConfigValidationError(
                f"Monitor names must be strings, got {self.monitors!r}"
            )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"

