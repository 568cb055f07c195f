"""
Configuration validation for WallRotate.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ConfigError, ConfigValidationError


# Valid sections and their keys. Sections listed in CASE_INSENSITIVE_SECTIONS
# also accept the legacy capitalised key names (Interval, Paths, ...).
VALID_STRUCTURE: Dict[str, Dict[str, Any]] = {
    'rotation': {
        'interval': int,
        'paths': (list, str),
        'recursive': bool,
        'pattern': (list, str),
        'shuffle': bool,
        'selection': str,
    },
    'wallpaper': {
        'command': str,
        'timeout': int,
        'monitors': list,
    },
    'logging': {
        'level': str,
    },
}

CASE_INSENSITIVE_SECTIONS = {'rotation'}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}

ENV_PREFIX = 'WALLROTATE_'


def _type_name(expected: Any) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__


def validate_toml_structure(config_dict: Dict[str, Any], config_file: Path) -> None:
    """
    Validate TOML structure before creating dataclasses.

    Checks for unknown sections and keys, providing helpful error messages.

    Args:
        config_dict: Loaded TOML configuration dictionary
        config_file: Path to config file for error messages

    Raises:
        ConfigError: If structure validation fails
    """
    for section in config_dict:
        if section not in VALID_STRUCTURE:
            raise ConfigError(
                f"Unknown config section '{section}' in {config_file}. "
                f"Valid sections: {list(VALID_STRUCTURE.keys())}"
            )

    for section_name, section_config in config_dict.items():
        if not isinstance(section_config, dict):
            raise ConfigError(
                f"Section '{section_name}' must be a table in {config_file}"
            )

        valid_keys = VALID_STRUCTURE[section_name]
        fold_case = section_name in CASE_INSENSITIVE_SECTIONS

        for key, value in section_config.items():
            lookup = key.lower() if fold_case else key
            if lookup not in valid_keys:
                raise ConfigError(
                    f"Unknown key '{key}' in section '{section_name}' in {config_file}. "
                    f"Valid keys: {list(valid_keys.keys())}"
                )

            expected_type = valid_keys[lookup]
            # bool is a subclass of int; reject true/false for integer keys
            if expected_type is int and isinstance(value, bool):
                raise ConfigError(
                    f"Key '{section_name}.{key}' must be of type int "
                    f"in {config_file}, got bool"
                )
            if not isinstance(value, expected_type):
                raise ConfigError(
                    f"Key '{section_name}.{key}' must be of type {_type_name(expected_type)} "
                    f"in {config_file}, got {type(value).__name__}"
                )


def validate_log_level(level: str) -> None:
    """Raise ConfigValidationError for unknown logging levels."""
    if level.upper() not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"Invalid log level: {level}\n"
            f"Must be one of: {VALID_LOG_LEVELS}"
        )


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean environment value."""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigValidationError(
        f"Environment variable {name}={value!r} is not a boolean.\n"
        f"Use one of: {sorted(TRUE_VALUES | FALSE_VALUES)}"
    )


def rotation_overrides_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Collect [rotation] overrides from WALLROTATE_* environment variables.

    WALLROTATE_PATHS is split on os.pathsep; WALLROTATE_PATTERN keeps the
    semicolon-delimited form and is parsed with the rest of the section.
    """
    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}

    raw = env.get(f'{ENV_PREFIX}INTERVAL')
    if raw is not None:
        try:
            overrides['interval'] = int(raw)
        except ValueError:
            raise ConfigValidationError(
                f"Environment variable {ENV_PREFIX}INTERVAL={raw!r} is not an integer."
            )

    raw = env.get(f'{ENV_PREFIX}PATHS')
    if raw:
        overrides['paths'] = [p for p in raw.split(os.pathsep) if p]

    raw = env.get(f'{ENV_PREFIX}PATTERN')
    if raw:
        overrides['pattern'] = raw

    for key in ('recursive', 'shuffle'):
        name = f'{ENV_PREFIX}{key.upper()}'
        raw = env.get(name)
        if raw is not None:
            overrides[key] = parse_bool(name, raw)

    return overrides
