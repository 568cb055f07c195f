"""
Common exception classes for WallRotate.

Provides domain-specific exceptions for consistent error handling across modules.
All exceptions inherit from WallRotateError for unified catching at CLI level.
"""


class WallRotateError(Exception):
    """
    Base exception for all WallRotate errors.

    All domain-specific exceptions inherit from this class, allowing
    callers to catch all WallRotate errors with a single except clause.
    """
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigError(WallRotateError):
    """
    Configuration-related errors.

    Raised when:
    - Config file is malformed or missing required fields
    - Config contains unknown sections or keys
    - Required settings such as rotation paths are absent
    """
    pass


class ConfigValidationError(ConfigError):
    """
    Config value validation failed.

    Raised when a config value is present but invalid (e.g., non-positive
    interval, unknown selection policy, unknown wallpaper command).
    """
    pass


# ============================================================================
# Scan Errors
# ============================================================================

class ScanError(WallRotateError):
    """
    A single directory scan failed.

    Raised per path/pattern by the file pool provider and caught there;
    it never reaches the scheduler.
    """
    pass


# ============================================================================
# Command Errors
# ============================================================================

class CommandError(WallRotateError):
    """
    Command execution errors (wallpaper setters, external tools).

    Raised when external commands fail to execute or return errors.
    """
    pass


class CommandNotFoundError(CommandError):
    """
    Required command/tool not found in PATH.

    Raised when a wallpaper setter or other required tool is not installed.
    """
    pass


class CommandTimeoutError(CommandError):
    """External command timed out."""
    pass


class CommandPermissionError(CommandError):
    """Permission denied executing command."""
    pass


# ============================================================================
# Monitor Detection Errors
# ============================================================================

class MonitorDetectionError(WallRotateError):
    """
    Monitor detection errors.

    Base class for errors during compositor monitor detection.
    """
    pass


class CompositorNotFoundError(MonitorDetectionError):
    """
    No supported compositor or display server is running.

    Raised when neither niri, sway, hyprland nor an X11 session is detected.
    """
    pass


class CompositorCommunicationError(MonitorDetectionError):
    """
    Failed to communicate with compositor.

    Raised when compositor IPC commands fail or time out.
    """
    pass


class NoMonitorsDetectedError(MonitorDetectionError):
    """
    No monitors detected from compositor.

    Raised when compositor reports no connected outputs.
    """
    pass
