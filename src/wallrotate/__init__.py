"""
WallRotate - Multi-monitor wallpaper rotation daemon.

Periodically assigns image files from configured directories to the
desktop background of every connected monitor.
"""

__version__ = "0.1.0"

from .config import Config, RotationConfig, WallpaperConfig, LoggingConfig
from .pool import FilePoolProvider
from .scheduler import RotationScheduler, TickResult
from .wallpaper import WallpaperSetter, get_setter
from .monitor_detection import (
    MonitorDetector,
    Monitor,
    detect_monitors,
    get_monitor_names,
)

__all__ = [
    "Config",
    "RotationConfig",
    "WallpaperConfig",
    "LoggingConfig",
    "FilePoolProvider",
    "RotationScheduler",
    "TickResult",
    "WallpaperSetter",
    "get_setter",
    "MonitorDetector",
    "Monitor",
    "detect_monitors",
    "get_monitor_names",
]
