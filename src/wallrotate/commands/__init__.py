"""CLI commands module."""

from .run import run_rotation, rotate_once, build_scheduler
from .status import show_pool, show_monitors
from .init import init_config, validate_config

__all__ = [
    "run_rotation",
    "rotate_once",
    "build_scheduler",
    "show_pool",
    "show_monitors",
    "init_config",
    "validate_config",
]
