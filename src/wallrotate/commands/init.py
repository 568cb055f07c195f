"""Initialization and validation commands."""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from ..config import Config
from ..wallpaper import get_setter, CustomSetter
from ..monitor_detection import MonitorDetector


def init_config(config_file: Optional[Path] = None) -> None:
    """Write a starter config file unless one already exists."""
    logger = logging.getLogger(__name__)
    target = config_file or Config.get_config_file()

    try:
        if Config.initialize_config(target):
            print(f"Configuration initialized at {target}")
            print("Edit [rotation] paths to point at your wallpaper directories.")
        else:
            print(f"Configuration already exists at {target}")
    except Exception as e:
        logger.error(f"Initialization failed: {e}")
        raise


def validate_config(config: Config) -> None:
    """Validate configuration and report issues."""
    errors = []
    warnings = []

    print("Validating configuration...")
    if config.source:
        print(f"  Config file: {config.source}")

    # Paths
    print("\nChecking wallpaper paths...")
    for path in config.rotation.get_paths():
        if not path.exists():
            errors.append(f"Path does not exist: {path}")
            print(f"  ✗ {path} does not exist")
        elif not path.is_dir():
            errors.append(f"Path is not a directory: {path}")
            print(f"  ✗ {path} is not a directory")
        elif not os.access(path, os.R_OK | os.X_OK):
            errors.append(f"Path is not readable: {path}")
            print(f"  ✗ {path} is not readable")
        else:
            print(f"  ✓ {path}")

    print(f"\n  Pattern:   {config.rotation.pattern}")
    print(f"  Recursive: {config.rotation.recursive}")
    print(f"  Shuffle:   {config.rotation.shuffle}")
    print(f"  Selection: {config.rotation.selection}")
    print(f"  Interval:  {config.rotation.interval}s")

    # Wallpaper command
    print("\nChecking wallpaper command...")
    try:
        setter = get_setter(config.wallpaper.command, timeout=config.wallpaper.timeout)
        if isinstance(setter, CustomSetter):
            executable = setter.template.split()[0] if setter.template.split() else ""
        else:
            executable = {"hyprpaper": "hyprctl"}.get(config.wallpaper.command, config.wallpaper.command)
        if executable and shutil.which(executable):
            print(f"  ✓ {config.wallpaper.command} setter is available")
        else:
            warnings.append(f"'{executable}' not found in PATH")
            print(f"  ⚠ {config.wallpaper.command} setter selected but '{executable}' is not in PATH")
    except Exception as e:
        errors.append(f"Wallpaper command error: {e}")
        print(f"  ✗ Wallpaper command error: {e}")

    # Monitors
    print("\nChecking monitors...")
    if config.wallpaper.monitors is not None:
        if config.wallpaper.monitors:
            print(f"  ✓ Using configured monitors: {config.wallpaper.monitors}")
        else:
            warnings.append("Configured monitor list is empty")
            print("  ⚠ Configured monitor list is empty, no wallpapers will be set")
    else:
        try:
            detector = MonitorDetector()
            monitors = detector.detect()
            print(f"  ✓ Detected {len(monitors)} monitors via {detector.compositor}: "
                  f"{[m.name for m in monitors]}")
        except Exception as e:
            errors.append(f"Monitor detection failed: {e}")
            print(f"  ✗ Monitor detection failed: {e}")

    # Summary
    print(f"\nValidation complete")
    print(f"Errors: {len(errors)}")
    print(f"Warnings: {len(warnings)}")

    if errors:
        print("\nErrors:")
        for error in errors:
            print(f"  ✗ {error}")

    if warnings:
        print("\nWarnings:")
        for warning in warnings:
            print(f"  ⚠ {warning}")

    if errors:
        print(f"\nConfiguration validation FAILED with {len(errors)} errors")
        raise SystemExit(1)
    else:
        print("\nConfiguration validation PASSED")
