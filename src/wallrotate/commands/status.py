"""Read-only commands: show the file pool and detected monitors."""

import json
from typing import Any, Dict, List

from ..config import Config
from ..monitor_detection import MonitorDetector
from ..pool import FilePoolProvider


def show_pool(config: Config, json_output: bool = False) -> List[str]:
    """Print the pool a fresh scan would produce."""
    files = FilePoolProvider.from_config(config.rotation).scan()

    if json_output:
        print(json.dumps(files, indent=2))
        return files

    for path in files:
        print(path)
    print(f"\n{len(files)} file(s) from {len(config.rotation.paths)} path(s), "
          f"pattern {config.rotation.pattern}")
    return files


def show_monitors(config: Config, json_output: bool = False) -> List[Dict[str, Any]]:
    """Print the monitors the rotation would use, in assignment order."""
    if config.wallpaper.monitors is not None:
        monitors = [{"name": name, "resolution": None, "model": None, "source": "config"}
                    for name in config.wallpaper.monitors]
    else:
        detector = MonitorDetector()
        monitors = [
            {"name": m.name, "resolution": m.resolution, "model": m.model,
             "source": detector.compositor}
            for m in detector.detect()
        ]

    if json_output:
        print(json.dumps(monitors, indent=2))
        return monitors

    for index, monitor in enumerate(monitors):
        details = ", ".join(
            str(monitor[key]) for key in ("resolution", "model") if monitor[key]
        )
        suffix = f" ({details})" if details else ""
        print(f"#{index} {monitor['name']}{suffix}")
    return monitors
