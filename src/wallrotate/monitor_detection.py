"""
Monitor detection from Wayland compositors and X11.

Monitors are identified by their output names (e.g. "DP-1"), in the order
the compositor reports them.
"""

import json
import logging
import os
import re
import subprocess
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .exceptions import (
    CompositorNotFoundError,
    CompositorCommunicationError,
    NoMonitorsDetectedError,
)

logger = logging.getLogger(__name__)


@dataclass
class Monitor:
    """Detected monitor information."""
    name: str  # Output name (e.g., "DP-1", "HDMI-A-1")
    resolution: str  # Resolution string (e.g., "2560x1440")
    model: Optional[str] = None

    def __repr__(self) -> str:
        return f"Monitor({self.name}, {self.resolution})"


def parse_niri_output(output: str) -> List[Monitor]:
    """
    Parse `niri msg outputs`.

    Example:
    Output "HP Inc. OMEN by HP 27 CNK724200N" (DP-1)
      Current mode: 2560x1440 @ 59.951 Hz
    """
    monitors = []
    header = re.compile(r'^Output "([^"]*)" \((\S+)\)', re.MULTILINE)
    mode = re.compile(r'Current mode: (\d+x\d+)')

    matches = list(header.finditer(output))
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(output)
        mode_match = mode.search(output, match.end(), end)
        if not mode_match:
            # Disabled outputs have no current mode
            continue
        monitors.append(Monitor(
            name=match.group(2),
            resolution=mode_match.group(1),
            model=match.group(1) or None,
        ))
    return monitors


def _load_json(output: str, compositor: str) -> list:
    try:
        return json.loads(output)
    except json.JSONDecodeError as e:
        raise CompositorCommunicationError(
            f"Failed to parse {compositor} JSON output: {e}\n"
            "The compositor returned invalid JSON. This may indicate a version mismatch."
        ) from e


def _resolution(width: int, height: int) -> str:
    return f"{width}x{height}" if width and height else "unknown"


def parse_sway_output(output: str) -> List[Monitor]:
    """Parse `swaymsg -t get_outputs` JSON, skipping inactive outputs."""
    monitors = []
    for info in _load_json(output, "sway"):
        if not info.get("active", True) or not info.get("name"):
            continue
        current_mode = info.get("current_mode") or {}
        model = f"{info.get('make', '')} {info.get('model', '')}".strip()
        monitors.append(Monitor(
            name=info["name"],
            resolution=_resolution(current_mode.get("width", 0), current_mode.get("height", 0)),
            model=model or None,
        ))
    return monitors


def parse_hyprland_output(output: str) -> List[Monitor]:
    """Parse `hyprctl monitors -j` JSON."""
    monitors = []
    for info in _load_json(output, "hyprland"):
        if not info.get("name"):
            continue
        monitors.append(Monitor(
            name=info["name"],
            resolution=_resolution(info.get("width", 0), info.get("height", 0)),
            model=info.get("description") or None,
        ))
    return monitors


def parse_xrandr_output(output: str) -> List[Monitor]:
    """
    Parse `xrandr --listmonitors`.

    Example:
    Monitors: 2
     0: +*DP-1 2560/597x1440/336+0+0  DP-1
     1: +HDMI-1 1920/527x1080/296+2560+0  HDMI-1
    """
    monitors = []
    line_pattern = re.compile(r'^\s*\d+:\s+\S+\s+(\d+)/\d+x(\d+)/\d+\S*\s+(\S+)\s*$')
    for line in output.splitlines():
        match = line_pattern.match(line)
        if match:
            width, height, name = match.groups()
            monitors.append(Monitor(name=name, resolution=f"{width}x{height}"))
    return monitors


# Compositor -> (process names, query command, parser). Checked in order.
BACKENDS: Dict[str, Tuple[Sequence[str], List[str], Callable[[str], List[Monitor]]]] = {
    "niri": (("niri",), ["niri", "msg", "outputs"], parse_niri_output),
    "sway": (("sway",), ["swaymsg", "-t", "get_outputs"], parse_sway_output),
    "hyprland": (("hyprland", "Hyprland"), ["hyprctl", "monitors", "-j"], parse_hyprland_output),
    "x11": ((), ["xrandr", "--listmonitors"], parse_xrandr_output),
}


class MonitorDetector:
    """
    Detect monitors from the running compositor.

    Supports niri, sway and hyprland, falling back to xrandr when an X11
    DISPLAY is available. Results are cached until force_refresh=True.
    """

    def __init__(self, timeout: int = 10) -> None:
        self.timeout = timeout
        self._cache: Optional[List[Monitor]] = None
        self._compositor: Optional[str] = None

    @property
    def compositor(self) -> Optional[str]:
        """Get detected compositor name."""
        return self._compositor

    def detect(self, force_refresh: bool = False) -> List[Monitor]:
        """
        Detect connected monitors.

        Raises:
            CompositorNotFoundError: If no supported compositor is running
            CompositorCommunicationError: If the query command fails
            NoMonitorsDetectedError: If no outputs are reported
        """
        if self._cache is not None and not force_refresh:
            logger.debug("Using cached monitor detection results")
            return self._cache

        compositor = self._detect_compositor()
        self._compositor = compositor
        _, command, parser = BACKENDS[compositor]

        monitors = parser(self._query(compositor, command))
        if not monitors:
            raise NoMonitorsDetectedError(
                f"No monitors detected from {compositor} output.\n"
                "Make sure at least one monitor is connected."
            )

        self._cache = monitors
        logger.info(f"Detected {len(monitors)} monitors via {compositor}")
        return monitors

    def invalidate_cache(self) -> None:
        """Clear cached detection results."""
        self._cache = None

    def _detect_compositor(self) -> str:
        for name, (processes, _, _) in BACKENDS.items():
            if any(self._is_running(p) for p in processes):
                return name

        if os.environ.get("DISPLAY"):
            return "x11"

        raise CompositorNotFoundError(
            "Could not detect monitors: No supported compositor running.\n"
            "Supported: niri, sway, hyprland, or an X11 session with xrandr.\n"
            "Alternatively list monitors in the [wallpaper] monitors setting."
        )

    def _is_running(self, process_name: str) -> bool:
        """Check if a process is running."""
        try:
            result = subprocess.run(
                ["pgrep", "-x", process_name],
                capture_output=True,
                timeout=5,
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def _query(self, compositor: str, command: List[str]) -> str:
        cmd_str = ' '.join(command)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CompositorCommunicationError(
                f"Timeout detecting monitors from {compositor} after {e.timeout}s.\n"
                f"'{cmd_str}' took too long to respond."
            ) from e
        except FileNotFoundError as e:
            raise CompositorNotFoundError(
                f"Could not find '{command[0]}' command.\n"
                f"Make sure it is installed and in PATH."
            ) from e

        if result.returncode != 0:
            error_msg = result.stderr.strip() or "Unknown error"
            raise CompositorCommunicationError(
                f"Failed to detect monitors from {compositor}: {error_msg}\n"
                f"Make sure {compositor} is running and '{cmd_str}' works."
            )
        return result.stdout


# Global detector instance for caching
_detector: Optional[MonitorDetector] = None


def get_detector() -> MonitorDetector:
    """Get or create the global monitor detector."""
    global _detector
    if _detector is None:
        _detector = MonitorDetector()
    return _detector


def detect_monitors(force_refresh: bool = False) -> List[Monitor]:
    """Convenience function to detect monitors."""
    return get_detector().detect(force_refresh)


def get_monitor_names() -> List[str]:
    """
    Get list of detected monitor names, in compositor order.

    A compositor reporting no outputs gives an empty list; failing to
    reach the compositor still raises.
    """
    try:
        monitors = detect_monitors()
    except NoMonitorsDetectedError as e:
        logger.warning(str(e).splitlines()[0])
        return []
    return [m.name for m in monitors]
