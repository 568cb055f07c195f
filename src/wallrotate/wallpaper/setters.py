"""
Wallpaper setter implementations for various desktop environments.

Each setter handles the specifics of setting wallpapers for its target
environment (Wayland compositors, X11, etc.) and raises a CommandError
subclass when the wallpaper could not be set.
"""

import logging
import subprocess
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Type, Union

from ..exceptions import (
    CommandError,
    CommandNotFoundError,
    CommandTimeoutError,
    CommandPermissionError,
    ConfigValidationError,
)


class WallpaperSetter(ABC):
    """Abstract base class for wallpaper setters."""

    def __init__(self, timeout: int = 30) -> None:
        self.timeout = timeout
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def set(self, monitor_id: str, image_path: Union[str, Path], index: int = 0) -> None:
        """
        Set wallpaper for a specific monitor.

        Args:
            monitor_id: Monitor output name (e.g., "DP-1")
            image_path: Absolute path to wallpaper image
            index: Monitor position in enumeration order (0-based)

        Raises:
            CommandError: If the wallpaper could not be set
        """

    def _require_file(self, image_path: Union[str, Path]) -> Path:
        path = Path(image_path)
        if not path.is_file():
            raise CommandError(f"Image file does not exist: {path}")
        return path

    def _run_command(self, cmd: List[str]) -> None:
        """
        Run a command in the foreground.

        Raises:
            CommandNotFoundError: If the executable is not in PATH
            CommandTimeoutError: If it runs longer than self.timeout
            CommandPermissionError: If it cannot be executed
            CommandError: On any other failure or non-zero exit
        """
        cmd_str = ' '.join(cmd)
        self.logger.debug(f"Running command: {cmd_str}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(f"Command timed out after {self.timeout}s: {cmd_str}") from e
        except FileNotFoundError as e:
            raise CommandNotFoundError(
                f"Command not found: {cmd[0]} - ensure {cmd[0]} is installed and in PATH"
            ) from e
        except PermissionError as e:
            raise CommandPermissionError(f"Permission denied executing command: {cmd_str}: {e}") from e
        except OSError as e:
            raise CommandError(f"OS error executing command {cmd_str}: {e}") from e

        if result.returncode != 0:
            error_msg = f"Command failed with exit code {result.returncode}: {cmd_str}"
            if result.stderr:
                error_msg += f"\nStderr: {result.stderr.strip()}"
            elif result.stdout:
                error_msg += f"\nStdout: {result.stdout.strip()}"
            raise CommandError(error_msg)

        self.logger.debug(f"Command succeeded: {cmd_str}")

    def _spawn_daemon(self, cmd: List[str], startup_delay: float = 0.5) -> None:
        """
        Start a long-running command detached from this process.

        Raises:
            CommandError: If the process exits during the startup delay
        """
        cmd_str = ' '.join(cmd)
        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(
                f"Command not found: {cmd[0]} - ensure {cmd[0]} is installed and in PATH"
            ) from e
        except PermissionError as e:
            raise CommandPermissionError(f"Permission denied executing command: {cmd_str}: {e}") from e
        except OSError as e:
            raise CommandError(f"OS error executing command {cmd_str}: {e}") from e

        time.sleep(startup_delay)
        if process.poll() is not None:
            raise CommandError(
                f"Background command exited with code {process.returncode}: {cmd_str}"
            )
        self.logger.debug(f"Background command started: {cmd_str}")


class SwwwSetter(WallpaperSetter):
    """Wallpaper setter using swww (Wayland)."""

    def set(self, monitor_id: str, image_path: Union[str, Path], index: int = 0) -> None:
        path = self._require_file(image_path)
        self._run_command(["swww", "img", str(path), "--outputs", monitor_id, "--resize", "crop"])
        self.logger.info(f"Set wallpaper on {monitor_id} via swww")


class SwaybgSetter(WallpaperSetter):
    """
    Wallpaper setter using swaybg (Sway/Wayland).

    swaybg stays running while it shows the image, so the previous
    instance for the output is killed before a new one is started.
    """

    def set(self, monitor_id: str, image_path: Union[str, Path], index: int = 0) -> None:
        path = self._require_file(image_path)
        self._kill_existing_swaybg(monitor_id)
        self._spawn_daemon(["swaybg", "--output", monitor_id, "--mode", "fill", "--image", str(path)])
        self.logger.info(f"Set wallpaper on {monitor_id} via swaybg (background)")

    def _kill_existing_swaybg(self, monitor_id: str) -> None:
        """Kill swaybg processes bound to this output, tolerating failures."""
        for pattern in (f"swaybg.*-o {monitor_id}( |$)", f"swaybg.*--output {monitor_id}( |$)"):
            try:
                result = subprocess.run(
                    ["pkill", "-f", pattern],
                    capture_output=True, text=True, timeout=5,
                )
            except subprocess.TimeoutExpired:
                self.logger.warning(f"Timeout killing swaybg processes for {monitor_id}")
                return
            except FileNotFoundError:
                self.logger.warning("pkill command not found - cannot kill existing swaybg processes")
                return

            if result.returncode == 0:
                self.logger.debug(f"Killed swaybg matching pattern: {pattern}")


class HyprpaperSetter(WallpaperSetter):
    """Wallpaper setter using hyprpaper IPC (Hyprland)."""

    def set(self, monitor_id: str, image_path: Union[str, Path], index: int = 0) -> None:
        path = self._require_file(image_path)
        self._run_command(["hyprctl", "hyprpaper", "preload", str(path)])
        self._run_command(["hyprctl", "hyprpaper", "wallpaper", f"{monitor_id},{path}"])
        self.logger.info(f"Set wallpaper on {monitor_id} via hyprpaper")


class FehSetter(WallpaperSetter):
    """
    Wallpaper setter using feh (X11).

    feh paints every Xinerama head in one call, taking one image per head
    in order, so the image for each head index is remembered and the full
    list is passed each time.
    """

    def __init__(self, timeout: int = 30) -> None:
        super().__init__(timeout)
        self.images: List[str] = []

    def set(self, monitor_id: str, image_path: Union[str, Path], index: int = 0) -> None:
        path = str(self._require_file(image_path))

        images = list(self.images)
        if index >= len(images):
            # heads never set yet repeat the new image
            images.extend([path] * (index + 1 - len(images)))
        images[index] = path

        self._run_command(["feh", "--bg-fill", *images])
        self.images = images
        self.logger.info(f"Set wallpaper on head {index} ({monitor_id}) via feh")


class NitrogenSetter(WallpaperSetter):
    """Wallpaper setter using nitrogen (X11), addressing heads by index."""

    def set(self, monitor_id: str, image_path: Union[str, Path], index: int = 0) -> None:
        path = self._require_file(image_path)
        self._run_command(["nitrogen", f"--head={index}", "--set-zoom-fill", "--save", str(path)])
        self.logger.info(f"Set wallpaper on head {index} ({monitor_id}) via nitrogen")


class CustomSetter(WallpaperSetter):
    """
    Wallpaper setter using a custom command template.

    Placeholders: {path}, {name}, {index}.
    """

    def __init__(self, command_template: str, timeout: int = 30) -> None:
        super().__init__(timeout)
        self.template = command_template

    def set(self, monitor_id: str, image_path: Union[str, Path], index: int = 0) -> None:
        path = self._require_file(image_path)

        try:
            cmd = [
                part.format(path=str(path), name=monitor_id, index=index)
                for part in self.template.split()
            ]
        except KeyError as e:
            raise CommandError(
                f"Invalid placeholder {e} in custom command template. "
                "Available placeholders: {path}, {name}, {index}"
            ) from e
        except (ValueError, IndexError) as e:
            raise CommandError(f"Error formatting custom command template: {e}") from e

        if not cmd:
            raise CommandError("Custom command template is empty")

        self._run_command(cmd)
        self.logger.info(f"Set wallpaper on {monitor_id} via custom command: {' '.join(cmd)}")


# Registry of available setters
SETTERS: Dict[str, Type[WallpaperSetter]] = {
    "swww": SwwwSetter,
    "swaybg": SwaybgSetter,
    "hyprpaper": HyprpaperSetter,
    "feh": FehSetter,
    "nitrogen": NitrogenSetter,
}


def get_setter(command: str, timeout: int = 30) -> WallpaperSetter:
    """
    Get appropriate wallpaper setter for the given command.

    Args:
        command: Setter name ("swww", "swaybg", etc.) or "custom:template"
        timeout: Seconds allowed for each external command

    Raises:
        ConfigValidationError: If the command is not known
    """
    if command.startswith("custom:"):
        return CustomSetter(command[len("custom:"):], timeout=timeout)

    if command in SETTERS:
        return SETTERS[command](timeout=timeout)

    raise ConfigValidationError(
        f"Unknown wallpaper command: {command}. "
        f"Available: {list(SETTERS.keys())} or custom:<template>"
    )
