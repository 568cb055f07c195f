"""
Rotation scheduler.

Owns the timed loop: refill the pool when it is empty, assign one file per
monitor, then wait for the configured interval or until stop is requested.
"""

import inspect
import logging
import random
import threading
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from .config import RotationConfig

logger = logging.getLogger(__name__)


class PoolProvider(Protocol):
    """Anything that can produce a fresh file pool."""

    def scan(self) -> List[str]:
        ...


class Setter(Protocol):
    """
    Anything that can set a monitor's wallpaper, raising on failure.

    index, the monitor's position in enumeration order, is only passed to
    setters whose set() accepts it.
    """

    def set(self, monitor_id: str, image_path: str, index: int = 0) -> None:
        ...


@dataclass
class TickResult:
    """Outcome of one rotation round."""
    assigned: List[Tuple[str, str]] = field(default_factory=list)  # (monitor, file)
    failed: List[Tuple[str, str, Exception]] = field(default_factory=list)
    rescanned: bool = False

    @property
    def attempted(self) -> int:
        return len(self.assigned) + len(self.failed)


class RotationScheduler:
    """
    Drive the wallpaper rotation loop.

    Monitors are enumerated once in start(). Each tick drains files from
    the pool, one per monitor in enumeration order. A file is consumed
    even when assigning it fails.
    """

    def __init__(
        self,
        config: RotationConfig,
        provider: PoolProvider,
        setter: Setter,
        monitor_source: Callable[[], Sequence[str]],
        stop_event: Optional[threading.Event] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.provider = provider
        self.setter = setter
        self._pass_index = _accepts_index(setter.set)
        self.monitor_source = monitor_source
        self.stop_event = stop_event or threading.Event()
        self.rng = rng or random.Random()
        self._pool: List[str] = []
        self._monitors: Optional[Tuple[str, ...]] = None

    @property
    def interval(self) -> timedelta:
        return timedelta(seconds=self.config.interval)

    @property
    def monitors(self) -> Tuple[str, ...]:
        return self._monitors or ()

    @property
    def pool(self) -> List[str]:
        """Copy of the files not yet assigned."""
        return list(self._pool)

    @property
    def started(self) -> bool:
        return self._monitors is not None

    def start(self) -> None:
        """Enumerate monitors and fill the initial pool."""
        self._monitors = tuple(self.monitor_source())
        if self._monitors:
            logger.info(f"Rotating wallpapers on {len(self._monitors)} monitor(s): {list(self._monitors)}")
        else:
            logger.warning("No monitors found, no wallpapers will be set")
        self._pool = self.provider.scan()

    def stop(self) -> None:
        """Request the loop to exit. Safe to call from a signal handler."""
        self.stop_event.set()

    def run(self) -> None:
        """Run rounds until stop() is called."""
        if not self.started:
            self.start()

        while not self.stop_event.is_set():
            self.tick()

            logger.info(f"Waiting {self.interval} to set new wallpapers.")
            if self.stop_event.wait(self.config.interval):
                break

        logger.info("Wallpaper rotation stopped.")

    def tick(self) -> TickResult:
        """Run one rotation round without waiting."""
        if not self.started:
            self.start()

        result = TickResult()

        if not self._pool:
            self._pool = self.provider.scan()
            result.rescanned = True

        for index, monitor_id in enumerate(self.monitors):
            if not self._pool:
                logger.info("File pool exhausted, remaining monitors keep their wallpaper")
                break

            file = self._take()
            logger.info(f"Setting {file} as wallpaper for monitor #{index} - {monitor_id}")

            try:
                if self._pass_index:
                    self.setter.set(monitor_id, file, index=index)
                else:
                    self.setter.set(monitor_id, file)
            except Exception as e:
                logger.error(
                    f"Error while setting {file} as wallpaper for monitor #{index} - {monitor_id}: {e}"
                )
                result.failed.append((monitor_id, file, e))
            else:
                result.assigned.append((monitor_id, file))

        return result

    def _take(self) -> str:
        """Remove and return the next file according to the selection policy."""
        if self.config.selection == "random":
            return self._pool.pop(self.rng.randrange(len(self._pool)))
        return self._pool.pop(0)


def _accepts_index(method: Callable[..., None]) -> bool:
    try:
        parameters = inspect.signature(method).parameters.values()
    except (TypeError, ValueError):
        return True
    return any(
        p.name == "index" or p.kind is inspect.Parameter.VAR_KEYWORD
        for p in parameters
    )
