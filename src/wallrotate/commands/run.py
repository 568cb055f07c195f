"""Rotation commands: the long-running loop and a single round."""

import logging
import random
import signal
import threading
from typing import Callable, List, Optional

from ..config import Config
from ..monitor_detection import get_monitor_names
from ..pool import FilePoolProvider
from ..scheduler import RotationScheduler, TickResult
from ..wallpaper import get_setter
from ..exceptions import CommandError

logger = logging.getLogger(__name__)


def monitor_source_for(config: Config) -> Callable[[], List[str]]:
    """Use the configured monitor list if present, otherwise detect."""
    if config.wallpaper.monitors is not None:
        fixed = list(config.wallpaper.monitors)
        return lambda: fixed
    return get_monitor_names


def build_scheduler(
    config: Config,
    stop_event: Optional[threading.Event] = None,
    rng: Optional[random.Random] = None,
) -> RotationScheduler:
    """Wire provider, setter and monitor source into a scheduler."""
    rng = rng or random.Random()
    return RotationScheduler(
        config=config.rotation,
        provider=FilePoolProvider.from_config(config.rotation, rng=rng),
        setter=get_setter(config.wallpaper.command, timeout=config.wallpaper.timeout),
        monitor_source=monitor_source_for(config),
        stop_event=stop_event,
        rng=rng,
    )


def run_rotation(config: Config) -> None:
    """
    Rotate wallpapers until SIGINT or SIGTERM.

    The signal handlers only set the stop event, so an in-progress
    assignment finishes and the inter-round wait returns immediately.
    """
    scheduler = build_scheduler(config)

    def request_stop(signum, frame) -> None:
        logger.info(f"Received {signal.Signals(signum).name}, stopping")
        scheduler.stop()

    previous = {
        sig: signal.signal(sig, request_stop)
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        scheduler.run()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def rotate_once(config: Config) -> TickResult:
    """
    Run a single rotation round and return.

    Raises:
        CommandError: If every attempted assignment failed
    """
    scheduler = build_scheduler(config)
    result = scheduler.tick()

    for monitor_id, path in result.assigned:
        print(f"{monitor_id}: {path}")

    if result.failed and not result.assigned:
        raise CommandError(
            f"Failed to set wallpaper on {len(result.failed)} monitor(s); "
            f"first error: {result.failed[0][2]}"
        )
    return result
