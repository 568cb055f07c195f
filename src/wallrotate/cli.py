"""
Command-line interface for WallRotate.

Usage:
    wallrotate [options] [command]

Commands:
    run        Rotate wallpapers until stopped (default)
    once       Run a single rotation round and exit
    scan       Show the files a scan would pick up
    monitors   Show the monitors wallpapers are assigned to
    validate   Validate configuration
    init       Write a starter config file
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .config import Config
from .exceptions import (
    WallRotateError,
    ConfigError,
    ConfigValidationError,
    CommandError,
    MonitorDetectionError,
    CompositorNotFoundError,
)
from .commands import (
    run_rotation,
    rotate_once,
    show_pool,
    show_monitors,
    init_config,
    validate_config,
)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wallrotate",
        description="Rotate desktop wallpapers across all monitors on an interval"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to config file"
    )
    parser.add_argument(
        "--interval",
        type=int,
        help="Override seconds between rotation rounds"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="JSON output for scan and monitors"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("run", help="Rotate wallpapers until stopped (default)")
    subparsers.add_parser("once", help="Run a single rotation round")
    subparsers.add_parser("scan", help="Show the current file pool")
    subparsers.add_parser("monitors", help="Show monitors")
    subparsers.add_parser("validate", help="Validate configuration")
    subparsers.add_parser("init", help="Write a starter config file")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = logging.getLogger(__name__)
    command = args.command or "run"

    try:
        if command == "init":
            setup_logging("DEBUG" if args.verbose else "INFO")
            init_config(args.config)
            return 0

        config = Config.load(config_file=args.config)
        if args.interval is not None:
            config.rotation = dataclasses.replace(config.rotation, interval=args.interval)

        level = "DEBUG" if args.verbose else config.logging.level
        setup_logging(level)

        if command == "run":
            run_rotation(config)
        elif command == "once":
            rotate_once(config)
        elif command == "scan":
            show_pool(config, json_output=args.json)
        elif command == "monitors":
            show_monitors(config, json_output=args.json)
        elif command == "validate":
            validate_config(config)
        else:
            parser.print_help()
            return 1

        return 0

    # Handle specific error types with appropriate exit codes and messages
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        return 130

    except ConfigValidationError as e:
        print(f"\n❌ Configuration Validation Error: {e}", file=sys.stderr)
        print("\nRun 'wallrotate validate' for detailed diagnostics.", file=sys.stderr)
        return 78  # EX_CONFIG

    except ConfigError as e:
        print(f"\n❌ Configuration Error: {e}", file=sys.stderr)
        return 78  # EX_CONFIG

    except CompositorNotFoundError as e:
        print(f"\n❌ Compositor Not Found\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 69  # EX_UNAVAILABLE

    except MonitorDetectionError as e:
        print(f"\n❌ Monitor Detection Failed: {e}", file=sys.stderr)
        return 69  # EX_UNAVAILABLE

    except CommandError as e:
        print(f"\n❌ Wallpaper Command Failed: {e}", file=sys.stderr)
        return 1

    except WallRotateError as e:
        # Catch-all for any other WallRotate errors
        print(f"\n❌ Error: {e}", file=sys.stderr)
        logger.error(str(e))
        if args.verbose:
            raise
        return 1

    except Exception as e:
        # Unexpected errors - show full traceback in verbose mode
        print(f"\n❌ Unexpected Error: {type(e).__name__}: {e}", file=sys.stderr)
        logger.error(f"Unexpected error: {type(e).__name__}: {e}")
        if args.verbose:
            raise
        print("\nRun with -v/--verbose for full traceback.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
