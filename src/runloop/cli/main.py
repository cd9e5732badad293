"""
Command-line interface for runloop.

Subcommands inspect and stop running instruments processes, list simulators,
devices and templates, and manage the host cache.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..cache import HostCache
from ..config import get_config, get_config_path, set_config_path
from ..models.config import AppConfig, LoggingConfig
from ..models.process import KillSignal
from ..models.toolchain import ToolchainVersion
from ..instruments import Instruments
from ..validation import (
    CacheError,
    ProcessSurvivedKillError,
    RunLoopError,
    ValidationError,
    handle_cli_error,
    validate_version_string,
)

logger = logging.getLogger(__name__)


def configure_logging(logging_config: LoggingConfig) -> None:
    """Apply the configured level and format to the root logger."""
    logging.basicConfig(
        level=getattr(logging, logging_config.level.upper(), logging.INFO),
        format=logging_config.format,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def _load_app_config(config_path: Optional[str]) -> AppConfig:
    if config_path:
        set_config_path(Path(config_path))
        return get_config()
    if not get_config_path().exists():
        logger.debug(f"No configuration at {get_config_path()}, using defaults")
        return AppConfig()
    return get_config()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runloop",
        description="Supervise the instruments tool and manage the host cache.",
    )
    parser.add_argument("--config", type=str, help="Path to config.toml.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("running", help="Report whether instruments is running.")
    subparsers.add_parser("pids", help="Print the pids of running instruments processes.")
    subparsers.add_parser("app-running", help="Report whether Instruments.app is running.")

    kill_parser = subparsers.add_parser("kill", help="Stop all instruments processes.")
    kill_parser.add_argument(
        "--signal",
        type=str,
        choices=[member.name for member in KillSignal],
        help="Preferred signal. Defaults to the one suited to the Xcode version.",
    )
    simulators_parser = subparsers.add_parser("simulators", help="List available simulators.")
    subparsers.add_parser("devices", help="List attached physical devices.")
    templates_parser = subparsers.add_parser("templates", help="List automation templates.")

    # Commands whose behavior depends on the Xcode version.
    for subparser in (kill_parser, simulators_parser, templates_parser):
        subparser.add_argument(
            "--xcode-version",
            type=str,
            help="Active Xcode version (e.g. '7.0'). Detected from instruments when omitted.",
        )

    cache_parser = subparsers.add_parser("cache", help="Read or clear the host cache.")
    cache_parser.add_argument("action", choices=["read", "clear"])
    cache_parser.add_argument("--directory", type=str, help="Cache directory.")
    cache_parser.add_argument("--filename", type=str, help="Cache file name.")

    return parser


def _toolchain_from_args(args: argparse.Namespace) -> Optional[ToolchainVersion]:
    version = getattr(args, "xcode_version", None)
    if not version:
        return None
    return ToolchainVersion(validate_version_string(version, field_name="--xcode-version"))


def _run_cache_command(args: argparse.Namespace, app_config: AppConfig) -> int:
    directory = args.directory or app_config.cache.directory
    filename = args.filename or app_config.cache.filename
    cache = HostCache(directory, filename=filename)
    if args.action == "clear":
        cache.clear()
        print(f"Cleared {cache.path}")
        return 0
    for key, value in cache.read().items():
        print(f"{key!r}: {value!r}")
    return 0


def _run_command(args: argparse.Namespace, app_config: AppConfig) -> int:
    if args.command == "cache":
        return _run_cache_command(args, app_config)

    instruments = Instruments(toolchain=_toolchain_from_args(args), config=app_config)

    if args.command == "running":
        running = instruments.instruments_running()
        print("running" if running else "not running")
        return 0 if running else 1

    if args.command == "pids":
        for pid in instruments.instruments_pids():
            print(pid)
        return 0

    if args.command == "app-running":
        running = instruments.instruments_app_running()
        print("running" if running else "not running")
        return 0 if running else 1

    if args.command == "kill":
        kill_signal = KillSignal.parse(args.signal) if args.signal else None
        report = instruments.kill_instruments(kill_signal)
        print(
            f"Stopped {len(report.terminated)} processes with {report.signal.signal_name}"
            f" ({len(report.escalated)} escalated to SIGKILL)"
        )
        return 0

    if args.command == "simulators":
        devices = instruments.simulators()
    elif args.command == "devices":
        devices = instruments.physical_devices()
    else:
        for template in instruments.templates():
            print(template)
        return 0

    for device in devices:
        print(f"{device.name}\t{device.os_version}\t{device.identifier}")
    return 0


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line entry point.

    Returns:
        Process exit status

    Raises:
        SystemExit: On configuration errors or failed commands.
    """
    args = _build_parser().parse_args(argv)

    try:
        app_config = _load_app_config(args.config)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    if args.verbose:
        app_config.logging.level = "DEBUG"
    configure_logging(app_config.logging)

    try:
        return _run_command(args, app_config)
    except ProcessSurvivedKillError as e:
        handle_cli_error(error=e, context="stopping instruments", exit_code=2, logger=logger)
    except ValidationError as e:
        handle_cli_error(error=e, context="argument validation", exit_code=1, logger=logger)
    except CacheError as e:
        handle_cli_error(error=e, context="host cache", exit_code=1, logger=logger)
    except RunLoopError as e:
        handle_cli_error(error=e, context=args.command, exit_code=1, logger=logger)
    except OSError as e:
        handle_cli_error(error=e, context=args.command, exit_code=1, logger=logger)


if __name__ == "__main__":
    sys.exit(main_cli())
