"""
Control of the instruments command-line tool.

- supervisor: discover and stop running instruments processes
- device_parser: parse simulator and device listings of every Xcode format
- output: version, template and stderr parsing
- tool: the Instruments facade that runs the listing commands and spawns the tool
"""

from .device_parser import (
    DeviceTextParser,
    extract_version,
    parse,
    parse_legacy_line,
    parse_modern_line,
    parse_physical_devices,
)
from .output import filter_stderr_spam, parse_templates, parse_version
from .supervisor import TerminationReport, ToolProcessSupervisor, kill_signal_for
from .tool import Instruments, LaunchOptions, build_spawn_arguments

__all__ = [
    # Devices
    "DeviceTextParser",
    "extract_version",
    "parse",
    "parse_legacy_line",
    "parse_modern_line",
    "parse_physical_devices",
    # Output
    "filter_stderr_spam",
    "parse_templates",
    "parse_version",
    # Supervision
    "TerminationReport",
    "ToolProcessSupervisor",
    "kill_signal_for",
    # Tool
    "Instruments",
    "LaunchOptions",
    "build_spawn_arguments",
]
