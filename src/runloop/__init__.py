"""
runloop: control of the instruments command-line tool.

The package is organized into specialized modules:
- system: command execution, process listing and signal delivery
- instruments: process supervision, device/simulator listings, tool spawning
- cache: persistent host cache
- models: data structures and type definitions
- config: configuration loading and validation
- validation: error types, error handling and validators
- cli: command-line interface

Usage:
    From command line:
        runloop kill --xcode-version 7.0

    Programmatically:
        from runloop import Instruments, ToolchainVersion
        instruments = Instruments(toolchain=ToolchainVersion("7.0"))
        if instruments.instruments_running():
            instruments.kill_instruments()
"""

# Main interfaces
from .cache import HostCache, get_default_cache, reset_default_cache, set_default_cache
from .config import clear_config_cache, get_config, set_config_path
from .instruments import (
    DeviceTextParser,
    Instruments,
    LaunchOptions,
    TerminationReport,
    ToolProcessSupervisor,
)
from .system import ProcessLister, ProcessTerminator

# Model classes for external use
from .models import (
    AppConfig,
    Device,
    FormatKind,
    KillSignal,
    ProcessRecord,
    ToolchainInfo,
    ToolchainVersion,
)

# Errors
from .validation import (
    CacheArgumentError,
    CacheCorruptionError,
    CacheError,
    CacheSerializationError,
    DirectoryIsFileError,
    ProcessSurvivedKillError,
    RunLoopError,
    UnsupportedFormatError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "DeviceTextParser",
    "HostCache",
    "Instruments",
    "LaunchOptions",
    "ProcessLister",
    "ProcessTerminator",
    "TerminationReport",
    "ToolProcessSupervisor",
    "get_default_cache",
    "reset_default_cache",
    "set_default_cache",
    # Configuration
    "clear_config_cache",
    "get_config",
    "set_config_path",
    # Models
    "AppConfig",
    "Device",
    "FormatKind",
    "KillSignal",
    "ProcessRecord",
    "ToolchainInfo",
    "ToolchainVersion",
    # Errors
    "CacheArgumentError",
    "CacheCorruptionError",
    "CacheError",
    "CacheSerializationError",
    "DirectoryIsFileError",
    "ProcessSurvivedKillError",
    "RunLoopError",
    "UnsupportedFormatError",
    "ValidationError",
]
