"""
Data models for process supervision, device listings and configuration.

Process Models:
- ProcessRecord: one parsed line of process-listing output
- KillSignal: termination signals ordered by escalation strength

Device Models:
- Device: simulator or physical device, equal by identifier
- FormatKind: listing format selected from the toolchain version

Toolchain Models:
- ToolchainInfo: protocol answering ``version_at_least``
- ToolchainVersion: concrete implementation over packaging versions

Configuration Models:
- AppConfig and its per-section dataclasses
"""

from .config import AppConfig, CacheConfig, InstrumentsConfig, LoggingConfig, SupervisorConfig
from .device import Device, FormatKind
from .process import KillSignal, ProcessRecord
from .toolchain import ToolchainInfo, ToolchainVersion

__all__ = [
    # Configuration
    "AppConfig",
    "CacheConfig",
    "InstrumentsConfig",
    "LoggingConfig",
    "SupervisorConfig",
    # Devices
    "Device",
    "FormatKind",
    # Processes
    "KillSignal",
    "ProcessRecord",
    # Toolchain
    "ToolchainInfo",
    "ToolchainVersion",
]
