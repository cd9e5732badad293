"""
Configuration data models.

This module contains the configuration data structures loaded from
`config.toml`. Every field has a default so a partial file is valid.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class SupervisorConfig:
    """
    Process discovery and termination settings, `[supervisor]` section.
    """

    # Name passed to grep when listing processes.
    tool_name: str = "instruments"
    # Substring identifying the real executable (not a shell wrapper).
    executable_marker: str = "/usr/bin/instruments"
    # Liveness probes per termination attempt.
    max_attempts: int = 10
    # Seconds between liveness probes.
    poll_interval: float = 0.1


@dataclass
class InstrumentsConfig:
    """
    Settings for running the instruments tool, `[instruments]` section.
    """

    # The tool is always run in the context of this launcher.
    launcher: str = "xcrun"
    # stderr lines containing any of these are dropped instead of logged.
    stderr_spam_patterns: List[str] = field(
        default_factory=lambda: ["WebKit Threading Violation"]
    )


@dataclass
class CacheConfig:
    """
    Host cache location, `[cache]` section.
    """

    directory: Path = field(default_factory=lambda: Path("~/.run-loop").expanduser())
    # None selects the fixed default filename.
    filename: Optional[str] = None


@dataclass
class LoggingConfig:
    """
    Logging settings, `[logging]` section.
    """

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    supervisor: SupervisorConfig = field(default_factory=SupervisorConfig)
    instruments: InstrumentsConfig = field(default_factory=InstrumentsConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
