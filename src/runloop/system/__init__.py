"""
System interaction utilities for process supervision.

This module provides:

- Command execution with output capture and detached spawning
- Process listing through ``ps`` and parsing into ProcessRecord objects
- Signal delivery with bounded liveness polling
"""

from .commands import (
    run_command,
    spawn_detached,
)

from .processes import (
    ProcessLister,
    build_ps_command,
    parse_ps_line,
    parse_ps_output,
)

from .terminator import (
    ProcessTerminator,
    is_process_alive,
    terminate,
)

__all__ = [
    # Commands
    "run_command",
    "spawn_detached",
    # Process listing
    "ProcessLister",
    "build_ps_command",
    "parse_ps_line",
    "parse_ps_output",
    # Termination
    "ProcessTerminator",
    "is_process_alive",
    "terminate",
]
