"""
Command execution utilities.

This module provides functions for running external commands and capturing
their output, and for spawning detached processes whose output goes to a
log file.
"""

import logging
import shlex
import subprocess
import threading
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

Command = Union[str, Sequence[str]]


def _command_name(command: Command) -> str:
    if isinstance(command, str):
        try:
            return shlex.split(command)[0]
        except (ValueError, IndexError):
            return command
    return command[0] if command else ""


def _command_text(command: Command) -> str:
    if isinstance(command, str):
        return command
    return " ".join(shlex.quote(part) for part in command)


def run_command(
    command: Command, cwd: Optional[Path] = None, shell: bool = False
) -> Tuple[int, str, str]:
    """Execute a command and capture its output with robust error handling.

    Args:
        command: The command string (for ``shell=True``) or argument list.
        cwd: Working directory path for command execution.
        shell: Whether to run the command through the shell (needed for pipes).

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 when the command could not be started.

    Note:
        Uses UTF-8 encoding with error replacement for robust text handling.
    """
    logger.debug(f"Executing command: '{_command_text(command)}'")
    try:
        process = subprocess.run(
            command,
            cwd=cwd,
            shell=shell,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        name = _command_name(command)
        logger.error(f"Command not found: {name}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{name}'"
    except OSError as e:
        logger.error(
            f"Failed to run command '{_command_text(command)[:50]}': {type(e).__name__}: {e}",
            exc_info=True,
        )
        return -1, "", f"An unexpected error occurred: {e}"


def spawn_detached(arguments: List[str], log_file: Union[str, Path]) -> int:
    """Start a process in its own session and return its pid without waiting.

    Both stdout and stderr are redirected to ``log_file`` (truncated). The
    caller is responsible for polling liveness or reading the log file if it
    needs to know when the process finishes. A daemon thread waits on the
    child so it is reaped as soon as it exits.

    Args:
        arguments: Executable followed by its arguments.
        log_file: File receiving the combined output.

    Returns:
        The pid of the spawned process.

    Raises:
        FileNotFoundError: If the executable does not exist.
    """
    log_path = Path(log_file)
    logger.debug(f"{_command_text(arguments)} >& {log_path}")
    with open(log_path, "w", encoding="utf-8") as log_handle:
        process = subprocess.Popen(
            arguments,
            stdout=log_handle,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            start_new_session=True,
        )
    threading.Thread(target=process.wait, name=f"reap-{process.pid}", daemon=True).start()
    logger.info(f"Spawned '{arguments[0]}' with PID: {process.pid}")
    return process.pid
