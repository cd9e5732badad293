"""
Process listing and parsing.

This module runs ``ps`` filtered through ``grep`` for the tool name and
parses the ``<pid> <command...>`` lines into ProcessRecord objects.

Example listing when the tool was launched through ``xcrun``::

    98081 sh -c xcrun instruments -w "43be3f89d9587e9468c24672777ff6241bd91124" < args >
    98082 /Xcode/6.0.1/Xcode.app/Contents/Developer/usr/bin/instruments -w < args >

Only the second line is the tool itself; the first is the shell wrapper that
launched it.
"""

import logging
import shlex
from typing import Dict, List, Optional

from ..models.process import ProcessRecord
from .commands import run_command

logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAME = "instruments"
DEFAULT_EXECUTABLE_MARKER = "/usr/bin/instruments"


def build_ps_command(tool_name: str) -> str:
    """Build the shell pipeline that lists processes mentioning ``tool_name``."""
    return f"ps x -o pid,command | grep -v grep | grep {shlex.quote(tool_name)}"


def parse_ps_line(line: str) -> Optional[ProcessRecord]:
    """Parse one ``<pid> <command...>`` line.

    Returns:
        The parsed record, or None when the line has no numeric positive pid.
    """
    tokens = line.split()
    if not tokens:
        return None
    try:
        pid = int(tokens[0])
    except ValueError:
        logger.debug(f"Dropping ps line with non-numeric pid: '{line.strip()}'")
        return None
    if pid <= 0:
        logger.debug(f"Dropping ps line with invalid pid {pid}")
        return None
    return ProcessRecord(pid=pid, command_line=" ".join(tokens[1:]))


def is_tool_process(command_line: Optional[str], executable_marker: str) -> bool:
    """Does the command line describe the real tool executable?"""
    if not command_line:
        return False
    return executable_marker in command_line


def parse_ps_output(
    ps_output: str, executable_marker: str = DEFAULT_EXECUTABLE_MARKER
) -> List[ProcessRecord]:
    """Extract tool process records from ``ps`` output.

    Malformed lines are dropped without aborting the scan. The result is
    deduplicated by pid and sorted by ascending pid; it is empty when nothing
    matches.

    Args:
        ps_output: Text of ``ps x -o pid,command`` (possibly pre-filtered).
        executable_marker: Substring that identifies the real executable.

    Returns:
        Matching records, pid ascending.
    """
    records: Dict[int, ProcessRecord] = {}
    for line in ps_output.splitlines():
        record = parse_ps_line(line)
        if record is None:
            continue
        if not is_tool_process(record.command_line, executable_marker):
            continue
        records.setdefault(record.pid, record)
    return sorted(records.values())


class ProcessLister:
    """
    Lists running instances of a tool by parsing ``ps`` output.
    """

    def __init__(
        self,
        tool_name: str = DEFAULT_TOOL_NAME,
        executable_marker: str = DEFAULT_EXECUTABLE_MARKER,
    ):
        self.tool_name = tool_name
        self.executable_marker = executable_marker

    @property
    def ps_command(self) -> str:
        return build_ps_command(self.tool_name)

    def ps_output(self) -> str:
        """Run the listing pipeline and return its stripped stdout.

        grep exits with status 1 when nothing matches, which is an empty
        listing rather than an error.
        """
        return_code, stdout, stderr = run_command(self.ps_command, shell=True)
        if return_code not in (0, 1) or (return_code == 1 and stderr.strip()):
            logger.warning(
                f"Process listing failed with exit code {return_code}: {stderr.strip()}"
            )
            return ""
        return stdout.strip()

    def list_matching(self) -> List[ProcessRecord]:
        """Return the running tool processes, pid ascending."""
        records = parse_ps_output(self.ps_output(), self.executable_marker)
        logger.debug(f"Found {len(records)} '{self.tool_name}' processes")
        return records

    def pids(self) -> List[int]:
        return [record.pid for record in self.list_matching()]
