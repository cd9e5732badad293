"""
Supervision of running instruments processes.

ToolProcessSupervisor answers "is the tool running" and stops every running
instance, escalating to KILL for any pid the preferred signal did not stop.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..models.config import SupervisorConfig
from ..models.process import KillSignal
from ..models.toolchain import ToolchainInfo
from ..system.commands import run_command
from ..system.processes import ProcessLister
from ..system.terminator import ProcessTerminator
from ..validation import ProcessSurvivedKillError

logger = logging.getLogger(__name__)

INSTRUMENTS_APP_PS_COMMAND = "ps x -o pid,comm | grep Instruments.app | grep -v grep"


def kill_signal_for(toolchain: ToolchainInfo) -> KillSignal:
    """
    Pick the preferred kill signal for the active toolchain.

    With Xcode >= 6, TERM or KILL leaves the on-device ScriptAgent logging
    MobileGestalt access errors until the device reboots; QUIT shuts the tool
    down cleanly. Older toolchains get TERM.
    """
    return KillSignal.QUIT if toolchain.version_at_least("6.0") else KillSignal.TERM


@dataclass
class TerminationReport:
    """Outcome of stopping every running tool process."""

    signal: KillSignal
    # Pids confirmed dead, in processing order.
    terminated: List[int] = field(default_factory=list)
    # Pids that needed KILL after the preferred signal failed.
    escalated: List[int] = field(default_factory=list)
    # Pids still alive after KILL.
    survivors: List[int] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.survivors


class ToolProcessSupervisor:
    """
    Discovers and stops running instances of the tool.
    """

    def __init__(
        self,
        lister: Optional[ProcessLister] = None,
        config: Optional[SupervisorConfig] = None,
    ):
        self.config = config or SupervisorConfig()
        self.lister = lister or ProcessLister(
            tool_name=self.config.tool_name,
            executable_marker=self.config.executable_marker,
        )

    def pids(self) -> List[int]:
        """Running tool pids, ascending."""
        return sorted({record.pid for record in self.lister.list_matching()})

    def is_running(self) -> bool:
        return len(self.lister.list_matching()) > 0

    def kill_signal(self, toolchain: ToolchainInfo) -> KillSignal:
        return kill_signal_for(toolchain)

    def _terminator(self, pid: int, kill_signal: KillSignal) -> ProcessTerminator:
        return ProcessTerminator(
            pid,
            kill_signal,
            self.config.tool_name,
            max_attempts=self.config.max_attempts,
            poll_interval=self.config.poll_interval,
        )

    def kill_all(
        self,
        signal_policy: Union[KillSignal, ToolchainInfo],
        raise_on_failure: bool = True,
    ) -> TerminationReport:
        """
        Stop every running tool process.

        Each pid, in ascending order, gets the preferred signal and its full
        retry budget; only if that fails is KILL sent to the same pid. A
        failure on one pid never stops processing of the others.

        Args:
            signal_policy: The preferred signal, or a toolchain to derive it from
            raise_on_failure: Raise if any pid survives KILL

        Returns:
            The termination report

        Raises:
            ProcessSurvivedKillError: If a pid survived KILL and
                ``raise_on_failure`` is True
        """
        if isinstance(signal_policy, KillSignal):
            preferred = signal_policy
        else:
            preferred = self.kill_signal(signal_policy)

        report = TerminationReport(signal=preferred)
        pids = self.pids()
        if pids:
            logger.info(f"Stopping {len(pids)} {self.config.tool_name} processes with {preferred.signal_name}")

        for pid in pids:
            if self._terminator(pid, preferred).terminate():
                report.terminated.append(pid)
                continue

            if preferred.is_unconditional:
                report.survivors.append(pid)
                continue

            logger.warning(f"Escalating to SIGKILL for {self.config.tool_name} (PID: {pid})")
            report.escalated.append(pid)
            if self._terminator(pid, KillSignal.KILL).terminate():
                report.terminated.append(pid)
            else:
                report.survivors.append(pid)

        if report.survivors:
            logger.error(
                f"Failed to stop {len(report.survivors)} {self.config.tool_name} processes: {report.survivors}"
            )
            if raise_on_failure:
                raise ProcessSurvivedKillError(report)
        return report

    def app_running(self) -> bool:
        """
        Is Instruments.app running?

        While the app is open, the command-line tool cannot take control of
        applications.
        """
        return_code, stdout, _ = run_command(INSTRUMENTS_APP_PS_COMMAND, shell=True)
        if return_code != 0:
            return False
        return "Instruments.app" in stdout
