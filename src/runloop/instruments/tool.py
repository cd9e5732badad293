"""
Interface to the instruments command-line tool.

All instruments commands are run in the context of the configured launcher
(``xcrun`` by default). Listing results are memoized per Instruments object;
call ``reset()`` to list again.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..lazy import LazyValue
from ..models.config import AppConfig
from ..models.device import Device, FormatKind
from ..models.process import KillSignal
from ..models.toolchain import ToolchainInfo, ToolchainVersion
from ..system.commands import run_command, spawn_detached
from ..validation import RunLoopError, ValidationError
from . import device_parser
from .output import filter_stderr_spam, parse_templates, parse_version
from .supervisor import TerminationReport, ToolProcessSupervisor

logger = logging.getLogger(__name__)

TOOL_NAME = "instruments"


@dataclass
class LaunchOptions:
    """Options for launching an app under instruments."""

    # Target device or simulator identifier.
    udid: str
    # Path to the .app bundle or a bundle identifier.
    bundle_dir_or_bundle_id: str
    # Directory receiving UIAutomation results.
    results_dir: str = ""
    # The UIAutomation script to run.
    script: str = ""
    # Optional trace document output directory (-D).
    results_dir_trace: Optional[str] = None
    # Extra arguments appended after the environment.
    args: List[str] = field(default_factory=list)

    def environment(self) -> Dict[str, str]:
        return {
            "UIARESULTSPATH": self.results_dir,
            "UIASCRIPT": self.script,
        }


def build_spawn_arguments(automation_template: str, options: LaunchOptions) -> List[str]:
    """
    Build the instruments argument list (without the launcher).

    ``instruments -w <udid> [-D <trace>] -t <template> <bundle> -e KEY VALUE ... [args]``

    Raises:
        ValidationError: If the udid, bundle or template is missing
    """
    if not options.udid:
        raise ValidationError("udid is required to launch instruments", field_name="udid")
    if not options.bundle_dir_or_bundle_id:
        raise ValidationError(
            "bundle_dir_or_bundle_id is required to launch instruments",
            field_name="bundle_dir_or_bundle_id",
        )
    if not automation_template:
        raise ValidationError(
            "an automation template is required to launch instruments",
            field_name="automation_template",
        )

    arguments = [TOOL_NAME, "-w", options.udid]
    if options.results_dir_trace:
        arguments.extend(["-D", options.results_dir_trace])
    arguments.extend(["-t", automation_template, options.bundle_dir_or_bundle_id])
    for key, value in options.environment().items():
        arguments.extend(["-e", key, value])
    return arguments + list(options.args)


class Instruments:
    """
    Runs instruments listing commands, parses their output and supervises
    running instruments processes.

    Args:
        toolchain: The active toolchain. When omitted, the instruments version
            reported by the tool itself is used.
        config: Application configuration; defaults apply when omitted.
        supervisor: Process supervisor; built from ``config`` when omitted.
    """

    def __init__(
        self,
        toolchain: Optional[ToolchainInfo] = None,
        config: Optional[AppConfig] = None,
        supervisor: Optional[ToolProcessSupervisor] = None,
    ):
        self.config = config or AppConfig()
        self.supervisor = supervisor or ToolProcessSupervisor(config=self.config.supervisor)
        self._toolchain = toolchain

        self._version: LazyValue[ToolchainVersion] = LazyValue(self._detect_version, "instruments version")
        self._templates: LazyValue[List[str]] = LazyValue(self._list_templates, "templates")
        self._simulators: LazyValue[List[Device]] = LazyValue(self._list_simulators, "simulators")
        self._physical_devices: LazyValue[List[Device]] = LazyValue(
            self._list_physical_devices, "physical devices"
        )

    @property
    def toolchain(self) -> ToolchainInfo:
        if self._toolchain is None:
            return self.version()
        return self._toolchain

    def reset(self) -> None:
        """Forget memoized listings."""
        for lazy_value in (self._version, self._templates, self._simulators, self._physical_devices):
            lazy_value.reset()

    def execute_command(self, args: List[str]) -> Tuple[int, str, str]:
        """Run ``<launcher> instruments <args>``."""
        return run_command([self.config.instruments.launcher, TOOL_NAME, *args])

    def _listing(self, args: List[str]) -> str:
        return_code, stdout, stderr = self.execute_command(args)
        filter_stderr_spam(stderr, self.config.instruments.stderr_spam_patterns)
        if return_code != 0:
            raise RunLoopError(
                f"'{TOOL_NAME} {' '.join(args)}' failed with exit code {return_code}"
            )
        return stdout

    # --- Version ---

    def _detect_version(self) -> ToolchainVersion:
        _, _, stderr = self.execute_command([])
        version = parse_version(stderr)
        if version is None:
            raise RunLoopError("Could not determine the instruments version")
        logger.debug(f"instruments version: {version}")
        return version

    def version(self) -> ToolchainVersion:
        return self._version.get()

    # --- Listings ---

    def _list_templates(self) -> List[str]:
        return parse_templates(self._listing(["-s", "templates"]), self.toolchain)

    def templates(self) -> List[str]:
        """Instruments.app templates, as names or full paths depending on Xcode."""
        return self._templates.get()

    def _list_simulators(self) -> List[Device]:
        format_kind = FormatKind.for_toolchain(self.toolchain)
        return device_parser.parse(self._listing(["-s", "devices"]), format_kind)

    def simulators(self) -> List[Device]:
        return self._simulators.get()

    def _list_physical_devices(self) -> List[Device]:
        return device_parser.parse_physical_devices(self._listing(["-s", "devices"]))

    def physical_devices(self) -> List[Device]:
        return self._physical_devices.get()

    # --- Processes ---

    def instruments_pids(self) -> List[int]:
        return self.supervisor.pids()

    def instruments_running(self) -> bool:
        return self.supervisor.is_running()

    def instruments_app_running(self) -> bool:
        return self.supervisor.app_running()

    def kill_instruments(
        self,
        kill_signal: Optional[KillSignal] = None,
        raise_on_failure: bool = True,
    ) -> TerminationReport:
        """
        Stop all instruments processes.

        The signal defaults to the one preferred for the active toolchain.
        """
        policy = kill_signal if kill_signal is not None else self.toolchain
        return self.supervisor.kill_all(policy, raise_on_failure=raise_on_failure)

    def spawn(
        self,
        automation_template: str,
        options: LaunchOptions,
        log_file: Union[str, Path],
    ) -> int:
        """
        Launch instruments detached, with all output going to ``log_file``.

        Returns:
            The pid of the launcher process
        """
        arguments = [self.config.instruments.launcher] + build_spawn_arguments(
            automation_template, options
        )
        return spawn_detached(arguments, log_file)
