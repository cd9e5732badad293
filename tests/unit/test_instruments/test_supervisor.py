"""
Unit tests for ToolProcessSupervisor.

Termination is faked by patching ProcessTerminator so each test controls
which (pid, signal) attempts succeed.
"""

import pytest
from unittest.mock import Mock, patch

from runloop.instruments.supervisor import (
    TerminationReport,
    ToolProcessSupervisor,
    kill_signal_for,
)
from runloop.models.config import SupervisorConfig
from runloop.models.process import KillSignal, ProcessRecord
from runloop.models.toolchain import ToolchainVersion
from runloop.validation import ProcessSurvivedKillError


def _lister(*pids):
    lister = Mock()
    lister.list_matching.return_value = [
        ProcessRecord(pid=pid, command_line="/usr/bin/instruments") for pid in pids
    ]
    return lister


class FakeTerminators:
    """Records every terminator built and answers from a survival table."""

    def __init__(self, outcomes=None):
        # (pid, KillSignal) -> bool; missing entries succeed.
        self.outcomes = outcomes or {}
        self.attempts = []

    def __call__(self, pid, kill_signal, display_name, **kwargs):
        self.attempts.append((pid, kill_signal))
        terminator = Mock()
        terminator.terminate.return_value = self.outcomes.get((pid, kill_signal), True)
        return terminator


@pytest.mark.unit
class TestKillSignalPolicy:
    """Test cases for choosing the preferred signal."""

    @pytest.mark.parametrize(
        "version,expected",
        [
            ("5.1", KillSignal.TERM),
            ("5.1.1", KillSignal.TERM),
            ("6.0", KillSignal.QUIT),
            ("7.0.1", KillSignal.QUIT),
        ],
    )
    def test_kill_signal_for(self, version, expected):
        assert kill_signal_for(ToolchainVersion(version)) is expected

    def test_supervisor_delegates(self):
        supervisor = ToolProcessSupervisor(lister=_lister())
        assert supervisor.kill_signal(ToolchainVersion("6.1")) is KillSignal.QUIT


@pytest.mark.unit
class TestKillAll:
    """Test cases for ToolProcessSupervisor.kill_all."""

    def test_no_processes(self):
        fake = FakeTerminators()
        with patch("runloop.instruments.supervisor.ProcessTerminator", fake):
            report = ToolProcessSupervisor(lister=_lister()).kill_all(KillSignal.TERM)

        assert report == TerminationReport(signal=KillSignal.TERM)
        assert report.succeeded
        assert fake.attempts == []

    def test_preferred_signal_succeeds(self):
        fake = FakeTerminators()
        with patch("runloop.instruments.supervisor.ProcessTerminator", fake):
            report = ToolProcessSupervisor(lister=_lister(30, 10, 20)).kill_all(KillSignal.QUIT)

        assert fake.attempts == [(10, KillSignal.QUIT), (20, KillSignal.QUIT), (30, KillSignal.QUIT)]
        assert report.terminated == [10, 20, 30]
        assert report.escalated == []

    def test_escalates_to_kill_after_preferred_signal(self):
        fake = FakeTerminators({(20, KillSignal.TERM): False})
        with patch("runloop.instruments.supervisor.ProcessTerminator", fake):
            report = ToolProcessSupervisor(lister=_lister(10, 20)).kill_all(KillSignal.TERM)

        assert fake.attempts == [
            (10, KillSignal.TERM),
            (20, KillSignal.TERM),
            (20, KillSignal.KILL),
        ]
        assert report.escalated == [20]
        assert report.terminated == [10, 20]
        assert report.succeeded

    def test_toolchain_selects_signal(self):
        fake = FakeTerminators()
        with patch("runloop.instruments.supervisor.ProcessTerminator", fake):
            report = ToolProcessSupervisor(lister=_lister(10)).kill_all(ToolchainVersion("7.0"))

        assert report.signal is KillSignal.QUIT
        assert fake.attempts == [(10, KillSignal.QUIT)]

    def test_survivor_does_not_block_other_pids(self):
        fake = FakeTerminators({(10, KillSignal.TERM): False, (10, KillSignal.KILL): False})
        with patch("runloop.instruments.supervisor.ProcessTerminator", fake):
            with pytest.raises(ProcessSurvivedKillError) as exc_info:
                ToolProcessSupervisor(lister=_lister(10, 20)).kill_all(KillSignal.TERM)

        assert (20, KillSignal.TERM) in fake.attempts
        report = exc_info.value.report
        assert exc_info.value.survivors == [10]
        assert report.terminated == [20]
        assert report.escalated == [10]
        assert "10" in str(exc_info.value)

    def test_survivor_without_raising(self):
        fake = FakeTerminators({(10, KillSignal.TERM): False, (10, KillSignal.KILL): False})
        with patch("runloop.instruments.supervisor.ProcessTerminator", fake):
            report = ToolProcessSupervisor(lister=_lister(10)).kill_all(
                KillSignal.TERM, raise_on_failure=False
            )

        assert report.survivors == [10]
        assert not report.succeeded

    def test_kill_preferred_is_not_repeated(self):
        fake = FakeTerminators({(10, KillSignal.KILL): False})
        with patch("runloop.instruments.supervisor.ProcessTerminator", fake):
            report = ToolProcessSupervisor(lister=_lister(10)).kill_all(
                KillSignal.KILL, raise_on_failure=False
            )

        assert fake.attempts == [(10, KillSignal.KILL)]
        assert report.escalated == []
        assert report.survivors == [10]

    def test_terminators_use_configured_budget(self):
        config = SupervisorConfig(max_attempts=3, poll_interval=0.5)
        with patch("runloop.instruments.supervisor.ProcessTerminator") as mock_terminator:
            mock_terminator.return_value.terminate.return_value = True
            ToolProcessSupervisor(lister=_lister(10), config=config).kill_all(KillSignal.TERM)

        mock_terminator.assert_called_once_with(
            10, KillSignal.TERM, "instruments", max_attempts=3, poll_interval=0.5
        )


@pytest.mark.unit
class TestDiscovery:
    """Test cases for pid listing and running checks."""

    def test_pids_and_is_running(self):
        supervisor = ToolProcessSupervisor(lister=_lister(5, 7))
        assert supervisor.pids() == [5, 7]
        assert supervisor.is_running() is True

    def test_not_running(self):
        assert ToolProcessSupervisor(lister=_lister()).is_running() is False

    def test_default_lister_from_config(self):
        config = SupervisorConfig(tool_name="mytool", executable_marker="/bin/mytool")
        supervisor = ToolProcessSupervisor(config=config)
        assert supervisor.lister.tool_name == "mytool"
        assert supervisor.lister.executable_marker == "/bin/mytool"

    @patch("runloop.instruments.supervisor.run_command")
    def test_app_running(self, mock_run):
        mock_run.return_value = (0, "  812 /Applications/Xcode.app/Contents/Applications/Instruments.app\n", "")
        assert ToolProcessSupervisor(lister=_lister()).app_running() is True

    @patch("runloop.instruments.supervisor.run_command")
    def test_app_not_running(self, mock_run):
        mock_run.return_value = (1, "", "")
        assert ToolProcessSupervisor(lister=_lister()).app_running() is False
