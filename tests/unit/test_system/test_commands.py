"""
Unit tests for command execution helpers.
"""

import sys

import psutil
import pytest

from runloop.system.commands import run_command, spawn_detached
from runloop.system.terminator import is_process_alive
from runloop.validation import poll_until


@pytest.mark.unit
class TestRunCommand:
    """Test cases for run_command."""

    def test_captures_stdout_and_return_code(self):
        rc, stdout, stderr = run_command([sys.executable, "-c", "print('hello')"])
        assert rc == 0
        assert stdout.strip() == "hello"
        assert stderr == ""

    def test_captures_stderr(self):
        rc, _, stderr = run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('oops'); sys.exit(3)"]
        )
        assert rc == 3
        assert stderr == "oops"

    def test_shell_pipeline(self):
        rc, stdout, _ = run_command("echo instruments | grep instr", shell=True)
        assert rc == 0
        assert stdout.strip() == "instruments"

    def test_missing_executable(self):
        rc, stdout, stderr = run_command(["definitely-not-a-real-command-xyz"])
        assert rc == -1
        assert stdout == ""
        assert "definitely-not-a-real-command-xyz" in stderr


@pytest.mark.unit
class TestSpawnDetached:
    """Test cases for spawn_detached."""

    def test_output_goes_to_log_file(self, temp_dir):
        log_file = temp_dir / "instruments.log"
        pid = spawn_detached(
            [sys.executable, "-c", "import sys; print('out'); sys.stderr.write('err\\n')"],
            log_file,
        )

        assert pid > 0
        assert poll_until(
            lambda: "out" in log_file.read_text() and "err" in log_file.read_text(),
            max_attempts=100,
            delay=0.05,
        )
        poll_until(lambda: not is_process_alive(pid), max_attempts=100, delay=0.05)

    def test_exited_child_is_reaped(self, temp_dir):
        pid = spawn_detached(["true"], temp_dir / "true.log")

        # A zombie still shows up in the process table until it is waited on.
        assert poll_until(lambda: not psutil.pid_exists(pid), max_attempts=100, delay=0.05)

    def test_missing_executable_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            spawn_detached(["definitely-not-a-real-command-xyz"], temp_dir / "out.log")
