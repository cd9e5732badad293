"""
Signal-based process termination.

A ProcessTerminator sends one signal to one pid and then polls the process
until it is confirmed dead or the retry budget runs out. Escalation to a
stronger signal is the caller's decision: it builds a new terminator with
``KillSignal.KILL`` when ``terminate()`` returns False.
"""

import logging
from typing import Union

import psutil

from ..models.process import KillSignal
from ..validation import poll_until

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_POLL_INTERVAL = 0.1


def is_process_alive(pid: int) -> bool:
    """Signal-0 style liveness probe; zombies count as dead."""
    if not psutil.pid_exists(pid):
        return False
    try:
        return psutil.Process(pid).status() not in (psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD)
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied:
        # The process exists; we just cannot inspect it.
        return True


class ProcessTerminator:
    """
    Terminates a single process with a single signal.

    States: alive -> signal sent -> confirmed dead, or signal sent -> budget
    exhausted (``terminate()`` returns False and the caller may escalate).
    """

    def __init__(
        self,
        pid: int,
        kill_signal: Union[KillSignal, str],
        display_name: str = "process",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        if isinstance(kill_signal, str):
            kill_signal = KillSignal.parse(kill_signal)
        self.pid = pid
        self.kill_signal = kill_signal
        self.display_name = display_name
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval

    def __repr__(self) -> str:
        return (
            f"ProcessTerminator(pid={self.pid}, signal={self.kill_signal.signal_name}, "
            f"name='{self.display_name}')"
        )

    def terminate(self) -> bool:
        """
        Send the signal and wait for the process to die.

        Returns:
            True if the process is dead (including when it was already gone
            before the signal), False if it is still alive after the retry
            budget or the signal could not be delivered.
        """
        label = f"{self.display_name} (PID: {self.pid})"

        if not is_process_alive(self.pid):
            logger.info(f"{label} is not running, nothing to terminate")
            return True

        if not self._send_signal(label):
            return not is_process_alive(self.pid)

        if poll_until(
            lambda: not is_process_alive(self.pid),
            max_attempts=self.max_attempts,
            delay=self.poll_interval,
            context=f"{label} exit after {self.kill_signal.signal_name}",
        ):
            logger.info(f"{label} terminated with {self.kill_signal.signal_name}")
            return True

        wait_time = self.max_attempts * self.poll_interval
        if self.kill_signal.is_unconditional:
            logger.error(f"{label} still alive {wait_time:.1f}s after {self.kill_signal.signal_name}")
        else:
            logger.warning(
                f"{label} did not terminate within {wait_time:.1f}s of {self.kill_signal.signal_name}"
            )
        return False

    # Original method name used by callers that think in terms of killing.
    kill_process = terminate

    def _send_signal(self, label: str) -> bool:
        """Deliver the signal; False means it was not delivered."""
        try:
            psutil.Process(self.pid).send_signal(self.kill_signal.signum)
        except psutil.NoSuchProcess:
            logger.info(f"{label} exited before {self.kill_signal.signal_name} was sent")
            return False
        except psutil.AccessDenied:
            logger.warning(f"Access denied sending {self.kill_signal.signal_name} to {label}")
            return False
        logger.debug(f"Sent {self.kill_signal.signal_name} to {label}")
        return True


def terminate(
    pid: int,
    preferred_signal: Union[KillSignal, str],
    display_name: str = "process",
    **kwargs,
) -> bool:
    """Terminate ``pid`` with ``preferred_signal``; see ProcessTerminator."""
    return ProcessTerminator(pid, preferred_signal, display_name, **kwargs).terminate()
