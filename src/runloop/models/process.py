"""
Process data models.

This module contains the transient records produced by parsing process
listings and the ordered set of termination signals used for escalation.
"""

import signal
from dataclasses import dataclass, field
from enum import IntEnum


@dataclass(frozen=True, order=True)
class ProcessRecord:
    """
    One line of process-listing output.

    Records order by pid; the command line does not take part in ordering.
    """

    # Process id, always > 0.
    pid: int
    # The command and its arguments, tokens joined by single spaces.
    command_line: str = field(compare=False)

    def __post_init__(self):
        if self.pid <= 0:
            raise ValueError(f"pid must be positive, got {self.pid}")


class KillSignal(IntEnum):
    """
    Termination signals ordered by escalation strength.

    ``QUIT`` < ``TERM`` < ``KILL``; comparisons follow that order.
    """

    QUIT = 1
    TERM = 2
    KILL = 3

    @property
    def signum(self) -> int:
        """The OS signal number for this signal."""
        return getattr(signal, f"SIG{self.name}")

    @property
    def signal_name(self) -> str:
        return f"SIG{self.name}"

    def stronger(self) -> "KillSignal":
        """Return the next stronger signal; ``KILL`` is the strongest."""
        if self is KillSignal.KILL:
            return self
        return KillSignal(self.value + 1)

    @property
    def is_unconditional(self) -> bool:
        return self is KillSignal.KILL

    @classmethod
    def parse(cls, name: str) -> "KillSignal":
        """
        Look up a signal by name, accepting ``TERM``, ``SIGTERM`` or ``term``.

        Raises:
            ValueError: If the name is not a known kill signal
        """
        normalized = str(name).strip().upper()
        if normalized.startswith("SIG"):
            normalized = normalized[3:]
        try:
            return cls[normalized]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise ValueError(f"Unknown kill signal '{name}', expected one of: {valid}") from None
