"""
Exception types and error handling helpers.

This module defines the error taxonomy shared by the process supervision,
device listing and host cache components, together with the logging-aware
``handle_error`` helpers used at the configuration and CLI boundaries.
"""

import logging
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from ..instruments.supervisor import TerminationReport

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_LOG_LEVELS = {
    ErrorSeverity.DEBUG: logging.DEBUG,
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    Used for configuration values, CLI arguments and launch options.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class RunLoopError(Exception):
    """Base class for errors raised by the supervision and cache components."""


class UnsupportedFormatError(RunLoopError):
    """No parsing rule exists for the requested format or toolchain version."""

    def __init__(self, message: str, format_hint: Any = None):
        super().__init__(message)
        self.format_hint = format_hint


class ProcessSurvivedKillError(RunLoopError):
    """
    One or more processes were still alive after the unconditional kill signal.

    The full ``TerminationReport`` is attached so callers can inspect which
    pids were terminated, which needed escalation and which survived.
    """

    def __init__(self, report: "TerminationReport"):
        pids = ", ".join(str(pid) for pid in report.survivors)
        super().__init__(f"Processes survived KILL: {pids}")
        self.report = report

    @property
    def survivors(self):
        return self.report.survivors


class CacheError(RunLoopError):
    """Base class for host cache failures."""


class CacheArgumentError(CacheError, TypeError):
    """``write`` was called with something other than a dict."""


class CacheSerializationError(CacheError, TypeError):
    """A value in the mapping cannot be serialized."""


class CacheCorruptionError(CacheError):
    """The backing file exists but cannot be deserialized into a mapping."""

    def __init__(self, message: str, path: Any = None):
        super().__init__(message)
        self.path = path


class DirectoryIsFileError(CacheError, RuntimeError):
    """The cache directory path exists but is not a directory."""


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log ``error`` at ``severity`` and optionally re-raise it.

    DEBUG and CRITICAL entries carry the traceback.

    Args:
        error: The exception that occurred
        context: Where the error occurred, e.g. "config parsing"
        severity: An ErrorSeverity or its lowercase name
        reraise: Re-raise ``error`` after logging
        logger: Logger to use (defaults to this module's logger)
    """
    effective_logger = logger or globals()['logger']
    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())

    effective_logger.log(
        _LOG_LEVELS[severity],
        f"Error in {context}: {error}",
        exc_info=severity in (ErrorSeverity.DEBUG, ErrorSeverity.CRITICAL),
    )

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI error and exit with the requested status code."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    if include_traceback:
        severity = ErrorSeverity.CRITICAL
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
