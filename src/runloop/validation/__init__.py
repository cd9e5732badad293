"""
Validation and error handling for the runloop package.

This module provides the error taxonomy, logging-aware error handlers and the
input validators used by configuration loading and the CLI.
"""

from .exceptions import (
    CacheArgumentError,
    CacheCorruptionError,
    CacheError,
    CacheSerializationError,
    DirectoryIsFileError,
    ErrorSeverity,
    ProcessSurvivedKillError,
    RunLoopError,
    UnsupportedFormatError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

from .strategies import poll_until

from .validators import (
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
    validate_version_string,
)

__all__ = [
    # Errors
    "CacheArgumentError",
    "CacheCorruptionError",
    "CacheError",
    "CacheSerializationError",
    "DirectoryIsFileError",
    "ErrorSeverity",
    "ProcessSurvivedKillError",
    "RunLoopError",
    "UnsupportedFormatError",
    "ValidationError",
    # Handlers
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    # Strategies
    "poll_until",
    # Validators
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_string_list",
    "validate_version_string",
]
