"""
Configuration validation utilities.

Each section of config.toml has its own validator that turns raw TOML data
into a dataclass, applying defaults for missing keys.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import (
    AppConfig,
    CacheConfig,
    InstrumentsConfig,
    LoggingConfig,
    SupervisorConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)
    return section


def validate_supervisor_config(supervisor_data: Dict[str, Any]) -> SupervisorConfig:
    """
    Validate the [supervisor] section.

    Raises:
        ValidationError: If validation fails
    """
    defaults = SupervisorConfig()

    tool_name = validate_non_empty_string(
        supervisor_data.get("tool_name", defaults.tool_name),
        field_name="supervisor.tool_name",
    )
    executable_marker = validate_non_empty_string(
        supervisor_data.get("executable_marker", defaults.executable_marker),
        field_name="supervisor.executable_marker",
    )
    max_attempts = validate_positive_integer(
        supervisor_data.get("max_attempts", defaults.max_attempts),
        min_value=1,
        max_value=1000,
        field_name="supervisor.max_attempts",
    )
    poll_interval = validate_positive_float(
        supervisor_data.get("poll_interval", defaults.poll_interval),
        min_value=0.001,  # 1ms minimum
        max_value=10.0,
        field_name="supervisor.poll_interval",
    )

    if max_attempts * poll_interval > 60.0:
        logger.warning(
            f"supervisor.max_attempts * supervisor.poll_interval is {max_attempts * poll_interval:.1f}s; "
            "each kill attempt may block that long"
        )

    return SupervisorConfig(
        tool_name=tool_name,
        executable_marker=executable_marker,
        max_attempts=max_attempts,
        poll_interval=poll_interval,
    )


def validate_instruments_config(instruments_data: Dict[str, Any]) -> InstrumentsConfig:
    """Validate the [instruments] section."""
    defaults = InstrumentsConfig()

    launcher = validate_non_empty_string(
        instruments_data.get("launcher", defaults.launcher),
        field_name="instruments.launcher",
    )
    spam_patterns = validate_string_list(
        instruments_data.get("stderr_spam_patterns", defaults.stderr_spam_patterns),
        field_name="instruments.stderr_spam_patterns",
    )
    return InstrumentsConfig(launcher=launcher, stderr_spam_patterns=spam_patterns)


def validate_cache_config(cache_data: Dict[str, Any]) -> CacheConfig:
    """Validate the [cache] section."""
    defaults = CacheConfig()

    directory = cache_data.get("directory")
    if directory is None:
        directory_path = defaults.directory
    else:
        directory_path = Path(
            validate_non_empty_string(directory, field_name="cache.directory")
        ).expanduser()

    filename = cache_data.get("filename")
    if filename is not None:
        filename = validate_non_empty_string(filename, field_name="cache.filename")
        if "/" in filename:
            raise ValidationError(
                "cache.filename must be a file name, not a path",
                field_name="cache.filename",
                value=filename,
            )

    return CacheConfig(directory=directory_path, filename=filename)


def validate_logging_config(logging_data: Dict[str, Any]) -> LoggingConfig:
    """Validate the [logging] section."""
    defaults = LoggingConfig()

    level = validate_enum_choice(
        logging_data.get("level", defaults.level),
        valid_choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )
    log_format = validate_non_empty_string(
        logging_data.get("format", defaults.format),
        field_name="logging.format",
    )
    return LoggingConfig(level=level, format=log_format)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate a whole parsed config.toml.

    Missing sections fall back to their defaults.

    Raises:
        ValidationError: If any value is invalid
    """
    return AppConfig(
        supervisor=validate_supervisor_config(_section(config_data, "supervisor")),
        instruments=validate_instruments_config(_section(config_data, "instruments")),
        cache=validate_cache_config(_section(config_data, "cache")),
        logging=validate_logging_config(_section(config_data, "logging")),
    )
