"""
Reading config.toml from disk.

Parsing only; turning the raw tables into dataclasses is the job of
``validators``.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)

# Top-level tables and the keys each one understands.
KNOWN_SECTIONS = {
    "supervisor": {"tool_name", "executable_marker", "max_attempts", "poll_interval"},
    "instruments": {"launcher", "stderr_spam_patterns"},
    "cache": {"directory", "filename"},
    "logging": {"level", "format"},
}


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Parse ``file_path`` as TOML.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")
    if not file_path.is_file():
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {file_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def _warn_unknown_keys(config_data: Dict[str, Any], config_path: Path) -> None:
    for section, values in config_data.items():
        if section not in KNOWN_SECTIONS:
            logger.warning(f"{config_path}: ignoring unknown section [{section}]")
            continue
        if isinstance(values, dict):
            for key in sorted(set(values) - KNOWN_SECTIONS[section]):
                logger.warning(f"{config_path}: ignoring unknown key {section}.{key}")


def load_main_config(config_path: Path) -> Dict[str, Any]:
    """Load config.toml, warning about sections and keys nothing reads."""
    config_data = load_toml_file(config_path, "main configuration file")
    _warn_unknown_keys(config_data, config_path)
    return config_data
