"""
Configuration management for the runloop package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file, cached once per process.
"""

from .loader import load_main_config, load_toml_file
from .manager import (
    clear_config_cache,
    get_config,
    get_config_path,
    is_config_loaded,
    set_config_path,
)
from .validators import (
    validate_app_config,
    validate_cache_config,
    validate_instruments_config,
    validate_logging_config,
    validate_supervisor_config,
)

__all__ = [
    # Main interface
    "get_config",
    "get_config_path",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_app_config",
    "validate_cache_config",
    "validate_instruments_config",
    "validate_logging_config",
    "validate_supervisor_config",
]
