"""
Command-line interface for the runloop package.
"""

from .main import configure_logging, main_cli

__all__ = [
    "configure_logging",
    "main_cli",
]
