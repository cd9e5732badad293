"""
Persistent host cache.

A small pickled key/value store for host facts that are expensive to compute,
plus a lazily constructed process-wide default instance.
"""

from .host_cache import (
    DEFAULT_DIRECTORY,
    DEFAULT_FILENAME,
    HostCache,
    get_default_cache,
    is_default_cache_loaded,
    reset_default_cache,
    set_default_cache,
)

__all__ = [
    "DEFAULT_DIRECTORY",
    "DEFAULT_FILENAME",
    "HostCache",
    "get_default_cache",
    "is_default_cache_loaded",
    "reset_default_cache",
    "set_default_cache",
]
