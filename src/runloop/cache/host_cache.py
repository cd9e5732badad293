"""
Persistent host cache.

A HostCache is a single pickled dict stored at ``<directory>/<filename>``.
It memoizes expensive host facts across process invocations. Reads of an
absent or empty file return an empty dict; a file that exists but cannot be
unpickled raises CacheCorruptionError. Writes replace the whole file.

There is no locking: two writers pointed at the same path race and the last
writer wins.
"""

import logging
import pickle
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..lazy import LazyValue
from ..validation import (
    CacheArgumentError,
    CacheCorruptionError,
    CacheSerializationError,
    DirectoryIsFileError,
)

logger = logging.getLogger(__name__)

# Fixed so that every HostCache over the same directory shares one file.
DEFAULT_FILENAME = "2780e6479cc2bfcd0a007bd08bdf36de11b397bd"
DEFAULT_DIRECTORY = "~/.run-loop"

_UNPICKLING_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    AttributeError,
    ImportError,
    IndexError,
    ValueError,
    TypeError,
)
_PICKLING_ERRORS = (pickle.PicklingError, TypeError, AttributeError)


def _ensure_directory(directory: Path) -> Path:
    if directory.exists() and not directory.is_dir():
        raise DirectoryIsFileError(f"Expected {directory} to be a directory, but it is a file")
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created cache directory: {directory}")
    return directory


class HostCache:
    """
    File-backed key/value store for host facts.

    Args:
        directory: Directory holding the cache file; created if missing
        filename: Cache file name; defaults to DEFAULT_FILENAME
        clear: Delete an existing cache file during construction

    Raises:
        DirectoryIsFileError: If ``directory`` exists and is not a directory
    """

    def __init__(
        self,
        directory: Union[str, Path],
        filename: Optional[str] = None,
        clear: bool = False,
    ):
        directory = _ensure_directory(Path(directory).expanduser())
        self.path = directory / (filename or DEFAULT_FILENAME)

        if clear and self.path.exists():
            self.path.unlink()
            logger.info(f"Cleared host cache at {self.path}")

    def __repr__(self) -> str:
        return f"HostCache(path='{self.path}')"

    @staticmethod
    def default_directory() -> Path:
        """
        The well-known cache directory, ``~/.run-loop``, created if absent.

        Raises:
            DirectoryIsFileError: If the path exists but is not a directory
        """
        return _ensure_directory(Path(DEFAULT_DIRECTORY).expanduser())

    @classmethod
    def default(cls) -> "HostCache":
        """The process-wide default cache; see get_default_cache."""
        return get_default_cache()

    def read(self) -> Dict[Any, Any]:
        """
        Return the cached mapping.

        Raises:
            CacheCorruptionError: If the file exists but does not hold a
                pickled dict
        """
        if not self.path.exists():
            return {}

        data = self.path.read_bytes()
        if not data:
            return {}

        try:
            value = pickle.loads(data)
        except _UNPICKLING_ERRORS as e:
            raise CacheCorruptionError(
                f"Host cache at {self.path} cannot be read: {type(e).__name__}: {e}",
                path=self.path,
            ) from e

        if not isinstance(value, dict):
            raise CacheCorruptionError(
                f"Host cache at {self.path} holds a {type(value).__name__}, not a dict",
                path=self.path,
            )
        return value

    def write(self, mapping: Dict[Any, Any]) -> bool:
        """
        Replace the cache contents with ``mapping``.

        The mapping is serialized before the file is opened, so a failure
        leaves the existing file untouched.

        Returns:
            True

        Raises:
            CacheArgumentError: If ``mapping`` is not a dict
            CacheSerializationError: If a key or value cannot be pickled
        """
        if not isinstance(mapping, dict):
            raise CacheArgumentError(
                f"Expected a dict to write to the host cache, got {type(mapping).__name__}"
            )

        try:
            payload = pickle.dumps(mapping, protocol=pickle.HIGHEST_PROTOCOL)
        except _PICKLING_ERRORS as e:
            raise CacheSerializationError(
                f"Host cache values must be picklable: {type(e).__name__}: {e}"
            ) from e

        _ensure_directory(self.path.parent)
        self.path.write_bytes(payload)
        logger.debug(f"Wrote {len(mapping)} entries to host cache at {self.path}")
        return True

    def clear(self) -> bool:
        """Delete the cache file if present. Always returns True."""
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Cleared host cache at {self.path}")
        return True


def _build_default_cache() -> HostCache:
    return HostCache(HostCache.default_directory())


_DEFAULT_CACHE: LazyValue[HostCache] = LazyValue(_build_default_cache, "default host cache")


def get_default_cache() -> HostCache:
    """
    Get the process-wide default cache, constructing it on first access.

    The instance lives for the rest of the process; it is a convenience
    handle and holds no state beyond its path.
    """
    return _DEFAULT_CACHE.get()


def set_default_cache(cache: HostCache) -> None:
    """Substitute the default cache, e.g. with one over a temporary directory."""
    _DEFAULT_CACHE.set(cache)


def reset_default_cache() -> None:
    """Forget the default cache; the next access constructs a new one."""
    _DEFAULT_CACHE.reset()


def is_default_cache_loaded() -> bool:
    return _DEFAULT_CACHE.computed
