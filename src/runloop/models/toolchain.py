"""
Toolchain version models.

Version detection itself happens elsewhere; the supervision and parsing code
only needs to ask whether the active toolchain is at least some version.
"""

from typing import Protocol, Union, runtime_checkable

from packaging.version import InvalidVersion, Version


@runtime_checkable
class ToolchainInfo(Protocol):
    """Anything that can answer ``version_at_least`` for the active toolchain."""

    def version_at_least(self, version: str) -> bool:
        ...


class ToolchainVersion:
    """
    A concrete ToolchainInfo backed by ``packaging.version.Version``.

    Examples:
        >>> ToolchainVersion("7.0.1").version_at_least("6.0")
        True
        >>> ToolchainVersion("5.1").version_at_least("6.0")
        False
    """

    def __init__(self, version: Union[str, Version]):
        if isinstance(version, Version):
            self.version = version
        else:
            try:
                self.version = Version(str(version).strip())
            except InvalidVersion as e:
                raise ValueError(f"Invalid toolchain version '{version}': {e}") from e

    def version_at_least(self, version: str) -> bool:
        return self.version >= Version(version)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToolchainVersion):
            return NotImplemented
        return self.version == other.version

    def __hash__(self) -> int:
        return hash(self.version)

    def __str__(self) -> str:
        return str(self.version)

    def __repr__(self) -> str:
        return f"ToolchainVersion('{self.version}')"
