"""
Device data models.

A single immutable Device type is shared by every listing format. The format
of a listing is an explicit FormatKind chosen from the toolchain version.
"""

from dataclasses import dataclass, field
from enum import Enum

from ..validation.exceptions import UnsupportedFormatError
from .toolchain import ToolchainInfo


@dataclass(frozen=True)
class Device:
    """
    A simulator or physical device.

    Two devices are equal when their identifiers are equal. For legacy
    simulator listings the identifier is the full description line.
    """

    name: str = field(compare=False)
    os_version: str = field(compare=False)
    identifier: str


class FormatKind(Enum):
    """Device listing formats emitted by different toolchain versions."""

    # Xcode 5.1: "iPad Retina - Simulator - iOS 7.1"
    LEGACY = "legacy"
    # Xcode >= 6: "iPhone 6 (9.0) [3EDC9C6E-3096-48BF-BCEC-7A5CAF8AA706]"
    MODERN = "modern"

    @classmethod
    def for_toolchain(cls, toolchain: ToolchainInfo) -> "FormatKind":
        """
        Select the listing format for a toolchain.

        Raises:
            UnsupportedFormatError: If the toolchain predates 5.1
        """
        if toolchain.version_at_least("6.0"):
            return cls.MODERN
        if toolchain.version_at_least("5.1"):
            return cls.LEGACY
        raise UnsupportedFormatError(
            f"Toolchain version '{toolchain}' is not supported", format_hint=toolchain
        )
