"""
Device and simulator listing parsers.

``instruments -s devices`` prints one device per line, in a format that
depends on the Xcode version:

**Xcode 5.1**::

    iPad Retina - Simulator - iOS 7.1

**Xcode 6**::

    iPad Retina (8.3 Simulator) [EA79555F-ADB4-4D75-930C-A745EAC8FA8B]

**Xcode 7**::

    iPhone 6 (9.0) [3EDC9C6E-3096-48BF-BCEC-7A5CAF8AA706]
    iPhone 6 (9.0) + Apple Watch - 38mm (2.0) [EE3C200C-69BA-4816-A087-0457C5FCEDA0]

Physical devices appear in every format as ``<name> (<version>) [<udid>]``.
Each format has its own pure line parser; lines a parser does not recognize
are dropped.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Union

from ..models.device import Device, FormatKind
from ..validation import UnsupportedFormatError

logger = logging.getLogger(__name__)

VERSION_REGEX = re.compile(r"\d+\.\d+(?:\.\d+)?")
CORE_SIMULATOR_UDID_REGEX = re.compile(r"[A-F0-9]{8}-(?:[A-F0-9]{4}-){3}[A-F0-9]{12}")
DEVICE_UDID_REGEX = re.compile(r"\[([a-f0-9]{40}|[A-F0-9]{8}-[A-F0-9]{16})\]")
NAME_DELIMITER_REGEX = re.compile(r"[(\[]")

LEGACY_SIMULATOR_MARKER = "Simulator"
LEGACY_NAME_SEPARATOR = " - Simulator"
# A simulator paired with a watch is not independently addressable.
PAIRED_ACCESSORY_MARKER = "Apple Watch"

LineParser = Callable[[str], Optional[Device]]


def extract_version(line: str) -> Optional[str]:
    """Return the first ``major.minor[.patch]`` token in ``line``."""
    match = VERSION_REGEX.search(line)
    return match.group(0) if match else None


def _leading_name(line: str) -> str:
    return NAME_DELIMITER_REGEX.split(line, 1)[0].strip()


def parse_legacy_line(line: str) -> Optional[Device]:
    """
    Parse ``<name> - Simulator - <version>``.

    The identifier is the full line as given; legacy listings carry no UDID.
    """
    stripped = line.strip()
    if not stripped or CORE_SIMULATOR_UDID_REGEX.search(stripped):
        return None
    if LEGACY_SIMULATOR_MARKER not in stripped:
        return None
    version = extract_version(stripped)
    if version is None:
        return None
    name = stripped.split(LEGACY_NAME_SEPARATOR, 1)[0].strip()
    return Device(name=name, os_version=version, identifier=line)


def parse_modern_line(line: str) -> Optional[Device]:
    """
    Parse ``<name> (<version>[, <extra>]) [paired info] [<UDID>]``.

    Lines without a CoreSimulator UDID fall back to the legacy grammar.
    Lines describing a simulator paired with a watch are rejected.
    """
    stripped = line.strip()
    udid_match = CORE_SIMULATOR_UDID_REGEX.search(stripped)
    if udid_match is None:
        return parse_legacy_line(line)
    if PAIRED_ACCESSORY_MARKER in stripped:
        return None
    version = extract_version(stripped)
    if version is None:
        return None
    return Device(
        name=_leading_name(stripped),
        os_version=version,
        identifier=udid_match.group(0),
    )


def parse_physical_line(line: str) -> Optional[Device]:
    """Parse ``<name> (<version>) [<udid>]`` for a physical device."""
    stripped = line.strip()
    udid_match = DEVICE_UDID_REGEX.search(stripped)
    if udid_match is None:
        return None
    return Device(
        name=_leading_name(stripped),
        os_version=extract_version(stripped) or "",
        identifier=udid_match.group(1),
    )


_SIMULATOR_PARSERS: Dict[FormatKind, LineParser] = {
    FormatKind.LEGACY: parse_legacy_line,
    FormatKind.MODERN: parse_modern_line,
}


def _resolve_format(format_hint: Union[FormatKind, str]) -> FormatKind:
    if isinstance(format_hint, FormatKind):
        return format_hint
    if isinstance(format_hint, str):
        try:
            return FormatKind(format_hint.strip().lower())
        except ValueError:
            pass
    raise UnsupportedFormatError(
        f"No device listing parser for format '{format_hint}'", format_hint=format_hint
    )


def _parse_lines(raw_listing: str, line_parser: LineParser) -> List[Device]:
    devices = []
    for line in raw_listing.splitlines():
        device = line_parser(line)
        if device is None:
            if line.strip():
                logger.debug(f"Skipping device listing line: '{line.strip()}'")
            continue
        devices.append(device)
    return devices


def parse(raw_listing: str, format_hint: Union[FormatKind, str]) -> List[Device]:
    """
    Parse a simulator listing.

    Args:
        raw_listing: stdout of ``instruments -s devices``
        format_hint: The listing format, usually ``FormatKind.for_toolchain``

    Returns:
        Simulators in listing order

    Raises:
        UnsupportedFormatError: If ``format_hint`` is not a known format
    """
    return _parse_lines(raw_listing, _SIMULATOR_PARSERS[_resolve_format(format_hint)])


def parse_physical_devices(raw_listing: str) -> List[Device]:
    """Parse the physical devices out of a device listing of any format."""
    return _parse_lines(raw_listing, parse_physical_line)


class DeviceTextParser:
    """Object interface over the listing parsers."""

    def __init__(self, format_hint: Union[FormatKind, str] = FormatKind.MODERN):
        self.format_kind = _resolve_format(format_hint)

    def parse(self, raw_listing: str) -> List[Device]:
        return parse(raw_listing, self.format_kind)

    def parse_physical(self, raw_listing: str) -> List[Device]:
        return parse_physical_devices(raw_listing)
