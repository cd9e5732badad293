"""
Parsers for miscellaneous instruments output.

- the tool version, printed to stderr when run without arguments
- the template listing of ``instruments -s templates``
- stderr noise that should not reach the user
"""

import logging
from typing import Iterable, List, Optional

from ..models.device import FormatKind
from ..models.toolchain import ToolchainInfo, ToolchainVersion
from .device_parser import extract_version

logger = logging.getLogger(__name__)

DEFAULT_SPAM_PATTERNS = ("WebKit Threading Violation",)
TEMPLATES_HEADER = "Known Templates:"
TEMPLATE_SUFFIX = "tracetemplate"


def parse_version(stderr: str) -> Optional[ToolchainVersion]:
    """
    Extract the tool version from ``instruments`` stderr.

    Example input: ``instruments, version 7.0 (58143.1)``
    """
    version = extract_version(stderr)
    if version is None:
        logger.debug("No version found in instruments output")
        return None
    return ToolchainVersion(version)


def parse_templates(stdout: str, toolchain: ToolchainInfo) -> List[str]:
    """
    Parse the template listing.

    Depending on the Xcode version templates are either:

    * a full path to the template (Xcode 5.1 and Xcode 6 betas)
    * the name of a template (Xcode >= 6)

    so the listing cannot simply be filtered on ``tracetemplate`` for every
    version. Templates users have saved are always full paths.

    Raises:
        UnsupportedFormatError: If the toolchain predates 5.1
    """
    format_kind = FormatKind.for_toolchain(toolchain)
    if format_kind is FormatKind.MODERN:
        templates = []
        for line in stdout.splitlines():
            stripped = line.strip().replace('"', "")
            if stripped and stripped != TEMPLATES_HEADER:
                templates.append(stripped)
        return templates

    return [line.strip() for line in stdout.splitlines() if TEMPLATE_SUFFIX in line]


def filter_stderr_spam(
    stderr: str, patterns: Iterable[str] = DEFAULT_SPAM_PATTERNS
) -> List[str]:
    """
    Drop known-noise lines from stderr and log the rest as warnings.

    Xcode 6 GM spams "WebKit Threading Violations" on every invocation.

    Returns:
        The lines that were kept
    """
    patterns = tuple(patterns)
    kept = []
    for line in stderr.strip().splitlines():
        if not line.strip() or any(pattern in line for pattern in patterns):
            continue
        kept.append(line)
        logger.warning(f"instruments: {line}")
    return kept
