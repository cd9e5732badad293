"""
Unit tests for version, template and stderr output parsing.
"""

import logging

import pytest

from runloop.instruments.output import filter_stderr_spam, parse_templates, parse_version
from runloop.models.toolchain import ToolchainVersion
from runloop.validation import UnsupportedFormatError

XCODE6_TEMPLATES = """Known Templates:
"Activity Monitor"
"Allocations"
"Automation"
"Blank"
"""

XCODE51_TEMPLATES = """Known Templates:
/Applications/Xcode.app/Contents/Applications/Instruments.app/Contents/PlugIns/AutomationInstrument.bundle/Contents/Resources/Automation.tracetemplate
/Applications/Xcode.app/Contents/Applications/Instruments.app/Contents/Resources/templates/Blank.tracetemplate
Some other line
"""


@pytest.mark.unit
class TestParseVersion:
    """Test cases for parse_version."""

    def test_version_from_stderr(self):
        version = parse_version("instruments, version 6.1 (56160)\nusage: instruments ...")
        assert version == ToolchainVersion("6.1")

    def test_no_version(self):
        assert parse_version("usage: instruments [-t template]") is None


@pytest.mark.unit
class TestParseTemplates:
    """Test cases for parse_templates."""

    def test_modern_templates_are_names(self):
        templates = parse_templates(XCODE6_TEMPLATES, ToolchainVersion("6.0"))
        assert templates == ["Activity Monitor", "Allocations", "Automation", "Blank"]

    def test_legacy_templates_are_paths(self):
        templates = parse_templates(XCODE51_TEMPLATES, ToolchainVersion("5.1.1"))
        assert len(templates) == 2
        assert all(template.endswith(".tracetemplate") for template in templates)

    def test_unsupported_toolchain(self):
        with pytest.raises(UnsupportedFormatError):
            parse_templates(XCODE51_TEMPLATES, ToolchainVersion("5.0"))


@pytest.mark.unit
class TestFilterStderrSpam:
    """Test cases for filter_stderr_spam."""

    def test_drops_spam_and_logs_the_rest(self, caplog):
        stderr = "\n".join([
            "2014-09-05 WebKit Threading Violation - initial use of WebKit from a secondary thread.",
            "",
            "Instruments Trace Error : target failed to run",
        ])
        with caplog.at_level(logging.WARNING):
            kept = filter_stderr_spam(stderr)

        assert kept == ["Instruments Trace Error : target failed to run"]
        assert "WebKit" not in caplog.text
        assert "target failed to run" in caplog.text

    def test_custom_patterns(self):
        assert filter_stderr_spam("noise: a\nsignal: b", patterns=["noise"]) == ["signal: b"]

    def test_empty_stderr(self):
        assert filter_stderr_spam("") == []
