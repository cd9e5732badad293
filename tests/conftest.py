"""
Pytest configuration and shared fixtures for the runloop test suite.

This module provides common fixtures (temporary directories, captured tool
output samples) and resets process-wide state between tests.
"""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from runloop.cache import reset_default_cache  # noqa: E402
from runloop.config import clear_config_cache, get_config_path, set_config_path  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_process_state():
    """Drop the default host cache and cached configuration around each test."""
    config_path = get_config_path()
    reset_default_cache()
    clear_config_cache()
    yield
    reset_default_cache()
    set_config_path(config_path)


# ============================================================================
# Captured Tool Output
# ============================================================================


@pytest.fixture
def ps_output_with_wrapper():
    """`ps x -o pid,command | grep -v grep | grep instruments` with a shell wrapper."""
    return (
        '98081 sh -c xcrun instruments -w "43be3f89d9587e9468c24672777ff6241bd91124" -t Automation\n'
        "98082 /Xcode/6.0.1/Xcode.app/Contents/Developer/usr/bin/instruments -w "
        "43be3f89d9587e9468c24672777ff6241bd91124 -t Automation\n"
    )


@pytest.fixture
def xcode5_devices_output():
    return "\n".join([
        "Known Devices:",
        "stern [43be3f89d9587e9468c24672777ff6241bd91124]",
        "iPhone - Simulator - iOS 7.1",
        "iPhone Retina (3.5-inch) - Simulator - iOS 7.1",
        "iPhone Retina (4-inch 64-bit) - Simulator - iOS 7.1",
        "iPad Retina - Simulator - iOS 7.1",
    ])


@pytest.fixture
def xcode6_devices_output():
    return "\n".join([
        "Known Devices:",
        "mercury [5AB7E1A7-5D8E-4F3F-9D3F-5A9A6A2B1C11]",
        "stern (8.0.2) [43be3f89d9587e9468c24672777ff6241bd91124]",
        "Resizable iPad (8.1 Simulator) [021F3D1C-4BC0-4F65-B8DA-B9E3B8A3C9A1]",
        "iPad Retina (8.3 Simulator) [EA79555F-ADB4-4D75-930C-A745EAC8FA8B]",
        "iPhone 6 Plus (8.3 Simulator) [6E43E3CF-25F5-41CC-A833-588F043AE749]",
    ])


@pytest.fixture
def xcode7_devices_output():
    return "\n".join([
        "Known Devices:",
        "mercury [5AB7E1A7-5D8E-4F3F-9D3F-5A9A6A2B1C11]",
        "neptune (9.0) [43be3f89d9587e9468c24672777ff6241bd91124]",
        "uranus (9.0) [00008030-001A2C3E0C88802E]",
        "Apple TV 1080p (9.0) [D6875A98-2C0E-4138-85EF-841025A54DE0]",
        "iPhone 6 (9.0) [3EDC9C6E-3096-48BF-BCEC-7A5CAF8AA706]",
        "iPhone 6 (9.0) + Apple Watch - 38mm (2.0) [EE3C200C-69BA-4816-A087-0457C5FCEDA0]",
        "iPad Air 2 (9.0) [C4AA8D40-2AB6-4A29-8C4F-6C5E5BCE9D6A]",
    ])
