"""
Unit tests for configuration loading and the process-wide config cache.
"""

import tomllib
from pathlib import Path

import pytest

from runloop.config import (
    clear_config_cache,
    get_config,
    get_config_path,
    is_config_loaded,
    load_toml_file,
    set_config_path,
)
from runloop.validation import ValidationError

REPO_CONFIG = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"

SAMPLE_TOML = """
[supervisor]
max_attempts = 5
poll_interval = 0.2

[cache]
filename = "host.db"
"""


@pytest.fixture
def config_file(temp_dir):
    path = temp_dir / "config.toml"
    path.write_text(SAMPLE_TOML)
    return path


@pytest.mark.unit
class TestLoadTomlFile:
    """Test cases for the TOML loader."""

    def test_load(self, config_file):
        data = load_toml_file(config_file)
        assert data["supervisor"]["max_attempts"] == 5

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_toml_file(temp_dir / "absent.toml")

    def test_malformed_file(self, temp_dir):
        path = temp_dir / "broken.toml"
        path.write_text("[supervisor\nmax_attempts = ")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml_file(path)


@pytest.mark.unit
class TestConfigManager:
    """Test cases for get_config and friends."""

    def test_default_path_points_at_repo_config(self):
        assert get_config_path().resolve() == REPO_CONFIG.resolve()

    def test_repo_config_is_valid(self):
        set_config_path(REPO_CONFIG)
        config = get_config()
        assert config.supervisor.tool_name == "instruments"
        assert config.instruments.launcher == "xcrun"

    def test_config_is_cached(self, config_file):
        set_config_path(config_file)
        assert not is_config_loaded()

        first = get_config()
        second = get_config()

        assert first is second
        assert is_config_loaded()
        assert first.supervisor.max_attempts == 5
        assert first.cache.filename == "host.db"

    def test_clear_forces_reload(self, config_file):
        set_config_path(config_file)
        first = get_config()

        config_file.write_text("[supervisor]\nmax_attempts = 7\n")
        assert get_config() is first

        clear_config_cache()
        assert get_config().supervisor.max_attempts == 7

    def test_missing_config_file(self, temp_dir):
        set_config_path(temp_dir / "absent.toml")
        with pytest.raises(FileNotFoundError):
            get_config()

    def test_invalid_values(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[supervisor]\nmax_attempts = 0\n")
        set_config_path(path)
        with pytest.raises(ValidationError):
            get_config()

    def test_unknown_keys_are_reported(self, temp_dir, caplog):
        path = temp_dir / "config.toml"
        path.write_text("[supervisor]\nmax_attempt = 3\n\n[monitor]\ninterval = 1\n")
        set_config_path(path)

        config = get_config()

        assert config.supervisor.max_attempts == 10
        assert "unknown key supervisor.max_attempt" in caplog.text
        assert "unknown section [monitor]" in caplog.text
