#!/usr/bin/env python3
"""Tests for the configuration manager."""

import pytest

from sealkit.core.config import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    get_config_manager,
    set_global_config,
)
from sealkit.core.constants import ErrorCode


class TestConfigDefaults:
    """Tests for compiled defaults."""

    def test_default_values(self):
        """Defaults keep legacy empty-on-failure behaviour."""
        config = ConfigManager()

        assert config.get("sealkit.errors.strict") is False
        assert config.get("sealkit.compression.level") == 6
        assert config.get("sealkit.logging.level") == "WARNING"
        assert config.get("sealkit.pipeline") == []

    def test_missing_key_returns_default(self):
        """Unknown keys fall back to the supplied default."""
        config = ConfigManager()

        assert config.get("sealkit.nope", "fallback") == "fallback"
        assert config.get("sealkit.errors.strict.deeper") is None

    def test_defaults_not_shared_between_instances(self):
        """Mutating one manager does not leak into another."""
        first = ConfigManager()
        first.set("sealkit.compression.level", 1, ConfigSource.COMPILED_DEFAULTS)

        assert ConfigManager().get("sealkit.compression.level") == 6


class TestConfigFile:
    """Tests for YAML loading."""

    def test_load_file(self, config_file):
        """Values from the file override defaults."""
        config = ConfigManager(str(config_file))

        assert config.get("sealkit.errors.strict") is True
        assert config.get("sealkit.compression.level") == 9
        assert config.get("sealkit.pipeline")[1] == {"type": "aes", "key": "secret"}
        # Untouched defaults remain visible
        assert config.get("sealkit.logging.file") is None

    def test_missing_file(self, tmp_path):
        """Missing files raise NOT_FOUND."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(str(tmp_path / "absent.yaml"))

        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, tmp_path):
        """Unparseable YAML raises INVALID_INPUT."""
        path = tmp_path / "bad.yaml"
        path.write_text("sealkit: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(str(path))

        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_non_mapping_yaml(self, tmp_path):
        """A YAML list is not a valid configuration."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            ConfigManager(str(path))


class TestConfigEnvironment:
    """Tests for SEALKIT_* environment variables."""

    def test_environment_overrides_file(self, monkeypatch, config_file):
        """Environment beats the user config file."""
        monkeypatch.setenv("SEALKIT_ERRORS_STRICT", "false")
        monkeypatch.setenv("SEALKIT_COMPRESSION_LEVEL", "1")

        config = ConfigManager(str(config_file))

        assert config.get("sealkit.errors.strict") is False
        assert config.get("sealkit.compression.level") == 1

    def test_multi_word_key(self, monkeypatch):
        """Only the first underscore separates section from key."""
        monkeypatch.setenv("SEALKIT_LOGGING_LOG_FILE", "/tmp/x.log")

        config = ConfigManager()

        assert config.get("sealkit.logging.log_file") == "/tmp/x.log"

    def test_environment_can_be_disabled(self, monkeypatch):
        """load_environment=False ignores the environment."""
        monkeypatch.setenv("SEALKIT_ERRORS_STRICT", "true")

        assert ConfigManager(load_environment=False).get("sealkit.errors.strict") is False

    def test_parse_env_value(self):
        """Values are parsed to bool, int, float or str."""
        config = ConfigManager(load_environment=False)

        assert config._parse_env_value("yes") is True
        assert config._parse_env_value("OFF") is False
        assert config._parse_env_value("1") == 1
        assert config._parse_env_value("2.5") == 2.5
        assert config._parse_env_value("DEBUG") == "DEBUG"


class TestConfigRuntime:
    """Tests for runtime updates and merging."""

    def test_set_and_get_value(self):
        """Runtime values win and report their source."""
        config = ConfigManager(load_environment=False)
        config.set("sealkit.errors.strict", True)

        value = config.get_value("sealkit.errors.strict")
        assert value.value is True
        assert value.source == ConfigSource.RUNTIME

    def test_get_all_deep_merges(self):
        """Merged view keeps sibling keys from lower sources."""
        config = ConfigManager(load_environment=False)
        config.load_dict({"sealkit": {"compression": {"level": 3}}})

        merged = config.get_all()

        assert merged["sealkit"]["compression"]["level"] == 3
        assert merged["sealkit"]["errors"]["strict"] is False

    def test_clear(self):
        """clear() drops everything except defaults."""
        config = ConfigManager(load_environment=False)
        config.set("sealkit.compression.level", 2)
        config.clear()

        assert config.get("sealkit.compression.level") == 6

    def test_clear_single_source(self):
        """clear(source) never removes compiled defaults."""
        config = ConfigManager(load_environment=False)
        config.clear(ConfigSource.COMPILED_DEFAULTS)

        assert config.get("sealkit.compression.level") == 6


class TestGlobalConfig:
    """Tests for the module-level singleton."""

    def test_get_config_manager_is_cached(self):
        assert get_config_manager() is get_config_manager()

    def test_set_global_config(self):
        config = ConfigManager(load_environment=False)
        set_global_config(config)

        assert get_config_manager() is config
