#!/usr/bin/env python3
"""Tests for the structured logger."""

import logging

import pytest

from sealkit.core.config import ConfigManager, set_global_config
from sealkit.core.logging import (
    LogLevel,
    Logger,
    file_handler,
    get_logger,
    parse_level,
    set_global_logger,
)


class TestParseLevel:
    """Tests for level parsing."""

    def test_log_levels_match_stdlib(self):
        assert LogLevel.DEBUG == logging.DEBUG
        assert LogLevel.WARNING == logging.WARNING
        assert LogLevel.CRITICAL == logging.CRITICAL

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("debug", LogLevel.DEBUG),
            (" Warning ", LogLevel.WARNING),
            (logging.ERROR, LogLevel.ERROR),
            (LogLevel.INFO, LogLevel.INFO),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_level(value) == expected

    @pytest.mark.parametrize("value", ["LOUD", "", 11])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_level(value)


class TestLogger:
    """Tests for Logger."""

    def test_context_appended(self, log_handler):
        """Context renders as key=value after a separator."""
        get_logger().debug("Encoded", transform="aes", size=3)

        assert log_handler.messages == ["Encoded | transform=aes size=3"]
        assert log_handler.records[0].context == {"transform": "aes", "size": 3}

    def test_add_context_is_scoped(self, log_handler):
        """Pushed context disappears when the block exits."""
        logger = get_logger()

        with logger.add_context(command="decode"):
            with logger.add_context(step=1):
                logger.debug("nested")
            logger.debug("inside")
        logger.debug("outside")

        assert log_handler.messages == [
            "nested | command=decode step=1",
            "inside | command=decode",
            "outside",
        ]

    def test_call_context_overrides_block_context(self, log_handler):
        logger = get_logger()

        with logger.add_context(step=1):
            logger.warning("retry", step=2)

        assert log_handler.messages == ["retry | step=2"]

    def test_level_filtering(self, log_handler):
        """Messages below the level are dropped."""
        logger = get_logger()
        logger.set_level("warning")

        logger.debug("hidden")
        logger.warning("shown")

        assert log_handler.messages == ["shown"]
        assert logger.get_level() == LogLevel.WARNING

    def test_invalid_level_name(self):
        with pytest.raises(ValueError):
            Logger(level="LOUD", handlers=[])

    def test_file_handler(self, tmp_path):
        """Rotating file handler writes formatted lines."""
        logger = Logger(name="sealkit.test.file", handlers=[])
        handler = file_handler(tmp_path / "sealkit.log")
        logger.add_handler(handler)

        logger.warning("to file", step=1)
        handler.close()

        line = (tmp_path / "sealkit.log").read_text()
        assert "sealkit.test.file - WARNING - to file | step=1" in line

class TestGlobalLogger:
    """Tests for get_logger / set_global_logger."""

    def test_level_from_config(self):
        """The shared logger takes its level from configuration."""
        config = ConfigManager(load_environment=False)
        config.set("sealkit.logging.level", "DEBUG")
        set_global_config(config)

        assert get_logger().get_level() == LogLevel.DEBUG

    def test_default_level_is_warning(self):
        assert get_logger().get_level() == LogLevel.WARNING

    def test_unknown_config_level_falls_back(self):
        """A bad level in configuration never breaks logger creation."""
        config = ConfigManager(load_environment=False)
        config.set("sealkit.logging.level", "LOUD")
        set_global_config(config)

        assert get_logger().get_level() == LogLevel.WARNING

    def test_get_logger_cached(self):
        assert get_logger() is get_logger()

    def test_set_global_logger(self):
        logger = Logger(handlers=[])
        set_global_logger(logger)

        assert get_logger() is logger
