"""Unit tests for utils/logging_config.py."""

import logging

import pytest

from conference_portal.utils.logging_config import (
    NOISY_LOGGERS,
    configure_logger,
    get_logger,
)


class TestConfigureLogger:
    """Test logger configuration."""

    def teardown_method(self):
        configure_logger("WARNING")

    def test_sets_root_level(self):
        """Test the requested level is applied to the root logger."""
        configure_logger("DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_level_is_case_insensitive(self):
        """Test lower-case level names are accepted."""
        configure_logger("info")
        assert logging.getLogger().level == logging.INFO

    def test_noisy_loggers_are_quieted(self):
        """Test HTTP and imaging loggers stay at WARNING even in debug mode."""
        configure_logger("DEBUG")
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_unknown_level(self):
        """Test an unknown level name is rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logger("LOUD")

    def test_get_logger_accepts_keyword_events(self):
        """Test loggers take structured key/value pairs."""
        configure_logger("DEBUG", json_output=True)
        logger = get_logger("conference_portal.tests")
        logger.info("Test event", submission_id="ICMBNT-001", count=2)
