"""Tests for logging configuration."""

import io

import pytest

from paperhand_common.logging_config import configure_logging, get_logger


class TestLoggingConfiguration:
    """Test logging configuration and logger creation."""

    def test_configure_logging_sets_up_structlog(self):
        """Test configure_logging initializes structlog correctly."""
        configure_logging(level="INFO", json_output=True)

        logger = get_logger("test_module")

        # Duck typing - structlog returns a lazy proxy
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        assert hasattr(logger, "debug")
        assert callable(logger.info)

    def test_logger_name_preserved(self):
        """Loggers requested under different names are distinct."""
        configure_logging(level="DEBUG", json_output=False)

        logger1 = get_logger("module_a")
        logger2 = get_logger("module_b")

        assert logger1 is not logger2

    def test_json_output_mode_configured(self):
        """JSON output mode can be configured and used without errors."""
        try:
            configure_logging(level="INFO", json_output=True)
            logger = get_logger("test")
            logger.info("test_event", key1="value1", key2=42)
        except Exception as e:
            pytest.fail(f"JSON logging configuration failed: {e}")

    def test_custom_stream_accepted(self):
        """A custom stream can be passed without errors."""
        buffer = io.StringIO()
        configure_logging(level="WARNING", json_output=True, stream=buffer)
        logger = get_logger("stream_test")
        logger.warning("stream_event", detail="x")

    def test_different_log_levels(self):
        """Test different log levels can be configured."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            configure_logging(level=level, json_output=False)
            logger = get_logger(f"test_{level}")
            assert logger is not None
