"""
Tests for logging configuration.
"""

import json
import logging
import logging.handlers

import pytest

from woowoo_backend.utils.logging_config import (
    JSONFormatter,
    LogFormat,
    LoggingManager,
    LogLevel,
    parse_file_size,
)


def make_record(message="parsed", **extra):
    record = logging.LogRecord(
        name="woowoo_backend.core.parser",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogLevel:
    """Tests for log level names."""

    def test_from_name_is_case_insensitive(self):
        """Test configured names map to levels."""
        assert LogLevel.from_name("debug") is LogLevel.DEBUG
        assert LogLevel.from_name("WARNING").value == logging.WARNING

    def test_unknown_name(self):
        """Test unknown levels raise ValueError."""
        with pytest.raises(ValueError):
            LogLevel.from_name("loud")


class TestJSONFormatter:
    """Tests for structured log output."""

    def test_output_is_single_line_json(self):
        """Test the standard fields are present."""
        output = JSONFormatter().format(make_record())
        data = json.loads(output)
        assert "\n" not in output
        assert data["message"] == "parsed"
        assert data["level"] == "INFO"
        assert data["logger"] == "woowoo_backend.core.parser"

    def test_extra_fields_included(self):
        """Test values passed through ``extra`` are serialized."""
        data = json.loads(JSONFormatter().format(make_record(pattern_name="document_part")))
        assert data["pattern_name"] == "document_part"


class TestLoggingManager:
    """Tests for LoggingManager."""

    def test_from_config(self, temp_directory):
        """Test the logging section maps onto manager options."""
        manager = LoggingManager.from_config({
            "level": "error",
            "format": "json",
            "file": str(temp_directory / "woowoo.log"),
            "rotation": True,
            "max_file_size": "1MB",
        })
        assert manager.log_level is LogLevel.ERROR
        assert manager.log_format is LogFormat.JSON
        assert manager.log_file == temp_directory / "woowoo.log"
        assert manager.enable_rotation is True

    def test_overrides_take_precedence(self):
        """Test keyword overrides replace configured values."""
        manager = LoggingManager.from_config({"level": "WARNING"}, log_level=LogLevel.DEBUG)
        assert manager.log_level is LogLevel.DEBUG

    @pytest.mark.parametrize("log_format,formatter_type", [
        (LogFormat.JSON, JSONFormatter),
        (LogFormat.STANDARD, logging.Formatter),
        (LogFormat.DETAILED, logging.Formatter),
    ])
    def test_create_formatter(self, log_format, formatter_type):
        """Test formatters match the configured format."""
        assert isinstance(LoggingManager(log_format=log_format).create_formatter(), formatter_type)

    def test_setup_root_logger_with_file(self, temp_directory, preserve_root_logger):
        """Test console and file handlers are attached."""
        log_file = temp_directory / "woowoo.log"
        manager = LoggingManager(log_level=LogLevel.INFO, log_file=log_file)
        root_logger = manager.setup_root_logger()

        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 2
        logging.getLogger("woowoo_logging_test").info("written to file")
        for handler in root_logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_rotating_file_handler(self, temp_directory, preserve_root_logger):
        """Test rotation uses a size-limited handler."""
        manager = LoggingManager(
            log_file=temp_directory / "woowoo.log",
            enable_console=False,
            enable_rotation=True,
            max_file_size="1KB",
        )
        root_logger = manager.setup_root_logger()
        assert len(root_logger.handlers) == 1
        handler = root_logger.handlers[0]
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == 1024

    def test_custom_console_handler(self, preserve_root_logger):
        """Test a provided console handler replaces the stream handler."""
        console_handler = logging.NullHandler()
        root_logger = LoggingManager(log_level=LogLevel.DEBUG).setup_root_logger(console_handler)
        assert root_logger.handlers == [console_handler]
        assert console_handler.level == logging.DEBUG


class TestParseFileSize:
    """Tests for size strings."""

    @pytest.mark.parametrize("size,expected", [
        ("512KB", 512 * 1024),
        ("10MB", 10 * 1024 ** 2),
        ("1gb", 1024 ** 3),
        ("2048", 2048),
    ])
    def test_sizes(self, size, expected):
        """Test units are converted to bytes."""
        assert parse_file_size(size) == expected
