"""
Logging configuration and management.

This module sets up structured logging for WooWoo tools from the ``logging``
configuration section: standard, detailed or JSON formats, console output
and optional (rotating) log files.
"""

import json
import logging
import logging.handlers
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


# Standard LogRecord attributes, excluded from JSON extra fields
_STANDARD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'message', 'taskName'
})


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "message": record.getMessage(),
            "logger": record.name,
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr_name, attr_value in record.__dict__.items():
            if not attr_name.startswith('_') and attr_name not in _STANDARD_ATTRS:
                if not callable(attr_value):
                    log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        try:
            return json.dumps(log_data, default=str, ensure_ascii=False, separators=(',', ':'))
        except (TypeError, ValueError):
            # Fallback for non-serializable data
            return json.dumps({
                "timestamp": log_data["timestamp"],
                "level": log_data["level"],
                "logger": log_data["logger"],
                "message": str(record.getMessage()),
                "serialization_error": "Failed to serialize additional data"
            }, separators=(',', ':'))


class LoggingManager:
    """
    Configures the root logger from logging settings.
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        log_format: LogFormat = LogFormat.STANDARD,
        log_file: Optional[Path] = None,
        enable_console: bool = True,
        enable_rotation: bool = False,
        max_file_size: str = "10MB",
        backup_count: int = 5
    ):
        self.log_level = log_level
        self.log_format = log_format
        self.log_file = log_file
        self.enable_console = enable_console
        self.enable_rotation = enable_rotation
        self.max_file_size = max_file_size
        self.backup_count = backup_count

    @classmethod
    def from_config(cls, logging_config: Dict[str, Any], **overrides: Any) -> "LoggingManager":
        """
        Create a manager from the ``logging`` configuration section.

        Args:
            logging_config: Section with ``level``, ``format``, ``file``,
                ``rotation`` and ``max_file_size`` entries
            **overrides: Constructor arguments taking precedence

        Returns:
            Configured (not yet applied) LoggingManager
        """
        log_file = logging_config.get("file")
        options: Dict[str, Any] = {
            "log_level": LogLevel.from_name(logging_config.get("level", "INFO")),
            "log_format": LogFormat(logging_config.get("format", "standard")),
            "log_file": Path(log_file) if log_file else None,
            "enable_rotation": bool(logging_config.get("rotation", False)),
            "max_file_size": logging_config.get("max_file_size", "10MB"),
        }
        options.update(overrides)
        return cls(**options)

    def create_formatter(self) -> logging.Formatter:
        """Create the formatter for the configured format."""
        if self.log_format == LogFormat.JSON:
            return JSONFormatter()
        if self.log_format == LogFormat.DETAILED:
            return logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
            )
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def setup_root_logger(self, console_handler: Optional[logging.Handler] = None) -> logging.Logger:
        """
        Apply the configuration to the root logger.

        Args:
            console_handler: Handler to use for console output instead of a
                plain StreamHandler (the CLI passes a RichHandler)

        Returns:
            The root logger
        """
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level.value)

        # Clear existing handlers
        root_logger.handlers.clear()

        formatter = self.create_formatter()

        if self.enable_console:
            if console_handler is None:
                console_handler = logging.StreamHandler()
                console_handler.setFormatter(formatter)
            console_handler.setLevel(self.log_level.value)
            root_logger.addHandler(console_handler)

        if self.log_file:
            file_handler = self._create_file_handler()
            file_handler.setLevel(self.log_level.value)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        return root_logger

    def _create_file_handler(self) -> logging.Handler:
        """Create appropriate file handler based on rotation settings."""
        if self.enable_rotation:
            return logging.handlers.RotatingFileHandler(
                filename=self.log_file,
                maxBytes=parse_file_size(self.max_file_size),
                backupCount=self.backup_count,
                encoding="utf-8"
            )
        return logging.FileHandler(self.log_file, encoding="utf-8")


def parse_file_size(size: str) -> int:
    """Parse sizes such as '512KB', '10MB' or '1GB' into bytes."""
    units = {"KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}
    size = size.strip().upper()
    for suffix, factor in units.items():
        if size.endswith(suffix):
            return int(size[:-len(suffix)]) * factor
    return int(size)
