"""
Utility modules for WooWoo: configuration and logging.
"""

from .config import ConfigManager
from .logging_config import LoggingManager, LogLevel, LogFormat, JSONFormatter

__all__ = [
    "ConfigManager",
    "LoggingManager",
    "LogLevel",
    "LogFormat",
    "JSONFormatter",
]
