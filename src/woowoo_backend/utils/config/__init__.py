"""
Configuration management package for WooWoo.
"""

from .manager import ConfigManager, deep_merge_dicts
from .paths import ConfigPaths, DEFAULT_CONFIG
from .file_operations import FileOperations
from .schema_validation import SchemaValidator, CONFIG_SCHEMA
from .environment import EnvironmentHandler

__all__ = [
    "ConfigManager",
    "ConfigPaths",
    "DEFAULT_CONFIG",
    "CONFIG_SCHEMA",
    "FileOperations",
    "SchemaValidator",
    "EnvironmentHandler",
    "deep_merge_dicts",
]
