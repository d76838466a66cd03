"""
Main configuration manager for WooWoo.

This module provides the ConfigManager class that orchestrates loading,
merging with built-in defaults, environment variable overrides and schema
validation of the WooWoo configuration.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
)
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import DEFAULT_CONFIG, ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)


def deep_merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_dicts(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


class ConfigManager:
    """
    Configuration manager for WooWoo.

    Handles loading, validation, and merging of configuration from multiple sources:
    - Built-in defaults
    - The JSON configuration file (optional unless named explicitly)
    - Environment variables (``WOOWOO_*``, optionally from a .env file)
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to configuration file (default: woowoo.config.json).
                An explicitly given file must exist.
            project_root: Project root directory (default: current working directory)
            load_env: Whether to load environment variables from .env file
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.explicit_config_file = config_file is not None
        self.config_file = config_file or self.paths.DEFAULT_CONFIG_FILE

        self._config: Dict[str, Any] = {}
        self._loaded = False

        self.logger = logger

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator()
        self.env_handler = EnvironmentHandler()

        if load_env:
            self.file_ops.load_environment_variables()

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._loaded

    def load_config(self, force_reload: bool = False, validate: bool = True) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded
            validate: Whether to validate configuration against schema

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicitly named file is missing
            ConfigurationValidationError: If validation fails
            ConfigurationError: If loading fails otherwise
        """
        if self._loaded and not force_reload:
            self.logger.debug("Configuration already loaded, returning cached version")
            return deepcopy(self._config)

        self.logger.debug(f"Loading configuration from {self.config_file}")

        try:
            file_config = self._load_file_config()
            merged_config = deep_merge_dicts(DEFAULT_CONFIG, file_config)
            merged_config = self.env_handler.apply_environment_overrides(merged_config)

            if validate:
                self.schema_validator.validate_config_against_schema(
                    merged_config, config_file=str(self.config_file)
                )
        except ConfigurationError as e:
            self.logger.error(f"Configuration loading failed: {e}")
            self._loaded = False
            raise

        self._config = merged_config
        self._loaded = True
        self.logger.debug("Configuration loaded successfully")
        return deepcopy(self._config)

    def _load_file_config(self) -> Dict[str, Any]:
        try:
            return self.file_ops.load_json_file(self.config_file)
        except ConfigurationFileNotFoundError:
            if self.explicit_config_file:
                raise
            self.logger.debug("No configuration file found, using built-in defaults")
            return {}

    def reload_config(self) -> Dict[str, Any]:
        """Force reload configuration from all sources."""
        return self.load_config(force_reload=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (supports dot notation like 'logging.level')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        config = self.config
        keys = key.split('.')

        try:
            for k in keys:
                config = config[k]
            return config
        except (KeyError, TypeError):
            return default

    def has(self, key: str) -> bool:
        """Check whether a configuration key exists (dot notation)."""
        missing = object()
        return self.get(key, missing) is not missing

    def get_grammar_config(self) -> Dict[str, Any]:
        """Return the grammar overrides section with unset entries removed."""
        grammar = self.get("grammar", {}) or {}
        return {name: regex for name, regex in grammar.items() if regex is not None}
