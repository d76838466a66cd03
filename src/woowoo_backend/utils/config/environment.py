"""
Environment variable handling for configuration management.

Maps ``WOOWOO_*`` environment variables onto configuration keys, converting
their string values to the types the configuration expects.
"""

import json
import logging
import os
from copy import deepcopy
from typing import Any, Dict, Tuple

from ...exceptions.config_exceptions import EnvironmentVariableError


logger = logging.getLogger(__name__)


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    def __init__(self) -> None:
        """Initialize environment handler."""
        self.logger = logger

    def get_env_mapping(self) -> Dict[str, Tuple[str, str]]:
        """
        Get mapping of environment variable names to configuration keys.

        Returns:
            Dictionary mapping env var names to (config key, target type)
        """
        return {
            'WOOWOO_LOG_LEVEL': ('logging.level', 'string'),
            'WOOWOO_LOG_FORMAT': ('logging.format', 'string'),
            'WOOWOO_LOG_FILE': ('logging.file', 'string'),
            'WOOWOO_LOG_ROTATION': ('logging.rotation', 'boolean'),
            'WOOWOO_TREE_PREVIEW_WIDTH': ('cli.tree_preview_width', 'integer'),
        }

    def convert_env_value(self, value: str, target_type: str = 'string', variable_name: str = "") -> Any:
        """
        Convert environment variable string to appropriate Python type.

        Args:
            value: Environment variable value (always string)
            target_type: Target type ('string', 'boolean', 'integer', 'json')
            variable_name: Name of the variable, for error reporting

        Returns:
            Converted value

        Raises:
            EnvironmentVariableError: If conversion fails
        """
        try:
            if target_type == 'boolean':
                return value.lower() in ('true', '1', 'yes', 'on', 'enabled')
            elif target_type == 'integer':
                return int(value)
            elif target_type == 'json':
                return json.loads(value)
            else:  # string
                return value
        except (ValueError, json.JSONDecodeError) as e:
            raise EnvironmentVariableError(
                f"Failed to convert environment variable value '{value}' to {target_type}: {e}",
                variable_name or None
            ) from e

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Base configuration dictionary

        Returns:
            Configuration with environment overrides applied

        Raises:
            EnvironmentVariableError: If a set variable cannot be converted
        """
        result = deepcopy(config)

        for env_var, (config_key, target_type) in self.get_env_mapping().items():
            env_value = os.getenv(env_var)
            if env_value is None or env_value == "":
                continue

            converted_value = self.convert_env_value(env_value, target_type, env_var)
            self._set_nested_value(result, config_key, converted_value)
            self.logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def _set_nested_value(self, config: Dict[str, Any], key_path: str, value: Any) -> None:
        """
        Set a nested value in configuration using dot notation.

        Args:
            config: Configuration dictionary to modify
            key_path: Dot-separated key path (e.g., 'logging.level')
            value: Value to set
        """
        keys = key_path.split('.')
        current = config

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value
