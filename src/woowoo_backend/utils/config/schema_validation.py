"""
Schema validation for configuration management.

Validates merged configurations against the WooWoo configuration JSON
schema and reports every problem found.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema

from ...exceptions.config_exceptions import ConfigurationValidationError


logger = logging.getLogger(__name__)

_NULLABLE_STRING = {"type": ["string", "null"]}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "version": {"type": "string"},
        "grammar": {
            "type": "object",
            "properties": {
                "document_part": _NULLABLE_STRING,
                "document_object": _NULLABLE_STRING,
                "fragile_outer_env": _NULLABLE_STRING,
                "outer_env": _NULLABLE_STRING,
                "text_block_separator": _NULLABLE_STRING,
                "metablock": _NULLABLE_STRING,
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL",
                             "debug", "info", "warning", "error", "critical"],
                },
                "format": {"type": "string", "enum": ["standard", "json", "detailed"]},
                "file": _NULLABLE_STRING,
                "rotation": {"type": "boolean"},
                "max_file_size": {"type": "string", "pattern": r"^\d+\s*(KB|MB|GB)?$"},
            },
            "additionalProperties": False,
        },
        "cli": {
            "type": "object",
            "properties": {
                "tree_preview_width": {"type": "integer", "minimum": 10},
            },
        },
    },
}


class SchemaValidator:
    """
    Schema validation for configuration management.

    Handles JSON schema validation and error reporting.
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize schema validator.

        Args:
            schema: JSON schema to validate against (default: CONFIG_SCHEMA)
        """
        self.schema = schema or CONFIG_SCHEMA
        self.logger = logger

    def validate_config_against_schema(
        self,
        config: Dict[str, Any],
        config_file: str = "unknown"
    ) -> None:
        """
        Validate configuration against the JSON schema.

        Args:
            config: Configuration dictionary to validate
            config_file: Configuration file name for error reporting

        Raises:
            ConfigurationValidationError: If validation fails
        """
        validator = jsonschema.Draft7Validator(self.schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.absolute_path))
        if not errors:
            self.logger.debug("Configuration passed schema validation")
            return

        validation_errors = [error.message for error in errors]
        invalid_fields = [
            ".".join(str(p) for p in error.absolute_path)
            for error in errors if error.absolute_path
        ]
        raise ConfigurationValidationError(
            f"Configuration validation failed: {len(errors)} error(s)",
            config_file,
            validation_errors,
            invalid_fields
        )
