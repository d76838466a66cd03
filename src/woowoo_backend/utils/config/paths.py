"""
Configuration file paths, constants and built-in defaults for WooWoo.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ConfigPaths:
    """Configuration file paths and constants."""

    DEFAULT_CONFIG_FILE: str = "woowoo.config.json"
    ENV_FILE: str = ".env"


# Null grammar entries keep the built-in rule
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0",
    "grammar": {
        "document_part": None,
        "document_object": None,
        "fragile_outer_env": None,
        "outer_env": None,
        "text_block_separator": None,
        "metablock": None,
    },
    "logging": {
        "level": "WARNING",
        "format": "standard",
        "file": None,
        "rotation": False,
        "max_file_size": "10MB",
    },
    "cli": {
        "tree_preview_width": 60,
    },
}
