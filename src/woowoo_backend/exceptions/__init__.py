"""
Exceptions package for WooWoo.

This package contains custom exception classes for parsing, configuration
and rendering error scenarios.
"""

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)

from .parser_exceptions import (
    ParserError,
    GrammarError,
    ParserInvariantError,
    MissingGroupError,
)

from .rendering_exceptions import (
    RendererNotFoundError,
)

__all__ = [
    # Configuration exceptions
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
    # Parser exceptions
    "ParserError",
    "GrammarError",
    "ParserInvariantError",
    "MissingGroupError",
    # Rendering exceptions
    "RendererNotFoundError",
]
