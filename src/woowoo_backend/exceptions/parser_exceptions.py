"""
Parser-related exceptions for WooWoo.

Exception classes for grammar definition problems and internal parser
invariant violations. Malformed user documents never raise: the block
parser is total over its grammar, so everything here signals a defect in a
grammar rule or in the engine itself.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ParserError(Exception):
    """
    Base exception for parser errors.

    Carries debugging context about the grammar rule involved and logs
    itself on creation, since these errors abort the parse of the current
    document.

    Attributes:
        message: Human-readable error description
        pattern_name: Name of the grammar rule involved (if any)
        regex: The regex pattern string involved (if any)
    """

    def __init__(
        self,
        message: str,
        pattern_name: Optional[str] = None,
        regex: Optional[str] = None
    ) -> None:
        """
        Initialize ParserError with debugging context.

        Args:
            message: Primary error message
            pattern_name: Optional name of the grammar rule
            regex: Optional regex string of the grammar rule
        """
        super().__init__(message)
        self.message = message
        self.pattern_name = pattern_name
        self.regex = regex

        logger.error(
            f"{type(self).__name__}: {message}",
            extra={
                "pattern_name": pattern_name,
                "regex": regex,
                "error_type": "woowoo_parse"
            }
        )


class GrammarError(ParserError):
    """Raised when a grammar rule is invalid or lacks a required group."""


class ParserInvariantError(ParserError):
    """
    Raised when the block parser detects an internal inconsistency.

    The typical cause is a grammar rule that matched without consuming any
    input, which would otherwise loop forever.

    Attributes:
        offset: Character offset of the cursor when the error was detected
    """

    def __init__(
        self,
        message: str,
        pattern_name: Optional[str] = None,
        regex: Optional[str] = None,
        offset: Optional[int] = None
    ) -> None:
        self.offset = offset
        super().__init__(message, pattern_name=pattern_name, regex=regex)


class MissingGroupError(ParserInvariantError):
    """Raised when a matched rule lacks a capture group the parser requires."""

    def __init__(self, group_name: str, pattern_name: Optional[str] = None) -> None:
        self.group_name = group_name
        super().__init__(
            f"Rule '{pattern_name}' matched without required group '{group_name}'",
            pattern_name=pattern_name
        )
