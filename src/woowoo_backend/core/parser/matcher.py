"""
Pattern Matcher Module - Grammar Rule Matching

This module wraps single grammar rules of the WooWoo block grammar. A rule
is a regular expression with named groups; matching it splits the searched
text into the unmatched prefix, the matched span and the remainder.

Key Components:
- Match: Immutable result of a successful match
- Pattern: Compiled grammar rule with validation and error handling

Usage:
    >>> pattern = Pattern("outer_env", r"\\.(?P<variant>[a-z][\\w-]*):", ("variant",))
    >>> match = pattern.find_first(".tikz:\\n  body")
    >>> match.index, match.require("variant"), match.after
    (0, 'tikz', '\\n  body')
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from ...exceptions.parser_exceptions import GrammarError, MissingGroupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """
    Immutable result container for a grammar rule match.

    Attributes:
        pattern_name: Name of the rule that produced the match
        index: Offset of the match start within the searched text
        matched: The matched span
        before: Unmatched prefix, ``text[:index]``
        after: Remainder, ``text[index + len(matched):]``
        groups: Capture groups in order (None for non-participating groups)
        named_groups: Named capture groups
    """
    pattern_name: str
    index: int
    matched: str
    before: str
    after: str
    groups: Tuple[Optional[str], ...] = ()
    named_groups: Dict[str, Optional[str]] = field(default_factory=dict)

    def group(self, name: str) -> Optional[str]:
        """Get a named capture, None if it did not participate."""
        return self.named_groups.get(name)

    def require(self, name: str) -> str:
        """
        Get a named capture the caller cannot do without.

        Raises:
            MissingGroupError: If the group did not participate in the match
        """
        value = self.named_groups.get(name)
        if value is None:
            raise MissingGroupError(name, pattern_name=self.pattern_name)
        return value


class Pattern:
    """
    A single grammar rule.

    Handles regex compilation and validation and finds the first match of
    the rule in a text. Rules are compiled with MULTILINE so that ``^`` and
    ``$`` refer to line boundaries.

    Attributes:
        name: Descriptive identifier for the rule
        regex_pattern: Raw regex string
        required_groups: Named groups every match must provide
        compiled_regex: Pre-compiled regex object
    """

    def __init__(
        self,
        name: str,
        regex_pattern: str,
        required_groups: Sequence[str] = ()
    ) -> None:
        """
        Initialize a Pattern with name and regex validation.

        Args:
            name: Descriptive name for the rule (e.g. 'document_part')
            regex_pattern: Regular expression pattern string
            required_groups: Named groups the parser reads from matches

        Raises:
            GrammarError: If the regex is invalid or lacks a required group
            ValueError: If name or regex is empty
        """
        if not name or not name.strip():
            raise ValueError("Pattern name cannot be empty")

        if not regex_pattern:
            raise ValueError("Regex pattern cannot be empty")

        self.name = name.strip()
        self.regex_pattern = regex_pattern
        self.required_groups = tuple(required_groups)

        try:
            self.compiled_regex = re.compile(regex_pattern, re.MULTILINE)
            logger.debug(f"Compiled pattern '{self.name}': {regex_pattern}")
        except re.error as e:
            raise GrammarError(
                f"Invalid regex pattern for '{name}': {e}",
                pattern_name=name,
                regex=regex_pattern
            )

        missing = [g for g in self.required_groups if g not in self.compiled_regex.groupindex]
        if missing:
            raise GrammarError(
                f"Pattern '{name}' lacks required groups: {', '.join(missing)}",
                pattern_name=name,
                regex=regex_pattern
            )

    def find_first(self, text: str) -> Optional[Match]:
        """
        Find the first match of the rule in text.

        Args:
            text: Input text to search

        Returns:
            Match splitting the text around the first match, None if the
            rule does not match anywhere
        """
        found = self.compiled_regex.search(text)
        if found is None:
            return None

        index, end = found.span()
        return Match(
            pattern_name=self.name,
            index=index,
            matched=found.group(0),
            before=text[:index],
            after=text[end:],
            groups=found.groups(),
            named_groups=found.groupdict(),
        )

    def match_at_start(self, text: str) -> Optional[Match]:
        """
        Find the first match and keep it only if it begins at offset 0.

        A match further into the text means the rule does not apply at the
        cursor; it is never a reason to skip ahead.
        """
        match = self.find_first(text)
        if match is None or match.index != 0:
            return None
        return match

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"Pattern(name='{self.name}', regex='{self.regex_pattern}')"

    def __eq__(self, other: object) -> bool:
        """Equality comparison based on name and regex pattern."""
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.name == other.name and self.regex_pattern == other.regex_pattern

    def __hash__(self) -> int:
        return hash((self.name, self.regex_pattern))
