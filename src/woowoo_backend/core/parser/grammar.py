"""
Grammar Module - Declarative WooWoo Block Grammar

This module defines the grammar rules the block parser dispatches over.
Every rule is plain regex text with named groups; the engine only relies on
the group names listed in ``REQUIRED_GROUPS``. Rules can be overridden from
the ``grammar`` configuration section.

Default syntax:

    .h1 Introduction              document part (variant "h1")
      label: intro                optional metablock lines
    .Theorem:                     document object (variant "Theorem")
    .tikz:                        outer environment (variant "tikz")
    !code:                        fragile outer environment (variant "code")
"""

import logging
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional

from .matcher import Pattern

logger = logging.getLogger(__name__)

HORIZONTAL_WHITESPACE = r"[ \t]"
EOL = r"(?:\r?\n|$)"

# Key line, list item or deeper-indented continuation of a YAML block
_META_KEY_LINE = rf"[\w-]+:(?:{HORIZONTAL_WHITESPACE}[^\r\n]*)?"
_META_CONTINUATION = (
    rf"(?:{_META_KEY_LINE}|-(?:{HORIZONTAL_WHITESPACE}[^\r\n]*)?"
    rf"|{HORIZONTAL_WHITESPACE}+\S[^\r\n]*)"
)

# Indented metablock directly below a header line
HEADER_METABLOCK = (
    rf"(?P<metablock>(?P<meta_indent>{HORIZONTAL_WHITESPACE}+){_META_KEY_LINE}{EOL}"
    rf"(?:(?P=meta_indent){_META_CONTINUATION}{EOL})*)?"
)

DOCUMENT_PART = (
    rf"(?P<before_title>\.(?P<variant>[a-z][\w-]*){HORIZONTAL_WHITESPACE}+)"
    rf"(?P<title>[^\r\n]*{EOL}){HEADER_METABLOCK}"
)
DOCUMENT_OBJECT = rf"\.(?P<variant>[A-Z][\w-]*):{HORIZONTAL_WHITESPACE}*{EOL}{HEADER_METABLOCK}"
FRAGILE_OUTER_ENV = rf"!(?P<variant>[A-Za-z][\w-]*):{HORIZONTAL_WHITESPACE}*{EOL}{HEADER_METABLOCK}"
OUTER_ENV = rf"\.(?P<variant>[a-z][\w-]*):{HORIZONTAL_WHITESPACE}*{EOL}{HEADER_METABLOCK}"
TEXT_BLOCK_SEPARATOR = rf"\r?\n{HORIZONTAL_WHITESPACE}*\r?\n"

# Unindented metablock closing the (de-indented) content of a block
TRAILING_METABLOCK = (
    rf"^{_META_KEY_LINE}(?:\r?\n{_META_CONTINUATION})*(?:\r?\n)?\Z"
)

REQUIRED_GROUPS: Dict[str, tuple] = {
    "document_part": ("before_title", "variant", "title"),
    "document_object": ("variant",),
    "fragile_outer_env": ("variant",),
    "outer_env": ("variant",),
    "text_block_separator": (),
    "metablock": (),
}


@dataclass(frozen=True)
class CompiledGrammar:
    """Compiled patterns of a Grammar, one per rule."""
    document_part: Pattern
    document_object: Pattern
    fragile_outer_env: Pattern
    outer_env: Pattern
    text_block_separator: Pattern
    metablock: Pattern


@dataclass(frozen=True)
class Grammar:
    """
    Regex text of every block grammar rule.

    Attributes:
        document_part: Section heading line (groups: before_title, variant,
            title, optional metablock)
        document_object: Object opener (groups: variant, optional metablock)
        fragile_outer_env: Fragile environment opener (groups: variant,
            optional metablock)
        outer_env: Environment opener (groups: variant, optional metablock)
        text_block_separator: Blank line ending a block
        metablock: Metadata lines closing the content of a block
    """
    document_part: str = DOCUMENT_PART
    document_object: str = DOCUMENT_OBJECT
    fragile_outer_env: str = FRAGILE_OUTER_ENV
    outer_env: str = OUTER_ENV
    text_block_separator: str = TEXT_BLOCK_SEPARATOR
    metablock: str = TRAILING_METABLOCK

    @classmethod
    def from_config(cls, grammar_config: Optional[Dict[str, Any]] = None) -> "Grammar":
        """
        Build a grammar from the ``grammar`` configuration section.

        Missing or null entries keep their default rule.

        Args:
            grammar_config: Mapping of rule name to regex text

        Returns:
            Grammar with the configured overrides applied

        Raises:
            ValueError: If the section names an unknown rule
        """
        grammar_config = grammar_config or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(grammar_config) - known)
        if unknown:
            raise ValueError(f"Unknown grammar rules: {', '.join(unknown)}")

        overrides = {k: v for k, v in grammar_config.items() if v is not None}
        if overrides:
            logger.info(f"Using grammar overrides for: {', '.join(sorted(overrides))}")
        return cls(**overrides)

    def compile(self) -> CompiledGrammar:
        """
        Compile every rule into a Pattern.

        Raises:
            GrammarError: If a rule is invalid or lacks a required group
        """
        return CompiledGrammar(**{
            name: Pattern(name, regex, REQUIRED_GROUPS[name])
            for name, regex in asdict(self).items()
        })
