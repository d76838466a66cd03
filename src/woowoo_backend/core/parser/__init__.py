"""
WooWoo Parser Package

Indentation-scoped block parser producing WooWoo ASTs.

Components:
- matcher: Grammar rule matching (Pattern, Match)
- grammar: Declarative block grammar (Grammar, CompiledGrammar)
- metablock: YAML metablock decoding (MetablockParser)
- inline_parser: Inline content parsing (InlineParser)
- block_parser: The block parser itself (Parser)
"""

from .matcher import Match, Pattern

from .grammar import (
    Grammar,
    CompiledGrammar,
    REQUIRED_GROUPS,
)

from .metablock import MetablockParser

from .inline_parser import InlineParser

from .block_parser import (
    Parser,
    ParseResult,
    UNSCOPED_KINDS,
)

__all__ = [
    "Match",
    "Pattern",
    "Grammar",
    "CompiledGrammar",
    "REQUIRED_GROUPS",
    "MetablockParser",
    "InlineParser",
    "Parser",
    "ParseResult",
    "UNSCOPED_KINDS",
]
