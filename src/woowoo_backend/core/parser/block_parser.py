"""
Block Parser Module - WooWoo Document Parsing

This module implements the block parser that turns a WooWoo document into an
AST. Structure is driven by indentation: the parser keeps a stack of open
scopes and attributes each recognized construct to the innermost scope whose
indentation column lies left of the construct.

Each loop iteration skips leading whitespace, closes the scopes the cursor
has dedented out of, and tries the grammar alternatives in a fixed order:

1. fragile content (only inside a fragile environment)
2. document part header
3. document object opener
4. fragile outer environment opener
5. outer environment opener
6. indented block (deeper than the first sibling)
7. text block (always matches)

Usage:
    >>> parser = Parser()
    >>> root = parser.parse(".h1 Title\\ntext\\n")
    >>> [child.kind.value for child in root.children]
    ['DocumentPart', 'TextBlock']
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Type

from ...exceptions.parser_exceptions import ParserInvariantError
from ..ast import (
    ASTNode,
    ASTNodePosition,
    BlockNode,
    DocumentObject,
    DocumentPart,
    DocumentRoot,
    IndentedBlock,
    OuterEnv,
    ScopedNodeMixin,
    TextBlock,
    TextNode,
    VariantNode,
    WooElementKind,
)
from .grammar import Grammar
from .inline_parser import InlineParser
from .matcher import Pattern
from .metablock import MetablockParser
from .text_utils import get_ending_newline, trim_ending_newline, trim_indentation

logger = logging.getLogger(__name__)

# Kinds whose nested content is consumed while they are recognized
UNSCOPED_KINDS = frozenset({
    WooElementKind.DOCUMENT_PART,
    WooElementKind.INDENTED_BLOCK,
    WooElementKind.TEXT_BLOCK,
})


@dataclass(frozen=True)
class ParseResult:
    """
    Result of a single grammar alternative.

    Attributes:
        parsed: The recognized node
        after: Non-parsed source remainder
    """
    parsed: ASTNode
    after: str


ParsingStep = Callable[[ASTNodePosition, ASTNode, str], Optional[ParseResult]]


class Parser:
    """
    Parses WooWoo documents into ASTs.

    A Parser holds only its grammar and collaborators; all per-document
    state lives in local variables of ``parse``, so one instance can parse
    any number of documents, also from several threads at once.

    Attributes:
        grammar: Grammar rules in regex form
        patterns: Compiled grammar rules
        metablock_parser: Decoder for YAML metablocks
        inline_parser: Parser for titles and block content
    """

    def __init__(
        self,
        grammar: Optional[Grammar] = None,
        metablock_parser: Optional[MetablockParser] = None,
        inline_parser: Optional[InlineParser] = None
    ) -> None:
        """
        Initialize the parser.

        Args:
            grammar: Grammar to parse with (default WooWoo syntax if None)
            metablock_parser: Metablock decoder (default YAML decoder if None)
            inline_parser: Inline content parser (plain text if None)

        Raises:
            GrammarError: If a grammar rule is invalid
        """
        self.grammar = grammar or Grammar()
        self.patterns = self.grammar.compile()
        self.metablock_parser = metablock_parser or MetablockParser()
        self.inline_parser = inline_parser or InlineParser()

        self._parsing_steps: List[ParsingStep] = [
            self.parse_fragile_outer_env_content,
            self.parse_document_part,
            self.parse_document_object,
            self.parse_fragile_outer_env,
            self.parse_outer_env,
            self.parse_indented_block,
            self.parse_text_block,
        ]

    def parse(self, source: str) -> DocumentRoot:
        """
        Parse a WooWoo document into a WooWoo AST.

        Args:
            source: The complete source document

        Returns:
            Root node spanning the whole source

        Raises:
            TypeError: If source is not a string
            ParserInvariantError: If the grammar lets the parser stall
        """
        if not isinstance(source, str):
            raise TypeError(f"Source must be a string, got: {type(source)}")

        start = ASTNodePosition.document_start()
        root = DocumentRoot(start.advance(source))
        self.parse_block_content(start, root, source)

        logger.debug(
            f"Parsed document of {len(source)} characters into "
            f"{sum(1 for _ in root.walk())} nodes"
        )
        return root

    def parse_block_content(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> None:
        """
        Parse block content and attach the resulting nodes.

        Args:
            start: The position of the start of the block content
            parent: The node the block content belongs to
            source: The source of the block content

        Raises:
            ParserInvariantError: If an iteration consumes no input
        """
        scope: List[ASTNode] = []
        remaining = source
        cursor = start
        previous_length: Optional[int] = None

        while remaining:
            if len(remaining) == previous_length:
                raise ParserInvariantError(
                    "Parser made no progress; a grammar rule matched without consuming input",
                    offset=cursor.offset
                )
            previous_length = len(remaining)

            trimmed = remaining.lstrip()
            if len(trimmed) != len(remaining):
                cursor = cursor.advance(remaining[:len(remaining) - len(trimmed)])
                remaining = trimmed
                continue

            while scope and cursor.column <= scope[-1].start_column:
                self._close_scope(scope.pop())
            effective_parent = scope[-1] if scope else parent

            result = self._apply_parsing_steps(cursor, effective_parent, remaining)
            parsed = result.parsed

            if parsed.kind not in UNSCOPED_KINDS:
                scope.append(parsed)
            effective_parent.add_children(parsed)
            remaining = result.after
            cursor = parsed.end

            logger.debug(
                f"Recognized {parsed.kind} at {parsed.start} "
                f"(parent: {effective_parent.kind}, open scopes: {len(scope)})"
            )

        while scope:
            self._close_scope(scope.pop())

    def _apply_parsing_steps(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> ParseResult:
        for parsing_step in self._parsing_steps:
            result = parsing_step(start, parent, source)
            if result is not None:
                return result
        raise ParserInvariantError("No grammar alternative matched", offset=start.offset)

    @staticmethod
    def _close_scope(node: ASTNode) -> None:
        if isinstance(node, ScopedNodeMixin):
            node.close_scope()

    def parse_fragile_outer_env_content(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> Optional[ParseResult]:
        """
        Parse the content of a fragile outer environment.

        The content up to the next blank line is kept verbatim, only
        de-indented to the column it starts at and without the line ending
        that closes the document.

        Returns:
            A fragile text block along with the non-parsed source remainder;
            or None if the parent is not fragile
        """
        if not parent.is_fragile:
            return None

        before, separator, after = self._split_block(source)
        end = start.advance(before)
        content = trim_ending_newline(trim_indentation(before, start.column - 1))
        text_block = TextBlock(True, start, end, parent)
        text_block.add_children(TextNode(content, True, start, text_block))
        return ParseResult(parsed=text_block, after=f"{separator}{after}")

    def parse_document_part(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> Optional[ParseResult]:
        """
        Parse a document part.

        The part spans its header line (and metablock) without the final
        line ending; the title becomes its inline content.

        Returns:
            A new document part along with the non-parsed source remainder;
            or None if no document part starts at the cursor
        """
        match = self.patterns.document_part.match_at_start(source)
        if match is None:
            return None

        before_title = match.require("before_title")
        variant = match.require("variant")
        title = match.require("title")

        end = start.advance(trim_ending_newline(match.matched))
        document_part = DocumentPart(variant, start, end, parent)
        title_start = start.advance(before_title)
        document_part.add_children(
            *self.inline_parser.parse(title_start, document_part, trim_ending_newline(title))
        )
        document_part.update_metadata(self.metablock_parser.parse(match.group("metablock")))
        return ParseResult(
            parsed=document_part,
            after=f"{get_ending_newline(match.matched)}{match.after}"
        )

    def parse_document_object(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> Optional[ParseResult]:
        """Parse a document object opener such as ``.Theorem:``."""
        return self._parse_opener(
            start, parent, source, self.patterns.document_object, DocumentObject, False
        )

    def parse_fragile_outer_env(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> Optional[ParseResult]:
        """Parse a fragile outer environment opener such as ``!code:``."""
        return self._parse_opener(
            start, parent, source, self.patterns.fragile_outer_env, OuterEnv, True
        )

    def parse_outer_env(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> Optional[ParseResult]:
        """Parse an outer environment opener such as ``.tikz:``."""
        return self._parse_opener(
            start, parent, source, self.patterns.outer_env, OuterEnv, False
        )

    def _parse_opener(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str,
        pattern: Pattern,
        node_class: Type[VariantNode],
        is_fragile: bool
    ) -> Optional[ParseResult]:
        match = pattern.match_at_start(source)
        if match is None:
            return None

        variant = match.require("variant")
        end = start.advance(trim_ending_newline(match.matched))
        node = node_class(variant, is_fragile, start, end, parent)
        node.update_metadata(self.metablock_parser.parse(match.group("metablock")))
        return ParseResult(
            parsed=node,
            after=f"{get_ending_newline(match.matched)}{match.after}"
        )

    def parse_indented_block(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> Optional[ParseResult]:
        """
        Parse an indented block.

        Applies only when the cursor is indented deeper than the first child
        of the parent.

        Returns:
            A new indented block along with the non-parsed source remainder;
            or None if the cursor is not indented deeper
        """
        if not parent.children or start.column <= parent.children[0].start_column:
            return None
        return self._parse_paragraph(start, parent, source, IndentedBlock)

    def parse_text_block(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> ParseResult:
        """
        Parse a text block.

        Always succeeds on non-empty input.

        Returns:
            A new text block along with the non-parsed source remainder
        """
        return self._parse_paragraph(start, parent, source, TextBlock)

    def _parse_paragraph(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str,
        node_class: Type[BlockNode]
    ) -> ParseResult:
        before, separator, after = self._split_block(source)
        end = start.advance(before)
        content = trim_indentation(before, start.column - 1)

        metablock_match = self.patterns.metablock.find_first(content)
        metablock = metablock_match.matched if metablock_match else ""
        if metablock:
            content = content[:-len(metablock)]
        content = trim_ending_newline(content)

        node = node_class(False, start, end, parent)
        node.update_metadata(self.metablock_parser.parse(metablock or None))
        node.add_children(*self.inline_parser.parse(start, node, content))
        return ParseResult(parsed=node, after=f"{separator}{after}")

    def _split_block(self, source: str) -> Tuple[str, str, str]:
        """Split source at the first blank line into (block, separator, rest)."""
        match = self.patterns.text_block_separator.find_first(source)
        if match is None:
            return source, "", ""
        return match.before, match.matched, match.after
