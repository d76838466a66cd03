"""
Inline Parser Module

Turns the inline content of titles and blocks into AST nodes. The core
grammar keeps inline text whole; richer inline grammars (emphasis, inner
environments, inline math) can subclass ``InlineParser`` and decompose the
text further.
"""

from typing import List

from ..ast import ASTNode, ASTNodePosition, TextNode


class InlineParser:
    """Wraps a span of inline text as a single text node."""

    def parse(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> List[ASTNode]:
        """
        Parse inline content.

        Args:
            start: Position of the start of the inline content
            parent: Node the inline content belongs to
            source: Inline source text

        Returns:
            Nodes parsed from the source, in document order
        """
        return [self.parse_text_node(start, parent, source)]

    def parse_text_node(
        self,
        start: ASTNodePosition,
        parent: ASTNode,
        source: str
    ) -> TextNode:
        return TextNode(source, False, start, parent)
