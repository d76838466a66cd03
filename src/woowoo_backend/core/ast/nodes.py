"""
AST Nodes Module - WooWoo Abstract Syntax Tree

This module provides the node classes produced by the block parser. The
tree mirrors the indentation structure of a WooWoo document: every node
owns its children in document order and refers back to its parent through
a weak reference, so dropping the root releases the whole tree.

Key Components:
- WooElementKind: Closed set of node kinds
- ASTNode: Common node behaviour (positions, metadata, children)
- VariantNode: Base for constructs distinguished by a variant name
- DocumentRoot, DocumentPart, DocumentObject, OuterEnv, InnerEnv,
  IndentedBlock, InlineMath, TextBlock, TextNode: Concrete node kinds

Usage:
    >>> root = DocumentRoot(ASTNodePosition(1, 1, 0).advance("text"))
    >>> block = TextBlock(False, root.start, root.end, root)
    >>> root.add_children(block)
    >>> block.parent is root
    True
"""

import weakref
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from .position import ASTNodePosition


class WooElementKind(str, Enum):
    """Kind of a WooWoo document element."""
    DOCUMENT_OBJECT = "DocumentObject"
    DOCUMENT_PART = "DocumentPart"
    DOCUMENT_ROOT = "DocumentRoot"
    INDENTED_BLOCK = "IndentedBlock"
    INLINE_MATH = "InlineMath"
    INNER_ENV = "InnerEnv"
    OUTER_ENV = "OuterEnv"
    TEXT_BLOCK = "TextBlock"
    TEXT_NODE = "TextNode"

    def __str__(self) -> str:
        return self.value


class ASTNode:
    """
    Base class of all WooWoo AST nodes.

    Nodes are built once by the parser at the moment their source span is
    recognized. ``add_children`` and ``set_metadata`` are append-only and
    are meant to be called only during that construction step.

    Attributes:
        kind: Node kind tag
        start: Position where the node starts
        end: Position right after the node
        metadata: Metadata attached through metablocks
        children: Child nodes in document order
        is_fragile: True if the content must not be parsed recursively
    """

    kind: WooElementKind

    def __init__(
        self,
        start: ASTNodePosition,
        end: ASTNodePosition,
        parent: Optional["ASTNode"] = None,
        is_fragile: bool = False
    ) -> None:
        if end < start:
            raise ValueError(f"Node end {end} precedes its start {start}")

        self.start = start
        self.end = end
        self.is_fragile = is_fragile
        self.metadata: Dict[str, Any] = {}
        self.children: List["ASTNode"] = []
        self._parent_ref: Optional["weakref.ReferenceType[ASTNode]"] = None
        self.parent = parent

    @property
    def parent(self) -> Optional["ASTNode"]:
        """Parent node, or None for the root (or once the parent is gone)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, node: Optional["ASTNode"]) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None

    @property
    def start_column(self) -> int:
        """Column of the node start, i.e. its indentation column."""
        return self.start.column

    @property
    def variant(self) -> Optional[str]:
        """Variant name; None for kinds that have no variants."""
        return None

    def add_children(self, *children: "ASTNode") -> None:
        """
        Append children in document order and adopt them.

        Args:
            *children: Nodes to append
        """
        for child in children:
            if not isinstance(child, ASTNode):
                raise TypeError(f"Child must be ASTNode, got: {type(child)}")
            child.parent = self
            self.children.append(child)

    def set_metadata(self, key: str, value: Any) -> None:
        """Attach a metadata value under ``key``."""
        self.metadata[key] = value

    def update_metadata(self, metadata: Dict[str, Any]) -> None:
        """Attach every entry of a parsed metablock."""
        for key, value in metadata.items():
            self.set_metadata(key, value)

    def walk(self) -> Iterator["ASTNode"]:
        """Iterate over this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def get_depth(self) -> int:
        """
        Calculate the depth of this node in the tree.

        Returns:
            Depth level (0 for the root, 1 for its children, etc.)
        """
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    def text_content(self) -> str:
        """Concatenated content of all descendant text nodes."""
        return "".join(
            node.content for node in self.walk() if isinstance(node, TextNode)
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert node to dictionary representation.

        Returns:
            Dictionary with node data (without the parent reference)
        """
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }
        if self.variant is not None:
            data["variant"] = self.variant
        if self.is_fragile:
            data["is_fragile"] = True
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        data["children"] = [child.to_dict() for child in self.children]
        return data

    def __repr__(self) -> str:
        variant = f", variant='{self.variant}'" if self.variant is not None else ""
        return (
            f"{type(self).__name__}(start={self.start}, end={self.end}"
            f"{variant}, children={len(self.children)})"
        )


class ScopedNodeMixin:
    """
    Behaviour of nodes that open an indentation scope.

    The header of such a node is recognized before its body, so its end
    first covers the header only. When the scope closes the end is extended
    over the last child, keeping every child inside its parent's span.
    """

    def close_scope(self) -> None:
        if self.children and self.children[-1].end > self.end:
            self.end = self.children[-1].end


class VariantNode(ASTNode):
    """
    Base class for constructs distinguished by a variant name.

    Attributes:
        variant: Concrete construct name, e.g. "h1", "Theorem" or "tikz"
    """

    def __init__(
        self,
        variant: str,
        is_fragile: bool,
        start: ASTNodePosition,
        end: ASTNodePosition,
        parent: Optional[ASTNode] = None
    ) -> None:
        if not variant:
            raise ValueError(f"{type(self).__name__} requires a variant")
        self._variant = variant
        super().__init__(start, end, parent, is_fragile)
        self.header_end = end

    @property
    def variant(self) -> str:
        return self._variant


class DocumentRoot(ASTNode):
    """Root of a parsed document; spans the whole source."""

    kind = WooElementKind.DOCUMENT_ROOT

    def __init__(self, end: ASTNodePosition) -> None:
        super().__init__(ASTNodePosition.document_start(), end)


class DocumentPart(VariantNode):
    """Section heading such as ``.h1 Introduction``; children hold the title."""

    kind = WooElementKind.DOCUMENT_PART

    def __init__(
        self,
        variant: str,
        start: ASTNodePosition,
        end: ASTNodePosition,
        parent: Optional[ASTNode] = None
    ) -> None:
        super().__init__(variant, False, start, end, parent)

    @property
    def title(self) -> str:
        return self.text_content()


class DocumentObject(ScopedNodeMixin, VariantNode):
    """Theorem-like block such as ``.Theorem:`` owning the indented body."""

    kind = WooElementKind.DOCUMENT_OBJECT


class OuterEnv(ScopedNodeMixin, VariantNode):
    """Block environment such as ``.tikz:`` or the fragile ``!code:``."""

    kind = WooElementKind.OUTER_ENV


class InnerEnv(ScopedNodeMixin, VariantNode):
    """Inline environment; produced by inline grammars built on top of the core."""

    kind = WooElementKind.INNER_ENV


class BlockNode(ASTNode):
    """Base class for nodes without a variant, built as (is_fragile, start, end)."""

    def __init__(
        self,
        is_fragile: bool,
        start: ASTNodePosition,
        end: ASTNodePosition,
        parent: Optional[ASTNode] = None
    ) -> None:
        super().__init__(start, end, parent, is_fragile)


class IndentedBlock(BlockNode):
    """Paragraph indented deeper than the first sibling, without an opener."""

    kind = WooElementKind.INDENTED_BLOCK


class TextBlock(BlockNode):
    """Paragraph-like unit delimited by blank lines."""

    kind = WooElementKind.TEXT_BLOCK


class InlineMath(BlockNode):
    """Inline math span; produced by inline grammars built on top of the core."""

    kind = WooElementKind.INLINE_MATH


class TextNode(ASTNode):
    """
    Leaf node carrying raw text.

    The end position is derived from the content, so a text node never has
    children.

    Attributes:
        content: Raw text of the node
    """

    kind = WooElementKind.TEXT_NODE

    def __init__(
        self,
        content: str,
        is_fragile: bool,
        start: ASTNodePosition,
        parent: Optional[ASTNode] = None
    ) -> None:
        self.content = content
        super().__init__(start, start.advance(content), parent, is_fragile)

    def add_children(self, *children: ASTNode) -> None:
        raise TypeError("TextNode cannot have children")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        del data["children"]
        data["content"] = self.content
        return data
