"""
WooWoo AST package.

Components:
- position: Immutable source positions (ASTNodePosition)
- nodes: Node kinds and the tree structure built by the parser
"""

from .position import ASTNodePosition

from .nodes import (
    WooElementKind,
    ASTNode,
    BlockNode,
    VariantNode,
    ScopedNodeMixin,
    DocumentRoot,
    DocumentPart,
    DocumentObject,
    OuterEnv,
    InnerEnv,
    IndentedBlock,
    TextBlock,
    InlineMath,
    TextNode,
)

__all__ = [
    "ASTNodePosition",
    "WooElementKind",
    "ASTNode",
    "BlockNode",
    "VariantNode",
    "ScopedNodeMixin",
    "DocumentRoot",
    "DocumentPart",
    "DocumentObject",
    "OuterEnv",
    "InnerEnv",
    "IndentedBlock",
    "TextBlock",
    "InlineMath",
    "TextNode",
]
