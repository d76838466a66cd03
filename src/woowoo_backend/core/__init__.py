"""
WooWoo core package.

Architecture:
- ast: Source positions and the node model of the syntax tree
- parser: Grammar rules, metablock decoding and the block parser
- rendering: Renderer registry and the console tree renderer
- navigation: Document outlines
- serializer: AST to WooWoo source
"""

from .ast import (
    ASTNodePosition,
    WooElementKind,
    ASTNode,
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

from .parser import (
    Grammar,
    Match,
    Pattern,
    MetablockParser,
    InlineParser,
    Parser,
)

from .navigation import OutlineEntry, build_outline

from .serializer import SourceSerializer, serialize

__all__ = [
    # AST
    "ASTNodePosition",
    "WooElementKind",
    "ASTNode",
    "DocumentRoot",
    "DocumentPart",
    "DocumentObject",
    "OuterEnv",
    "InnerEnv",
    "IndentedBlock",
    "TextBlock",
    "InlineMath",
    "TextNode",
    # Parsing
    "Grammar",
    "Match",
    "Pattern",
    "MetablockParser",
    "InlineParser",
    "Parser",
    # Navigation
    "OutlineEntry",
    "build_outline",
    # Serialization
    "SourceSerializer",
    "serialize",
]
