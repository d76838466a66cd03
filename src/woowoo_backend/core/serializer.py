"""
Source Serializer Module

Writes a WooWoo AST back to WooWoo source in the default syntax. Every
construct is placed at the column it was parsed at and separated from its
neighbours by a blank line; metadata is written as YAML metablocks. Parsing
the serialized source yields a tree isomorphic to the input tree (same
kinds, variants, columns, text and metadata), which makes the serializer a
structural regression check for the parser.
"""

import logging
from typing import Any, Dict, List

import yaml

from .ast import (
    ASTNode,
    DocumentObject,
    DocumentPart,
    DocumentRoot,
    IndentedBlock,
    OuterEnv,
    TextBlock,
)
from .parser.text_utils import indent_lines

logger = logging.getLogger(__name__)

METABLOCK_INDENT = 2


class SourceSerializer:
    """Serializes ASTs produced with the default grammar."""

    def serialize(self, root: ASTNode) -> str:
        """
        Serialize a tree to WooWoo source.

        Args:
            root: Root of the tree (or any subtree)

        Returns:
            WooWoo source text ending with a newline ('' for an empty tree)

        Raises:
            ValueError: If the tree contains nodes without a block syntax
        """
        blocks: List[str] = []
        nodes = root.children if isinstance(root, DocumentRoot) else [root]
        for node in nodes:
            self._serialize_node(node, blocks)

        logger.debug(f"Serialized {len(blocks)} blocks")
        return "\n\n".join(blocks) + "\n" if blocks else ""

    def _serialize_node(self, node: ASTNode, blocks: List[str]) -> None:
        pad = node.start_column - 1

        if isinstance(node, DocumentPart):
            header = f"{' ' * pad}.{node.variant} {node.title}"
            blocks.append(header + self._header_metablock(node.metadata, pad))
        elif isinstance(node, (DocumentObject, OuterEnv)):
            marker = "!" if node.is_fragile else "."
            header = f"{' ' * pad}{marker}{node.variant}:"
            blocks.append(header + self._header_metablock(node.metadata, pad))
            for child in node.children:
                self._serialize_node(child, blocks)
        elif isinstance(node, (TextBlock, IndentedBlock)):
            lines = [" " * pad + indent_lines(node.text_content(), pad)] if node.children else []
            if node.metadata:
                lines.append(self._dump_metadata(node.metadata, pad))
            blocks.append("\n".join(line for line in lines if line.strip()) or " " * pad)
        else:
            raise ValueError(f"Cannot serialize {node.kind.value} as block content")

    def _header_metablock(self, metadata: Dict[str, Any], pad: int) -> str:
        if not metadata:
            return ""
        return "\n" + self._dump_metadata(metadata, pad + METABLOCK_INDENT)

    @staticmethod
    def _dump_metadata(metadata: Dict[str, Any], pad: int) -> str:
        dumped = yaml.safe_dump(
            metadata, default_flow_style=False, sort_keys=False, allow_unicode=True
        ).rstrip("\n")
        return indent_lines(dumped, pad, first_line=True)


def serialize(root: ASTNode) -> str:
    """Serialize a tree to WooWoo source with the default serializer."""
    return SourceSerializer().serialize(root)
