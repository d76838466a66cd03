"""
Document Outline Module

Builds the navigation outline of a parsed document: its document parts and
document objects in document order, as shown in an editor navigation pane.

Usage:
    >>> root = Parser().parse(".h1 Intro\\n\\n.Theorem:\\n  label: main\\n")
    >>> [entry.variant for entry in build_outline(root)]
    ['h1', 'Theorem']
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from ..ast import ASTNode, DocumentObject, DocumentPart

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutlineEntry:
    """
    One navigable construct of a document.

    Attributes:
        kind: "DocumentPart" or "DocumentObject"
        variant: Construct variant, e.g. "h1" or "Theorem"
        title: Part title, or the ``title`` metadata of an object
        label: The ``label`` metadata, if any
        line: Line where the construct starts
        column: Column where the construct starts
        depth: Nesting depth below the document root (1 for top level)
    """
    kind: str
    variant: str
    title: str
    label: Optional[str]
    line: int
    column: int
    depth: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_outline(root: ASTNode, max_depth: Optional[int] = None) -> List[OutlineEntry]:
    """
    Collect the outline of a document.

    Args:
        root: Root of a parsed document
        max_depth: Deepest nesting level to include (None for all)

    Returns:
        Outline entries in document order
    """
    entries = []
    for node in root.walk():
        if not isinstance(node, (DocumentPart, DocumentObject)):
            continue

        depth = node.get_depth()
        if max_depth is not None and depth > max_depth:
            continue

        if isinstance(node, DocumentPart):
            title = node.title
        else:
            title = str(node.metadata.get("title", ""))
        label = node.metadata.get("label")

        entries.append(OutlineEntry(
            kind=node.kind.value,
            variant=node.variant,
            title=title,
            label=str(label) if label is not None else None,
            line=node.start.line,
            column=node.start.column,
            depth=depth,
        ))

    logger.debug(f"Built outline with {len(entries)} entries")
    return entries
