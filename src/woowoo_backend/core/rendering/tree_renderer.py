"""
Tree Renderer

Renders WooWoo ASTs as ``rich`` trees for inspection on the console. Every
node kind has a default renderer; variant renderers can be registered on
top to change the label of single constructs.
"""

from typing import Optional

from rich.markup import escape
from rich.tree import Tree

from ..ast import ASTNode, DocumentPart, TextNode, WooElementKind
from .registry import Renderer, RendererRegistry, RenderingManager

DEFAULT_PREVIEW_WIDTH = 60


class TreeNodeRenderer(Renderer):
    """Default tree renderer for one node kind."""

    def __init__(self, kind: WooElementKind, abstract_variant: Optional[str] = None) -> None:
        self.kind = kind
        self.abstract_variant = abstract_variant

    def label(self, node: ASTNode) -> str:
        parts = [f"[bold]{node.kind.value}[/bold]"]
        if node.variant is not None:
            parts.append(f"[cyan]{escape(node.variant)}[/cyan]")
        if node.is_fragile:
            parts.append("[magenta]fragile[/magenta]")
        parts.append(f"[dim]{node.start}-{node.end}[/dim]")
        if node.metadata:
            parts.append(f"[yellow]{escape(', '.join(sorted(node.metadata)))}[/yellow]")
        return " ".join(parts)

    def render(self, rendering_manager: RenderingManager, node: ASTNode) -> Tree:
        tree = Tree(self.label(node))
        for child_tree in rendering_manager.render(*node.children):
            tree.children.append(child_tree)
        return tree


class DocumentPartTreeRenderer(TreeNodeRenderer):
    """Shows the title of a document part next to its kind."""

    def __init__(self, abstract_variant: Optional[str] = None) -> None:
        super().__init__(WooElementKind.DOCUMENT_PART, abstract_variant)

    def label(self, node: ASTNode) -> str:
        title = node.title if isinstance(node, DocumentPart) else node.text_content()
        return f"{super().label(node)} [green]{escape(title)}[/green]"

    def render(self, rendering_manager: RenderingManager, node: ASTNode) -> Tree:
        return Tree(self.label(node))


class TextNodeTreeRenderer(TreeNodeRenderer):
    """Shows a single-line preview of the text content."""

    def __init__(self, preview_width: int = DEFAULT_PREVIEW_WIDTH) -> None:
        super().__init__(WooElementKind.TEXT_NODE)
        self.preview_width = preview_width

    def label(self, node: ASTNode) -> str:
        content = node.content if isinstance(node, TextNode) else ""
        preview = content.replace("\n", "⏎")
        if len(preview) > self.preview_width:
            preview = preview[:self.preview_width - 1] + "…"
        return f"{super().label(node)} {escape(repr(preview))}"


def create_tree_registry(preview_width: int = DEFAULT_PREVIEW_WIDTH) -> RendererRegistry:
    """Registry with default tree renderers for every node kind."""
    registry = RendererRegistry()
    for kind in WooElementKind:
        registry.set_renderer(TreeNodeRenderer(kind))
    registry.set_renderer(DocumentPartTreeRenderer())
    registry.set_renderer(TextNodeTreeRenderer(preview_width))
    return registry


def render_tree(
    root: ASTNode,
    registry: Optional[RendererRegistry] = None,
    preview_width: int = DEFAULT_PREVIEW_WIDTH
) -> Tree:
    """Render an AST as a rich tree."""
    manager = RenderingManager(registry or create_tree_registry(preview_width))
    return manager.render_node(root)
