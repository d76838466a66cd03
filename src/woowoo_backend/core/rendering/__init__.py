"""
Rendering package.

Components:
- registry: Renderer lookup by node kind and variant
- tree_renderer: Console tree view of an AST built on ``rich``
"""

from .registry import Renderer, RendererRegistry, RenderingManager

from .tree_renderer import (
    TreeNodeRenderer,
    DocumentPartTreeRenderer,
    TextNodeTreeRenderer,
    create_tree_registry,
    render_tree,
)

__all__ = [
    "Renderer",
    "RendererRegistry",
    "RenderingManager",
    "TreeNodeRenderer",
    "DocumentPartTreeRenderer",
    "TextNodeTreeRenderer",
    "create_tree_registry",
    "render_tree",
]
