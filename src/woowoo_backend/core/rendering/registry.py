"""
Renderer Registry

Registry system mapping AST node kinds and variants to renderers.
Renderers for a specific variant take precedence over the default renderer
of their kind, so output formats only implement the variants they care about.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from ...exceptions.rendering_exceptions import RendererNotFoundError
from ..ast import ASTNode, WooElementKind

logger = logging.getLogger(__name__)


class Renderer(ABC):
    """
    Renders one kind of AST node.

    Attributes:
        kind: Node kind handled by the renderer
        abstract_variant: Variant handled by the renderer, or None for the
            default renderer of the kind
    """

    kind: WooElementKind
    abstract_variant: Optional[str] = None

    @abstractmethod
    def render(self, rendering_manager: "RenderingManager", node: ASTNode) -> Any:
        """Render ``node``; children are rendered through the manager."""


class RendererRegistry:
    """Registry for renderers keyed by (kind, variant)."""

    def __init__(self) -> None:
        self._renderers: Dict[Tuple[WooElementKind, Optional[str]], Renderer] = {}

    def set_renderer(self, renderer: Renderer) -> None:
        """Register a renderer, replacing any renderer with the same key."""
        key = (WooElementKind(renderer.kind), renderer.abstract_variant)
        if key in self._renderers:
            logger.debug(f"Replacing renderer for {key[0]}/{key[1] or 'default'}")
        self._renderers[key] = renderer

    def get_renderer(self, kind: WooElementKind, variant: Optional[str] = None) -> Renderer:
        """
        Look up the renderer for a node kind and variant.

        Args:
            kind: Node kind
            variant: Node variant (None for kinds without variants)

        Returns:
            The variant renderer if registered, else the kind default

        Raises:
            RendererNotFoundError: If neither is registered
        """
        kind = WooElementKind(kind)
        if variant is not None and (kind, variant) in self._renderers:
            return self._renderers[(kind, variant)]
        if (kind, None) in self._renderers:
            return self._renderers[(kind, None)]
        raise RendererNotFoundError(kind.value, variant)

    def has_renderer(self, kind: WooElementKind, variant: Optional[str] = None) -> bool:
        return (WooElementKind(kind), variant) in self._renderers

    def unregister(self, kind: WooElementKind, variant: Optional[str] = None) -> None:
        self._renderers.pop((WooElementKind(kind), variant), None)

    def get_registered_keys(self) -> List[Tuple[WooElementKind, Optional[str]]]:
        return list(self._renderers.keys())


class RenderingManager:
    """Dispatches nodes to the renderers of a registry."""

    def __init__(self, registry: RendererRegistry) -> None:
        self.registry = registry

    def render_node(self, node: ASTNode) -> Any:
        renderer = self.registry.get_renderer(node.kind, node.variant)
        return renderer.render(self, node)

    def render(self, *nodes: ASTNode) -> List[Any]:
        """Render nodes in order, returning one output per node."""
        return [self.render_node(node) for node in nodes]
