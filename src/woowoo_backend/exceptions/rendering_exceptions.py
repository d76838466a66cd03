"""
Rendering-related exceptions for WooWoo.
"""

from typing import Optional


class RendererNotFoundError(LookupError):
    """Raised when no renderer is registered for a node kind and variant."""

    def __init__(self, kind: str, variant: Optional[str] = None) -> None:
        self.kind = kind
        self.variant = variant
        target = f"{kind}/{variant}" if variant else kind
        super().__init__(f"No renderer registered for '{target}' and no default for '{kind}'")
