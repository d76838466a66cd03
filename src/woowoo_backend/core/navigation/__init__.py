"""
Navigation package: document outlines for editor navigation panes.
"""

from .outline import OutlineEntry, build_outline

__all__ = ["OutlineEntry", "build_outline"]
