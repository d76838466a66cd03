"""
WooWoo Backend

Parser for the WooWoo structured-document markup language: turns documents
into ordered, typed ASTs with exact source positions and per-node metadata.
"""

__version__ = "0.1.0"

from .core import Parser, Grammar, serialize, build_outline

__all__ = ["Parser", "Grammar", "serialize", "build_outline", "__version__"]
