"""
WooWoo CLI Package.

This package contains the command-line interface for WooWoo, built with
Typer and Rich.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]
