"""Shared test fixtures and configuration for WooWoo backend tests."""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterator

import pytest

from woowoo_backend.core.ast import ASTNode, TextNode
from woowoo_backend.core.parser import Parser


SAMPLE_DOCUMENT = """\
.h1 Introduction
  label: intro

First paragraph of text.

.Theorem:
  label: thm-main
  title: Pythagoras

  The square of the hypotenuse.

    A nested remark.

!code:

  .h2 not a heading
  x = 1

Closing words.
label: closing
"""


@pytest.fixture
def temp_directory():
    """Provide a temporary directory for testing."""
    temp_dir = tempfile.mkdtemp()
    temp_path = Path(temp_dir)

    yield temp_path

    # Cleanup temporary directory
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def parser() -> Parser:
    """Provide a parser with the default grammar."""
    return Parser()


@pytest.fixture
def sample_document() -> str:
    """Provide a document using every default construct."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def sample_file(temp_directory: Path, sample_document: str) -> Path:
    """Provide the sample document written to disk."""
    path = temp_directory / "sample.woo"
    path.write_text(sample_document, encoding="utf-8")
    return path


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove WOOWOO_* variables so configuration tests see built-in defaults."""
    for name in (
        "WOOWOO_LOG_LEVEL",
        "WOOWOO_LOG_FORMAT",
        "WOOWOO_LOG_FILE",
        "WOOWOO_LOG_ROTATION",
        "WOOWOO_TREE_PREVIEW_WIDTH",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def preserve_root_logger() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after tests that reconfigure logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def tree_shape(node: ASTNode) -> Dict[str, Any]:
    """Structural fingerprint of a tree: kinds, variants, columns, text and metadata."""
    shape: Dict[str, Any] = {
        "kind": node.kind.value,
        "variant": node.variant,
        "column": node.start.column,
        "is_fragile": node.is_fragile,
        "metadata": dict(node.metadata),
    }
    if isinstance(node, TextNode):
        shape["content"] = node.content
    else:
        shape["children"] = [tree_shape(child) for child in node.children]
    return shape


@pytest.fixture
def shape_of():
    """Provide the structural fingerprint function."""
    return tree_shape
