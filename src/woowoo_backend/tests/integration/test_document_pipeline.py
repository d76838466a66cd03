"""
Integration tests for the document pipeline.

Parses complete documents from disk with configured grammars and checks
that the outline, tree view and serializer agree on the result.
"""

import json

from rich.console import Console

from woowoo_backend.core.ast import DocumentObject, DocumentPart, OuterEnv, TextBlock
from woowoo_backend.core.navigation import build_outline
from woowoo_backend.core.parser import Grammar, Parser
from woowoo_backend.core.rendering import render_tree
from woowoo_backend.core.serializer import serialize
from woowoo_backend.utils.config import ConfigManager


class TestDocumentPipeline:
    """End-to-end tests over the sample document."""

    def test_parse_sample_file(self, parser, sample_file):
        """Test every construct of the sample is recognised."""
        root = parser.parse(sample_file.read_text(encoding="utf-8"))
        part, paragraph, theorem, code, closing = root.children

        assert isinstance(part, DocumentPart)
        assert part.title == "Introduction"
        assert part.metadata == {"label": "intro"}

        assert isinstance(paragraph, TextBlock)
        assert paragraph.text_content() == "First paragraph of text."

        assert isinstance(theorem, DocumentObject)
        assert theorem.metadata == {"label": "thm-main", "title": "Pythagoras"}
        assert theorem.children[0].text_content() == "The square of the hypotenuse."
        assert theorem.children[1].text_content() == "A nested remark."

        assert isinstance(code, OuterEnv)
        assert code.is_fragile
        assert code.text_content() == ".h2 not a heading\nx = 1"

        assert closing.text_content() == "Closing words."
        assert closing.metadata == {"label": "closing"}

    def test_parent_links_and_positions(self, parser, sample_document):
        """Test every node is inside its parent and linked to it."""
        root = parser.parse(sample_document)
        for node in root.walk():
            for child in node.children:
                assert child.parent is node
                assert node.start <= child.start
                assert child.end <= node.end

    def test_ast_is_json_serializable(self, parser, sample_document):
        """Test the dictionary form survives a JSON dump."""
        data = json.loads(json.dumps(parser.parse(sample_document).to_dict()))
        assert data["children"][2]["variant"] == "Theorem"

    def test_outline_matches_tree(self, parser, sample_document):
        """Test the outline lists the parts and objects of the tree."""
        root = parser.parse(sample_document)
        entries = build_outline(root)
        assert [(entry.variant, entry.title, entry.label) for entry in entries] == [
            ("h1", "Introduction", "intro"),
            ("Theorem", "Pythagoras", "thm-main"),
        ]

    def test_tree_rendering(self, parser, sample_document):
        """Test the rich tree renders every node."""
        console = Console(record=True, width=120)
        console.print(render_tree(parser.parse(sample_document)))
        text = console.export_text()
        assert "DocumentRoot" in text
        assert "OuterEnv" in text
        assert "Introduction" in text

    def test_serialize_and_reparse(self, parser, sample_document, shape_of):
        """Test written source parses back to the same structure."""
        root = parser.parse(sample_document)
        assert shape_of(parser.parse(serialize(root))) == shape_of(root)


class TestConfiguredGrammar:
    """Tests for grammars loaded from configuration files."""

    def test_grammar_from_project_config(self, temp_directory, clean_environment):
        """Test configured rules replace the defaults."""
        config = {
            "grammar": {
                "document_part": r"(?P<before_title>(?P<variant>#+)[ \t]+)(?P<title>[^\r\n]*(?:\r?\n|$))"
            }
        }
        (temp_directory / "woowoo.config.json").write_text(json.dumps(config), encoding="utf-8")
        manager = ConfigManager(project_root=temp_directory, load_env=False)

        parser = Parser(Grammar.from_config(manager.get_grammar_config()))
        root = parser.parse("## Methods\n\n.Theorem:\n  Body.\n")

        part, theorem = root.children
        assert part.variant == "##"
        assert part.title == "Methods"
        assert theorem.variant == "Theorem"
        assert [entry.variant for entry in build_outline(root)] == ["##", "Theorem"]
