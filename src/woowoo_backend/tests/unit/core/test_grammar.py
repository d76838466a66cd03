"""
Tests for the declarative block grammar.
"""

import pytest

from woowoo_backend.core.parser import CompiledGrammar, Grammar, Pattern
from woowoo_backend.core.parser.grammar import DOCUMENT_PART
from woowoo_backend.exceptions import GrammarError


class TestGrammar:
    """Tests for Grammar construction and compilation."""

    def test_compile_produces_pattern_per_rule(self):
        """Test every rule compiles into a named Pattern."""
        compiled = Grammar().compile()
        assert isinstance(compiled, CompiledGrammar)
        assert isinstance(compiled.document_part, Pattern)
        assert compiled.document_part.name == "document_part"
        assert compiled.text_block_separator.name == "text_block_separator"

    def test_from_config_ignores_null_entries(self):
        """Test null overrides keep the built-in rules."""
        grammar = Grammar.from_config({"document_part": None, "outer_env": None})
        assert grammar == Grammar()
        assert grammar.document_part == DOCUMENT_PART

    def test_from_config_applies_overrides(self):
        """Test configured rules replace the defaults."""
        regex = r"(?P<before_title>(?P<variant>#+)[ \t]+)(?P<title>[^\r\n]*(?:\r?\n|$))"
        grammar = Grammar.from_config({"document_part": regex})
        assert grammar.document_part == regex
        assert grammar.outer_env == Grammar().outer_env

    def test_from_config_rejects_unknown_rules(self):
        """Test misspelled rule names are reported."""
        with pytest.raises(ValueError, match="documentpart"):
            Grammar.from_config({"documentpart": "x"})

    def test_from_config_none(self):
        """Test a missing section means the default grammar."""
        assert Grammar.from_config(None) == Grammar()

    def test_compile_rejects_rule_without_required_group(self):
        """Test a document part rule must capture the title."""
        grammar = Grammar(document_part=r"(?P<before_title>(?P<variant>#+) )")
        with pytest.raises(GrammarError, match="title"):
            grammar.compile()

    def test_compile_rejects_invalid_regex(self):
        """Test broken regex text is reported at compile time."""
        with pytest.raises(GrammarError):
            Grammar(text_block_separator="(").compile()


class TestDefaultRules:
    """Tests for the default WooWoo syntax."""

    def setup_method(self):
        """Set up test fixtures."""
        self.patterns = Grammar().compile()

    def test_document_part_header(self):
        """Test part headers capture variant and title."""
        match = self.patterns.document_part.match_at_start(".h1 Introduction\nbody")
        assert match.require("variant") == "h1"
        assert match.require("before_title") == ".h1 "
        assert match.require("title") == "Introduction\n"
        assert match.group("metablock") is None

    def test_document_part_header_with_metablock(self):
        """Test indented key lines below a header form its metablock."""
        source = ".h2 Methods\n  label: methods\n  tags:\n    - a\n\nbody"
        match = self.patterns.document_part.match_at_start(source)
        assert match.group("metablock") == "  label: methods\n  tags:\n    - a\n"
        assert match.after == "\nbody"

    def test_document_object_requires_capitalised_variant(self):
        """Test objects are capitalised, environments lower case."""
        assert self.patterns.document_object.match_at_start(".Theorem:\n").require("variant") == "Theorem"
        assert self.patterns.document_object.match_at_start(".tikz:\n") is None
        assert self.patterns.outer_env.match_at_start(".tikz:\n").require("variant") == "tikz"
        assert self.patterns.outer_env.match_at_start(".Theorem:\n") is None

    def test_fragile_outer_env(self):
        """Test the exclamation mark opens a fragile environment."""
        match = self.patterns.fragile_outer_env.match_at_start("!code:\n  x = 1\n")
        assert match.require("variant") == "code"
        assert match.matched == "!code:\n"

    def test_opener_at_end_of_input(self):
        """Test openers without a final newline still match."""
        assert self.patterns.document_object.match_at_start(".Proof:") is not None

    def test_part_header_is_not_an_environment(self):
        """Test a header with a title is never read as an opener."""
        assert self.patterns.outer_env.match_at_start(".h1 Title\n") is None

    def test_text_block_separator(self):
        """Test blank lines, including whitespace-only ones, separate blocks."""
        separator = self.patterns.text_block_separator
        assert separator.find_first("a\n\nb").matched == "\n\n"
        assert separator.find_first("a\n  \t\nb").matched == "\n  \t\n"
        assert separator.find_first("a\r\n\r\nb").matched == "\r\n\r\n"
        assert separator.find_first("a\nb") is None

    def test_trailing_metablock_only_at_end(self):
        """Test key lines count as metablock only when they close the content."""
        metablock = self.patterns.metablock
        assert metablock.find_first("Text.\nlabel: x\n").matched == "label: x\n"
        assert metablock.find_first("label: x\nMore text.") is None
