"""Tests for the language registry."""

from __future__ import annotations

from classmap.languages import LANGUAGES, language_for_extension


class TestLanguageForExtension:
    """Tests for extension-to-language lookup."""

    def test_ruby_extension(self) -> None:
        lang = language_for_extension(".rb")
        assert lang is not None
        assert lang.name == "ruby"

    def test_unknown_extension_returns_none(self) -> None:
        assert language_for_extension(".py") is None

    def test_no_dot_returns_none(self) -> None:
        assert language_for_extension("rb") is None


class TestTreeSitterLanguage:
    """Tests for TreeSitterLanguage configuration."""

    def test_get_parser(self) -> None:
        parser = LANGUAGES["ruby"].get_parser()
        assert parser is not None

    def test_get_parser_returns_same_instance(self) -> None:
        lang = LANGUAGES["ruby"]
        assert lang.get_parser() is lang.get_parser()

    def test_parser_produces_program(self) -> None:
        tree = LANGUAGES["ruby"].get_parser().parse(b"class Foo; end")
        assert tree.root_node.type == "program"
