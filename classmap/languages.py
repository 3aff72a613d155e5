"""Language registry for tree-sitter grammars."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tree_sitter_language_pack import get_parser

if TYPE_CHECKING:
    from tree_sitter import Parser


EXTENSION_MAP: dict[str, str] = {
    ".rb": "ruby",
}


@functools.cache
def _cached_parser(name: str) -> Parser:
    """Return a cached tree-sitter Parser for the given language."""
    return get_parser(name)


@dataclass(frozen=True)
class TreeSitterLanguage:
    """A tree-sitter language and the file extensions it covers."""

    name: str
    extensions: tuple[str, ...]

    def get_parser(self) -> Parser:
        """Get a configured tree-sitter Parser (cached)."""
        return _cached_parser(self.name)


LANGUAGES: dict[str, TreeSitterLanguage] = {
    "ruby": TreeSitterLanguage(name="ruby", extensions=(".rb",)),
}


def language_for_extension(ext: str) -> TreeSitterLanguage | None:
    """Look up a language config by file extension.

    Args:
        ext: File extension including the dot (e.g., ".rb").

    Returns:
        The TreeSitterLanguage config, or None if unsupported.
    """
    lang_name = EXTENSION_MAP.get(ext)
    if lang_name is None:
        return None
    return LANGUAGES.get(lang_name)
