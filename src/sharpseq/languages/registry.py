"""Language detection, grammar loading, and frontend registry."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import TYPE_CHECKING

from sharpseq.exit_codes import UnsupportedLanguageError

if TYPE_CHECKING:
    from .base import LanguageFrontend

# Language name -> grammar name in tree_sitter_language_pack
GRAMMAR_ALIASES: dict[str, str] = {
    "c_sharp": "csharp",
}

_LANG_ALIASES = {
    "c#": "c_sharp",
    "cs": "c_sharp",
    "csharp": "c_sharp",
    "c_sharp": "c_sharp",
}

_SUPPORTED_LANGUAGES = frozenset({"c_sharp"})


def normalize_language_name(language: str) -> str:
    """Normalize user-facing language aliases (``C#``, ``cs``) to ``c_sharp``."""
    key = language.strip().lower()
    return _LANG_ALIASES.get(key, key)


def get_language_for_file(path: str) -> str | None:
    """Determine the language for a file based on its extension.

    Returns the language name string, or None if unsupported.
    """
    _, ext = os.path.splitext(path)
    ext = ext.lower()
    for language in sorted(_SUPPORTED_LANGUAGES):
        if ext in _create_frontend(language).file_extensions:
            return language
    return None


def get_parser(language: str):
    """Get a tree-sitter Parser for *language* from tree_sitter_language_pack.

    Raises:
        UnsupportedLanguageError: If the language is not supported.
    """
    language = normalize_language_name(language)
    if language not in _SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(language)

    from tree_sitter_language_pack import get_parser as _get_parser

    return _get_parser(GRAMMAR_ALIASES.get(language, language))


@lru_cache(maxsize=None)
def _create_frontend(language: str) -> "LanguageFrontend":
    """Create and cache a frontend instance for a language."""
    if language == "c_sharp":
        from .csharp_lang import CSharpFrontend

        return CSharpFrontend()
    raise UnsupportedLanguageError(language)


def get_frontend(language: str) -> "LanguageFrontend":
    """Get the frontend for a language.

    Raises:
        UnsupportedLanguageError: If the language is not supported.
    """
    language = normalize_language_name(language)
    if language not in _SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(language)
    return _create_frontend(language)

