"""Turn C# source text into a tree-sitter syntax tree."""

from __future__ import annotations

import logging
from pathlib import Path

from sharpseq.languages.registry import get_language_for_file, get_parser

log = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "c_sharp"


def read_source(path) -> bytes:
    """Read a source file as raw bytes.  I/O errors propagate to the caller."""
    return Path(path).read_bytes()


def parse_source(source, language: str = DEFAULT_LANGUAGE):
    """Parse *source* (str or bytes) and return ``(tree, source_bytes)``.

    The tree is returned as the parser produced it.  Syntax errors are
    logged, not repaired.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    parser = get_parser(language)
    tree = parser.parse(source)
    if tree.root_node.has_error:
        log.warning("Source contains syntax errors; the diagram may be incomplete")
    return tree, source


def parse_file(path):
    """Parse a source file, detecting the language from its extension.

    Files with an unknown extension are parsed as C#.
    """
    language = get_language_for_file(str(path)) or DEFAULT_LANGUAGE
    source = read_source(path)
    log.debug("Parsing %s as %s (%d bytes)", path, language, len(source))
    return parse_source(source, language)
