"""Exit codes and error types for sharpseq.

Exit code scheme (0 on success):

    1  ERROR    -- unexpected failure (unreadable input, unwritable output)
    2  USAGE    -- invalid arguments (Click default)
    3  PARSE    -- the syntax tree does not have the shape the walker needs
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_PARSE: int = 3

# ---------------------------------------------------------------------------
# Custom exceptions (reported by Click with their exit code)
# ---------------------------------------------------------------------------


class SharpseqError(click.ClickException):
    """Base class for sharpseq errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class SyntaxTreeError(SharpseqError):
    """A recognized construct lacks a child it must have.

    This is an input-contract violation: the parser handed over a tree the
    walker cannot read.  It is never repaired locally.
    """

    def __init__(self, node_type: str, field: str, line: int | None = None):
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"{node_type} has no '{field}' child{where}", EXIT_PARSE)
        self.node_type = node_type
        self.field = field
        self.line = line


class UnsupportedLanguageError(SharpseqError):
    """No grammar is available for the requested language or file."""

    def __init__(self, language: str):
        super().__init__(f"Unsupported language: {language}", EXIT_USAGE)
        self.language = language

