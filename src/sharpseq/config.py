"""Output conventions for generated diagrams."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiagramConfig:
    """Fixed text conventions used while walking a method body.

    The defaults reproduce the classic output: ``Async``-suffixed calls are
    asynchronous, blocks indent by two columns, an untyped ``catch`` reads
    ``catch Exception as ex``.
    """

    async_suffix: str = "Async"
    indent_width: int = 2
    default_exception_type: str = "Exception"
    default_exception_name: str = "ex"
    return_placeholder: str = "return value"
    unknown_owner: str = "UnknownClass"


DEFAULT_CONFIG = DiagramConfig()
