from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator

from sharpseq.exit_codes import SyntaxTreeError


class NodeKind(enum.Enum):
    """Constructs the diagram walker reacts to.  Everything else is OTHER."""

    INVOCATION = "invocation"
    CREATION = "creation"
    IF = "if"
    SWITCH = "switch"
    FOR = "for"
    FOREACH = "foreach"
    WHILE = "while"
    TRY = "try"
    OTHER = "other"


# ---- Read-only views over syntax nodes ----


@dataclass(frozen=True)
class MethodInfo:
    owner: str | None
    name: str
    parameters: list[str]
    is_async: bool
    body: object | None
    line: int


@dataclass(frozen=True)
class ReturnSite:
    """Where the value of a call goes: an assignment target or a return."""

    kind: str  # "assignment" | "return"
    target: str | None = None


@dataclass(frozen=True)
class MemberCall:
    receiver: str
    name: str
    arguments: list[str]
    returns_to: ReturnSite | None
    line: int


@dataclass(frozen=True)
class Creation:
    type_name: str
    arguments: list[str]


@dataclass(frozen=True)
class Branch:
    condition: str
    consequence: object
    alternative: object | None


@dataclass(frozen=True)
class SwitchSection:
    labels: list[str]
    statements: list = field(default_factory=list)
    line: int = 0


@dataclass(frozen=True)
class Switch:
    subject: str
    sections: list[SwitchSection]


@dataclass(frozen=True)
class CatchClause:
    exception_type: str | None
    name: str | None
    body: object


@dataclass(frozen=True)
class TryParts:
    body: object
    catches: list[CatchClause]
    finally_body: object | None


class LanguageFrontend(ABC):
    """Base class for language-specific syntax tree readers.

    A frontend knows the node types and field names of one tree-sitter
    grammar and turns them into the views above.  It never mutates the tree.
    """

    @property
    @abstractmethod
    def language_name(self) -> str: ...

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]: ...

    @abstractmethod
    def classify(self, node) -> NodeKind: ...

    @abstractmethod
    def iter_methods(self, root) -> Iterator: ...

    @abstractmethod
    def method_info(self, node, source: bytes) -> MethodInfo: ...

    @abstractmethod
    def member_call(self, node, source: bytes) -> MemberCall | None:
        """Describe ``receiver.Name(args)``; None for any other call shape."""
        ...

    @abstractmethod
    def creation(self, node, source: bytes) -> Creation: ...

    @abstractmethod
    def branch(self, node, source: bytes) -> Branch: ...

    @abstractmethod
    def switch(self, node, source: bytes) -> Switch: ...

    @abstractmethod
    def for_loop(self, node, source: bytes) -> tuple[str | None, object]: ...

    @abstractmethod
    def foreach_loop(self, node, source: bytes) -> tuple[str, str, object]: ...

    @abstractmethod
    def while_loop(self, node, source: bytes) -> tuple[str, object]: ...

    @abstractmethod
    def try_parts(self, node, source: bytes) -> TryParts: ...

    @abstractmethod
    def is_block(self, node) -> bool: ...

    def node_text(self, node, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def required_child(self, node, field_name: str):
        """Return the child stored under *field_name* or raise SyntaxTreeError."""
        child = node.child_by_field_name(field_name)
        if child is None:
            raise SyntaxTreeError(node.type, field_name, node.start_point[0] + 1)
        return child
