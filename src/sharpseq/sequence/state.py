"""Mutable bookkeeping for one diagram generation run.

Everything a run accumulates lives on a single :class:`DiagramState`:
the emitted lines, the participant registry, the current indent depth and
the loop / activation stacks.  A fresh state is created per run, so
nothing leaks between runs.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass

from sharpseq.output import plantuml


@dataclass(frozen=True)
class LoopContext:
    id: str


@dataclass(frozen=True)
class AsyncContext:
    id: str
    participant: str


class ParticipantRegistry:
    """Insertion-ordered set of participant names.

    Names are compared by exact string identity after trimming, so ``x``
    and ``x.Field`` are distinct participants.
    """

    def __init__(self):
        self._names: dict[str, None] = {}

    def register(self, name: str | None) -> bool:
        """Add *name*; returns True if it was not registered before."""
        if name is None:
            return False
        name = name.strip()
        if not name or name in self._names:
            return False
        self._names[name] = None
        return True

    def __contains__(self, name) -> bool:
        return name in self._names

    def __iter__(self):
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def names(self) -> list[str]:
        return list(self._names)


class DiagramState:
    def __init__(self, indent_width: int = 2):
        self.indent_width = indent_width
        self.indent = 0
        self.lines: list[str] = []
        self.participants = ParticipantRegistry()
        self.loops: list[LoopContext] = []
        self.activations: list[AsyncContext] = []
        self._loop_counter = 0
        self._async_counter = 0

    def write(self, line: str) -> None:
        self.lines.append(" " * (self.indent * self.indent_width) + line)

    @contextmanager
    def scope(self):
        """Indent everything written inside the block by one level."""
        self.indent += 1
        try:
            yield
        finally:
            self.indent -= 1

    @contextmanager
    def loop(self):
        """Push a fresh LoopContext for the duration of the block."""
        ctx = LoopContext(f"loop_{self._loop_counter}")
        self._loop_counter += 1
        self.loops.append(ctx)
        try:
            yield ctx
        finally:
            self.loops.pop()

    def begin_async(self, participant: str) -> AsyncContext:
        ctx = AsyncContext(f"async_{self._async_counter}", participant)
        self._async_counter += 1
        self.activations.append(ctx)
        self.write(plantuml.activate(participant))
        return ctx

    def end_async(self) -> AsyncContext | None:
        """Close the innermost activation.  No-op on an empty stack."""
        if not self.activations:
            return None
        ctx = self.activations.pop()
        self.write(plantuml.deactivate(ctx.participant))
        return ctx

    def end_async_to(self, depth: int) -> None:
        """Close activations until only *depth* remain open."""
        while len(self.activations) > depth:
            self.end_async()
