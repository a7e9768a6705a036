"""Walk a C# syntax tree and emit a PlantUML sequence diagram.

For every method declaration the generator writes a note naming the
method, then visits the body depth-first.  Calls, object creations and
control-flow statements each have a handler; any other node is walked
through transparently so calls nested inside declarations or expression
statements are still found.  A handler owns recursion into its own
sub-bodies.

The calling participant is always the class that declares the method,
however deep the walk goes.
"""

from __future__ import annotations

import logging

from sharpseq.config import DEFAULT_CONFIG, DiagramConfig
from sharpseq.languages.base import LanguageFrontend, NodeKind
from sharpseq.languages.registry import get_frontend
from sharpseq.output import plantuml
from sharpseq.sequence.state import DiagramState

log = logging.getLogger(__name__)


class SequenceDiagramGenerator:
    def __init__(self, config: DiagramConfig | None = None, frontend: LanguageFrontend | None = None):
        self.config = config or DEFAULT_CONFIG
        self.frontend = frontend or get_frontend("c_sharp")
        self.state = DiagramState(self.config.indent_width)
        self._source = b""
        self._handlers = {
            NodeKind.INVOCATION: self._handle_invocation,
            NodeKind.CREATION: self._handle_creation,
            NodeKind.IF: self._handle_if,
            NodeKind.SWITCH: self._handle_switch,
            NodeKind.FOR: self._handle_for,
            NodeKind.FOREACH: self._handle_foreach,
            NodeKind.WHILE: self._handle_while,
            NodeKind.TRY: self._handle_try,
            NodeKind.OTHER: self._analyze_statements,
        }

    def generate(self, tree, source: bytes) -> str:
        """Analyze every method in *tree* and return the diagram text.

        Each call starts from an empty state, so repeated calls on the
        same input return identical text.
        """
        self.state = DiagramState(self.config.indent_width)
        self._source = source
        methods = 0
        with self.state.scope():
            for method in self.frontend.iter_methods(tree.root_node):
                self.analyze_method(method)
                methods += 1
        log.info(
            "Analyzed %d methods, %d participants",
            methods, len(self.state.participants),
        )
        return plantuml.diagram(
            self.state.participants.names(),
            self.state.lines,
            self.config.indent_width,
        )

    def analyze_method(self, node) -> None:
        info = self.frontend.method_info(node, self._source)
        owner = info.owner or self.config.unknown_owner
        log.debug("Method %s.%s (line %d)", owner, info.name, info.line)

        self.state.participants.register(owner)
        self.state.write(plantuml.note_over(owner, info.name, info.parameters))

        depth = len(self.state.activations)
        if info.is_async:
            self.state.begin_async(owner)
        if info.body is not None:
            self._analyze_statements(info.body, owner)
        # close the method's own activation and any left open by async calls
        self.state.end_async_to(depth)

    # ---- Dispatch ----

    def _dispatch(self, node, caller: str) -> None:
        self._handlers[self.frontend.classify(node)](node, caller)

    def _analyze_statements(self, node, caller: str) -> None:
        for child in node.named_children:
            self._dispatch(child, caller)

    def _analyze_body(self, node, caller: str) -> None:
        """Visit a sub-body: a block's statements, or a single statement."""
        if node is None:
            return
        if self.frontend.is_block(node):
            self._analyze_statements(node, caller)
        else:
            self._dispatch(node, caller)

    # ---- Messages ----

    def _handle_invocation(self, node, caller: str) -> None:
        call = self.frontend.member_call(node, self._source)
        if call is None:
            log.debug("Skipping call without a receiver at line %d", node.start_point[0] + 1)
            return

        self.state.participants.register(call.receiver)
        is_async = call.name.endswith(self.config.async_suffix)
        self.state.write(plantuml.call(caller, call.receiver, call.name, call.arguments, is_async))

        site = call.returns_to
        if site is not None:
            value = site.target if site.kind == "assignment" else self.config.return_placeholder
            self.state.write(plantuml.reply(call.receiver, caller, value, is_async))

        if is_async:
            self.state.begin_async(call.receiver)

    def _handle_creation(self, node, caller: str) -> None:
        creation = self.frontend.creation(node, self._source)
        self.state.participants.register(creation.type_name)
        self.state.write(plantuml.create(caller, creation.type_name, creation.arguments))

    # ---- Control flow ----

    def _handle_if(self, node, caller: str) -> None:
        branch = self.frontend.branch(node, self._source)
        self.state.write(plantuml.alt(branch.condition))
        with self.state.scope():
            self._analyze_body(branch.consequence, caller)
            if branch.alternative is not None:
                self.state.write(plantuml.else_())
                self._analyze_body(branch.alternative, caller)
        self.state.write(plantuml.end())

    def _handle_switch(self, node, caller: str) -> None:
        switch = self.frontend.switch(node, self._source)
        self.state.write(plantuml.alt(switch.subject))
        with self.state.scope():
            for section in switch.sections:
                if not section.labels:
                    # pattern and default sections have no constant label
                    log.debug("Skipping switch section without constant label at line %d", section.line)
                    continue
                self.state.write(plantuml.case(section.labels))
                with self.state.scope():
                    for statement in section.statements:
                        self._dispatch(statement, caller)
        self.state.write(plantuml.end())

    def _handle_for(self, node, caller: str) -> None:
        condition, body = self.frontend.for_loop(node, self._source)
        self._loop(condition or "true", body, caller)

    def _handle_foreach(self, node, caller: str) -> None:
        item, collection, body = self.frontend.foreach_loop(node, self._source)
        self._loop(f"for each {item} in {collection}", body, caller)

    def _handle_while(self, node, caller: str) -> None:
        condition, body = self.frontend.while_loop(node, self._source)
        self._loop(f"while {condition}", body, caller)

    def _loop(self, label: str, body, caller: str) -> None:
        with self.state.loop():
            self.state.write(plantuml.loop(label))
            with self.state.scope():
                self._analyze_body(body, caller)
            self.state.write(plantuml.end())

    def _handle_try(self, node, caller: str) -> None:
        parts = self.frontend.try_parts(node, self._source)
        self._group("try", parts.body, caller)
        for clause in parts.catches:
            exc_type = clause.exception_type or self.config.default_exception_type
            name = clause.name or self.config.default_exception_name
            self._group(f"catch {exc_type} as {name}", clause.body, caller)
        if parts.finally_body is not None:
            self._group("finally", parts.finally_body, caller)

    def _group(self, label: str, body, caller: str) -> None:
        self.state.write(plantuml.group(label))
        with self.state.scope():
            self._analyze_body(body, caller)
        self.state.write(plantuml.end())
