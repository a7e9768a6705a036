from __future__ import annotations

from .base import (
    Branch,
    CatchClause,
    Creation,
    LanguageFrontend,
    MemberCall,
    MethodInfo,
    NodeKind,
    ReturnSite,
    Switch,
    SwitchSection,
    TryParts,
)

_NODE_KINDS = {
    "invocation_expression": NodeKind.INVOCATION,
    "object_creation_expression": NodeKind.CREATION,
    "if_statement": NodeKind.IF,
    "switch_statement": NodeKind.SWITCH,
    "for_statement": NodeKind.FOR,
    "foreach_statement": NodeKind.FOREACH,
    "while_statement": NodeKind.WHILE,
    "try_statement": NodeKind.TRY,
}

_TYPE_DECLARATIONS = frozenset({
    "class_declaration",
    "struct_declaration",
    "record_declaration",
    "interface_declaration",
})

# Case labels that test a shape rather than compare against a constant.
_PATTERN_LABELS = frozenset({
    "declaration_pattern",
    "recursive_pattern",
    "var_pattern",
    "negated_pattern",
    "parenthesized_pattern",
    "relational_pattern",
    "and_pattern",
    "or_pattern",
    "list_pattern",
    "discard",
})

_WRAPPER_LABELS = ("pattern", "constant_pattern", "type_pattern")

# Type-only labels (`case string:`) test the runtime type; they are patterns too.
_TYPE_LABELS = frozenset({
    "predefined_type",
    "generic_name",
    "array_type",
    "nullable_type",
    "pointer_type",
    "tuple_type",
})


class CSharpFrontend(LanguageFrontend):
    """Reads the tree-sitter C# grammar for the sequence diagram walker."""

    @property
    def language_name(self) -> str:
        return "c_sharp"

    @property
    def file_extensions(self) -> list[str]:
        return [".cs", ".csx"]

    def classify(self, node) -> NodeKind:
        return _NODE_KINDS.get(node.type, NodeKind.OTHER)

    def is_block(self, node) -> bool:
        return node.type == "block"

    # ---- Declarations ----

    def iter_methods(self, root):
        """Yield method declarations in source order (pre-order walk)."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "method_declaration":
                yield node
            stack.extend(reversed(node.named_children))

    def _owner_name(self, node, source) -> str | None:
        parent = node.parent
        while parent is not None:
            if parent.type in _TYPE_DECLARATIONS:
                name = parent.child_by_field_name("name")
                if name is not None:
                    return self.node_text(name, source)
            parent = parent.parent
        return None

    def _has_modifier(self, node, source, modifier: str) -> bool:
        for child in node.children:
            if child.type == "modifier":
                if self.node_text(child, source) == modifier:
                    return True
        return False

    def _parameters(self, node, source) -> list[str]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []
        params = []
        for child in params_node.named_children:
            if child.type != "parameter":
                continue
            type_node = child.child_by_field_name("type")
            name = self.node_text(child.child_by_field_name("name"), source)
            if type_node is not None:
                params.append(f"{self.node_text(type_node, source)} {name}")
            else:
                params.append(name)
        return params

    def method_info(self, node, source: bytes) -> MethodInfo:
        name = self.node_text(self.required_child(node, "name"), source)
        return MethodInfo(
            owner=self._owner_name(node, source),
            name=name,
            parameters=self._parameters(node, source),
            is_async=self._has_modifier(node, source, "async"),
            body=self._method_body(node),
            line=node.start_point[0] + 1,
        )

    def _method_body(self, node):
        body = node.child_by_field_name("body")
        if body is not None:
            return body
        for child in node.named_children:
            if child.type in ("block", "arrow_expression_clause"):
                return child
        # abstract, interface and extern methods carry no body
        return None

    # ---- Expressions ----

    def _arguments(self, arg_list, source) -> list[str]:
        if arg_list is None:
            return []
        return [
            self.node_text(arg, source)
            for arg in arg_list.named_children
            if arg.type == "argument"
        ]

    def _return_site(self, node, source) -> ReturnSite | None:
        parent = node.parent
        if parent is None:
            return None
        if parent.type == "assignment_expression":
            target = parent.child_by_field_name("left")
            return ReturnSite("assignment", self.node_text(target, source))
        if parent.type == "return_statement":
            return ReturnSite("return")
        return None

    def member_call(self, node, source: bytes) -> MemberCall | None:
        function = self.required_child(node, "function")
        if function.type != "member_access_expression":
            return None
        receiver = self.required_child(function, "expression")
        name = self.required_child(function, "name")
        return MemberCall(
            receiver=self.node_text(receiver, source),
            name=self.node_text(name, source),
            arguments=self._arguments(node.child_by_field_name("arguments"), source),
            returns_to=self._return_site(node, source),
            line=node.start_point[0] + 1,
        )

    def creation(self, node, source: bytes) -> Creation:
        type_node = self.required_child(node, "type")
        return Creation(
            type_name=self.node_text(type_node, source),
            arguments=self._arguments(node.child_by_field_name("arguments"), source),
        )

    # ---- Statements ----

    def branch(self, node, source: bytes) -> Branch:
        return Branch(
            condition=self.node_text(self.required_child(node, "condition"), source),
            consequence=self.required_child(node, "consequence"),
            alternative=node.child_by_field_name("alternative"),
        )

    def for_loop(self, node, source: bytes):
        condition = node.child_by_field_name("condition")
        text = self.node_text(condition, source) if condition is not None else None
        return text, self.required_child(node, "body")

    def foreach_loop(self, node, source: bytes):
        item = self.node_text(self.required_child(node, "left"), source)
        collection = self.node_text(self.required_child(node, "right"), source)
        return item, collection, self.required_child(node, "body")

    def while_loop(self, node, source: bytes):
        condition = self.node_text(self.required_child(node, "condition"), source)
        return condition, self.required_child(node, "body")

    def try_parts(self, node, source: bytes) -> TryParts:
        catches = []
        finally_body = None
        for child in node.named_children:
            if child.type == "catch_clause":
                catches.append(self._catch_clause(child, source))
            elif child.type == "finally_clause":
                finally_body = self._first_block(child)
                if finally_body is None:
                    finally_body = child
        body = node.child_by_field_name("body")
        if body is None:
            body = self._first_block(node)
        if body is None:
            body = self.required_child(node, "body")
        return TryParts(
            body=body,
            catches=catches,
            finally_body=finally_body,
        )

    def _catch_clause(self, node, source) -> CatchClause:
        exc_type = None
        name = None
        for child in node.named_children:
            if child.type == "catch_declaration":
                type_node = child.child_by_field_name("type")
                name_node = child.child_by_field_name("name")
                if type_node is not None:
                    exc_type = self.node_text(type_node, source)
                if name_node is not None:
                    name = self.node_text(name_node, source)
        body = node.child_by_field_name("body")
        if body is None:
            body = self._first_block(node)
        if body is None:
            body = self.required_child(node, "body")
        return CatchClause(exception_type=exc_type, name=name, body=body)

    def _first_block(self, node):
        for child in node.named_children:
            if child.type == "block":
                return child
        return None

    # ---- Switch ----

    def switch(self, node, source: bytes) -> Switch:
        subject = self.required_child(node, "value")
        if subject.type == "parenthesized_expression" and subject.named_child_count == 1:
            subject = subject.named_children[0]
        body = self.required_child(node, "body")
        sections = merge_stacked_sections([
            self._switch_section(child, source)
            for child in body.named_children
            if child.type == "switch_section"
        ])
        return Switch(subject=self.node_text(subject, source), sections=sections)

    def _constant_label(self, label, guarded: bool, source) -> str | None:
        """Text of a constant ``case`` label, or None for pattern labels."""
        if label is None or guarded:
            return None
        # some grammar versions wrap the label in a single-child pattern node
        while label.type in _WRAPPER_LABELS and label.named_child_count == 1:
            label = label.named_children[0]
        if label.type in _PATTERN_LABELS or label.type in _TYPE_LABELS:
            return None
        return self.node_text(label, source)

    def _switch_section(self, node, source) -> SwitchSection:
        """Split a switch section into constant labels and statements.

        Handles both grammar shapes: labels wrapped in ``case_switch_label``
        nodes, and bare ``case <expr> :`` token runs directly in the section.
        """
        labels: list[str] = []
        statements = []
        in_label = False
        label = None
        guarded = False
        for child in node.children:
            kind = child.type
            if kind == "case_switch_label":
                value = child.named_children[0] if child.named_children else None
                text = self._constant_label(value, False, source)
                if text is not None:
                    labels.append(text)
            elif kind in ("case_pattern_switch_label", "default_switch_label"):
                continue
            elif not child.is_named:
                if kind in ("case", "default"):
                    in_label = True
                    label = None
                    guarded = False
                elif kind == ":" and in_label:
                    text = self._constant_label(label, guarded, source)
                    if text is not None:
                        labels.append(text)
                    in_label = False
            elif in_label:
                if kind == "when_clause":
                    guarded = True
                elif kind != "comment" and label is None:
                    label = child
            else:
                statements.append(child)
        return SwitchSection(labels=labels, statements=statements, line=node.start_point[0] + 1)


def merge_stacked_sections(sections: list[SwitchSection]) -> list[SwitchSection]:
    """Fold label-only sections into the next section that has statements.

    Some grammar versions give each label of ``case 2: case 3: ...`` its own
    section.  The labels belong to one section, as they do in C# itself.
    """
    merged = []
    pending: list[str] = []
    pending_line = None
    for section in sections:
        if not section.statements:
            pending.extend(section.labels)
            if pending_line is None:
                pending_line = section.line
            continue
        merged.append(SwitchSection(
            labels=pending + section.labels,
            statements=section.statements,
            line=section.line if pending_line is None else pending_line,
        ))
        pending = []
        pending_line = None
    if pending_line is not None:
        merged.append(SwitchSection(labels=pending, statements=[], line=pending_line))
    return merged
