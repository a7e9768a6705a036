"""PlantUML sequence diagram helpers.

Small building blocks for the lines of a PlantUML sequence diagram.
Every function returns a plain, unindented string -- the caller owns
indentation and ordering.  :func:`diagram` assembles the final document.
"""

from __future__ import annotations

START = "@startuml"
END = "@enduml"


def escape_newlines(text: str) -> str:
    """Replace line breaks with the two-character ``\\n`` marker.

    Keeps each message on a single physical line.
    """
    return text.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\n")


def _args(arguments: list[str]) -> str:
    return ", ".join(escape_newlines(a) for a in arguments)


def participant(name: str) -> str:
    """Generate a participant declaration (``participant "name"``)."""
    return f'participant "{name}"'


def note_over(owner: str, method: str, parameters: list[str]) -> str:
    return f"note over {owner}: {method}({', '.join(parameters)})"


def call(source: str, target: str, method: str, arguments: list[str], is_async: bool = False) -> str:
    """Generate a call message; asynchronous calls use the open arrow ``->>``."""
    arrow = "->>" if is_async else "->"
    return f'{source} {arrow} "{target}": {method}({_args(arguments)})'


def reply(target: str, source: str, value: str, is_async: bool = False) -> str:
    """Generate a return message from *target* back to *source*."""
    arrow = "-->>" if is_async else "-->"
    return f"{target} {arrow} {source}: {value}"


def create(source: str, type_name: str, arguments: list[str]) -> str:
    """Generate a creation message (``**`` marks the created participant)."""
    return f'{source} -> "{type_name}" **: new({_args(arguments)})'


def activate(name: str) -> str:
    return f"activate {name}"


def deactivate(name: str) -> str:
    return f"deactivate {name}"


def alt(label: str) -> str:
    return f"alt {label}"


def else_() -> str:
    return "else"


def case(labels: list[str]) -> str:
    return f"case {', '.join(labels)}"


def loop(label: str) -> str:
    return f"loop {label}"


def group(label: str) -> str:
    return f"group {label}"


def end() -> str:
    return "end"


def diagram(participants: list[str], body: list[str], indent_width: int = 2) -> str:
    """Assemble a complete PlantUML document.

    *participants* are declared one per line right after the start marker,
    followed by a blank line and the pre-indented *body* lines.
    """
    pad = " " * indent_width
    lines = [START]
    lines.extend(pad + participant(name) for name in participants)
    lines.append("")
    lines.extend(body)
    lines.append(END)
    return "\n".join(lines) + "\n"
