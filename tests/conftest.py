"""Shared test fixtures and helpers for sharpseq tests.

Provides:
- generate(): C# source text -> diagram text, in-process
- body_lines(): the indented body of a diagram, without header and markers
- CliRunner fixtures: cli_runner, invoke_cli()
- cs_file factory fixture for on-disk inputs
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

# ===========================================================================
# In-process generation helpers
# ===========================================================================


def generate(source: str, config=None) -> str:
    """Parse *source* as C# and return the generated diagram."""
    from sharpseq import generate_diagram

    return generate_diagram(source, config)


def body_lines(diagram: str) -> list[str]:
    """Return the body lines (after the blank separator, before @enduml)."""
    lines = diagram.split("\n")
    start = lines.index("") + 1
    end = lines.index("@enduml")
    return lines[start:end]


def header_names(diagram: str) -> list[str]:
    """Return participant names declared in the header, in order."""
    names = []
    for line in diagram.split("\n"):
        stripped = line.strip()
        if stripped.startswith('participant "'):
            names.append(stripped[len('participant "'):-1])
    return names


def in_class(body: str, class_name: str = "Foo") -> str:
    """Wrap method declarations in a class."""
    return f"public class {class_name}\n{{\n{body}\n}}\n"


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args):
    """Invoke the sharpseq CLI via CliRunner and return the click Result."""
    from sharpseq.cli import cli

    return runner.invoke(cli, list(args))


@pytest.fixture
def cs_file(tmp_path):
    """Factory fixture: write C# source to a file and return its path."""

    def _make(source: str, name: str = "Input.cs"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _make
