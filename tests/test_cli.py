"""CLI tests: ``sharpseq INPUT OUTPUT``."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from conftest import invoke_cli

SOURCE = (
    "public class Greeter\n"
    "{\n"
    "    public void Greet(string name)\n"
    "    {\n"
    "        console.WriteLine(name);\n"
    "    }\n"
    "}\n"
)


class TestCli:
    def test_writes_output_file(self, cli_runner, cs_file, tmp_path):
        src = cs_file(SOURCE)
        out = tmp_path / "out.puml"
        result = invoke_cli(cli_runner, [str(src), str(out)])
        assert result.exit_code == 0, result.output
        text = out.read_text(encoding="utf-8")
        assert text.startswith("@startuml\n")
        assert text.endswith("@enduml\n")
        assert '  Greeter -> "console": WriteLine(name)' in text

    def test_echoes_diagram_and_message(self, cli_runner, cs_file, tmp_path):
        src = cs_file(SOURCE)
        out = tmp_path / "out.puml"
        result = invoke_cli(cli_runner, [str(src), str(out)])
        assert out.read_text(encoding="utf-8") in result.output
        assert f"Diagram has been written to {out}. Application finished." in result.output

    def test_unknown_extension_parsed_as_csharp(self, cli_runner, cs_file, tmp_path):
        src = cs_file(SOURCE, name="input.txt")
        out = tmp_path / "out.puml"
        result = invoke_cli(cli_runner, [str(src), str(out)])
        assert result.exit_code == 0
        assert 'participant "console"' in out.read_text(encoding="utf-8")

    def test_missing_input_propagates(self, cli_runner, tmp_path):
        out = tmp_path / "out.puml"
        result = invoke_cli(cli_runner, [str(tmp_path / "nope.cs"), str(out)])
        assert result.exit_code == 1
        assert isinstance(result.exception, FileNotFoundError)
        assert not out.exists()

    def test_missing_arguments_is_usage_error(self, cli_runner):
        result = invoke_cli(cli_runner, [])
        assert result.exit_code == 2

    def test_verbose_logs_to_stderr(self, cli_runner, cs_file, tmp_path):
        src = cs_file(SOURCE)
        out = tmp_path / "out.puml"
        result = invoke_cli(cli_runner, [str(src), str(out), "--verbose"])
        assert result.exit_code == 0
        assert "Method Greeter.Greet" in result.output
        assert "Analyzed 1 methods, 2 participants" in result.output

    def test_quiet_by_default(self, cli_runner, cs_file, tmp_path):
        src = cs_file(SOURCE)
        out = tmp_path / "out.puml"
        result = invoke_cli(cli_runner, [str(src), str(out)])
        assert "Analyzed" not in result.output
