"""Click CLI entry point: ``sharpseq INPUT OUTPUT``."""

import logging
import os
import sys

# Fix Unicode output on Windows consoles (cp1253, cp1252, etc.)
if sys.platform == "win32" and not os.environ.get("PYTHONIOENCODING"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click


class _EchoHandler(logging.Handler):
    """Route log records through click.echo(err=True)."""

    def emit(self, record):
        click.echo(self.format(record), err=True)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("sharpseq")
    for handler in list(logger.handlers):
        if isinstance(handler, _EchoHandler):
            logger.removeHandler(handler)
    if not verbose:
        return
    handler = _EchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@click.command()
@click.version_option(package_name="sharpseq")
@click.argument("input_path", type=click.Path(dir_okay=False))
@click.argument("output_path", type=click.Path(dir_okay=False))
@click.option("--verbose", is_flag=True, help="Log analysis details to stderr")
def cli(input_path, output_path, verbose):
    """Write a PlantUML sequence diagram of every method in INPUT_PATH to OUTPUT_PATH.

    The diagram is also echoed to stdout.
    """
    _configure_logging(verbose)

    from sharpseq.parser import parse_file
    from sharpseq.sequence.generator import SequenceDiagramGenerator

    tree, source = parse_file(input_path)
    diagram = SequenceDiagramGenerator().generate(tree, source)

    click.echo(diagram, nl=False)
    with open(output_path, "w", encoding="utf-8", newline="\n") as fh:
        fh.write(diagram)
    click.echo(f"Diagram has been written to {output_path}. Application finished.")
