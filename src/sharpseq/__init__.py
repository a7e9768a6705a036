"""sharpseq: PlantUML sequence diagrams from C# method bodies."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sharpseq")
except PackageNotFoundError:
    __version__ = "dev"


def generate_diagram(source, config=None) -> str:
    """Parse C# *source* (str or bytes) and return the PlantUML diagram text."""
    from sharpseq.parser import parse_source
    from sharpseq.sequence.generator import SequenceDiagramGenerator

    tree, data = parse_source(source)
    return SequenceDiagramGenerator(config).generate(tree, data)


__all__ = ["__version__", "generate_diagram"]
