"""Generate random strings that match regular expressions.

Patterns are parsed into :class:`~regen.syntax.nodes.SyntaxNode` trees and
walked by :func:`~regen.gen.generator.generate`, which draws every choice from
a pluggable random source.  The command line interface lives in
:mod:`regen.cli`.
"""

from .gen import (
    GenerationResult,
    Outcome,
    OutputSink,
    StringGenerator,
    generate,
    generate_string,
)
from .syntax import NodeKind, SyntaxNode, parse

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "GenerationResult",
    "NodeKind",
    "Outcome",
    "OutputSink",
    "StringGenerator",
    "SyntaxNode",
    "generate",
    "generate_string",
    "parse",
]
