"""Pattern syntax trees and the parser that builds them."""

from .nodes import NodeKind, SyntaxNode
from .parser import parse

__all__ = ["NodeKind", "SyntaxNode", "parse"]
