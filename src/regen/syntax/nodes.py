"""Syntax tree model consumed by the generator.

A pattern is represented as an immutable tree of :class:`SyntaxNode` objects.
Each node carries a :class:`NodeKind` tag and only the fields that kind needs:
``runes`` for literals and character classes, ``children`` for composite
nodes and ``min``/``max`` for bounded repeats.  Character classes store their
ranges flattened as ``(low, high)`` pairs, both ends inclusive, sorted and
non-overlapping.

Trees are normally produced by :func:`regen.syntax.parser.parse`; the helper
constructors below exist for building trees by hand in tests and callers that
bring their own parser.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from regen.utils.errors import MalformedTreeError


class NodeKind(Enum):
    """Enumeration of supported node kinds."""

    LITERAL = "literal"
    CHAR_CLASS = "char_class"
    ANY_CHAR = "any_char"
    ANY_CHAR_NOT_NL = "any_char_not_nl"
    BEGIN_LINE = "begin_line"
    END_LINE = "end_line"
    BEGIN_TEXT = "begin_text"
    END_TEXT = "end_text"
    WORD_BOUNDARY = "word_boundary"
    NO_WORD_BOUNDARY = "no_word_boundary"
    STAR = "star"
    PLUS = "plus"
    QUEST = "quest"
    REPEAT = "repeat"
    CONCAT = "concat"
    CAPTURE = "capture"
    ALTERNATE = "alternate"
    EMPTY_MATCH = "empty_match"
    NO_MATCH = "no_match"


_COMPOSITE: frozenset[NodeKind] = frozenset(
    {
        NodeKind.STAR,
        NodeKind.PLUS,
        NodeKind.QUEST,
        NodeKind.REPEAT,
        NodeKind.CONCAT,
        NodeKind.CAPTURE,
        NodeKind.ALTERNATE,
    }
)


@dataclass(slots=True, frozen=True)
class SyntaxNode:
    """A single node of a parsed pattern.

    ``max == -1`` on a :attr:`NodeKind.REPEAT` node means the upper bound is
    unbounded.  ``name`` records a named capture group and has no effect on
    generation.
    """

    kind: NodeKind
    runes: tuple[int, ...] = ()
    children: tuple[SyntaxNode, ...] = ()
    min: int = 0
    max: int = 0
    name: str | None = None

    def __post_init__(self) -> None:  # noqa: D401 - simple validation
        if self.kind is NodeKind.CHAR_CLASS:
            if len(self.runes) % 2:
                raise MalformedTreeError("character class needs an even number of runes")
            for lo, hi in self.ranges():
                if lo > hi:
                    raise MalformedTreeError(f"inverted class range {lo:#x}-{hi:#x}")
        if self.kind in _COMPOSITE and not self.children:
            raise MalformedTreeError(f"{self.kind.value} node requires children")
        if self.kind is NodeKind.REPEAT:
            if self.min < 0:
                raise MalformedTreeError("repeat minimum must be non-negative")
            if self.max != -1 and self.max < self.min:
                raise MalformedTreeError(f"repeat bounds {{{self.min},{self.max}}} are inverted")

    def ranges(self) -> list[tuple[int, int]]:
        """Return the ``(low, high)`` pairs of a character class."""

        return [(self.runes[i], self.runes[i + 1]) for i in range(0, len(self.runes), 2)]

    @property
    def text(self) -> str:
        """Return the runes of a literal as a string."""

        return "".join(map(chr, self.runes))


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def literal(text: str) -> SyntaxNode:
    return SyntaxNode(NodeKind.LITERAL, runes=tuple(ord(ch) for ch in text))


def char_class(*pairs: tuple[int | str, int | str]) -> SyntaxNode:
    """Build a class from ``(low, high)`` pairs given as codepoints or characters."""

    runes: list[int] = []
    for lo, hi in pairs:
        runes.append(lo if isinstance(lo, int) else ord(lo))
        runes.append(hi if isinstance(hi, int) else ord(hi))
    return SyntaxNode(NodeKind.CHAR_CLASS, runes=tuple(runes))


def leaf(kind: NodeKind) -> SyntaxNode:
    return SyntaxNode(kind)


def concat(*children: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.CONCAT, children=tuple(children))


def capture(*children: SyntaxNode, name: str | None = None) -> SyntaxNode:
    return SyntaxNode(NodeKind.CAPTURE, children=tuple(children), name=name)


def alternate(*children: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.ALTERNATE, children=tuple(children))


def star(*children: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.STAR, children=tuple(children))


def plus(*children: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.PLUS, children=tuple(children))


def quest(*children: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.QUEST, children=tuple(children))


def repeat(child: SyntaxNode | Iterable[SyntaxNode], min: int, max: int) -> SyntaxNode:
    """Build a bounded repeat; pass ``max=-1`` for an unbounded upper limit."""

    children = (child,) if isinstance(child, SyntaxNode) else tuple(child)
    return SyntaxNode(NodeKind.REPEAT, children=children, min=min, max=max)


__all__ = [
    "NodeKind",
    "SyntaxNode",
    "literal",
    "char_class",
    "leaf",
    "concat",
    "capture",
    "alternate",
    "star",
    "plus",
    "quest",
    "repeat",
]
