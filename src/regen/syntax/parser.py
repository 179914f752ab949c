"""Translate Python regular expression syntax into :class:`SyntaxNode` trees.

The heavy lifting is done by the standard library's own regex parser
(``re._parser``); this module walks its opcode lists and rebuilds them as the
small node model the generator understands.

Mapping notes
-------------
- Runs of single-character literals are merged into one ``LITERAL`` node.
- Character classes, ``\\d``/``\\w``/``\\s`` and their negations become
  ``CHAR_CLASS`` nodes with sorted, merged ranges.  Categories use their ASCII
  definitions regardless of the ``re.ASCII`` flag; negation complements over
  the whole codepoint space, surrogates excluded.
- ``^`` and ``$`` are text anchors unless ``re.MULTILINE`` is in effect, in
  which case they become line anchors.  ``.`` matches newline only under
  ``re.DOTALL``.  Scoped flags such as ``(?s:...)`` are honoured.
- Lazy and possessive repeats are treated like greedy ones.  Non-capturing
  and atomic groups are inlined.  The empty negative lookahead ``(?!)`` becomes
  ``NO_MATCH``.
- Back-references, look-around assertions and conditional groups have no
  generation strategy and raise :class:`UnsupportedPatternError`.
"""

from __future__ import annotations

import re
from re import _constants as sre  # type: ignore[attr-defined]
from re import _parser as sre_parse  # type: ignore[attr-defined]
from typing import Any

from regen.syntax.nodes import NodeKind, SyntaxNode
from regen.utils.constants import MAX_RUNE
from regen.utils.errors import PatternSyntaxError, UnsupportedPatternError

__all__ = ["parse", "normalize_ranges", "negate_ranges"]

Range = tuple[int, int]

_DIGIT: tuple[Range, ...] = ((0x30, 0x39),)
_WORD: tuple[Range, ...] = ((0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A))
_SPACE: tuple[Range, ...] = ((0x09, 0x0D), (0x20, 0x20))
_SURROGATES: Range = (0xD800, 0xDFFF)

_UNSUPPORTED = {
    sre.GROUPREF: "back-references",
    sre.GROUPREF_EXISTS: "conditional groups",
    sre.ASSERT: "look-around assertions",
    sre.ASSERT_NOT: "look-around assertions",
}


# ---------------------------------------------------------------------------
# Range helpers
# ---------------------------------------------------------------------------


def normalize_ranges(ranges: list[Range]) -> list[Range]:
    """Sort ``ranges`` and merge overlapping or adjacent pairs."""

    merged: list[Range] = []
    for lo, hi in sorted(ranges):
        if merged and lo <= merged[-1][1] + 1:
            prev_lo, prev_hi = merged[-1]
            merged[-1] = (prev_lo, max(prev_hi, hi))
        else:
            merged.append((lo, hi))
    return merged


def negate_ranges(ranges: list[Range]) -> list[Range]:
    """Return the complement of ``ranges`` over all codepoints.

    Surrogates are never part of a complement; a lone surrogate cannot be
    encoded, so emitting one would make the output unprintable.
    """

    out: list[Range] = []
    nxt = 0
    for lo, hi in normalize_ranges([*ranges, _SURROGATES]):
        if lo > nxt:
            out.append((nxt, lo - 1))
        nxt = hi + 1
    if nxt <= MAX_RUNE:
        out.append((nxt, MAX_RUNE))
    return out


def _category_ranges(code: Any) -> list[Range]:
    table: dict[Any, tuple[tuple[Range, ...], bool]] = {
        sre.CATEGORY_DIGIT: (_DIGIT, False),
        sre.CATEGORY_NOT_DIGIT: (_DIGIT, True),
        sre.CATEGORY_WORD: (_WORD, False),
        sre.CATEGORY_NOT_WORD: (_WORD, True),
        sre.CATEGORY_SPACE: (_SPACE, False),
        sre.CATEGORY_NOT_SPACE: (_SPACE, True),
    }
    if code not in table:
        raise UnsupportedPatternError(f"unsupported character category {code}")
    ranges, negated = table[code]
    return negate_ranges(list(ranges)) if negated else list(ranges)


def _class_node(ranges: list[Range]) -> SyntaxNode:
    normalized = normalize_ranges(ranges)
    if not normalized:
        return SyntaxNode(NodeKind.NO_MATCH)
    runes: list[int] = []
    for lo, hi in normalized:
        runes.extend((lo, hi))
    return SyntaxNode(NodeKind.CHAR_CLASS, runes=tuple(runes))


def _set_ranges(items: list[tuple[Any, Any]]) -> list[Range]:
    negate = False
    ranges: list[Range] = []
    for op, av in items:
        if op is sre.NEGATE:
            negate = True
        elif op is sre.LITERAL:
            ranges.append((av, av))
        elif op is sre.RANGE:
            ranges.append((av[0], av[1]))
        elif op is sre.CATEGORY:
            ranges.extend(_category_ranges(av))
        else:
            raise UnsupportedPatternError(f"unsupported set member {op}")
    ranges = normalize_ranges(ranges)
    return negate_ranges(ranges) if negate else ranges


# ---------------------------------------------------------------------------
# Tree conversion
# ---------------------------------------------------------------------------


class _Converter:
    def __init__(self, group_names: dict[int, str]) -> None:
        self.group_names = group_names

    def sequence(self, items: Any, flags: int) -> SyntaxNode:
        nodes: list[SyntaxNode] = []
        pending: list[int] = []
        for op, av in items:
            if op is sre.LITERAL:
                pending.append(av)
                continue
            if pending:
                nodes.append(SyntaxNode(NodeKind.LITERAL, runes=tuple(pending)))
                pending = []
            nodes.append(self.item(op, av, flags))
        if pending:
            nodes.append(SyntaxNode(NodeKind.LITERAL, runes=tuple(pending)))
        if not nodes:
            return SyntaxNode(NodeKind.EMPTY_MATCH)
        if len(nodes) == 1:
            return nodes[0]
        return SyntaxNode(NodeKind.CONCAT, children=tuple(nodes))

    def item(self, op: Any, av: Any, flags: int) -> SyntaxNode:  # noqa: PLR0911
        if op is sre.NOT_LITERAL:
            return _class_node(negate_ranges([(av, av)]))
        if op is sre.IN:
            return _class_node(_set_ranges(av))
        if op is sre.ANY:
            kind = NodeKind.ANY_CHAR if flags & re.DOTALL else NodeKind.ANY_CHAR_NOT_NL
            return SyntaxNode(kind)
        if op is sre.AT:
            return SyntaxNode(self.anchor(av, flags))
        if op in (sre.MAX_REPEAT, sre.MIN_REPEAT, sre.POSSESSIVE_REPEAT):
            lo, hi, sub = av
            return self.repeat(lo, hi, self.sequence(sub, flags))
        if op is sre.SUBPATTERN:
            group, add_flags, del_flags, sub = av
            inner_flags = (flags | add_flags) & ~del_flags
            body = self.sequence(sub, inner_flags)
            if group is None:
                return body
            return SyntaxNode(
                NodeKind.CAPTURE, children=(body,), name=self.group_names.get(group)
            )
        if op is sre.ATOMIC_GROUP:
            return self.sequence(av, flags)
        if op is sre.BRANCH:
            _, branches = av
            return SyntaxNode(
                NodeKind.ALTERNATE,
                children=tuple(self.sequence(b, flags) for b in branches),
            )
        if op is sre.ASSERT_NOT and not av[1]:
            # (?!) never matches
            return SyntaxNode(NodeKind.NO_MATCH)
        if op in _UNSUPPORTED:
            raise UnsupportedPatternError(f"{_UNSUPPORTED[op]} are not supported")
        raise UnsupportedPatternError(f"unsupported regex opcode {op}")

    @staticmethod
    def anchor(code: Any, flags: int) -> NodeKind:
        multiline = bool(flags & re.MULTILINE)
        if code is sre.AT_BEGINNING:
            return NodeKind.BEGIN_LINE if multiline else NodeKind.BEGIN_TEXT
        if code is sre.AT_END:
            return NodeKind.END_LINE if multiline else NodeKind.END_TEXT
        if code is sre.AT_BEGINNING_STRING:
            return NodeKind.BEGIN_TEXT
        if code is sre.AT_END_STRING:
            return NodeKind.END_TEXT
        if code is sre.AT_BOUNDARY:
            return NodeKind.WORD_BOUNDARY
        if code is sre.AT_NON_BOUNDARY:
            return NodeKind.NO_WORD_BOUNDARY
        raise UnsupportedPatternError(f"unsupported anchor {code}")

    @staticmethod
    def repeat(lo: int, hi: int, child: SyntaxNode) -> SyntaxNode:
        unbounded = hi == sre.MAXREPEAT
        if unbounded and lo == 0:
            return SyntaxNode(NodeKind.STAR, children=(child,))
        if unbounded and lo == 1:
            return SyntaxNode(NodeKind.PLUS, children=(child,))
        if lo == 0 and hi == 1:
            return SyntaxNode(NodeKind.QUEST, children=(child,))
        return SyntaxNode(
            NodeKind.REPEAT, children=(child,), min=lo, max=-1 if unbounded else hi
        )


def parse(pattern: str, flags: int = 0) -> SyntaxNode:
    """Parse ``pattern`` into a :class:`SyntaxNode` tree.

    Parameters
    ----------
    pattern:
        Regular expression text in Python ``re`` syntax.
    flags:
        ``re`` module flags; ``re.MULTILINE`` and ``re.DOTALL`` change how
        anchors and ``.`` are translated.  Inline flags in the pattern are
        honoured as well.
    """

    try:
        parsed = sre_parse.parse(pattern, flags)
    except re.error as exc:
        raise PatternSyntaxError(f"invalid pattern {pattern!r}: {exc}") from exc

    names = {gid: name for name, gid in parsed.state.groupdict.items()}
    return _Converter(names).sequence(parsed, parsed.state.flags)
