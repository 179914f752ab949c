from __future__ import annotations

import dataclasses

import pytest

from regen.syntax.nodes import (
    NodeKind,
    SyntaxNode,
    alternate,
    char_class,
    concat,
    literal,
    repeat,
)
from regen.utils.errors import MalformedTreeError


def test_literal_constructor() -> None:
    node = literal("héllo")
    assert node.kind is NodeKind.LITERAL
    assert node.runes == (104, 233, 108, 108, 111)
    assert node.text == "héllo"


def test_char_class_constructor_accepts_chars_and_codepoints() -> None:
    node = char_class(("a", "z"), (0x30, 0x39))
    assert node.runes == (97, 122, 48, 57)
    assert node.ranges() == [(97, 122), (48, 57)]


def test_nodes_are_immutable() -> None:
    node = literal("a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.runes = (98,)  # type: ignore[misc]


def test_nodes_compare_by_value() -> None:
    assert concat(literal("a"), literal("b")) == concat(literal("a"), literal("b"))


def test_odd_class_rejected() -> None:
    with pytest.raises(MalformedTreeError):
        SyntaxNode(NodeKind.CHAR_CLASS, runes=(1, 2, 3))


def test_inverted_class_rejected() -> None:
    with pytest.raises(MalformedTreeError):
        char_class(("z", "a"))


@pytest.mark.parametrize(
    "kind",
    [
        NodeKind.CONCAT,
        NodeKind.CAPTURE,
        NodeKind.ALTERNATE,
        NodeKind.STAR,
        NodeKind.PLUS,
        NodeKind.QUEST,
        NodeKind.REPEAT,
    ],
)
def test_composite_nodes_need_children(kind: NodeKind) -> None:
    with pytest.raises(MalformedTreeError):
        SyntaxNode(kind)


def test_repeat_bounds() -> None:
    assert repeat(literal("a"), 3, -1).max == -1
    assert repeat([literal("a"), literal("b")], 1, 2).children == (literal("a"), literal("b"))
    with pytest.raises(MalformedTreeError):
        repeat(literal("a"), 3, 2)
    with pytest.raises(MalformedTreeError):
        repeat(literal("a"), -1, 2)


def test_malformed_tree_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        alternate()
