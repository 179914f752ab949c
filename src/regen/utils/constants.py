"""Shared generation constants."""

from __future__ import annotations

from typing import Final

__all__ = [
    "UNBOUND_MAX",
    "PRINTABLE_FIRST",
    "PRINTABLE_COUNT",
    "MAX_RUNE",
    "QUEST_RANGE",
    "QUEST_THRESHOLD",
]

# Repetitions added to the minimum of an unbounded repeat.
UNBOUND_MAX: Final = 32

PRINTABLE_FIRST: Final = 0x20
PRINTABLE_COUNT: Final = 95

MAX_RUNE: Final = 0x10FFFF

QUEST_RANGE: Final = 0xFFFFFFFF
QUEST_THRESHOLD: Final = 0x7FFFFFFF
