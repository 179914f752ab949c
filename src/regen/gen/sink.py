"""Append-only text buffer the generator writes into."""

from __future__ import annotations

__all__ = ["OutputSink"]


class OutputSink:
    """Collect generated text.

    The generator only ever appends.  ``len(sink)`` reports the number of
    characters written so far, which the line anchors use to tell whether
    anything has been emitted yet.
    """

    __slots__ = ("_parts", "_length")

    def __init__(self, initial: str = "") -> None:
        self._parts: list[str] = []
        self._length = 0
        if initial:
            self.write(initial)

    def write(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._length += len(text)

    def write_rune(self, rune: int) -> None:
        self.write(chr(rune))

    def getvalue(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.getvalue()

    def __repr__(self) -> str:
        return f"OutputSink({self.getvalue()!r})"
