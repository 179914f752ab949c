"""Random string generation from syntax trees.

:func:`generate` walks a :class:`~regen.syntax.nodes.SyntaxNode` tree depth
first and appends text to an :class:`~regen.gen.sink.OutputSink`.  The output
should, ideally, be matched by the pattern the tree came from; the walk is a
best-effort sampler rather than an exact inverse of the matcher.

Every nondeterministic choice is a single draw from a random source, so a
deterministic source makes generation fully reproducible.

End of text
-----------
An ``END_TEXT`` node (``$`` or ``\\Z``) stops generation: it returns
:attr:`Outcome.END_OF_TEXT` and every enclosing concatenation, group, repeat,
optional and alternation stops immediately and returns it as well.  The text
written so far is still the intended output.  ``END_LINE`` on an empty sink
behaves the same way.

Fatal conditions
----------------
Word boundary nodes raise :class:`~regen.utils.errors.UnsupportedNodeError`.
A character class walk that selects no range raises
:class:`~regen.utils.errors.InvariantViolationError`.  Neither is retried.

Limitations
-----------
- Unbounded repeats (``*``, ``+``, ``{n,}``) emit at most ``unbound_max``
  repetitions beyond their minimum.
- Line anchors are approximated by inserting a newline when something has
  already been written.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from regen.syntax.nodes import NodeKind, SyntaxNode
from regen.syntax.parser import parse
from regen.utils.constants import (
    PRINTABLE_COUNT,
    PRINTABLE_FIRST,
    QUEST_RANGE,
    QUEST_THRESHOLD,
    UNBOUND_MAX,
)
from regen.utils.errors import InvariantViolationError, UnsupportedNodeError
from regen.utils.logging import get_logger

from .random_source import RandomSource, pseudo_source, secure_source, seeded_source
from .sink import OutputSink

if TYPE_CHECKING:  # pragma: no cover
    from regen.config import ConfigModel

logger = get_logger(__name__)


class Outcome(Enum):
    """Result of generating a node."""

    CONTINUE = "continue"
    END_OF_TEXT = "end_of_text"


def _pick_class_rune(node: SyntaxNode, rng: RandomSource) -> int:
    ranges = node.ranges()
    total = sum(1 + hi - lo for lo, hi in ranges)
    if total <= 0:
        raise InvariantViolationError("character class covers no codepoints")
    nth = rng(total)
    for lo, hi in ranges:
        delta = hi - lo
        if 0 <= nth <= delta:
            return lo + nth
        nth -= 1 + delta
    raise InvariantViolationError("character class walk selected no range")


def _generate_all(
    children: Iterable[SyntaxNode], sink: OutputSink, rng: RandomSource, unbound_max: int
) -> Outcome:
    for child in children:
        if generate(child, sink, rng, unbound_max=unbound_max) is Outcome.END_OF_TEXT:
            return Outcome.END_OF_TEXT
    return Outcome.CONTINUE


def _repeat_bounds(node: SyntaxNode, unbound_max: int) -> tuple[int, int]:
    if node.kind is NodeKind.STAR:
        return 0, unbound_max
    if node.kind is NodeKind.PLUS:
        return 1, 1 + unbound_max
    lo, hi = node.min, node.max
    if hi == -1:
        hi = lo + unbound_max
    return lo, hi


def generate(  # noqa: PLR0911, PLR0912
    node: SyntaxNode,
    sink: OutputSink,
    rng: RandomSource,
    *,
    unbound_max: int = UNBOUND_MAX,
) -> Outcome:
    """Append a random string matching ``node`` to ``sink``.

    Parameters
    ----------
    node:
        Root of the tree to generate from.
    sink:
        Buffer receiving the generated text.
    rng:
        Random source; ``rng(n)`` must return an integer in ``[0, n)``.
    unbound_max:
        Extra repetitions allowed for repeats without an upper bound.

    Returns :attr:`Outcome.END_OF_TEXT` when an end-of-text marker stopped
    generation early, otherwise :attr:`Outcome.CONTINUE`.
    """

    kind = node.kind
    if kind is NodeKind.LITERAL:
        sink.write(node.text)
    elif kind is NodeKind.CHAR_CLASS:
        sink.write_rune(_pick_class_rune(node, rng))
    elif kind is NodeKind.ANY_CHAR_NOT_NL:
        sink.write_rune(PRINTABLE_FIRST + rng(PRINTABLE_COUNT))
    elif kind is NodeKind.ANY_CHAR:
        nth = rng(PRINTABLE_COUNT + 1)
        sink.write("\n" if nth == PRINTABLE_COUNT else chr(PRINTABLE_FIRST + nth))
    elif kind is NodeKind.BEGIN_LINE:
        if len(sink):
            sink.write("\n")
    elif kind is NodeKind.END_LINE:
        if not len(sink):
            return Outcome.END_OF_TEXT
        sink.write("\n")
    elif kind is NodeKind.END_TEXT:
        return Outcome.END_OF_TEXT
    elif kind in (NodeKind.WORD_BOUNDARY, NodeKind.NO_WORD_BOUNDARY):
        raise UnsupportedNodeError("word boundaries are not supported")
    elif kind in (NodeKind.STAR, NodeKind.PLUS, NodeKind.REPEAT):
        lo, hi = _repeat_bounds(node, unbound_max)
        for _ in range(lo + rng(hi - lo + 1)):
            if _generate_all(node.children, sink, rng, unbound_max) is Outcome.END_OF_TEXT:
                return Outcome.END_OF_TEXT
    elif kind is NodeKind.QUEST:
        if rng(QUEST_RANGE) > QUEST_THRESHOLD:
            return _generate_all(node.children, sink, rng, unbound_max)
    elif kind in (NodeKind.CONCAT, NodeKind.CAPTURE):
        return _generate_all(node.children, sink, rng, unbound_max)
    elif kind is NodeKind.ALTERNATE:
        child = node.children[rng(len(node.children))]
        return generate(child, sink, rng, unbound_max=unbound_max)
    elif kind not in (NodeKind.NO_MATCH, NodeKind.EMPTY_MATCH, NodeKind.BEGIN_TEXT):
        raise InvariantViolationError(f"unhandled node kind {kind!r}")
    return Outcome.CONTINUE


# ---------------------------------------------------------------------------
# High level API
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class GenerationResult:
    """Text produced by one generation run and how the run ended."""

    text: str
    outcome: Outcome

    @property
    def stopped(self) -> bool:
        """``True`` when an end-of-text marker cut generation short."""

        return self.outcome is Outcome.END_OF_TEXT

    def __str__(self) -> str:
        return self.text


class StringGenerator:
    """Generate random strings from patterns with a fixed random source."""

    def __init__(
        self,
        rng: RandomSource | None = None,
        *,
        unbound_max: int = UNBOUND_MAX,
        flags: int = 0,
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        rng:
            Random source used for every draw.  Defaults to a fresh
            :func:`~regen.gen.random_source.pseudo_source`.
        unbound_max:
            Extra repetitions allowed for unbounded repeats.
        flags:
            Default ``re`` flags applied when parsing patterns.
        """

        if unbound_max < 0:
            raise ValueError("unbound_max must be non-negative")
        self.rng: RandomSource = rng if rng is not None else pseudo_source()
        self.unbound_max = unbound_max
        self.flags = flags

    @classmethod
    def from_config(cls, cfg: ConfigModel, *, pattern: str = "") -> StringGenerator:
        """Build a generator from configuration.

        Any seed, whether from the config file, the environment or the CLI,
        goes through :func:`seeded_source`, so the stream is derived from the
        seed and ``pattern`` alone.  ``secure`` ignores the seed.
        """

        settings = cfg.random
        if settings.source == "secure":
            rng = secure_source()
        elif settings.seed is not None:
            rng = seeded_source(settings.seed.get_secret_value(), pattern=pattern)
        elif settings.source == "seeded":
            raise ValueError("random.source 'seeded' requires random.seed")
        else:
            rng = pseudo_source()
        return cls(rng, unbound_max=cfg.generation.unbound_max, flags=cfg.generation.re_flags)

    def generate(self, node: SyntaxNode) -> GenerationResult:
        """Generate one string from ``node`` into a fresh sink."""

        sink = OutputSink()
        outcome = generate(node, sink, self.rng, unbound_max=self.unbound_max)
        return GenerationResult(sink.getvalue(), outcome)

    def generate_string(self, pattern: str, *, flags: int | None = None) -> GenerationResult:
        """Parse ``pattern`` and generate one string from it."""

        tree = parse(pattern, self.flags if flags is None else flags)
        result = self.generate(tree)
        logger.debug(
            "generated %d chars for pattern of %d chars (%s)",
            len(result.text),
            len(pattern),
            result.outcome.value,
        )
        return result

    def iter_strings(
        self, pattern: str, count: int, *, flags: int | None = None
    ) -> Iterator[GenerationResult]:
        """Yield ``count`` results for ``pattern``, parsing it only once."""

        if count < 0:
            raise ValueError("count must be non-negative")
        tree = parse(pattern, self.flags if flags is None else flags)
        for _ in range(count):
            yield self.generate(tree)


def generate_string(
    pattern: str,
    rng: RandomSource | None = None,
    *,
    flags: int = 0,
    unbound_max: int = UNBOUND_MAX,
) -> GenerationResult:
    """Return a random string for ``pattern`` drawn from ``rng``."""

    return StringGenerator(rng, unbound_max=unbound_max, flags=flags).generate_string(pattern)


__all__ = [
    "Outcome",
    "GenerationResult",
    "StringGenerator",
    "generate",
    "generate_string",
]
