"""Random sources for the generator.

A random source is any callable taking an integer bound ``n > 0`` and
returning an integer uniformly distributed over ``[0, n)``.  Every choice the
generator makes (repeat counts, alternatives, class members) is drawn from it,
so the generated text is a pure function of the tree and the sequence of draws.

Stock sources
-------------
- :func:`pseudo_source` wraps :class:`random.Random`.
- :func:`secure_source` uses :func:`secrets.randbelow`.
- :func:`seeded_source` derives a reproducible :class:`random.Random` from a
  seed string and the pattern with strict domain separation, so the same seed
  yields independent streams for different patterns.
- :func:`fixed_source` and :func:`sequence_source` return canned values for
  tests; they do not enforce the ``[0, n)`` contract themselves.
- :func:`checked` wraps any source and enforces the contract.

Security notes
--------------
Only :func:`secure_source` is suitable for producing secrets.  Seeds are never
logged.
"""

from __future__ import annotations

import hashlib
import random
import secrets
from collections.abc import Callable, Iterable
from itertools import cycle
from typing import Final, Protocol, runtime_checkable

from regen.utils.errors import RandomSourceError

_NS_RNG: Final = b"regen/v1/rng"


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for uniform integer sources."""

    def __call__(self, n: int) -> int:
        """Return an integer uniformly distributed over ``[0, n)``."""

        ...


def pseudo_source(rnd: random.Random | None = None) -> RandomSource:
    """Return a source drawing from ``rnd`` or a freshly seeded generator."""

    return (rnd if rnd is not None else random.Random()).randrange


def secure_source() -> RandomSource:
    """Return a cryptographically secure source."""

    return secrets.randbelow


def rng_for(seed: str, *, pattern: str = "") -> random.Random:
    """Derive a reproducible RNG for ``pattern`` from ``seed``."""

    data = _NS_RNG + b"\x00" + seed.encode("utf-8") + b"\x00" + pattern.encode("utf-8")
    digest = hashlib.sha256(data).digest()
    return random.Random(int.from_bytes(digest, "big"))


def seeded_source(seed: str, *, pattern: str = "") -> RandomSource:
    """Return a reproducible source for ``pattern`` derived from ``seed``."""

    return rng_for(seed, pattern=pattern).randrange


def fixed_source(value: int) -> RandomSource:
    """Return a source that always yields ``value``."""

    def draw(n: int) -> int:
        return value

    return draw


def sequence_source(values: Iterable[int]) -> RandomSource:
    """Return a source replaying ``values`` in order, cycling when exhausted."""

    pool = list(values)
    if not pool:
        raise ValueError("sequence_source needs at least one value")
    it = cycle(pool)

    def draw(n: int) -> int:
        return next(it)

    return draw


def checked(source: Callable[[int], int]) -> RandomSource:
    """Wrap ``source`` so contract violations raise :class:`RandomSourceError`."""

    def draw(n: int) -> int:
        if n <= 0:
            raise RandomSourceError(f"random bound must be positive, got {n}")
        value = source(n)
        if not 0 <= value < n:
            raise RandomSourceError(f"random source returned {value} outside [0, {n})")
        return value

    return draw


__all__ = [
    "RandomSource",
    "pseudo_source",
    "secure_source",
    "rng_for",
    "seeded_source",
    "fixed_source",
    "sequence_source",
    "checked",
]
