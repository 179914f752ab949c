"""String generation from syntax trees."""

from .generator import GenerationResult, Outcome, StringGenerator, generate, generate_string
from .random_source import (
    RandomSource,
    checked,
    fixed_source,
    pseudo_source,
    secure_source,
    seeded_source,
    sequence_source,
)
from .sink import OutputSink

__all__ = [
    "GenerationResult",
    "Outcome",
    "OutputSink",
    "RandomSource",
    "StringGenerator",
    "checked",
    "fixed_source",
    "generate",
    "generate_string",
    "pseudo_source",
    "secure_source",
    "seeded_source",
    "sequence_source",
]
