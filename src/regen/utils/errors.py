"""Typed exceptions for pattern parsing and string generation."""


class RegenError(Exception):
    """Base class for all errors raised by the package."""


class GenerationError(RegenError):
    """Base class for fatal errors raised while walking a syntax tree."""


class UnsupportedNodeError(GenerationError):
    """Raised when the tree contains a node kind that cannot be generated."""


class InvariantViolationError(GenerationError):
    """Raised when generation reaches a state a well-formed tree cannot produce."""


class RandomSourceError(GenerationError):
    """Raised when a random source breaks its ``[0, n)`` contract."""


class PatternError(RegenError, ValueError):
    """Base class for pattern related errors."""


class PatternSyntaxError(PatternError):
    """Raised when the pattern text is not a valid regular expression."""


class UnsupportedPatternError(PatternError):
    """Raised when the pattern uses a construct with no generation strategy."""


class MalformedTreeError(RegenError, ValueError):
    """Raised when a syntax node is constructed with inconsistent fields."""
