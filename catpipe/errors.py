"""Exceptions raised by catpipe.

Each exception derives from the built-in type callers would naturally catch
(``TypeError`` for bad label types, ``ValueError`` for everything else).
"""

__all__ = [
    "InvalidLabelTypeError",
    "DimensionMismatch",
    "InvalidDistributionError",
    "IncompatiblePoolError",
    "ArgumentError",
    "EmptyDataError",
]


class InvalidLabelTypeError(TypeError):
    """Labels are not pooled categorical elements."""


class DimensionMismatch(ValueError):
    """Two sequences that must be aligned have different lengths."""


class InvalidDistributionError(ValueError):
    """Probabilities do not form a valid probability vector."""


class IncompatiblePoolError(ValueError):
    """Values drawn from different level pools were combined."""


class ArgumentError(ValueError):
    """A label was looked up in a pool it does not belong to."""


class EmptyDataError(ValueError):
    """No non-missing observations were supplied."""
