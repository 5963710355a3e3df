"""Exceptions raised by the weighted alias sampler.

Each error also subclasses the builtin exception that the equivalent
``list`` operation would raise, so code written against list semantics
can keep catching ``IndexError`` or ``ValueError``.
"""


class WeightedSamplerError(Exception):
    """Base class for all sampler errors."""


class InvalidWeightError(WeightedSamplerError, ValueError):
    """A non-positive weight was supplied under the throw-on-add policy."""


class IndexOutOfRangeError(WeightedSamplerError, IndexError):
    """An index argument was outside the valid range."""


class ItemNotFoundError(WeightedSamplerError, ValueError):
    """A lookup by value did not find the item."""


class WeightOverflowError(WeightedSamplerError, OverflowError):
    """The weights do not fit in the configured integer width."""
