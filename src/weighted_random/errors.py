"""Exceptions raised by the weighted random sampler.

Each error also derives from the closest built-in exception so callers that
only know about ``ValueError``/``LookupError``/``IndexError`` still catch them.
"""


class WeightedRandomError(Exception):
    """Base class for every error raised by this package."""


class InvalidWeightError(WeightedRandomError, ValueError):
    """A weight was negative, not finite, or not a real number."""


class LengthMismatchError(WeightedRandomError, ValueError):
    """A batch insert was given item and weight sequences of different lengths."""


class ItemNotFoundError(WeightedRandomError, LookupError):
    """The item (or item and weight combination) is not stored."""


class EmptySamplerError(WeightedRandomError, IndexError):
    """A draw was requested from a sampler that holds no items."""


class ZeroTotalWeightError(EmptySamplerError):
    """Items are stored but all of them have weight zero."""
