"""Weighted random selection container.

Stores items tagged with non-negative integer weights and draws one item at a
time with probability proportional to its weight.
"""

from weighted_random.errors import (
    EmptySamplerError,
    InvalidWeightError,
    ItemNotFoundError,
    LengthMismatchError,
    WeightedRandomError,
    ZeroTotalWeightError,
)
from weighted_random.sampler import WeightedRandom, coerce_weight

__version__ = "0.1.0"
__all__ = [
    "EmptySamplerError",
    "InvalidWeightError",
    "ItemNotFoundError",
    "LengthMismatchError",
    "WeightedRandom",
    "WeightedRandomError",
    "ZeroTotalWeightError",
    "coerce_weight",
]
