"""Weighted random selection over weight-bucketed items.

Items are grouped by integer weight. A draw walks the distinct weights from
largest to smallest and subtracts each group's mass from a uniform random
number, so sampling costs O(number of distinct weights) rather than
O(number of items). Items sharing a weight are equally likely within their
group's share.
"""

import bisect
import logging
import math
import random
from collections.abc import Iterator, Sequence
from numbers import Integral, Real
from typing import Generic, TypeVar

from weighted_random.errors import (
    EmptySamplerError,
    InvalidWeightError,
    ItemNotFoundError,
    LengthMismatchError,
    ZeroTotalWeightError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def floor_weight(weight: float) -> int:
    """Floor a finite real weight to an integer without checking its sign."""
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidWeightError(f"Weight must be a real number, got {weight!r}")
    if isinstance(weight, Integral):
        value = int(weight)
    else:
        if not math.isfinite(weight):
            raise InvalidWeightError(f"Weight must be finite, got {weight!r}")
        value = math.floor(weight)
    return value


def coerce_weight(weight: float) -> int:
    """Convert a caller-supplied weight to the integer stored internally.

    Integers pass through unchanged. Other real numbers are floored, so
    ``2.9`` becomes ``2`` and ``-0.5`` becomes ``-1`` (and is then rejected).
    """
    value = floor_weight(weight)
    if value < 0:
        raise InvalidWeightError(f"Weight must be non-negative, got {weight!r}")
    return value


class WeightedRandom(Generic[T]):
    """A container of items that draws each item with probability
    ``weight / total_weight``.

    Args:
        rng: Random generator used for every draw. A private
            ``random.Random`` is created when omitted.
        seed: Seed for the private generator. Cannot be combined with ``rng``.
        inclusive_upper_bound: Draw from ``[0, total_weight]`` instead of
            ``[0, total_weight)``. The extra unit of mass goes to the
            smallest positive weight group.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        seed: int | None = None,
        inclusive_upper_bound: bool = False,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self._rng = rng if rng is not None else random.Random(seed)
        self._inclusive = inclusive_upper_bound
        # Each group is stored oldest first; public views reverse it.
        self._groups: dict[int, list[T]] = {}
        self._weights: list[int] = []
        self._total = 0

    @property
    def total_weight(self) -> int:
        """Sum of the weights of every stored item."""
        return self._total

    @property
    def inclusive_upper_bound(self) -> bool:
        """Whether draws include total_weight itself."""
        return self._inclusive

    def __len__(self) -> int:
        return sum(len(group) for group in self._groups.values())

    def __bool__(self) -> bool:
        return bool(self._groups)

    def __contains__(self, item: object) -> bool:
        return any(item in group for group in self._groups.values())

    def __iter__(self) -> Iterator[tuple[T, int]]:
        """Yield ``(item, weight)`` pairs by ascending weight, newest first
        within a weight."""
        for weight in self._weights:
            for item in reversed(self._groups[weight]):
                yield item, weight

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(items={len(self)}, "
            f"total_weight={self._total}, groups={len(self._weights)})"
        )

    def weights(self) -> list[int]:
        """Distinct stored weights in ascending order."""
        return list(self._weights)

    def group(self, weight: float) -> tuple[T, ...]:
        """Items stored under ``weight``, newest first."""
        group = self._groups.get(floor_weight(weight), [])
        return tuple(reversed(group))

    def insert(self, item: T, weight: float) -> None:
        """Add ``item`` with ``weight``. Floats are floored to integers."""
        self._add(item, coerce_weight(weight))

    def insert_batch(self, items: Sequence[T], weights: Sequence[float]) -> None:
        """Add ``items[i]`` with ``weights[i]`` for every ``i``.

        Nothing is inserted unless both sequences have the same length and
        every weight is valid.
        """
        if len(items) != len(weights):
            raise LengthMismatchError(
                f"Got {len(items)} items but {len(weights)} weights"
            )
        values = [coerce_weight(weight) for weight in weights]
        for item, value in zip(items, values):
            self._add(item, value)
        logger.debug("Inserted batch of %d items", len(values))

    def remove(self, item: T, weight: float) -> None:
        """Remove the newest occurrence of ``item`` stored under ``weight``."""
        value = floor_weight(weight)
        group = self._groups.get(value)
        if group is None:
            raise ItemNotFoundError(f"There are no items with a weight of {value}")
        for index in range(len(group) - 1, -1, -1):
            if group[index] == item:
                break
        else:
            raise ItemNotFoundError(f"There is no {item!r} with a weight of {value}")
        del group[index]
        self._total -= value
        if not group:
            self._drop_group(value)

    def remove_all(self, item: T) -> int:
        """Remove every occurrence of ``item`` under any weight.

        Returns the number of occurrences removed; zero if ``item`` is absent.
        """
        removed = 0
        for weight in list(self._weights):
            group = self._groups[weight]
            kept = [entry for entry in group if entry != item]
            count = len(group) - len(kept)
            if not count:
                continue
            removed += count
            self._total -= weight * count
            if kept:
                self._groups[weight] = kept
            else:
                self._drop_group(weight)
        return removed

    def remove_weight_group(self, weight: float) -> int:
        """Remove every item stored under ``weight``.

        Returns the number of items removed; zero if no such group exists.
        """
        value = floor_weight(weight)
        group = self._groups.get(value)
        if group is None:
            return 0
        self._total -= value * len(group)
        self._drop_group(value)
        return len(group)

    def clear(self) -> None:
        """Remove every item and reset the total weight to zero."""
        self._groups.clear()
        self._weights.clear()
        self._total = 0
        logger.debug("Cleared all weight groups")

    def percentage_of(self, item: T) -> float:
        """Probability that a single draw returns this occurrence of ``item``.

        Uses the smallest weight under which ``item`` is stored.
        """
        for weight in self._weights:
            if item in self._groups[weight]:
                if self._total == 0:
                    raise ZeroTotalWeightError(
                        "All stored items have weight zero; percentages are undefined"
                    )
                return weight / self._total
        raise ItemNotFoundError(f"The item {item!r} could not be found")

    def sample(self) -> T:
        """Draw one stored item at random, proportionally to its weight."""
        if not self._weights:
            raise EmptySamplerError(
                "There are no items to sample. Use insert() to populate the sampler."
            )
        if self._total == 0:
            raise ZeroTotalWeightError("All stored items have weight zero")
        bound = self._total + 1 if self._inclusive else self._total
        remaining = self._rng.randrange(bound)
        for weight in reversed(self._weights):
            group = self._groups[weight]
            remaining -= weight * len(group)
            if remaining < 0:
                return self._pick(group)
        # Only reached when an inclusive draw lands exactly on the total.
        smallest = next(weight for weight in self._weights if weight > 0)
        return self._pick(self._groups[smallest])

    def _pick(self, group: list[T]) -> T:
        if len(group) == 1:
            return group[0]
        return group[self._rng.randrange(len(group))]

    def _add(self, item: T, weight: int) -> None:
        group = self._groups.get(weight)
        if group is None:
            group = self._groups[weight] = []
            bisect.insort(self._weights, weight)
            logger.debug("Created weight group %d", weight)
        group.append(item)
        self._total += weight

    def _drop_group(self, weight: int) -> None:
        del self._groups[weight]
        del self._weights[bisect.bisect_left(self._weights, weight)]
        logger.debug("Dropped weight group %d", weight)
