"""Demonstration driver for WeightedRandom.

Populates a sampler, draws from it many times and reports how often each item
came up next to the probability the sampler claims for it.

Usage: weighted-random-demo --draws 1000000 --seed 1
"""

import argparse
import logging
import sys
from collections import Counter
from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from weighted_random.sampler import WeightedRandom

logger = logging.getLogger(__name__)

# (item, weight) pairs; two items share weight 15.
DEMO_POPULATION: tuple[tuple[int, int], ...] = ((50, 50), (20, 20), (15, 15), (16, 15))


@dataclass(frozen=True)
class FrequencyRow:
    """Expected and observed share of one item over a run of draws."""

    item: Hashable
    expected: float
    observed: float

    @property
    def deviation(self) -> float:
        return self.observed - self.expected


def tally(sampler: WeightedRandom[Hashable], draws: int) -> Counter[Hashable]:
    """Draw ``draws`` times and count how often each item was returned."""
    if draws < 0:
        raise ValueError(f"draws must be non-negative, got {draws}")
    return Counter(sampler.sample() for _ in range(draws))


def frequency_report(
    sampler: WeightedRandom[Hashable], draws: int
) -> list[FrequencyRow]:
    """Compare observed frequencies over ``draws`` samples with
    ``percentage_of`` for every distinct stored item."""
    if draws <= 0:
        raise ValueError(f"draws must be positive, got {draws}")
    counts = tally(sampler, draws)
    rows: list[FrequencyRow] = []
    seen: set[Hashable] = set()
    for item, _ in sampler:
        if item in seen:
            continue
        seen.add(item)
        rows.append(
            FrequencyRow(item, sampler.percentage_of(item), counts[item] / draws)
        )
    return rows


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weighted-random-demo",
        description="Draw repeatedly from a weighted sampler and report frequencies.",
    )
    parser.add_argument("--draws", type=int, default=1_000_000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--inclusive",
        action="store_true",
        help="draw from [0, total] inclusive, as the original program did",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    if args.draws <= 0:
        logger.error("--draws must be positive, got %d", args.draws)
        return 2

    sampler: WeightedRandom[Hashable] = WeightedRandom(
        seed=args.seed, inclusive_upper_bound=args.inclusive
    )
    items = [item for item, _ in DEMO_POPULATION]
    weights = [weight for _, weight in DEMO_POPULATION]
    sampler.insert_batch(items, weights)

    logger.info("Item   | Expected | Observed")
    for row in frequency_report(sampler, args.draws):
        logger.info(
            "%-6s | %7.3f%% | %7.3f%%",
            row.item,
            row.expected * 100,
            row.observed * 100,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
