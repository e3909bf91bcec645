"""Tests for the demonstration driver."""

import logging
from typing import Any

import pytest


def test_tally_counts_every_draw() -> None:
    from weighted_random import WeightedRandom
    from weighted_random.demo import tally

    sampler: Any = WeightedRandom(seed=2)
    sampler.insert_batch(["a", "b"], [1, 1])
    counts = tally(sampler, 1_000)
    assert sum(counts.values()) == 1_000
    assert set(counts) == {"a", "b"}


def test_tally_rejects_negative_draws() -> None:
    from weighted_random import WeightedRandom
    from weighted_random.demo import tally

    with pytest.raises(ValueError):
        tally(WeightedRandom(), -1)


def test_frequency_report_matches_percentages() -> None:
    """Observed shares land near the expected ones for the demo population."""
    from weighted_random import WeightedRandom
    from weighted_random.demo import DEMO_POPULATION, frequency_report

    sampler: Any = WeightedRandom(seed=17)
    for item, weight in DEMO_POPULATION:
        sampler.insert(item, weight)
    rows = frequency_report(sampler, 100_000)
    assert sorted(row.item for row in rows) == [15, 16, 20, 50]
    for row in rows:
        assert row.expected == sampler.percentage_of(row.item)
        assert abs(row.deviation) < 0.01


def test_frequency_report_lists_duplicates_once() -> None:
    from weighted_random import WeightedRandom
    from weighted_random.demo import frequency_report

    sampler: Any = WeightedRandom(seed=3)
    sampler.insert_batch(["a", "a", "b"], [1, 2, 3])
    rows = frequency_report(sampler, 100)
    assert [row.item for row in rows] == ["a", "b"]


def test_frequency_report_rejects_zero_draws() -> None:
    from weighted_random import WeightedRandom
    from weighted_random.demo import frequency_report

    sampler: Any = WeightedRandom()
    sampler.insert("a", 1)
    with pytest.raises(ValueError):
        frequency_report(sampler, 0)


def test_main_logs_table(caplog: pytest.LogCaptureFixture) -> None:
    from weighted_random.demo import main

    caplog.set_level(logging.INFO, logger="weighted_random.demo")
    assert main(["--draws", "2000", "--seed", "1"]) == 0
    messages = [
        record.getMessage()
        for record in caplog.records
        if record.name == "weighted_random.demo"
    ]
    assert messages[0] == "Item   | Expected | Observed"
    assert len(messages) == 5
    assert any(message.startswith("50     |  50.000%") for message in messages)


def test_main_inclusive_flag(caplog: pytest.LogCaptureFixture) -> None:
    from weighted_random.demo import main

    caplog.set_level(logging.INFO, logger="weighted_random.demo")
    assert main(["--draws", "500", "--seed", "4", "--inclusive"]) == 0


def test_main_rejects_non_positive_draws(caplog: pytest.LogCaptureFixture) -> None:
    from weighted_random.demo import main

    caplog.set_level(logging.INFO, logger="weighted_random.demo")
    assert main(["--draws", "0"]) == 2
    assert "--draws must be positive" in caplog.text
