"""Tests for the simulated mobility feed and static datasets."""

import random

from sentinel.telemetry import (
    DEFAULT_HISTORY,
    MobilityFeedConfig,
    SimulatedMobilityFeed,
    StaticHistoryDataset,
    StaticTerrainDataset
)


def test_density_is_bounded():
    feed = SimulatedMobilityFeed(rng=random.Random(5))
    for tick in range(40):
        for row in range(6):
            for col in range(6):
                value = feed.density(f"{row}-{col}", tick, is_day=tick % 2 == 0, visibility=500 + tick * 100)
                assert 0 <= value <= 100


def test_seeded_feed_is_reproducible():
    first = SimulatedMobilityFeed(rng=random.Random(11))
    second = SimulatedMobilityFeed(rng=random.Random(11))
    assert [first.density("2-2", t) for t in range(10)] == [second.density("2-2", t) for t in range(10)]


def test_night_spike_at_crossings():
    quiet = MobilityFeedConfig(spike_probability=0.0, noise=0.0)
    feed = SimulatedMobilityFeed(quiet, rng=random.Random(0))

    spike_tick = feed.density("0-2", tick=8, is_day=False)
    off_tick = feed.density("0-2", tick=9, is_day=False)
    assert spike_tick > 70
    assert off_tick < 30


def test_town_sectors_are_busier():
    quiet = MobilityFeedConfig(spike_probability=0.0, noise=0.0)
    feed = SimulatedMobilityFeed(quiet, rng=random.Random(0))
    assert feed.density("2-2", tick=0) > feed.density("2-1", tick=0)


def test_terrain_bands():
    terrain = StaticTerrainDataset()
    assert terrain.complexity(26.80, 88.40) == 85
    assert terrain.complexity(26.70, 88.46) == 65
    assert terrain.complexity(26.70, 88.40) == 30


def test_history_table():
    history = StaticHistoryDataset()
    assert history.activity("3-3") == DEFAULT_HISTORY["3-3"] == 95
    assert history.activity("5-0") == 10
    assert StaticHistoryDataset({"1-1": 50}, default=0).activity("0-2") == 0
