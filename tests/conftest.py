"""Shared fixtures for the Sentinel Grid test suite."""

import pytest

from sentinel.alerts import AlertManager
from sentinel.config import AlertConfig, SentinelConfig
from sentinel.grid import GridCell, WeatherSample
from sentinel.pipeline import GridRefreshPipeline
from sentinel.risk import classify_threat
from sentinel.telemetry import StaticWeatherProvider


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value=0.0):
        self.value = value

    def random(self):
        return self.value


class FixedMobilityFeed:
    """Mobility feed with per-sector values and a shared default."""

    def __init__(self, default=20.0, overrides=None):
        self.default = default
        self.overrides = dict(overrides or {})

    def density(self, sector_id, tick=0, is_day=True, visibility=10000):
        return self.overrides.get(sector_id, self.default)


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clear_weather():
    return WeatherSample.default()


@pytest.fixture
def foggy_night():
    return WeatherSample(temperature=12, visibility=400, precipitation=0, wind_speed=5, is_day=False)


@pytest.fixture
def fixed_rng():
    return FixedRandom(0.0)


@pytest.fixture
def mobility_feed():
    return FixedMobilityFeed()


@pytest.fixture
def make_pipeline(clear_weather):
    """Build a pipeline with deterministic telemetry."""
    def _make(feed=None, config=None, weather=None, alert_config=None, **kwargs):
        config = config or SentinelConfig()
        return GridRefreshPipeline(
            config=config,
            weather_provider=StaticWeatherProvider(weather or clear_weather),
            mobility_feed=feed or FixedMobilityFeed(),
            alert_manager=AlertManager(alert_config or AlertConfig(dedup_seconds=0)),
            **kwargs
        )
    return _make


def make_cell(layout, sector_id, risk_score=10, terrain=30.0, threat_level=None):
    """GridCell with only the fields the planner reads."""
    bounds = layout.bounds(sector_id)
    return GridCell(
        sector_id=sector_id,
        bounds=bounds,
        center=layout.center(sector_id),
        terrain_complexity=terrain,
        risk_score=risk_score,
        threat_level=threat_level or classify_threat(risk_score)
    )


def make_grid(layout, overrides=None, **defaults):
    """Full grid of uniform cells, with per-sector keyword overrides."""
    overrides = overrides or {}
    return [
        make_cell(layout, sid, **{**defaults, **overrides.get(sid, {})})
        for sid in layout.sector_ids()
    ]


@pytest.fixture
def cell_factory():
    return make_cell


@pytest.fixture
def grid_factory():
    return make_grid


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def feed_factory():
    return FixedMobilityFeed


@pytest.fixture
def rng_factory():
    return FixedRandom
