"""
Sentinel Grid - Border Sector Risk Intelligence
Telemetry Module

External signal sources consumed once per refresh cycle.
"""

from sentinel.telemetry.weather_provider import (
    WeatherProvider,
    StaticWeatherProvider,
    OpenMeteoConfig,
    OpenMeteoWeatherProvider
)
from sentinel.telemetry.mobility_feed import MobilityFeedConfig, SimulatedMobilityFeed
from sentinel.telemetry.static_datasets import (
    StaticTerrainDataset,
    StaticHistoryDataset,
    DEFAULT_HISTORY
)

__all__ = [
    "WeatherProvider",
    "StaticWeatherProvider",
    "OpenMeteoConfig",
    "OpenMeteoWeatherProvider",
    "MobilityFeedConfig",
    "SimulatedMobilityFeed",
    "StaticTerrainDataset",
    "StaticHistoryDataset",
    "DEFAULT_HISTORY",
]
