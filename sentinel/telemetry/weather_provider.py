"""
Sentinel Grid - Border Sector Risk Intelligence
Weather Provider Module

Supplies one WeatherSample per refresh cycle. Network failures never
reach the scoring core: the provider falls back to the last-known sample
or to the default sample.

Features:
- Open-Meteo current weather with hourly visibility
- Last-known-good fallback
- Static provider for offline operation and tests
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import requests

from sentinel.grid.grid_types import Coordinates, WeatherSample

logger = logging.getLogger(__name__)


class WeatherProvider:
    """Base class for weather sources."""

    def fetch(self, coords: Coordinates) -> WeatherSample:
        raise NotImplementedError


class StaticWeatherProvider(WeatherProvider):
    """Returns a fixed sample."""

    def __init__(self, sample: Optional[WeatherSample] = None):
        self._sample = sample or WeatherSample.default()

    def set_sample(self, sample: WeatherSample) -> None:
        self._sample = sample

    def fetch(self, coords: Coordinates) -> WeatherSample:
        return self._sample


@dataclass
class OpenMeteoConfig:
    """Configuration for the Open-Meteo client."""
    base_url: str = "https://api.open-meteo.com/v1/forecast"
    timeout: int = 10
    default_visibility: float = 10000.0


class OpenMeteoWeatherProvider(WeatherProvider):
    """
    Live weather from the Open-Meteo forecast API.

    Example:
        >>> provider = OpenMeteoWeatherProvider()
        >>> weather = provider.fetch(Coordinates(lat=26.71, lng=88.43))
    """

    def __init__(self, config: Optional[OpenMeteoConfig] = None):
        self.config = config or OpenMeteoConfig()
        self._last_known: Optional[WeatherSample] = None

    @property
    def last_known(self) -> Optional[WeatherSample]:
        return self._last_known

    def fetch(self, coords: Coordinates) -> WeatherSample:
        """
        Fetch current weather.

        Args:
            coords: Location to query

        Returns:
            Live sample, or the last-known / default sample on failure
        """
        params = {
            "latitude": coords.lat,
            "longitude": coords.lng,
            "current_weather": "true",
            "hourly": "visibility",
            "timezone": "auto"
        }

        try:
            response = requests.get(
                self.config.base_url,
                params=params,
                timeout=self.config.timeout
            )
            response.raise_for_status()
            sample = self._parse(response.json())
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            fallback = self._last_known or WeatherSample.default()
            logger.error(f"Weather fetch failed, using fallback: {e}")
            return fallback

        self._last_known = sample
        return sample

    def _parse(self, data: dict) -> WeatherSample:
        current = data["current_weather"]

        # Visibility is only published hourly; take the current hour
        visibility = self.config.default_visibility
        hourly = (data.get("hourly") or {}).get("visibility") or []
        hour = datetime.now().hour
        if hour < len(hourly) and hourly[hour] is not None:
            visibility = float(hourly[hour])

        return WeatherSample(
            temperature=float(current["temperature"]),
            visibility=visibility,
            precipitation=0.0,
            wind_speed=float(current["windspeed"]),
            is_day=current.get("is_day") == 1
        )
