"""
Sentinel Grid - Border Sector Risk Intelligence
Grid Module - Shared Types

This module defines the value types shared by every layer:
geographic coordinates and the per-cycle weather sample.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """
    A geographic point.

    Attributes:
        lat: Latitude in degrees
        lng: Longitude in degrees
    """
    lat: float
    lng: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class WeatherSample:
    """
    Weather conditions for one refresh cycle.

    Produced externally once per cycle and never mutated by scoring.

    Attributes:
        temperature: Air temperature in degrees Celsius
        visibility: Visibility in meters
        precipitation: Precipitation in mm
        wind_speed: Wind speed in km/h
        is_day: Whether it is daylight
    """
    temperature: float
    visibility: float
    precipitation: float
    wind_speed: float
    is_day: bool

    @classmethod
    def default(cls) -> 'WeatherSample':
        """Fallback sample used when no live weather is available."""
        return cls(
            temperature=24.0,
            visibility=8000.0,
            precipitation=0.0,
            wind_speed=5.0,
            is_day=True
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "temperature": self.temperature,
            "visibility": self.visibility,
            "precipitation": self.precipitation,
            "wind_speed": self.wind_speed,
            "is_day": self.is_day
        }
