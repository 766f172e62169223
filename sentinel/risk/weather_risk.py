"""
Sentinel Grid - Border Sector Risk Intelligence
Weather Risk Module

Maps a weather sample to a bounded 0-100 sub-score.
"""

from sentinel.grid.grid_types import WeatherSample

MAX_WEATHER_RISK = 100


def calculate_weather_risk(weather: WeatherSample) -> int:
    """
    Score how much the weather degrades observation.

    Visibility dominates, night adds a fixed penalty and wind adds a
    smaller one. The additive total is clamped to 100.

    Args:
        weather: Current weather sample

    Returns:
        Integer sub-score between 0 and 100
    """
    score = 0

    # Visibility
    if weather.visibility < 500:
        score += 60  # dense fog
    elif weather.visibility < 2000:
        score += 40  # mist / haze
    elif weather.visibility < 5000:
        score += 20

    if not weather.is_day:
        score += 25

    # Wind
    if weather.wind_speed > 30:
        score += 15
    elif weather.wind_speed > 15:
        score += 5

    return min(MAX_WEATHER_RISK, score)


def describe_weather_impact(weather: WeatherSample) -> str:
    """Short tag summary of weather conditions, e.g. "LOW_VISIBILITY + NIGHT_OPS"."""
    factors = []
    if weather.visibility < 2000:
        factors.append("LOW_VISIBILITY")
    if not weather.is_day:
        factors.append("NIGHT_OPS")
    if weather.wind_speed > 20:
        factors.append("HIGH_WIND")

    if not factors:
        return "NORMAL_CONDITIONS"
    return " + ".join(factors)
