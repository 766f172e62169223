"""
Sentinel Grid - Border Sector Risk Intelligence
Risk Engine Module

This module provides the composite risk scoring logic.
Fuses weather, movement density, terrain complexity, historical incident
density and verified report impact into one bounded, explainable score.

Features:
- Weighted multi-signal fusion
- Direct (unweighted) report impact
- Threshold-based threat tiers
- Per-component contribution breakdown
"""

import logging
import math
from typing import Dict, Optional

from sentinel.config import RiskConfig, RiskThresholds
from sentinel.grid.grid_types import WeatherSample
from sentinel.risk.risk_types import ThreatLevel, ComponentContribution
from sentinel.risk.weather_risk import calculate_weather_risk

# Configure module logger
logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_threat(score: float, thresholds: Optional[RiskThresholds] = None) -> ThreatLevel:
    """Map a 0-100 score to a ThreatLevel using the given (or default) thresholds."""
    return ThreatLevel.from_score(score, thresholds or RiskThresholds())


class CompositeRiskScorer:
    """
    Fuses per-sector signals into a single 0-100 risk score.

    All inputs except report impact are expected in [0, 100]. Report
    impact represents verified human intelligence and is added after
    weighting as direct evidence.

    Example:
        >>> scorer = CompositeRiskScorer()
        >>> score = scorer.score(weather, mobility=60, terrain=30, history=10)
        >>> level = scorer.classify(score)
    """

    def __init__(self, config: Optional[RiskConfig] = None):
        """
        Initialize the scorer.

        Args:
            config: Risk configuration (weights and thresholds)
        """
        self._config = config or RiskConfig()

        logger.info(
            f"CompositeRiskScorer initialized with "
            f"weights={self._config.weights}, "
            f"thresholds={self._config.thresholds}"
        )

    @property
    def config(self) -> RiskConfig:
        """Get scorer configuration."""
        return self._config

    def weather_risk(self, weather: WeatherSample) -> int:
        """Weather sub-score for a sample."""
        return calculate_weather_risk(weather)

    def base_score(
        self,
        weather: WeatherSample,
        mobility: float,
        terrain: float,
        history: float
    ) -> float:
        """Weighted sum of the four fused components, before report impact."""
        weights = self._config.weights
        return (
            self.weather_risk(weather) * weights.weather
            + mobility * weights.mobility
            + terrain * weights.terrain
            + history * weights.history
        )

    def score(
        self,
        weather: WeatherSample,
        mobility: float,
        terrain: float,
        history: float,
        report_impact: float = 0.0
    ) -> int:
        """
        Compute the fused risk score.

        Args:
            weather: Current weather sample
            mobility: Movement density (0-100)
            terrain: Terrain complexity (0-100)
            history: Historical incident density (0-100)
            report_impact: Verified report bonus (>= 0)

        Returns:
            Integer risk score between 0 and 100
        """
        total = self.base_score(weather, mobility, terrain, history) + report_impact
        clamped = max(0.0, min(float(self._config.max_score), total))
        return _round_half_up(clamped)

    def classify(self, score: float) -> ThreatLevel:
        """Map a score to its threat tier."""
        return ThreatLevel.from_score(score, self._config.thresholds)

    def breakdown(
        self,
        weather: WeatherSample,
        mobility: float,
        terrain: float,
        history: float,
        report_impact: float = 0.0
    ) -> Dict[str, ComponentContribution]:
        """
        Per-component contributions for explainability.

        Returns:
            dict of component name -> ComponentContribution
        """
        weights = self._config.weights
        raw = {
            "weather": (float(self.weather_risk(weather)), weights.weather),
            "mobility": (float(mobility), weights.mobility),
            "terrain": (float(terrain), weights.terrain),
            "history": (float(history), weights.history),
            "reports": (float(report_impact), 1.0),
        }

        total = sum(value * weight for value, weight in raw.values())

        contributions = {}
        for name, (value, weight) in raw.items():
            weighted = value * weight
            pct = round(weighted / total * 100, 1) if total > 0 else 0.0
            contributions[name] = ComponentContribution(
                name=name,
                raw_value=value,
                weight=weight,
                weighted_value=weighted,
                contribution_pct=pct
            )

        return contributions

    def __repr__(self) -> str:
        return f"CompositeRiskScorer(thresholds={self._config.thresholds})"
