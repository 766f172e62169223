"""
Sentinel Grid - Border Sector Risk Intelligence
Anomaly Detection Module

Flags statistically abnormal movement density relative to a baseline.

The spread is a fixed configured constant rather than an estimate from
observed data. The detector holds no state; callers supply the baseline
for each sector on each tick.
"""

import logging
from typing import Optional

from sentinel.config import AnomalyConfig

logger = logging.getLogger(__name__)


class AnomalyDetector:
    """Fixed-variance z-score detector for mobility density."""

    def __init__(self, config: Optional[AnomalyConfig] = None):
        self._config = config or AnomalyConfig()
        logger.info(
            f"AnomalyDetector initialized with std_dev={self._config.std_dev}, "
            f"z_threshold={self._config.z_threshold}"
        )

    @property
    def config(self) -> AnomalyConfig:
        return self._config

    def compute_baseline(self, history: float) -> float:
        """
        Expected mobility for a sector, derived from its incident history.

        Args:
            history: Historical activity (0-100)

        Returns:
            Baseline, never below the configured floor
        """
        return max(
            self._config.baseline_floor,
            history * self._config.baseline_multiplier
        )

    def z_score(self, current: float, baseline: float) -> float:
        """
        Signed deviation of current mobility from baseline.

        Args:
            current: Current mobility density
            baseline: Expected mobility density

        Returns:
            (current - baseline) / std_dev, rounded to 2 decimals
        """
        return round((current - baseline) / self._config.std_dev, 2)

    def is_anomalous(self, z: float) -> bool:
        """Check whether a z-score is above the anomaly threshold."""
        return z > self._config.z_threshold

    def __repr__(self) -> str:
        return (
            f"AnomalyDetector(std_dev={self._config.std_dev}, "
            f"z_threshold={self._config.z_threshold})"
        )
