"""
Sentinel Grid - Border Sector Risk Intelligence
Risk Module - Shared Types

This module defines the shared data structures for risk fusion:
threat tiers and per-component contributions used for explainability.
"""

from dataclasses import dataclass
from enum import Enum

from sentinel.config import RiskThresholds


class ThreatLevel(Enum):
    """
    Discrete threat tiers derived from the fused risk score.

    Attributes:
        LOW: Normal activity, monitoring only
        MEDIUM: Elevated conditions, flagged for review
        HIGH: Concerning conditions, alert recommended
        CRITICAL: Immediate attention required
    """
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_score(cls, score: float, thresholds: RiskThresholds) -> 'ThreatLevel':
        """
        Map a risk score to a threat tier.

        Args:
            score: Risk score between 0 and 100
            thresholds: Threshold configuration

        Returns:
            Corresponding ThreatLevel
        """
        if score >= thresholds.critical:
            return cls.CRITICAL
        elif score >= thresholds.high:
            return cls.HIGH
        elif score >= thresholds.medium:
            return cls.MEDIUM
        return cls.LOW

    @property
    def display_name(self) -> str:
        """Capitalized form used in agent decisions (e.g. "High")."""
        return self.value.capitalize()

    @property
    def priority(self) -> int:
        """Get numeric priority (higher = more urgent)."""
        priorities = {
            ThreatLevel.LOW: 1,
            ThreatLevel.MEDIUM: 2,
            ThreatLevel.HIGH: 3,
            ThreatLevel.CRITICAL: 4
        }
        return priorities.get(self, 0)

    @property
    def is_concerning(self) -> bool:
        """Check if the tier warrants an alert on its own."""
        return self in (ThreatLevel.HIGH, ThreatLevel.CRITICAL)


@dataclass(frozen=True)
class ComponentContribution:
    """
    A single fused component of the risk score.

    Attributes:
        name: Component identifier (weather, mobility, terrain, history, reports)
        raw_value: Component value before weighting
        weight: Configured weight (1.0 for report impact)
        weighted_value: Value after applying weight
        contribution_pct: Share of the pre-clamp total, in percent
    """
    name: str
    raw_value: float
    weight: float
    weighted_value: float
    contribution_pct: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "raw_value": round(self.raw_value, 2),
            "weight": self.weight,
            "weighted_value": round(self.weighted_value, 2),
            "contribution_pct": self.contribution_pct
        }
