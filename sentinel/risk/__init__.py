"""
Sentinel Grid - Border Sector Risk Intelligence
Risk Module

Turns per-sector signals into bounded, explainable risk.

Components:
- calculate_weather_risk: weather sub-score
- CompositeRiskScorer: weighted fusion and threat tiers
- AnomalyDetector: fixed-variance z-score movement anomalies
- SectorStateStore: cross-tick state owned by the caller
"""

from sentinel.risk.risk_types import ThreatLevel, ComponentContribution
from sentinel.risk.weather_risk import calculate_weather_risk, describe_weather_impact
from sentinel.risk.risk_engine import CompositeRiskScorer, classify_threat
from sentinel.risk.anomaly import AnomalyDetector
from sentinel.risk.sector_state import SectorState, SectorStateStore

__all__ = [
    # Types
    "ThreatLevel",
    "ComponentContribution",
    # Scoring
    "calculate_weather_risk",
    "describe_weather_impact",
    "CompositeRiskScorer",
    "classify_threat",
    # Anomaly
    "AnomalyDetector",
    # State
    "SectorState",
    "SectorStateStore",
]
