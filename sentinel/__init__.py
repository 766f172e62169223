"""
Sentinel Grid - Border Sector Risk Intelligence
Core Package

Fuses weather, movement, terrain and incident history into per-sector
risk scores over a fixed border grid, turns them into explainable alert
decisions and plans threat-aware patrol routes.

Components:
- Risk fusion: weather sub-score, composite scorer, anomaly detector
- Autonomous agent: ordered factor rules, advisories, alert rule
- Path planner: threat-aware A* over the sector grid
- Pipeline: tick-driven grid regeneration, field reports, alerts
"""

__version__ = "1.0.0"

from sentinel.config import SentinelConfig, DEFAULT_CONFIG, load_config
from sentinel.exceptions import SentinelError, ConfigurationError, InvalidSectorError
from sentinel.grid import Coordinates, WeatherSample, GridLayout, GridCell, SectorClassifier
from sentinel.risk import (
    ThreatLevel,
    CompositeRiskScorer,
    AnomalyDetector,
    SectorStateStore,
    calculate_weather_risk
)
from sentinel.agent import AutonomousAgent, AgentInput, AgentDecision, PriorityContext
from sentinel.routing import ThreatAwarePlanner, RoutePlan
from sentinel.alerts import AlertManager, Alert, FieldReport, FieldReportType
from sentinel.pipeline import GridRefreshPipeline, TickResult

__all__ = [
    "SentinelConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "SentinelError",
    "ConfigurationError",
    "InvalidSectorError",
    "Coordinates",
    "WeatherSample",
    "GridLayout",
    "GridCell",
    "SectorClassifier",
    "ThreatLevel",
    "CompositeRiskScorer",
    "AnomalyDetector",
    "SectorStateStore",
    "calculate_weather_risk",
    "AutonomousAgent",
    "AgentInput",
    "AgentDecision",
    "PriorityContext",
    "ThreatAwarePlanner",
    "RoutePlan",
    "AlertManager",
    "Alert",
    "FieldReport",
    "FieldReportType",
    "GridRefreshPipeline",
    "TickResult",
]
