"""
Sentinel Grid - Border Sector Risk Intelligence
Configuration Management Module

This module centralizes all configuration parameters for Sentinel Grid.
Covers grid addressing, risk fusion, anomaly detection, the decision agent,
route planning, field reports, alerting and the refresh pipeline.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

from sentinel.exceptions import ConfigurationError


@dataclass(frozen=True)
class GridConfig:
    """
    Grid Addressing Configuration.

    Attributes:
        rows: Number of sector rows
        cols: Number of sector columns
        center_lat: Latitude of the grid center
        center_lng: Longitude of the grid center
        cell_lat_size: Sector height in degrees latitude
        cell_lng_size: Sector width in degrees longitude
        hq_sector_id: Headquarters sector (default route origin)
        border_rows: Row indices classified as border sectors
    """
    rows: int = 6
    cols: int = 6
    center_lat: float = 26.71
    center_lng: float = 88.43
    cell_lat_size: float = 0.02
    cell_lng_size: float = 0.02
    hq_sector_id: str = "0-0"
    border_rows: Tuple[int, ...] = (0, 1)


@dataclass(frozen=True)
class RiskWeights:
    """
    Signal weights for composite risk fusion.

    The four weights must sum to 1.0.

    Attributes:
        weather: Weight for the weather sub-score
        mobility: Weight for movement density
        terrain: Weight for terrain complexity
        history: Weight for historical incident density
    """
    weather: float = 0.25
    mobility: float = 0.30
    terrain: float = 0.20
    history: float = 0.25

    def __post_init__(self):
        if abs(self.total - 1.0) > 1e-9:
            raise ConfigurationError(
                f"Risk weights must sum to 1.0 (got {self.total:.4f})"
            )

    @property
    def total(self) -> float:
        """Get sum of all weights."""
        return self.weather + self.mobility + self.terrain + self.history


@dataclass(frozen=True)
class RiskThresholds:
    """
    Score thresholds for threat tier mapping (0-100 scale).

    Attributes:
        medium: Score at which a sector becomes MEDIUM
        high: Score at which a sector becomes HIGH
        critical: Score at which a sector becomes CRITICAL
    """
    medium: int = 40
    high: int = 70
    critical: int = 85

    def __post_init__(self):
        if not (0 <= self.medium <= self.high <= self.critical <= 100):
            raise ConfigurationError(
                "Risk thresholds must satisfy 0 <= medium <= high <= critical <= 100"
            )


@dataclass(frozen=True)
class RiskConfig:
    """
    Composite Risk Scorer Configuration.

    Attributes:
        weights: Fusion weights
        thresholds: Threat tier thresholds
        max_score: Upper clamp for the fused score
    """
    weights: RiskWeights = field(default_factory=RiskWeights)
    thresholds: RiskThresholds = field(default_factory=RiskThresholds)
    max_score: int = 100


@dataclass(frozen=True)
class AnomalyConfig:
    """
    Anomaly Detector Configuration.

    The detector assumes a fixed spread instead of estimating variance
    from data.

    Attributes:
        std_dev: Assumed standard deviation of mobility density
        z_threshold: z-score above which movement is anomalous
        baseline_floor: Minimum mobility baseline
        baseline_multiplier: Baseline = historical activity * multiplier
    """
    std_dev: float = 15.0
    z_threshold: float = 2.5
    baseline_floor: float = 10.0
    baseline_multiplier: float = 1.2


@dataclass(frozen=True)
class AgentConfig:
    """
    Autonomous Decision Agent Configuration.

    Attributes:
        critical_visibility: Visibility (m) below which visibility is critical
        low_visibility: Visibility (m) below which visibility is low
        high_wind: Wind speed (km/h) for wind interference
        rapid_change_delta: Mobility delta for rapid activity change
        border_movement_delta: Mobility delta for border movement
        border_alert_delta: Mobility delta that forces a border alert
        crowd_density: Mobility density for high crowd density
        complex_terrain: Terrain complexity for complex terrain
        incident_history: Historical activity for an incident zone
        ambush_history: Historical activity for the ambush-zone advisory
        confidence_base: Base decision confidence
        confidence_step: Adjustment per clarity signal
        confidence_jitter: Upper bound (exclusive) of random jitter
        confidence_min: Lower confidence clamp
        confidence_max: Upper confidence clamp
    """
    critical_visibility: float = 1000
    low_visibility: float = 3000
    high_wind: float = 30
    rapid_change_delta: float = 25
    border_movement_delta: float = 20
    border_alert_delta: float = 30
    crowd_density: float = 80
    complex_terrain: float = 70
    incident_history: float = 70
    ambush_history: float = 80
    confidence_base: float = 0.85
    confidence_step: float = 0.05
    confidence_jitter: float = 0.05
    confidence_min: float = 0.75
    confidence_max: float = 0.99


@dataclass(frozen=True)
class PlannerConfig:
    """
    Threat-Aware Path Planner Configuration.

    Attributes:
        base_cost: Cost of entering any sector
        risk_divisor: Risk score divisor for the threat penalty
        terrain_divisor: Terrain complexity divisor for the terrain penalty
        blind_penalty: Penalty for blind patrol conditions
        blind_visibility: Visibility (m) below which patrols are blind
        blind_terrain: Terrain complexity above which patrols are blind
        critical_cost: Base cost of entering a CRITICAL sector
    """
    base_cost: float = 1.0
    risk_divisor: float = 10.0
    terrain_divisor: float = 20.0
    blind_penalty: float = 20.0
    blind_visibility: float = 2000
    blind_terrain: float = 50
    critical_cost: float = 100.0


@dataclass(frozen=True)
class FieldReportConfig:
    """
    Verified field report configuration.

    Attributes:
        impact: Risk bonus added per verified report
        decay_step: Impact removed per refresh tick
    """
    impact: float = 40.0
    decay_step: float = 1.0


@dataclass(frozen=True)
class AlertConfig:
    """
    Alert System Configuration.

    Attributes:
        enabled: Whether alerting is enabled
        dedup_seconds: Window in which same sector/type alerts are merged
        history_size: Maximum alerts retained
    """
    enabled: bool = True
    dedup_seconds: float = 10.0
    history_size: int = 50


@dataclass(frozen=True)
class PipelineConfig:
    """
    Grid Refresh Pipeline Configuration.

    Attributes:
        refresh_rate_ms: Interval between refresh ticks
        decision_history_size: Alerting decisions retained
        parallel_workers: Worker threads for per-sector scoring (1 = serial)
    """
    refresh_rate_ms: int = 5000
    decision_history_size: int = 50
    parallel_workers: int = 1


@dataclass(frozen=True)
class APIConfig:
    """
    API Server Configuration.

    Attributes:
        host: Server host address
        port: Server port
    """
    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class SentinelConfig:
    """
    Master Configuration Container.

    Aggregates all sub-configurations for easy access and management.
    This is the primary configuration object passed throughout the system.
    """
    grid: GridConfig = field(default_factory=GridConfig)
    risk: RiskConfig = field(default_factory=RiskConfig)
    anomaly: AnomalyConfig = field(default_factory=AnomalyConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    reports: FieldReportConfig = field(default_factory=FieldReportConfig)
    alerts: AlertConfig = field(default_factory=AlertConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    api: APIConfig = field(default_factory=APIConfig)


# Default configuration instance for convenience
DEFAULT_CONFIG = SentinelConfig()


def load_config(env_file: Optional[str] = None) -> SentinelConfig:
    """
    Build configuration from defaults plus environment overrides.

    Recognized variables: SENTINEL_GRID_ROWS, SENTINEL_GRID_COLS,
    SENTINEL_REFRESH_MS, SENTINEL_API_HOST, SENTINEL_API_PORT.

    Args:
        env_file: Optional .env file to load before reading the environment

    Returns:
        SentinelConfig instance
    """
    load_dotenv(env_file)

    try:
        grid = GridConfig(
            rows=int(os.getenv("SENTINEL_GRID_ROWS", GridConfig.rows)),
            cols=int(os.getenv("SENTINEL_GRID_COLS", GridConfig.cols)),
        )
        pipeline = PipelineConfig(
            refresh_rate_ms=int(
                os.getenv("SENTINEL_REFRESH_MS", PipelineConfig.refresh_rate_ms)
            ),
        )
        api = APIConfig(
            host=os.getenv("SENTINEL_API_HOST", APIConfig.host),
            port=int(os.getenv("SENTINEL_API_PORT", APIConfig.port)),
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid environment override: {e}") from e

    if grid.rows <= 0 or grid.cols <= 0:
        raise ConfigurationError("Grid dimensions must be positive")

    return SentinelConfig(grid=grid, pipeline=pipeline, api=api)
