"""
Sentinel Grid - Border Sector Risk Intelligence
Grid Module - Sector Record

The per-sector record regenerated on every refresh tick. Data only;
all behavior lives in the risk, agent and pipeline layers.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from sentinel.grid.grid_types import Coordinates
from sentinel.risk.risk_types import ThreatLevel


@dataclass
class GridCell:
    """
    Fused state of one sector for one tick.

    Attributes:
        sector_id: "row-col" identifier
        bounds: (south-west, north-east) corners
        center: Sector center point
        weather_risk: Weather sub-score (0-100)
        terrain_complexity: Terrain complexity (0-100)
        mobility_density: Movement density (0-100)
        historical_activity: Historical incident density (0-100)
        report_impact: Decaying bonus from verified field reports
        mobility_baseline: Expected mobility used as anomaly reference
        z_score: Deviation of mobility from baseline in detector units
        risk_score: Fused risk score (0-100)
        threat_level: Tier derived from risk_score
        anomaly_detected: Whether z_score exceeds the anomaly threshold
        risk_factors: Ordered explanatory tags
        monitor_next: Recommended next action
        last_updated: Epoch milliseconds of the tick that produced the cell
    """
    sector_id: str
    bounds: Tuple[Coordinates, Coordinates]
    center: Coordinates
    weather_risk: int = 0
    terrain_complexity: float = 0.0
    mobility_density: float = 0.0
    historical_activity: float = 0.0
    report_impact: float = 0.0
    mobility_baseline: float = 0.0
    z_score: float = 0.0
    risk_score: int = 0
    threat_level: ThreatLevel = ThreatLevel.LOW
    anomaly_detected: bool = False
    risk_factors: List[str] = field(default_factory=list)
    monitor_next: str = ""
    last_updated: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "sector_id": self.sector_id,
            "bounds": [self.bounds[0].to_dict(), self.bounds[1].to_dict()],
            "center": self.center.to_dict(),
            "weather_risk": self.weather_risk,
            "terrain_complexity": self.terrain_complexity,
            "mobility_density": round(self.mobility_density, 2),
            "historical_activity": self.historical_activity,
            "report_impact": self.report_impact,
            "mobility_baseline": round(self.mobility_baseline, 2),
            "z_score": self.z_score,
            "risk_score": self.risk_score,
            "threat_level": self.threat_level.value,
            "anomaly_detected": self.anomaly_detected,
            "risk_factors": list(self.risk_factors),
            "monitor_next": self.monitor_next,
            "last_updated": self.last_updated
        }
