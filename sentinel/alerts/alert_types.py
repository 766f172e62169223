"""
Sentinel Grid - Border Sector Risk Intelligence
Alert Module - Shared Types

This module defines the shared data structures for the Alert System
and verified field reports.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sentinel.grid.grid_types import Coordinates
from sentinel.risk.risk_types import ThreatLevel


class AlertType(Enum):
    """
    What kind of evidence produced the alert.

    Attributes:
        INFILTRATION_PREDICTION: Risk-driven alert without a mobility anomaly
        MOBILITY_ANOMALY: Alert accompanied by anomalous movement
        FIELD_REPORT: A verified field report was filed for the sector
    """
    INFILTRATION_PREDICTION = "INFILTRATION_PREDICTION"
    MOBILITY_ANOMALY = "MOBILITY_ANOMALY"
    FIELD_REPORT = "FIELD_REPORT"


class FieldReportType(Enum):
    """Categories of human-sourced field intelligence."""
    SUSPICIOUS_ACTIVITY = "SUSPICIOUS_ACTIVITY"
    GEAR_FOUND = "GEAR_FOUND"
    INFILTRATION_SIGNS = "INFILTRATION_SIGNS"
    OTHER = "OTHER"


def generate_event_id(prefix: str = "evt") -> str:
    """Generate a unique, time-prefixed event ID."""
    now = datetime.now()
    unique = uuid.uuid4().hex[:6]
    return f"{prefix}_{now.strftime('%Y%m%d_%H%M%S')}_{unique}"


@dataclass
class Alert:
    """
    A single alert instance.

    Attributes:
        event_id: Unique identifier for this alert
        sector_id: Sector the alert concerns
        level: Threat tier of the sector
        alert_type: Kind of evidence behind the alert
        message: Human-readable alert message
        risk_score: Risk score (0-100)
        factors: Contributing factors
        timestamp: When the alert was generated
        acknowledged: Whether the alert has been acknowledged
    """
    event_id: str
    sector_id: str
    level: ThreatLevel
    alert_type: AlertType
    message: str
    risk_score: int = 0
    factors: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
    acknowledged: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "event_id": self.event_id,
            "sector_id": self.sector_id,
            "level": self.level.value,
            "type": self.alert_type.value,
            "message": self.message,
            "risk_score": self.risk_score,
            "factors": list(self.factors),
            "timestamp": self.timestamp.isoformat(),
            "acknowledged": self.acknowledged
        }

    def to_log_string(self) -> str:
        """Format for log output."""
        return (
            f"[{self.level.value}] [{self.alert_type.value}] "
            f"Sector {self.sector_id}: {self.message}"
        )


@dataclass
class FieldReport:
    """
    Verified human-sourced intelligence for a sector.

    Attributes:
        report_id: Unique identifier
        sector_id: Sector the report applies to
        report_type: Report category
        coordinates: Where the report was filed
        notes: Free-text notes
        timestamp: When the report was filed
    """
    report_id: str
    sector_id: str
    report_type: FieldReportType
    coordinates: Optional[Coordinates] = None
    notes: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "report_id": self.report_id,
            "sector_id": self.sector_id,
            "type": self.report_type.value,
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            "notes": self.notes,
            "timestamp": self.timestamp.isoformat()
        }


@dataclass
class AlertSummary:
    """
    Summary of alerts over a time period.

    Attributes:
        total_alerts: Total number of alerts
        by_level: Count per threat tier
        by_type: Count per alert type
        start_time: Summary period start
        end_time: Summary period end
    """
    total_alerts: int = 0
    by_level: dict = field(default_factory=lambda: {
        level.value: 0 for level in ThreatLevel
    })
    by_type: dict = field(default_factory=lambda: {
        alert_type.value: 0 for alert_type in AlertType
    })
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_alerts": self.total_alerts,
            "by_level": dict(self.by_level),
            "by_type": dict(self.by_type),
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None
        }
