"""
Sentinel Grid - Border Sector Risk Intelligence
Alert Module

Alert generation, deduplication and field report types.
"""

from sentinel.alerts.alert_types import (
    AlertType,
    FieldReportType,
    Alert,
    FieldReport,
    AlertSummary,
    generate_event_id
)
from sentinel.alerts.alert_manager import AlertManager

__all__ = [
    "AlertType",
    "FieldReportType",
    "Alert",
    "FieldReport",
    "AlertSummary",
    "generate_event_id",
    "AlertManager",
]
