"""
Sentinel Grid - Alert API Routes

REST endpoints for alerts, acknowledgment and field reports.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from sentinel.alerts.alert_types import FieldReportType
from sentinel.api.state import get_pipeline

router = APIRouter(tags=["alerts"])


class AcknowledgeResponse(BaseModel):
    """Acknowledge response."""
    message: str
    event_id: str


class ReportRequest(BaseModel):
    """Verified field report. The sector defaults to headquarters."""
    sector_id: Optional[str] = None
    report_type: FieldReportType = FieldReportType.SUSPICIOUS_ACTIVITY
    notes: str = ""


class ReportResponse(BaseModel):
    """Filed report and whether it was applied or queued."""
    report: Dict[str, Any]
    queued: bool


@router.get("/alerts", response_model=List[Dict[str, Any]])
async def get_alerts(
    limit: int = Query(50, ge=1, le=500),
    level: Optional[str] = None
):
    """
    Get recent alerts, newest first.

    Args:
        limit: Maximum alerts to return
        level: Filter by threat level (LOW, MEDIUM, HIGH, CRITICAL)
    """
    alerts = get_pipeline().alert_manager.get_recent_alerts(count=limit)
    result = [a.to_dict() for a in alerts]

    if level:
        result = [a for a in result if a["level"] == level.upper()]

    return result


@router.get("/alerts/summary")
async def get_alert_summary():
    """Get alert summary statistics."""
    manager = get_pipeline().alert_manager
    summary = manager.get_summary().to_dict()
    summary["pending_sync"] = len(manager.pending_sync)
    return summary


@router.post("/alerts/{event_id}/acknowledge", response_model=AcknowledgeResponse)
async def acknowledge_alert(event_id: str):
    """Acknowledge an alert."""
    if not get_pipeline().alert_manager.acknowledge(event_id):
        raise HTTPException(status_code=404, detail=f"Alert {event_id} not found")
    return AcknowledgeResponse(message="Alert acknowledged", event_id=event_id)


@router.post("/reports", response_model=ReportResponse)
async def submit_report(request: ReportRequest):
    """File a verified field report."""
    pipeline = get_pipeline()
    report = pipeline.submit_report(
        sector_id=request.sector_id,
        report_type=request.report_type,
        notes=request.notes
    )
    return ReportResponse(report=report.to_dict(), queued=not pipeline.online)
