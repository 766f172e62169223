"""
Sentinel Grid - API Routes - Status

GET /status - Pipeline tick, connectivity and peak risk
POST /tick - Run one refresh tick now
POST /connectivity - Switch online/offline
POST /sync - Push queued reports and alerts
"""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from sentinel.api.state import get_pipeline

router = APIRouter(tags=["status"])

APP_VERSION = "1.0.0"


class ConnectivityRequest(BaseModel):
    """Connectivity switch request."""
    online: bool


class TickResponse(BaseModel):
    """Summary of a manual refresh tick."""
    tick: int
    sectors: int
    alerting_decisions: int
    alerts_raised: int


@router.get("/status")
async def get_status():
    """Get pipeline status."""
    return {
        "status": "ok",
        "version": APP_VERSION,
        "timestamp": datetime.now().isoformat(),
        "pipeline": get_pipeline().get_status()
    }


@router.post("/tick", response_model=TickResponse)
async def run_tick():
    """Regenerate the grid immediately."""
    result = get_pipeline().tick()
    return TickResponse(
        tick=result.tick,
        sectors=len(result.cells),
        alerting_decisions=len(result.alerting_decisions),
        alerts_raised=len(result.alerts)
    )


@router.post("/connectivity")
async def set_connectivity(request: ConnectivityRequest):
    """Switch connectivity. Going online syncs queued data."""
    pipeline = get_pipeline()
    pipeline.set_online(request.online)
    return {"online": pipeline.online, "queued_reports": len(pipeline.queued_reports)}


@router.post("/sync")
async def sync():
    """Push queued field reports and alerts."""
    return get_pipeline().sync()
