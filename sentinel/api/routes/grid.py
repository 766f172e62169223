"""
Sentinel Grid - API Routes - Grid & Routing

GET /grid - Latest sector snapshot
GET /grid/{sector_id} - One sector
GET /grid/{sector_id}/briefing - Tactical briefing for one sector
GET /decisions - Recent alerting decisions
POST /route - Threat-aware route
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from sentinel.api.state import get_briefing, get_pipeline
from sentinel.grid.grid_types import WeatherSample

router = APIRouter(tags=["grid"])
logger = logging.getLogger(__name__)


class RouteRequest(BaseModel):
    """Route request. The origin defaults to headquarters."""
    end_id: str
    start_id: Optional[str] = None


class BriefingResponse(BaseModel):
    """Sector briefing response."""
    sector_id: str
    live: bool
    report: str


@router.get("/grid", response_model=List[Dict[str, Any]])
async def get_grid(
    min_score: int = Query(0, ge=0, le=100)
):
    """
    Get the latest grid snapshot, row-major.

    Args:
        min_score: Only return sectors at or above this risk score
    """
    cells = get_pipeline().snapshot()
    return [c.to_dict() for c in cells if c.risk_score >= min_score]


@router.get("/grid/{sector_id}")
async def get_sector(sector_id: str):
    """Get one sector record."""
    cell = get_pipeline().get_cell(sector_id)
    if cell is None:
        raise HTTPException(status_code=404, detail=f"Sector {sector_id} not yet generated")
    return cell.to_dict()


@router.get("/grid/{sector_id}/briefing", response_model=BriefingResponse)
def get_briefing_report(sector_id: str):
    """Tactical briefing for one sector (offline heuristic without Gemini)."""
    pipeline = get_pipeline()
    cell = pipeline.get_cell(sector_id)
    if cell is None:
        raise HTTPException(status_code=404, detail=f"Sector {sector_id} not yet generated")

    service = get_briefing()
    report = service.strategic_report(cell, pipeline.weather or WeatherSample.default())
    return BriefingResponse(sector_id=sector_id, live=service.is_live, report=report)


@router.get("/decisions", response_model=List[Dict[str, Any]])
async def get_decisions(
    limit: int = Query(20, ge=1, le=50)
):
    """Recent alerting decisions, newest first."""
    return [d.to_dict() for d in get_pipeline().recent_decisions(limit)]


@router.post("/route")
async def plan_route(request: RouteRequest):
    """
    Compute the safest route over the latest snapshot.

    An unreachable destination yields an empty path, not an error.
    """
    plan = get_pipeline().plan_route(request.end_id, request.start_id)
    return plan.to_dict()
