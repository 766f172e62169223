"""
Sentinel Grid - Commander Chat API

Free-text questions answered against the current situation report.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from sentinel.ai.briefing import CHAT_ALERT_COUNT
from sentinel.api.state import get_briefing, get_pipeline
from sentinel.grid.grid_types import WeatherSample

router = APIRouter(prefix="/chat", tags=["ai"])


class ChatRequest(BaseModel):
    """Commander query."""
    query: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """Commander chat answer."""
    answer: str
    live: bool


@router.post("", response_model=ChatResponse)
def commander_chat(request: ChatRequest):
    """Answer a commander query using the latest grid and alerts."""
    pipeline = get_pipeline()
    service = get_briefing()

    answer = service.commander_chat(
        request.query,
        pipeline.snapshot(),
        pipeline.weather or WeatherSample.default(),
        pipeline.alert_manager.get_recent_alerts(count=CHAT_ALERT_COUNT)
    )
    return ChatResponse(answer=answer, live=service.is_live)
