"""
Sentinel Grid - Border Sector Risk Intelligence
API Module - Shared State

Process-wide handles to the refresh pipeline and briefing service used
by the route handlers.
"""

import logging
import threading
from typing import Optional

from sentinel.ai.briefing import BriefingService
from sentinel.config import load_config
from sentinel.pipeline.grid_pipeline import GridRefreshPipeline

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_pipeline: Optional[GridRefreshPipeline] = None
_briefing: Optional[BriefingService] = None


def get_pipeline() -> GridRefreshPipeline:
    """Get the global pipeline, building and priming it on first use."""
    global _pipeline
    with _lock:
        if _pipeline is None:
            _pipeline = GridRefreshPipeline(load_config())
            _pipeline.tick()
            logger.info("Default pipeline created")
        return _pipeline


def set_pipeline(pipeline: Optional[GridRefreshPipeline]) -> None:
    """Set the global pipeline instance."""
    global _pipeline
    with _lock:
        _pipeline = pipeline


def get_briefing() -> BriefingService:
    """Get the global briefing service (live if GEMINI_API_KEY is set)."""
    global _briefing
    with _lock:
        if _briefing is None:
            _briefing = BriefingService.from_env()
        return _briefing


def set_briefing(service: Optional[BriefingService]) -> None:
    """Set the global briefing service."""
    global _briefing
    with _lock:
        _briefing = service
