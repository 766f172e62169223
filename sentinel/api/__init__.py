"""
Sentinel Grid - Border Sector Risk Intelligence
API Module

REST API over the grid refresh pipeline.

Components:
- create_app: FastAPI application factory
- APIServer: Background server wrapper
- Routes: status, grid, alerts, chat
"""

from sentinel.api.state import get_pipeline, set_pipeline, get_briefing, set_briefing
from sentinel.api.app import APIServer, create_app

__all__ = [
    "get_pipeline",
    "set_pipeline",
    "get_briefing",
    "set_briefing",
    "APIServer",
    "create_app",
]
