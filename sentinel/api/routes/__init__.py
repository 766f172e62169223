"""
Sentinel Grid - Border Sector Risk Intelligence
API Module - Routes Package
"""

from sentinel.api.routes.status import router as status_router
from sentinel.api.routes.grid import router as grid_router
from sentinel.api.routes.alerts import router as alerts_router
from sentinel.api.routes.chat import router as chat_router

__all__ = [
    "status_router",
    "grid_router",
    "alerts_router",
    "chat_router",
]
