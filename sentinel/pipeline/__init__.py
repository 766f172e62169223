"""
Sentinel Grid - Border Sector Risk Intelligence
Pipeline Module
"""

from sentinel.pipeline.grid_pipeline import (
    GridRefreshPipeline,
    TickResult,
    VERIFIED_REPORT_FACTOR
)

__all__ = [
    "GridRefreshPipeline",
    "TickResult",
    "VERIFIED_REPORT_FACTOR",
]
