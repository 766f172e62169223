"""
Sentinel Grid - Border Sector Risk Intelligence
Grid Module

Static spatial addressing and the per-sector record.

Components:
- GridLayout: "row-col" addressing, bounds, centers, neighbors
- SectorClassifier: border / interior classification
- GridCell: fused per-sector state for one tick
"""

from sentinel.grid.grid_types import Coordinates, WeatherSample
from sentinel.grid.layout import GridLayout, format_sector_id
from sentinel.grid.sector_context import SectorType, SectorClassifier
from sentinel.grid.grid_cell import GridCell

__all__ = [
    "Coordinates",
    "WeatherSample",
    "GridLayout",
    "format_sector_id",
    "SectorType",
    "SectorClassifier",
    "GridCell",
]
