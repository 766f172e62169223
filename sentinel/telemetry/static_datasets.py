"""
Sentinel Grid - Border Sector Risk Intelligence
Static Datasets Module

Simulated GIS terrain and historical incident data.
"""

from typing import Dict, Optional

DEFAULT_HISTORY: Dict[str, float] = {
    "0-0": 15,
    "0-1": 25,
    "0-2": 85,  # near the border
    "1-2": 70,
    "2-2": 55,
    "3-3": 95,  # choke point
}


class StaticTerrainDataset:
    """
    Terrain complexity by location.

    The northern ridge is hilly forest, a river band runs north-south,
    everything else is plains or urban.
    """

    def __init__(
        self,
        north_ridge_lat: float = 26.75,
        river_lng_range: tuple = (88.45, 88.48),
        ridge_value: float = 85,
        river_value: float = 65,
        plains_value: float = 30
    ):
        self.north_ridge_lat = north_ridge_lat
        self.river_lng_range = river_lng_range
        self.ridge_value = ridge_value
        self.river_value = river_value
        self.plains_value = plains_value

    def complexity(self, lat: float, lng: float) -> float:
        """Terrain complexity (0-100) at a point."""
        if lat > self.north_ridge_lat:
            return self.ridge_value
        low, high = self.river_lng_range
        if low < lng < high:
            return self.river_value
        return self.plains_value


class StaticHistoryDataset:
    """Historical incident density per sector."""

    def __init__(self, table: Optional[Dict[str, float]] = None, default: float = 10):
        self._table = dict(DEFAULT_HISTORY if table is None else table)
        self._default = default

    def activity(self, sector_id: str) -> float:
        """Historical activity (0-100) for a sector."""
        return self._table.get(sector_id, self._default)
