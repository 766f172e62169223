"""
Sentinel Grid - Border Sector Risk Intelligence
Threat-Aware Path Planner Module

A* search over the 4-connected sector grid. The cost of entering a sector
grows with its risk score and terrain complexity, adds a heavy penalty for
blind patrols (low visibility in complex terrain) and makes CRITICAL
sectors effectively impassable while still reachable as a last resort.

Features:
- Manhattan heuristic in grid-index space
- Stable open-set scan: ties go to the earliest inserted sector
- Strictly-cheaper relaxation only
- Empty route when no traversal exists or endpoints are unknown
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from sentinel.config import PlannerConfig
from sentinel.grid.grid_cell import GridCell
from sentinel.grid.grid_types import Coordinates, WeatherSample
from sentinel.grid.layout import GridLayout
from sentinel.risk.risk_types import ThreatLevel

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class RoutePlan:
    """
    Result of one route request.

    Attributes:
        start_id: Origin sector
        end_id: Destination sector
        sector_ids: Sectors along the route, endpoints inclusive
        coordinates: Sector centers along the route
        cumulative_costs: Cost from the origin to each route sector
        total_cost: Cost of the whole route
    """
    start_id: str
    end_id: str
    sector_ids: List[str] = field(default_factory=list)
    coordinates: List[Coordinates] = field(default_factory=list)
    cumulative_costs: List[float] = field(default_factory=list)
    total_cost: float = 0.0

    @property
    def found(self) -> bool:
        """Whether a traversal exists."""
        return bool(self.sector_ids)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "start_id": self.start_id,
            "end_id": self.end_id,
            "found": self.found,
            "sector_ids": list(self.sector_ids),
            "path": [c.to_dict() for c in self.coordinates],
            "cumulative_costs": [round(c, 2) for c in self.cumulative_costs],
            "total_cost": round(self.total_cost, 2)
        }


class ThreatAwarePlanner:
    """
    Computes the safest route between two sectors.

    Every call builds its own open set and cost maps, so one planner can
    serve concurrent requests.

    Example:
        >>> planner = ThreatAwarePlanner()
        >>> path = planner.plan(grid, "0-0", "4-3", weather)
        >>> if not path:
        ...     print("No safe route")
    """

    def __init__(
        self,
        config: Optional[PlannerConfig] = None,
        layout: Optional[GridLayout] = None
    ):
        """
        Initialize the planner.

        Args:
            config: Traversal cost parameters
            layout: Grid addressing used for neighbors and the heuristic
        """
        self._config = config or PlannerConfig()
        self._layout = layout or GridLayout()

        logger.info(
            f"ThreatAwarePlanner initialized for {self._layout.rows}x{self._layout.cols} grid"
        )

    @property
    def config(self) -> PlannerConfig:
        return self._config

    def traversal_cost(self, cell: GridCell, weather: Optional[WeatherSample]) -> float:
        """
        Cost of entering a sector.

        Args:
            cell: Target sector
            weather: Current weather (no blind-patrol penalty when None)

        Returns:
            Non-negative entry cost
        """
        cfg = self._config
        terrain_penalty = cell.terrain_complexity / cfg.terrain_divisor

        if cell.threat_level == ThreatLevel.CRITICAL:
            return cfg.critical_cost + terrain_penalty

        risk_penalty = cell.risk_score / cfg.risk_divisor

        blind_penalty = 0.0
        if (
            weather is not None
            and weather.visibility < cfg.blind_visibility
            and cell.terrain_complexity > cfg.blind_terrain
        ):
            blind_penalty = cfg.blind_penalty

        return cfg.base_cost + risk_penalty + terrain_penalty + blind_penalty

    def plan(
        self,
        grid: Iterable[GridCell],
        start_id: str,
        end_id: str,
        weather: Optional[WeatherSample]
    ) -> List[Coordinates]:
        """
        Compute the route as sector center coordinates.

        Args:
            grid: Current grid snapshot
            start_id: Origin sector
            end_id: Destination sector
            weather: Current weather sample

        Returns:
            Coordinates from origin to destination, empty if no route exists
        """
        return self.plan_route(grid, start_id, end_id, weather).coordinates

    def plan_route(
        self,
        grid: Iterable[GridCell],
        start_id: str,
        end_id: str,
        weather: Optional[WeatherSample]
    ) -> RoutePlan:
        """
        Compute the route with per-step costs.

        Args:
            grid: Current grid snapshot
            start_id: Origin sector
            end_id: Destination sector
            weather: Current weather sample

        Returns:
            RoutePlan (``found`` is False when no route exists)
        """
        cells: Dict[str, GridCell] = {cell.sector_id: cell for cell in grid}
        plan = RoutePlan(start_id=start_id, end_id=end_id)

        if start_id not in cells or end_id not in cells:
            logger.warning(
                f"Route {start_id} -> {end_id} rejected: sector not in current grid"
            )
            return plan

        open_set: List[str] = [start_id]
        came_from: Dict[str, str] = {}
        g_score: Dict[str, float] = {start_id: 0.0}
        f_score: Dict[str, float] = {start_id: float(self._layout.manhattan(start_id, end_id))}

        while open_set:
            # Stable scan: only a strictly lower f replaces the current pick
            current = open_set[0]
            for sector_id in open_set[1:]:
                if f_score[sector_id] < f_score[current]:
                    current = sector_id

            if current == end_id:
                return self._reconstruct(plan, cells, came_from, g_score, current)

            open_set.remove(current)

            for neighbor in self._layout.neighbors(current):
                cell = cells.get(neighbor)
                if cell is None:
                    continue

                tentative = g_score[current] + self.traversal_cost(cell, weather)
                if tentative < g_score.get(neighbor, float("inf")):
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative
                    f_score[neighbor] = tentative + self._layout.manhattan(neighbor, end_id)
                    if neighbor not in open_set:
                        open_set.append(neighbor)

        logger.warning(f"Route {start_id} -> {end_id}: no traversal found")
        return plan

    def _reconstruct(
        self,
        plan: RoutePlan,
        cells: Dict[str, GridCell],
        came_from: Dict[str, str],
        g_score: Dict[str, float],
        goal: str
    ) -> RoutePlan:
        sector_ids = [goal]
        while sector_ids[-1] in came_from:
            sector_ids.append(came_from[sector_ids[-1]])
        sector_ids.reverse()

        plan.sector_ids = sector_ids
        plan.coordinates = [cells[s].center for s in sector_ids]
        plan.cumulative_costs = [g_score[s] for s in sector_ids]
        plan.total_cost = g_score[goal]

        logger.debug(
            f"Route {plan.start_id} -> {plan.end_id}: "
            f"{len(sector_ids)} sectors, cost={plan.total_cost:.2f}"
        )
        return plan

    def __repr__(self) -> str:
        return f"ThreatAwarePlanner(layout={self._layout!r})"
