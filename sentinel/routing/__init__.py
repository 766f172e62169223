"""
Sentinel Grid - Border Sector Risk Intelligence
Routing Module

Threat-aware A* route planning across the sector grid.
"""

from sentinel.routing.path_planner import RoutePlan, ThreatAwarePlanner

__all__ = [
    "RoutePlan",
    "ThreatAwarePlanner",
]
