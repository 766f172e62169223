"""Tests for the threat-aware A* planner."""

import pytest

from sentinel.config import GridConfig
from sentinel.grid import GridLayout, WeatherSample
from sentinel.risk import ThreatLevel
from sentinel.routing import ThreatAwarePlanner


@pytest.fixture
def layout_2x2():
    return GridLayout(GridConfig(rows=2, cols=2))


@pytest.fixture
def planner_2x2(layout_2x2):
    return ThreatAwarePlanner(layout=layout_2x2)


def test_traversal_cost_components(planner_2x2, layout_2x2, cell_factory):
    cell = cell_factory(layout_2x2, "0-1", risk_score=10, terrain=30)
    assert planner_2x2.traversal_cost(cell, None) == pytest.approx(3.5)


def test_blind_patrol_penalty(planner_2x2, layout_2x2, cell_factory):
    fog = WeatherSample(temperature=10, visibility=1000, precipitation=0, wind_speed=5, is_day=True)
    rough = cell_factory(layout_2x2, "0-1", risk_score=10, terrain=60)
    flat = cell_factory(layout_2x2, "1-0", risk_score=10, terrain=40)

    assert planner_2x2.traversal_cost(rough, fog) == pytest.approx(1 + 1 + 3 + 20)
    assert planner_2x2.traversal_cost(flat, fog) == pytest.approx(1 + 1 + 2)
    assert planner_2x2.traversal_cost(rough, None) == pytest.approx(5.0)


def test_critical_cost_replaces_risk_penalty(planner_2x2, layout_2x2, cell_factory):
    cell = cell_factory(layout_2x2, "0-1", risk_score=90, terrain=40)
    assert cell.threat_level == ThreatLevel.CRITICAL
    assert planner_2x2.traversal_cost(cell, None) == pytest.approx(102.0)


def test_uniform_grid_route(planner_2x2, layout_2x2, grid_factory):
    grid = grid_factory(layout_2x2)
    plan = planner_2x2.plan_route(grid, "0-0", "1-1", None)

    assert plan.found
    assert len(plan.coordinates) == 3
    assert plan.sector_ids[0] == "0-0"
    assert plan.sector_ids[-1] == "1-1"
    assert plan.cumulative_costs == sorted(plan.cumulative_costs)
    assert plan.total_cost == pytest.approx(7.0)


def test_equal_cost_tie_takes_first_neighbor(planner_2x2, layout_2x2, grid_factory):
    plan = planner_2x2.plan_route(grid_factory(layout_2x2), "0-0", "1-1", None)
    assert plan.sector_ids == ["0-0", "1-0", "1-1"]


def test_route_avoids_critical_when_detour_exists(planner_2x2, layout_2x2, grid_factory):
    grid = grid_factory(layout_2x2, overrides={"1-0": {"risk_score": 95}})
    plan = planner_2x2.plan_route(grid, "0-0", "1-1", None)
    assert plan.sector_ids == ["0-0", "0-1", "1-1"]


def test_only_route_through_critical_is_returned(grid_factory):
    layout = GridLayout(GridConfig(rows=1, cols=3))
    planner = ThreatAwarePlanner(layout=layout)
    grid = grid_factory(layout, overrides={"0-1": {"risk_score": 95}})

    plan = planner.plan_route(grid, "0-0", "0-2", None)
    assert plan.sector_ids == ["0-0", "0-1", "0-2"]
    assert plan.total_cost == pytest.approx(101.5 + 3.5)


def test_start_equals_end(planner_2x2, layout_2x2, grid_factory):
    plan = planner_2x2.plan_route(grid_factory(layout_2x2), "1-1", "1-1", None)
    assert plan.sector_ids == ["1-1"]
    assert plan.total_cost == 0


def test_missing_endpoint_returns_empty(planner_2x2, layout_2x2, grid_factory):
    grid = [c for c in grid_factory(layout_2x2) if c.sector_id != "1-1"]

    assert planner_2x2.plan(grid, "0-0", "1-1", None) == []
    assert not planner_2x2.plan_route(grid, "1-1", "0-0", None).found


def test_disconnected_grid_returns_empty(grid_factory):
    layout = GridLayout(GridConfig(rows=1, cols=3))
    planner = ThreatAwarePlanner(layout=layout)
    grid = [c for c in grid_factory(layout) if c.sector_id != "0-1"]

    assert planner.plan(grid, "0-0", "0-2", None) == []


def test_route_points_are_sector_centers(planner_2x2, layout_2x2, grid_factory):
    plan = planner_2x2.plan_route(grid_factory(layout_2x2), "0-0", "0-1", None)
    assert plan.coordinates == [layout_2x2.center("0-0"), layout_2x2.center("0-1")]
    assert plan.to_dict()["found"] is True
