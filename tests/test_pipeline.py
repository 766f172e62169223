"""Tests for the grid refresh pipeline."""

import threading
import time

import pytest

from sentinel.alerts import AlertType
from sentinel.config import PipelineConfig, SentinelConfig
from sentinel.exceptions import InvalidSectorError
from sentinel.pipeline import VERIFIED_REPORT_FACTOR
from sentinel.risk import classify_threat


def test_tick_regenerates_full_grid(make_pipeline):
    pipeline = make_pipeline()
    result = pipeline.tick()

    assert result.tick == 0
    assert len(result.cells) == 36
    assert [c.sector_id for c in result.cells][:3] == ["0-0", "0-1", "0-2"]
    assert pipeline.current_tick == 1
    assert pipeline.snapshot() == result.cells


def test_cells_are_consistent(make_pipeline):
    pipeline = make_pipeline()
    pipeline.tick()

    for cell in pipeline.snapshot():
        assert 0 <= cell.risk_score <= 100
        assert cell.threat_level == classify_threat(cell.risk_score)
        assert cell.mobility_density == 20
        assert cell.monitor_next


def test_identical_inputs_give_identical_grids(make_pipeline, fake_clock):
    pipeline = make_pipeline(clock=fake_clock)
    first = [c.to_dict() for c in pipeline.tick().cells]
    second = [c.to_dict() for c in pipeline.tick().cells]
    assert first == second


def test_parallel_scoring_matches_serial(make_pipeline, fake_clock):
    serial = make_pipeline(clock=fake_clock)
    parallel = make_pipeline(
        config=SentinelConfig(pipeline=PipelineConfig(parallel_workers=4)),
        clock=fake_clock
    )
    assert (
        [c.to_dict() for c in serial.tick().cells]
        == [c.to_dict() for c in parallel.tick().cells]
    )


def test_quiet_grid_raises_no_alerts(make_pipeline):
    pipeline = make_pipeline()
    result = pipeline.tick()

    assert result.alerting_decisions == []
    assert result.alerts == []
    assert pipeline.recent_decisions() == []


def test_sudden_border_movement_alerts(make_pipeline, feed_factory):
    feed = feed_factory()
    pipeline = make_pipeline(feed=feed)
    pipeline.tick()

    feed.overrides["0-2"] = 80
    result = pipeline.tick()

    assert [d.sector_id for d in result.alerting_decisions] == ["0-2"]
    decision = pipeline.recent_decisions()[0]
    assert "Border Patch Movement" in decision.factors
    assert result.alerts[0].message.startswith("SUSPICIOUS MOVEMENT DETECTED AT ZONE 0-2")
    assert pipeline.alert_manager.get_recent_alerts()[0].sector_id == "0-2"


def test_field_report_raises_score_then_decays(make_pipeline):
    pipeline = make_pipeline()
    base = pipeline.tick()
    base_score = next(c for c in base.cells if c.sector_id == "0-1").risk_score

    pipeline.submit_report("0-1", notes="Footprints near fence")
    pipeline.tick()
    reported = pipeline.get_cell("0-1")

    assert reported.report_impact == 40
    assert reported.risk_score == base_score + 40
    assert VERIFIED_REPORT_FACTOR in reported.risk_factors

    pipeline.tick()
    assert pipeline.get_cell("0-1").report_impact == 39


def test_concurrent_ticks_run_one_after_another(make_pipeline):
    class SlowFeed:
        def density(self, sector_id, tick=0, is_day=True, visibility=10000):
            time.sleep(0.002)
            return 20.0

    pipeline = make_pipeline(feed=SlowFeed())
    pipeline.tick()
    pipeline.submit_report("3-3")

    results = []
    threads = [threading.Thread(target=lambda: results.append(pipeline.tick())) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    results.sort(key=lambda r: r.tick)
    assert [r.tick for r in results] == [1, 2]
    assert pipeline.current_tick == 3
    impacts = [next(c for c in r.cells if c.sector_id == "3-3").report_impact for r in results]
    assert impacts == [40, 39]
    assert pipeline.state_store.report_impact("3-3") == 38


def test_field_report_raises_alert(make_pipeline):
    pipeline = make_pipeline()
    pipeline.tick()
    pipeline.submit_report("2-2")

    alert = pipeline.alert_manager.get_recent_alerts()[0]
    assert alert.alert_type == AlertType.FIELD_REPORT
    assert alert.sector_id == "2-2"


def test_offline_reports_apply_on_sync(make_pipeline):
    pipeline = make_pipeline()
    pipeline.tick()

    pipeline.set_online(False)
    pipeline.submit_report("3-1")
    assert len(pipeline.queued_reports) == 1
    assert pipeline.state_store.report_impact("3-1") == 0

    pipeline.tick()
    assert pipeline.get_cell("3-1").report_impact == 0

    pipeline.set_online(True)
    assert pipeline.queued_reports == []
    assert pipeline.state_store.report_impact("3-1") == 40


def test_report_for_invalid_sector(make_pipeline):
    with pytest.raises(InvalidSectorError):
        make_pipeline().submit_report("7-7")


def test_plan_route_defaults_to_headquarters(make_pipeline):
    pipeline = make_pipeline()
    pipeline.tick()
    plan = pipeline.plan_route("5-5")

    assert plan.found
    assert plan.sector_ids[0] == "0-0"
    assert plan.sector_ids[-1] == "5-5"
    for a, b in zip(plan.sector_ids, plan.sector_ids[1:]):
        assert pipeline.layout.manhattan(a, b) == 1


def test_plan_route_rejects_invalid_ids(make_pipeline):
    pipeline = make_pipeline()
    pipeline.tick()

    with pytest.raises(InvalidSectorError):
        pipeline.plan_route("9-9")
    with pytest.raises(InvalidSectorError):
        pipeline.plan_route("2-2", start_id="north")


def test_plan_route_before_first_tick_is_empty(make_pipeline):
    assert not make_pipeline().plan_route("2-2").found


def test_get_cell(make_pipeline):
    pipeline = make_pipeline()
    assert pipeline.get_cell("1-1") is None

    pipeline.tick()
    assert pipeline.get_cell("1-1").sector_id == "1-1"
    with pytest.raises(InvalidSectorError):
        pipeline.get_cell("1_1")


def test_status(make_pipeline):
    pipeline = make_pipeline()
    pipeline.tick()
    status = pipeline.get_status()

    assert status["tick"] == 1
    assert status["sectors"] == 36
    assert status["online"] is True
    assert status["running"] is False


def test_background_refresh(make_pipeline):
    pipeline = make_pipeline(config=SentinelConfig(pipeline=PipelineConfig(refresh_rate_ms=10)))

    with pipeline:
        deadline = time.time() + 2.0
        while pipeline.current_tick < 2 and time.time() < deadline:
            time.sleep(0.01)
        assert pipeline.is_running

    assert pipeline.current_tick >= 2
    assert not pipeline.is_running
