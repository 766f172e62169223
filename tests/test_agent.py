"""Tests for the autonomous decision agent."""

import random

import pytest

from sentinel.agent import (
    ADVISORIES,
    AMBUSH_ZONE_ADVISORY,
    DEFAULT_ADVISORY,
    AgentInput,
    AutonomousAgent,
    PriorityContext
)
from sentinel.grid import SectorClassifier, SectorType
from sentinel.risk import ThreatLevel


@pytest.fixture
def agent(fixed_rng):
    return AutonomousAgent(rng=fixed_rng, clock=lambda: 1_700_000_000.0)


def make_input(weather, sector_id="4-4", mobility=20, baseline=20, delta=0, terrain=30, history=10):
    return AgentInput(
        sector_id=sector_id,
        weather=weather,
        mobility=mobility,
        mobility_baseline=baseline,
        mobility_delta=delta,
        terrain=terrain,
        history=history
    )


def test_border_movement_alerts_at_low_risk(agent, clear_weather):
    decision = agent.decide(make_input(clear_weather, sector_id="0-3", mobility=40, delta=35))

    assert decision.threat_level == ThreatLevel.LOW
    assert decision.alert is True
    assert decision.factors == ("Rapid Activity Change", "Border Patch Movement")
    assert decision.priority_context == PriorityContext.BORDER_INFILTRATION
    assert decision.monitor_next == ADVISORIES[PriorityContext.BORDER_INFILTRATION]


def test_same_movement_in_interior_does_not_alert(agent, clear_weather):
    decision = agent.decide(make_input(clear_weather, sector_id="3-3", mobility=40, delta=35))

    assert decision.alert is False
    assert decision.factors == ("Rapid Activity Change",)
    assert decision.monitor_next == ADVISORIES[PriorityContext.MOVEMENT]


def test_critical_visibility_at_night(agent, foggy_night):
    decision = agent.decide(make_input(foggy_night, sector_id="3-0", mobility=50))

    assert "Critical Low Visibility" in decision.factors
    assert "Night Ops Conditions" in decision.factors
    assert "Low Visibility" not in decision.factors
    assert decision.priority_context == PriorityContext.VISIBILITY
    assert decision.monitor_next == "Switch to Thermal/IR. Scan treeline."
    assert decision.risk_score == 45
    assert decision.risk_level == "Medium"
    assert decision.alert is False


def test_border_rule_overrides_visibility_context(agent, foggy_night):
    decision = agent.decide(make_input(foggy_night, sector_id="1-2", mobility=50, delta=22))

    assert decision.factors[0] == "Critical Low Visibility"
    assert "Border Patch Movement" in decision.factors
    assert decision.priority_context == PriorityContext.BORDER_INFILTRATION


def test_anomaly_takes_precedence_over_crowd_density(agent, clear_weather):
    decision = agent.decide(make_input(clear_weather, mobility=90))

    assert decision.is_anomalous
    assert "Abnormal Crowd Pattern" in decision.factors
    assert "High Crowd Density" not in decision.factors
    assert decision.monitor_next == ADVISORIES[PriorityContext.ANOMALY]
    assert decision.alert is False


def test_crowd_density_without_anomaly(agent, clear_weather):
    decision = agent.decide(make_input(clear_weather, mobility=85, baseline=60))

    assert not decision.is_anomalous
    assert "High Crowd Density" in decision.factors
    assert decision.priority_context == PriorityContext.CROWD


def test_ambush_zone_advisory_from_history(agent, clear_weather):
    decision = agent.decide(make_input(clear_weather, history=85, baseline=102))

    assert decision.factors == ("Historical Incident Zone",)
    assert decision.priority_context == PriorityContext.NORMAL
    assert decision.monitor_next == AMBUSH_ZONE_ADVISORY


def test_default_advisory(agent, clear_weather):
    decision = agent.decide(make_input(clear_weather))

    assert decision.factors == ()
    assert decision.monitor_next == DEFAULT_ADVISORY


def test_high_risk_alerts(agent, clear_weather):
    decision = agent.decide(make_input(clear_weather, mobility=100, baseline=114, terrain=85, history=95))

    assert decision.risk_score == 71
    assert decision.threat_level == ThreatLevel.HIGH
    assert decision.alert is True


def test_medium_with_anomaly_alerts(agent, foggy_night):
    decision = agent.decide(make_input(foggy_night, sector_id="3-0", mobility=70))

    assert decision.threat_level == ThreatLevel.MEDIUM
    assert decision.is_anomalous
    assert decision.alert is True


def test_classifier_override_controls_border_rule(clear_weather, fixed_rng):
    classifier = SectorClassifier()
    classifier.set_override("4-4", SectorType.BORDER)
    agent = AutonomousAgent(classifier=classifier, rng=fixed_rng)

    decision = agent.decide(make_input(clear_weather, sector_id="4-4", delta=35))
    assert decision.alert is True
    assert "Border Patch Movement" in decision.factors


def test_confidence_without_jitter(agent, clear_weather):
    with_factors = agent.decide(make_input(clear_weather, history=85, baseline=102))
    without_factors = agent.decide(make_input(clear_weather))

    assert with_factors.confidence == 0.9
    assert without_factors.confidence == 0.8


def test_confidence_is_clamped(clear_weather, rng_factory):
    agent = AutonomousAgent(rng=rng_factory(0.999))
    decision = agent.decide(make_input(clear_weather, mobility=90))
    assert decision.confidence == 0.99


def test_confidence_bounds_with_random_jitter(foggy_night):
    agent = AutonomousAgent(rng=random.Random(3))
    for mobility in range(0, 101, 5):
        decision = agent.decide(make_input(foggy_night, sector_id="0-1", mobility=mobility, delta=mobility / 2))
        assert 0.75 <= decision.confidence <= 0.99


def test_timestamp_from_clock(agent, clear_weather):
    assert agent.decide(make_input(clear_weather)).timestamp == 1_700_000_000_000


def test_decision_is_deterministic_apart_from_jitter(clear_weather):
    inputs = make_input(clear_weather, sector_id="0-2", mobility=72, baseline=102, delta=35, history=85)
    first = AutonomousAgent(rng=random.Random(1)).decide(inputs)
    second = AutonomousAgent(rng=random.Random(99)).decide(inputs)

    assert first.risk_score == second.risk_score
    assert first.factors == second.factors
    assert first.monitor_next == second.monitor_next
    assert first.alert == second.alert


def test_to_dict_exposes_public_fields(agent, clear_weather):
    data = agent.decide(make_input(clear_weather)).to_dict()
    assert set(data) == {
        "sector_id", "risk_score", "risk_level", "factors",
        "monitor_next", "alert", "timestamp", "confidence"
    }
