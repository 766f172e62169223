"""Tests for the fixed-variance anomaly detector."""

import pytest

from sentinel.config import AnomalyConfig
from sentinel.risk import AnomalyDetector


@pytest.fixture
def detector():
    return AnomalyDetector()


def test_baseline_has_floor(detector):
    assert detector.compute_baseline(0) == 10
    assert detector.compute_baseline(5) == 10


def test_baseline_scales_history(detector):
    assert detector.compute_baseline(50) == pytest.approx(60.0)


def test_z_score_below_threshold(detector):
    z = detector.z_score(50, 20)
    assert z == 2.0
    assert not detector.is_anomalous(z)


def test_z_score_above_threshold(detector):
    z = detector.z_score(80, 20)
    assert z == 4.0
    assert detector.is_anomalous(z)


def test_threshold_is_strict(detector):
    assert not detector.is_anomalous(2.5)
    assert detector.is_anomalous(2.51)


def test_negative_deviation_is_not_anomalous(detector):
    z = detector.z_score(0, 60)
    assert z == -4.0
    assert not detector.is_anomalous(z)


def test_z_score_is_rounded():
    detector = AnomalyDetector(AnomalyConfig(std_dev=3.0))
    assert detector.z_score(10, 0) == 3.33
