"""Tests for the Gemini client and tactical briefings (no network)."""

from datetime import datetime

import pytest
import requests

from sentinel.ai import (
    BriefingService,
    GeminiAPIError,
    GeminiClient,
    GeminiConfig,
    GeminiError,
    GeminiResponse
)
from sentinel.ai import gemini_client as gemini_module
from sentinel.ai.briefing import CHAT_FAILURE_MESSAGE, OFFLINE_CHAT_MESSAGE
from sentinel.alerts import Alert, AlertType
from sentinel.grid import GridLayout
from sentinel.risk import ThreatLevel


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text or str(self._payload)

    def json(self):
        return self._payload


def candidate(text):
    return {
        "candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}],
        "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 5, "totalTokenCount": 15},
    }


class RecordingClient:
    """Stands in for GeminiClient, recording prompts."""

    def __init__(self, text="Deploy thermal drones.", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate(self, prompt, system_prompt=None):
        self.calls.append((prompt, system_prompt))
        if self.error:
            raise self.error
        return GeminiResponse(text=self.text, model="test")


@pytest.fixture
def config():
    return GeminiConfig(api_key="test-key", retry_delay=0)


@pytest.fixture
def hot_cell(cell_factory):
    cell = cell_factory(GridLayout(), "0-2", risk_score=78)
    cell.mobility_density = 72.0
    cell.risk_factors = ["Border Patch Movement"]
    cell.monitor_next = "Check fence line & gullies for footprints."
    return cell


def test_client_requires_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(GeminiError):
        GeminiClient()


def test_generate_parses_text(monkeypatch, config):
    sent = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        sent["url"] = url
        sent["body"] = json
        return FakeResponse(200, candidate("All quiet."))

    monkeypatch.setattr(gemini_module.requests, "post", fake_post)
    client = GeminiClient(config)
    response = client.generate("status?", system_prompt="Be brief.")

    assert response.text == "All quiet."
    assert response.total_tokens == 15
    assert sent["url"].endswith(":generateContent")
    assert sent["body"]["systemInstruction"]["parts"][0]["text"] == "Be brief."
    assert client.get_stats()["request_count"] == 1


def test_retries_server_errors(monkeypatch, config):
    responses = [FakeResponse(503), FakeResponse(429), FakeResponse(200, candidate("ok"))]
    monkeypatch.setattr(gemini_module.requests, "post", lambda *a, **k: responses.pop(0))

    assert GeminiClient(config).generate("ping").text == "ok"


def test_gives_up_after_retries(monkeypatch, config):
    monkeypatch.setattr(gemini_module.requests, "post", lambda *a, **k: FakeResponse(500))
    with pytest.raises(GeminiError):
        GeminiClient(config).generate("ping")


def test_client_error_is_not_retried(monkeypatch, config):
    calls = []

    def fake_post(*args, **kwargs):
        calls.append(1)
        return FakeResponse(400, {"error": {"message": "bad request"}})

    monkeypatch.setattr(gemini_module.requests, "post", fake_post)
    with pytest.raises(GeminiAPIError) as exc_info:
        GeminiClient(config).generate("ping")

    assert exc_info.value.status_code == 400
    assert len(calls) == 1


def test_transport_error_becomes_gemini_error(monkeypatch, config):
    def fake_post(*args, **kwargs):
        raise requests.ConnectionError("no route")

    monkeypatch.setattr(gemini_module.requests, "post", fake_post)
    with pytest.raises(GeminiError):
        GeminiClient(config).generate("ping")


def test_offline_report(hot_cell, clear_weather):
    report = BriefingService().strategic_report(hot_cell, clear_weather)

    assert "Sector 0-2" in report
    assert "HIGH" in report
    assert "78/100" in report
    assert "72.0%" in report


def test_live_report_uses_client(hot_cell, foggy_night):
    client = RecordingClient()
    report = BriefingService(client).strategic_report(hot_cell, foggy_night)

    assert report == "Deploy thermal drones."
    prompt, _ = client.calls[0]
    assert "0-2" in prompt
    assert "Night" in prompt


def test_report_falls_back_on_failure(hot_cell, clear_weather):
    service = BriefingService(RecordingClient(error=GeminiError("down")))
    assert "Offline Assessment" in service.strategic_report(hot_cell, clear_weather)


def test_chat_offline(clear_weather):
    assert BriefingService().commander_chat("hotspots?", [], clear_weather, []) == OFFLINE_CHAT_MESSAGE


def test_chat_failure_message(clear_weather):
    service = BriefingService(RecordingClient(error=GeminiError("down")))
    assert service.commander_chat("hotspots?", [], clear_weather, []) == CHAT_FAILURE_MESSAGE


def test_sitrep_includes_hot_sectors_and_recent_alerts(hot_cell, cell_factory, clear_weather):
    calm = cell_factory(GridLayout(), "4-4", risk_score=20)
    alerts = [
        Alert(
            event_id=f"evt_{i}", sector_id="0-2", level=ThreatLevel.HIGH,
            alert_type=AlertType.INFILTRATION_PREDICTION, message=f"alert {i}",
            timestamp=datetime(2024, 1, 1, 12, 0, i)
        )
        for i in range(7)
    ]
    client = RecordingClient()
    BriefingService(client).commander_chat("why?", [hot_cell, calm], clear_weather, alerts)

    _, sitrep = client.calls[0]
    assert "Sector 0-2: Risk 78" in sitrep
    assert "Sector 4-4" not in sitrep
    assert "alert 4" in sitrep
    assert "alert 5" not in sitrep


def test_from_env_without_key_is_offline(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert not BriefingService.from_env().is_live
