"""Tests for configuration loading."""

import pytest

from sentinel.config import DEFAULT_CONFIG, load_config
from sentinel.exceptions import ConfigurationError

ENV_VARS = (
    "SENTINEL_GRID_ROWS",
    "SENTINEL_GRID_COLS",
    "SENTINEL_REFRESH_MS",
    "SENTINEL_API_HOST",
    "SENTINEL_API_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.grid.rows == 6
    assert config.grid.cols == 6
    assert config.grid.hq_sector_id == "0-0"
    assert config.pipeline.refresh_rate_ms == 5000
    assert config.api.port == 8080
    assert config.risk == DEFAULT_CONFIG.risk


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SENTINEL_GRID_ROWS", "8")
    monkeypatch.setenv("SENTINEL_REFRESH_MS", "1000")
    monkeypatch.setenv("SENTINEL_API_PORT", "9000")

    config = load_config()
    assert config.grid.rows == 8
    assert config.grid.cols == 6
    assert config.pipeline.refresh_rate_ms == 1000
    assert config.api.port == 9000


def test_env_file(tmp_path, monkeypatch):
    # register the variable so monkeypatch removes what load_dotenv sets
    monkeypatch.setenv("SENTINEL_API_HOST", "unset")
    monkeypatch.delenv("SENTINEL_API_HOST")
    env_file = tmp_path / ".env"
    env_file.write_text("SENTINEL_API_HOST=0.0.0.0\n")

    assert load_config(str(env_file)).api.host == "0.0.0.0"


@pytest.mark.parametrize("name,value", [
    ("SENTINEL_GRID_ROWS", "six"),
    ("SENTINEL_GRID_COLS", "0"),
    ("SENTINEL_API_PORT", "http"),
])
def test_invalid_overrides(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        load_config()
