"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from carbonwidget.config.schema import WidgetConfig


@pytest.fixture(autouse=True)
def _no_env_api_key(monkeypatch):
    monkeypatch.delenv("ADAPT_API_KEY", raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def forecast_fr(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "adapt_forecast_fr.json") as f:
        return json.load(f)


@pytest.fixture
def default_config() -> WidgetConfig:
    return WidgetConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"base_url": "https://test-adapt.example.com"},
        "timeline": {"refresh_minutes": 15},
        "location": "be",
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
