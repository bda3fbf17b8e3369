"""Shared pytest fixtures for the test suite.

Import any of these in a test file by simply declaring the fixture name as a
parameter; pytest discovers them automatically from this conftest.py.

Fixture overview
----------------
app_config      default configuration pointed at a temporary SQLite file
make_snapshot   factory for weather snapshots with N hourly entries
fake_fetcher    counting stand-in for the Open-Meteo client
client          TestClient around a fully started application
auth_client     the same client, already logged in as ``river_watcher``
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from floodmonitor.backend.api.app import create_app
from floodmonitor.backend.core.utils.config import default_config
from floodmonitor.backend.core.weather.open_meteo import WeatherSnapshot

# ── Weather ──────────────────────────────────────────────────────────────────


def _hourly_entry(hour: int) -> dict:
    return {
        "time": f"2026-10-{18 + hour // 24:02d}T{hour % 24:02d}:00",
        "temperature": 25.0 + hour / 10,
        "humidity": 80,
        "precipitation": 0.1 * hour,
        "precipitation_probability": min(100, hour),
        "wind_speed": 10.0,
        "wind_direction": 180,
        "cloud_cover": 70,
        "pressure": 1009.0,
    }


@pytest.fixture
def make_snapshot():
    """Return a factory building a snapshot with ``hours`` forecast entries."""

    def _make(hours: int = 120, temperature: float = 29.0) -> WeatherSnapshot:
        return WeatherSnapshot(
            current={
                "latitude": 7.875,
                "longitude": 80.75,
                "temperature": temperature,
                "humidity": 74,
                "precipitation": 0.4,
                "wind_speed": 9.8,
                "wind_direction": 240,
                "cloud_cover": 55,
                "pressure": 1007.5,
                "timestamp": "2026-10-18T10:00",
            },
            forecast=[_hourly_entry(h) for h in range(hours)],
        )

    return _make


class FakeFetcher:
    """Counts calls and returns (or raises) whatever the test configures."""

    def __init__(self, snapshot: WeatherSnapshot):
        self.snapshot = snapshot
        self.error: Exception | None = None
        self.calls = 0

    def fetch(self) -> WeatherSnapshot:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.snapshot


@pytest.fixture
def fake_fetcher(make_snapshot) -> FakeFetcher:
    return FakeFetcher(make_snapshot())


# ── Application ──────────────────────────────────────────────────────────────


@pytest.fixture
def app_config(tmp_path: Path) -> dict:
    cfg = default_config()
    cfg["database"]["url"] = f"sqlite:///{tmp_path / 'floodmonitor-test.db'}"
    cfg["session"]["secret"] = "test-secret"
    cfg["static"]["dir"] = str(tmp_path / "no-client-build")
    return cfg


@pytest.fixture
def client(app_config: dict, fake_fetcher: FakeFetcher):
    app = create_app(app_config, weather_fetcher=fake_fetcher.fetch)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client: TestClient) -> TestClient:
    resp = client.post(
        "/api/auth/register",
        json={"username": "river_watcher", "password": "monsoon-2026", "email": "watcher@example.lk"},
    )
    assert resp.status_code == 201
    return client
