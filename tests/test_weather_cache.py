"""
Unit tests for the weather cache.

Tests:
- Serving from cache inside the TTL window
- Refetching after expiry
- Stale data on provider failure
- Fallback reading when nothing was ever fetched
"""

from __future__ import annotations

import pytest
import requests

from floodmonitor.backend.core.weather.cache import WeatherCache, fallback_snapshot


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(fake_fetcher, clock) -> WeatherCache:
    return WeatherCache(fake_fetcher.fetch, latitude=7.8731, longitude=80.7718, ttl_seconds=600, clock=clock)


class TestWeatherCache:
    def test_first_call_fetches(self, cache, fake_fetcher) -> None:
        snapshot = cache.get()
        assert fake_fetcher.calls == 1
        assert snapshot.current["temperature"] == 29.0

    def test_returns_cached_within_ttl(self, cache, fake_fetcher, clock) -> None:
        cache.get()
        clock.advance(599)
        cache.get()
        assert fake_fetcher.calls == 1

    def test_refetches_after_ttl(self, cache, fake_fetcher, clock, make_snapshot) -> None:
        cache.get()
        fake_fetcher.snapshot = make_snapshot(temperature=31.5)
        clock.advance(600)

        snapshot = cache.get()
        assert fake_fetcher.calls == 2
        assert snapshot.current["temperature"] == 31.5

    def test_stale_data_on_error(self, cache, fake_fetcher, clock) -> None:
        first = cache.get()
        fake_fetcher.error = requests.ConnectionError("provider down")
        clock.advance(3600)

        snapshot = cache.get()
        assert fake_fetcher.calls == 2
        assert snapshot is first

    def test_fallback_when_never_fetched(self, cache, fake_fetcher) -> None:
        fake_fetcher.error = requests.Timeout("too slow")

        snapshot = cache.get()
        assert snapshot.forecast == []
        assert snapshot.current["temperature"] == 28.5
        assert snapshot.current["pressure"] == 1008
        assert snapshot.current["latitude"] == pytest.approx(7.8731)

    def test_fallback_is_not_cached(self, cache, fake_fetcher) -> None:
        fake_fetcher.error = requests.Timeout("too slow")
        cache.get()
        fake_fetcher.error = None

        snapshot = cache.get()
        assert fake_fetcher.calls == 2
        assert snapshot.current["temperature"] == 29.0

    def test_failed_refresh_retries_next_call(self, cache, fake_fetcher, clock) -> None:
        """A failed refresh does not extend the life of the stale data."""
        cache.get()
        clock.advance(601)
        fake_fetcher.error = RuntimeError("bad payload")
        cache.get()
        fake_fetcher.error = None
        cache.get()
        assert fake_fetcher.calls == 3

    def test_invalidate_forces_refetch(self, cache, fake_fetcher) -> None:
        cache.get()
        cache.invalidate()
        cache.get()
        assert fake_fetcher.calls == 2


def test_fallback_snapshot_shape() -> None:
    snap = fallback_snapshot(6.9, 79.9)
    assert set(snap.current) == {
        "latitude", "longitude", "temperature", "humidity", "precipitation",
        "wind_speed", "wind_direction", "cloud_cover", "pressure", "timestamp",
    }
    assert snap.current["timestamp"].endswith("Z")
