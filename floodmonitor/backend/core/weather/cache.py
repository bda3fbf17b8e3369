"""
Weather Cache.

Keeps the last successful provider snapshot for a fixed time window and
degrades to stale data, then to a fixed fallback reading, when the
provider is unreachable.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable

from floodmonitor.backend.core.weather.open_meteo import WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 10 * 60


def fallback_snapshot(latitude: float, longitude: float) -> WeatherSnapshot:
    """Typical monsoon-season reading used when nothing has ever been fetched."""
    return WeatherSnapshot(
        current={
            "latitude": latitude,
            "longitude": longitude,
            "temperature": 28.5,
            "humidity": 78,
            "precipitation": 2.5,
            "wind_speed": 12.3,
            "wind_direction": 225,
            "cloud_cover": 65,
            "pressure": 1008,
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        },
        forecast=[],
    )


class WeatherCache:
    """
    Time-based cache around a snapshot fetcher.

    Args:
        fetcher: Zero-argument callable returning a :class:`WeatherSnapshot`
        latitude: Latitude reported by the fallback reading
        longitude: Longitude reported by the fallback reading
        ttl_seconds: Lifetime of a fetched snapshot
        clock: Monotonic clock, injectable for tests
    """

    def __init__(
        self,
        fetcher: Callable[[], WeatherSnapshot],
        latitude: float,
        longitude: float,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.fetcher = fetcher
        self.latitude = latitude
        self.longitude = longitude
        self.ttl_seconds = ttl_seconds
        self.clock = clock

        self._snapshot: WeatherSnapshot | None = None
        self._fetched_at: float | None = None
        self._lock = threading.Lock()

    def _is_fresh(self, now: float) -> bool:
        return (
            self._snapshot is not None
            and self._fetched_at is not None
            and now - self._fetched_at < self.ttl_seconds
        )

    def get(self) -> WeatherSnapshot:
        """Return a snapshot, refreshing it when the cached one has expired."""
        if self._is_fresh(self.clock()):
            return self._snapshot

        with self._lock:
            # Another thread may have refreshed while we waited.
            now = self.clock()
            if self._is_fresh(now):
                return self._snapshot

            try:
                snapshot = self.fetcher()
            except Exception:
                logger.exception("Error fetching weather data")
                if self._snapshot is not None:
                    logger.warning("Serving stale weather data")
                    return self._snapshot
                logger.warning("No cached weather data, serving fallback reading")
                return fallback_snapshot(self.latitude, self.longitude)

            self._snapshot = snapshot
            self._fetched_at = now
            logger.info("Weather cache refreshed (%d forecast hours)", len(snapshot.forecast))
            return snapshot

    def invalidate(self) -> None:
        with self._lock:
            self._fetched_at = None
