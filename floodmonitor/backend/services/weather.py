"""Weather service – answers dashboard weather queries from the shared cache."""

from __future__ import annotations

from typing import Any

from floodmonitor.backend.core.weather.cache import WeatherCache
from floodmonitor.backend.core.weather.forecast import select_forecast


def weather_for_mode(cache: WeatherCache, mode: str = "current") -> dict[str, Any]:
    """
    Return the reading for a forecast mode.

    ``current`` returns the live reading; other modes return the matching
    forecast hour, or the live reading when no forecast is available.
    """
    snapshot = cache.get()
    if mode == "current":
        return snapshot.current

    selected = select_forecast(snapshot.forecast, mode, cache.latitude, cache.longitude)
    return selected or snapshot.current


def hourly_forecast(cache: WeatherCache) -> list[dict[str, Any]]:
    return cache.get().forecast
