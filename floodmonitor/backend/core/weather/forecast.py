"""Forecast-mode selection for the dashboard's time slider."""

from __future__ import annotations

from typing import Any

# Hours ahead of the first hourly entry for each mode label.
HOURS_OFFSET: dict[str, int] = {
    "current": 0,
    "24h": 24,
    "48h": 48,
    "72h": 72,
    "5days": 120,
}

FORECAST_MODES: tuple[str, ...] = tuple(HOURS_OFFSET)


def select_forecast(
    forecast: list[dict[str, Any]],
    mode: str,
    latitude: float,
    longitude: float,
) -> dict[str, Any] | None:
    """
    Pick the hourly entry for ``mode`` and reshape it as a weather reading.

    The offset is clamped to the last available hour, so a short forecast
    still answers the longer modes. Returns ``None`` for an empty forecast.

    Raises:
        KeyError: If ``mode`` is not a known forecast mode.
    """
    offset = HOURS_OFFSET[mode]
    if not forecast:
        return None

    entry = forecast[min(offset, len(forecast) - 1)]
    return {
        "latitude": latitude,
        "longitude": longitude,
        "temperature": entry["temperature"],
        "humidity": entry["humidity"],
        "precipitation": entry["precipitation"],
        "wind_speed": entry["wind_speed"],
        "wind_direction": entry["wind_direction"],
        "cloud_cover": entry["cloud_cover"],
        "pressure": entry["pressure"],
        "timestamp": entry["time"],
    }
