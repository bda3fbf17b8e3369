"""
Open-Meteo Forecast Client.

Fetches current conditions plus an hourly forecast for a single point and
flattens the columnar Open-Meteo payload into per-hour records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

CURRENT_VARIABLES = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "wind_speed_10m",
    "wind_direction_10m",
    "cloud_cover",
    "surface_pressure",
)

HOURLY_VARIABLES = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation_probability",
    "precipitation",
    "wind_speed_10m",
    "wind_direction_10m",
    "cloud_cover",
    "surface_pressure",
)


class WeatherProviderError(RuntimeError):
    """Raised when the provider response is missing or malformed."""


@dataclass
class WeatherSnapshot:
    """Current reading plus the hourly forecast, both as snake_case dicts."""

    current: dict[str, Any]
    forecast: list[dict[str, Any]] = field(default_factory=list)


def parse_forecast_response(data: dict[str, Any]) -> WeatherSnapshot:
    """
    Convert an Open-Meteo ``/v1/forecast`` payload into a snapshot.

    Raises:
        WeatherProviderError: If the payload lacks the ``current`` or
            ``hourly`` blocks (Open-Meteo reports errors as
            ``{"error": true, "reason": ...}``).
    """
    if data.get("error"):
        raise WeatherProviderError(f"Open-Meteo error: {data.get('reason', 'unknown')}")

    try:
        current = data["current"]
        hourly = data["hourly"]
        snapshot_current = {
            "latitude": data["latitude"],
            "longitude": data["longitude"],
            "temperature": current["temperature_2m"],
            "humidity": current["relative_humidity_2m"],
            "precipitation": current["precipitation"],
            "wind_speed": current["wind_speed_10m"],
            "wind_direction": current["wind_direction_10m"],
            "cloud_cover": current["cloud_cover"],
            "pressure": current["surface_pressure"],
            "timestamp": current["time"],
        }
        forecast = [
            {
                "time": time,
                "temperature": hourly["temperature_2m"][i],
                "humidity": hourly["relative_humidity_2m"][i],
                "precipitation": hourly["precipitation"][i],
                "precipitation_probability": hourly["precipitation_probability"][i],
                "wind_speed": hourly["wind_speed_10m"][i],
                "wind_direction": hourly["wind_direction_10m"][i],
                "cloud_cover": hourly["cloud_cover"][i],
                "pressure": hourly["surface_pressure"][i],
            }
            for i, time in enumerate(hourly["time"])
        ]
    except (KeyError, IndexError, TypeError) as exc:
        raise WeatherProviderError(f"Malformed Open-Meteo response: {exc!r}") from exc

    # Open-Meteo returns null for hours outside some models' range.
    forecast = [entry for entry in forecast if all(v is not None for v in entry.values())]
    return WeatherSnapshot(current=snapshot_current, forecast=forecast)


class OpenMeteoClient:
    """Blocking client; call it from a worker thread inside async handlers."""

    def __init__(
        self,
        latitude: float,
        longitude: float,
        base_url: str = OPEN_METEO_URL,
        forecast_days: int = 5,
        timeout: float = 10,
        session: requests.Session | None = None,
    ):
        self.latitude = latitude
        self.longitude = longitude
        self.base_url = base_url
        self.forecast_days = forecast_days
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, weather_cfg: dict[str, Any]) -> "OpenMeteoClient":
        return cls(
            latitude=weather_cfg["latitude"],
            longitude=weather_cfg["longitude"],
            base_url=weather_cfg.get("base_url", OPEN_METEO_URL),
            forecast_days=weather_cfg.get("forecast_days", 5),
            timeout=weather_cfg.get("timeout", 10),
        )

    def build_params(self) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "current": ",".join(CURRENT_VARIABLES),
            "hourly": ",".join(HOURLY_VARIABLES),
            "forecast_days": self.forecast_days,
            "timezone": "auto",
        }

    def fetch(self) -> WeatherSnapshot:
        logger.debug("Fetching Open-Meteo forecast for (%s, %s)", self.latitude, self.longitude)
        response = self.session.get(self.base_url, params=self.build_params(), timeout=self.timeout)
        response.raise_for_status()
        return parse_forecast_response(response.json())
