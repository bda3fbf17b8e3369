"""Schema package – re-exports all public symbols for convenient imports."""

from __future__ import annotations

from floodmonitor.backend.schemas.dashboard import (
    DistrictsOut,
    FloodRiskZone,
    ForecastMode,
    ForecastModeQuery,
    HazardAlert,
    HealthOut,
    MapBounds,
    NewsItem,
    RiverStation,
    WaterLevelRecordIn,
    WaterLevelRecordOut,
    WeatherData,
    WeatherForecast,
)
from floodmonitor.backend.schemas.users import (
    FavoriteIn,
    FavoriteOut,
    LoginIn,
    MessageOut,
    PreferencesOut,
    PreferencesUpdateIn,
    RegisterIn,
    UserOut,
)

__all__ = [
    "DistrictsOut",
    "FavoriteIn",
    "FavoriteOut",
    "FloodRiskZone",
    "ForecastMode",
    "ForecastModeQuery",
    "HazardAlert",
    "HealthOut",
    "LoginIn",
    "MapBounds",
    "MessageOut",
    "NewsItem",
    "PreferencesOut",
    "PreferencesUpdateIn",
    "RegisterIn",
    "RiverStation",
    "UserOut",
    "WaterLevelRecordIn",
    "WaterLevelRecordOut",
    "WeatherData",
    "WeatherForecast",
]
