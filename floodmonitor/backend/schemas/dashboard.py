"""Pydantic schemas for the public dashboard endpoints.

Field names are snake_case in Python and camelCase on the wire, which is
what the map client expects.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

StationTrend = Literal["rising", "falling", "stable"]
StationStatus = Literal["normal", "warning", "danger", "critical"]
RiskLevel = Literal["low", "medium", "high", "critical"]
AlertType = Literal["flood", "storm", "rainfall", "cyclone", "landslide"]
AlertSeverity = Literal["advisory", "watch", "warning", "emergency"]
NewsCategory = Literal["weather", "flood", "disaster", "general"]
ForecastMode = Literal["current", "24h", "48h", "72h", "5days"]


def _as_utc(value: datetime) -> datetime:
    # Rows are stored as naive UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]

# `?mode=` with no value means the live reading.
ForecastModeQuery = Annotated[ForecastMode, BeforeValidator(lambda value: value or "current")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Catalogue ───────────────────────────────────────────────────────────────


class RiverStation(CamelModel):
    id: str
    name: str
    district: str
    latitude: float
    longitude: float
    current_level: float
    normal_level: float
    warning_level: float
    danger_level: float
    trend: StationTrend
    last_updated: str
    status: StationStatus


class FloodRiskZone(CamelModel):
    id: str
    name: str
    district: str
    risk_level: RiskLevel
    coordinates: list[tuple[float, float]]
    affected_population: int | None = None
    last_assessed: str


class HazardAlert(CamelModel):
    id: str
    type: AlertType
    severity: AlertSeverity
    title: str
    description: str
    affected_areas: list[str]
    issued_at: str
    expires_at: str
    source: str


class NewsItem(CamelModel):
    id: str
    title: str
    summary: str
    source: str
    url: str
    published_at: str
    image_url: str | None = None
    category: NewsCategory


class MapBounds(CamelModel):
    north: float
    south: float
    east: float
    west: float


class DistrictsOut(CamelModel):
    districts: list[str]
    center: tuple[float, float]
    bounds: MapBounds


# ── Weather ─────────────────────────────────────────────────────────────────


class WeatherData(CamelModel):
    latitude: float
    longitude: float
    temperature: float
    humidity: float
    precipitation: float
    wind_speed: float
    wind_direction: float
    cloud_cover: float
    pressure: float
    timestamp: str


class WeatherForecast(CamelModel):
    time: str
    temperature: float
    humidity: float
    precipitation: float
    precipitation_probability: float
    wind_speed: float
    wind_direction: float
    cloud_cover: float
    pressure: float


# ── Water-level history ─────────────────────────────────────────────────────


class WaterLevelRecordIn(CamelModel):
    level: float = Field(ge=0, allow_inf_nan=False)
    status: StationStatus | None = None
    trend: StationTrend | None = None


class WaterLevelRecordOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    station_id: str
    level: float
    status: StationStatus
    trend: StationTrend
    recorded_at: UtcDatetime


# ── Misc ────────────────────────────────────────────────────────────────────


class HealthOut(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    tables: list[str] = Field(default_factory=list)
