"""Dashboard API route handlers.

Stations, risk zones, alerts, news and weather are gathered in a single
router; authentication and user-scoped routes live in ``auth.py``.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from floodmonitor import __version__
from floodmonitor.backend.api.deps import get_db, get_weather_cache
from floodmonitor.backend.core.data import catalog
from floodmonitor.backend.core.weather.cache import WeatherCache
from floodmonitor.backend.schemas import (
    DistrictsOut,
    FloodRiskZone,
    ForecastModeQuery,
    HazardAlert,
    HealthOut,
    NewsItem,
    RiverStation,
    WaterLevelRecordIn,
    WaterLevelRecordOut,
    WeatherData,
    WeatherForecast,
)
from floodmonitor.backend.services import monitoring
from floodmonitor.backend.services import weather as weather_service

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Health ─────────────────────────────────────────────────────────────────


@router.get("/health", response_model=HealthOut, include_in_schema=False)
def health_check(request: Request) -> HealthOut:
    """Liveness check; also lists the tables present (suppressed from access log)."""
    return HealthOut(version=__version__, tables=request.app.state.database.table_names())


# ── Catalogue ──────────────────────────────────────────────────────────────


@router.get("/stations", response_model=list[RiverStation])
async def list_stations(district: str | None = None) -> list[dict]:
    return catalog.list_stations(district)


@router.get("/stations/{station_id}", response_model=RiverStation)
async def get_station(station_id: str) -> dict:
    station = catalog.get_station(station_id)
    if station is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Station not found")
    return station


@router.get("/risk-zones", response_model=list[FloodRiskZone])
async def list_risk_zones(district: str | None = None) -> list[dict]:
    return catalog.list_risk_zones(district)


@router.get("/alerts", response_model=list[HazardAlert])
async def list_alerts(district: str | None = None) -> list[dict]:
    return catalog.list_alerts(district)


@router.get("/news", response_model=list[NewsItem])
async def list_news() -> list[dict]:
    return catalog.list_news()


@router.get("/districts", response_model=DistrictsOut)
async def list_districts() -> dict:
    return catalog.districts_overview()


# ── Water-level history ────────────────────────────────────────────────────


@router.get("/stations/{station_id}/history", response_model=list[WaterLevelRecordOut])
def station_history(
    station_id: str,
    hours: int = Query(monitoring.DEFAULT_HISTORY_HOURS, ge=1, le=720),
    db: Session = Depends(get_db),
):
    return monitoring.get_history(db, station_id, hours)


@router.post(
    "/stations/{station_id}/record",
    response_model=WaterLevelRecordOut,
    status_code=status.HTTP_201_CREATED,
)
def record_water_level(
    station_id: str,
    body: WaterLevelRecordIn,
    db: Session = Depends(get_db),
):
    return monitoring.record_level(db, station_id, body.level, status=body.status, trend=body.trend)


# ── Weather ────────────────────────────────────────────────────────────────


@router.get("/weather", response_model=WeatherData)
async def get_weather(
    mode: ForecastModeQuery = "current",
    cache: WeatherCache = Depends(get_weather_cache),
) -> dict:
    """Current conditions, or the forecast hour matching ``mode``.

    The cache may block on an HTTP refresh, so it runs on a worker thread
    to keep the event loop free.
    """
    try:
        return await asyncio.to_thread(weather_service.weather_for_mode, cache, mode)
    except Exception as exc:
        logger.exception("Error fetching weather")
        raise HTTPException(status_code=500, detail="Failed to fetch weather data") from exc


@router.get("/weather/forecast", response_model=list[WeatherForecast])
async def get_forecast(cache: WeatherCache = Depends(get_weather_cache)) -> list[dict]:
    try:
        return await asyncio.to_thread(weather_service.hourly_forecast, cache)
    except Exception as exc:
        logger.exception("Error fetching forecast")
        raise HTTPException(status_code=500, detail="Failed to fetch forecast data") from exc
