"""Monitoring service – river gauges and their recorded water-level history.

Station metadata comes from the static catalogue; readings posted by
gauge operators are persisted in ``water_level_history``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from floodmonitor.backend.core.data import catalog
from floodmonitor.backend.core.db.models import WaterLevelHistory
from floodmonitor.backend.core.monitoring.levels import classify_status, classify_trend
from floodmonitor.backend.services.errors import StationNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_HOURS = 24


def _utcnow() -> datetime:
    # Stored naive in UTC; SQLite has no timezone-aware column type.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def require_station(station_id: str) -> dict:
    station = catalog.get_station(station_id)
    if station is None:
        raise StationNotFoundError(station_id)
    return station


def get_history(db: Session, station_id: str, hours: int = DEFAULT_HISTORY_HOURS) -> list[WaterLevelHistory]:
    """Return readings for ``station_id`` from the last ``hours`` hours, newest first."""
    require_station(station_id)
    since = _utcnow() - timedelta(hours=hours)
    stmt = (
        select(WaterLevelHistory)
        .where(WaterLevelHistory.station_id == station_id, WaterLevelHistory.recorded_at >= since)
        .order_by(WaterLevelHistory.recorded_at.desc(), WaterLevelHistory.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def _previous_level(db: Session, station_id: str) -> float | None:
    stmt = (
        select(WaterLevelHistory.level)
        .where(WaterLevelHistory.station_id == station_id)
        .order_by(WaterLevelHistory.recorded_at.desc(), WaterLevelHistory.id.desc())
        .limit(1)
    )
    return db.execute(stmt).scalar_one_or_none()


def record_level(
    db: Session,
    station_id: str,
    level: float,
    status: str | None = None,
    trend: str | None = None,
) -> WaterLevelHistory:
    """
    Persist a water-level reading.

    Missing ``status`` is classified from the station thresholds; missing
    ``trend`` is derived from the previous reading, or from the catalogue
    level when the station has no history yet.
    """
    station = require_station(station_id)

    if status is None:
        status = classify_status(level, station["warning_level"], station["danger_level"])
    if trend is None:
        previous = _previous_level(db, station_id)
        if previous is None:
            previous = station["current_level"]
        trend = classify_trend(level, previous)

    record = WaterLevelHistory(
        station_id=station_id,
        level=level,
        status=status,
        trend=trend,
        recorded_at=_utcnow(),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Recorded %.2f m at %s (%s, %s)", level, station_id, status, trend)
    return record
