"""
Static Monitoring Catalogue.

Demo data for the dashboard map: Irrigation Department river gauging
stations, assessed flood-risk zones, active hazard alerts and recent news.
Alert and news timestamps are relative to process start so the dashboard
always shows a plausible "live" picture.
"""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

SRI_LANKA_CENTER: tuple[float, float] = (7.8731, 80.7718)

SRI_LANKA_BOUNDS: dict[str, float] = {
    "north": 9.9,
    "south": 5.9,
    "east": 82.0,
    "west": 79.5,
}

DISTRICTS: tuple[str, ...] = (
    "Ampara", "Anuradhapura", "Badulla", "Batticaloa", "Colombo",
    "Galle", "Gampaha", "Hambantota", "Jaffna", "Kalutara",
    "Kandy", "Kegalle", "Kilinochchi", "Kurunegala", "Mannar",
    "Matale", "Matara", "Monaragala", "Mullaitivu", "Nuwara Eliya",
    "Polonnaruwa", "Puttalam", "Ratnapura", "Trincomalee", "Vavuniya",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


_LOADED_AT = _now()


def _hours_from_load(hours: float) -> str:
    return _iso(_LOADED_AT + timedelta(hours=hours))


def _station(
    id: str,
    name: str,
    district: str,
    latitude: float,
    longitude: float,
    levels: tuple[float, float, float, float],
    trend: str,
    status: str,
) -> dict:
    current, normal, warning, danger = levels
    return {
        "id": id,
        "name": name,
        "district": district,
        "latitude": latitude,
        "longitude": longitude,
        "current_level": current,
        "normal_level": normal,
        "warning_level": warning,
        "danger_level": danger,
        "trend": trend,
        "last_updated": _iso(_LOADED_AT),
        "status": status,
    }


# levels are (current, normal, warning, danger) in metres
_RIVER_STATIONS: list[dict] = [
    _station("kelani-hanwella", "Kelani Ganga - Hanwella", "Colombo",
             6.9106, 80.0868, (3.2, 2.5, 4.0, 5.5), "stable", "normal"),
    _station("kelani-nagalagam", "Kelani Ganga - Nagalagam Street", "Colombo",
             6.9494, 79.8776, (2.8, 2.0, 3.5, 4.8), "rising", "normal"),
    _station("kalu-ratnapura", "Kalu Ganga - Ratnapura", "Ratnapura",
             6.6804, 80.4036, (5.1, 3.5, 5.0, 6.5), "rising", "warning"),
    _station("kalu-putupaula", "Kalu Ganga - Putupaula", "Kalutara",
             6.5774, 80.1050, (4.2, 3.0, 4.5, 5.8), "stable", "normal"),
    _station("mahaweli-peradeniya", "Mahaweli Ganga - Peradeniya", "Kandy",
             7.2681, 80.5955, (2.9, 2.2, 3.8, 5.0), "falling", "normal"),
    _station("nilwala-akuressa", "Nilwala Ganga - Akuressa", "Matara",
             5.9676, 80.4690, (3.8, 2.8, 4.0, 5.2), "rising", "warning"),
    _station("gin-baddegama", "Gin Ganga - Baddegama", "Galle",
             6.1862, 80.1986, (2.5, 2.0, 3.2, 4.5), "stable", "normal"),
    _station("attanagalu-dunamale", "Attanagalu Oya - Dunamale", "Gampaha",
             7.1088, 79.9954, (6.2, 4.0, 5.5, 6.0), "rising", "danger"),
    _station("deduru-chilaw", "Deduru Oya - Chilaw", "Puttalam",
             7.5751, 79.7956, (2.1, 1.8, 3.0, 4.2), "stable", "normal"),
    _station("walawe-embilipitiya", "Walawe Ganga - Embilipitiya", "Ratnapura",
             6.3384, 80.8498, (3.0, 2.5, 3.8, 5.0), "falling", "normal"),
]

_FLOOD_RISK_ZONES: list[dict] = [
    {
        "id": "colombo-low",
        "name": "Western Lowlands",
        "district": "Colombo",
        "risk_level": "medium",
        "coordinates": [(6.9271, 79.8612), (6.9400, 79.8800), (6.9100, 79.8900)],
        "affected_population": 250000,
        "last_assessed": _iso(_LOADED_AT),
    },
    {
        "id": "ratnapura-basin",
        "name": "Kalu Ganga Basin",
        "district": "Ratnapura",
        "risk_level": "high",
        "coordinates": [(6.6804, 80.4036), (6.7000, 80.4200), (6.6600, 80.4300)],
        "affected_population": 85000,
        "last_assessed": _iso(_LOADED_AT),
    },
    {
        "id": "gampaha-flood",
        "name": "Attanagalu Flood Plain",
        "district": "Gampaha",
        "risk_level": "critical",
        "coordinates": [(7.1088, 79.9954), (7.1200, 80.0100), (7.0900, 80.0200)],
        "affected_population": 120000,
        "last_assessed": _iso(_LOADED_AT),
    },
    {
        "id": "kalutara-coastal",
        "name": "Kalutara Coastal Zone",
        "district": "Kalutara",
        "risk_level": "medium",
        "coordinates": [(6.5833, 79.9607), (6.6000, 79.9800), (6.5600, 79.9700)],
        "affected_population": 65000,
        "last_assessed": _iso(_LOADED_AT),
    },
    {
        "id": "matara-nilwala",
        "name": "Nilwala Basin",
        "district": "Matara",
        "risk_level": "high",
        "coordinates": [(5.9485, 80.5353), (5.9600, 80.5500), (5.9300, 80.5400)],
        "affected_population": 75000,
        "last_assessed": _iso(_LOADED_AT),
    },
    {
        "id": "galle-lowlands",
        "name": "Galle Lowlands",
        "district": "Galle",
        "risk_level": "low",
        "coordinates": [(6.0535, 80.2210), (6.0700, 80.2400), (6.0400, 80.2300)],
        "affected_population": 45000,
        "last_assessed": _iso(_LOADED_AT),
    },
]

_HAZARD_ALERTS: list[dict] = [
    {
        "id": "alert-1",
        "type": "rainfall",
        "severity": "warning",
        "title": "Heavy Rainfall Warning - Western Province",
        "description": (
            "Heavy rainfall expected in Western Province with precipitation exceeding "
            "100mm in 24 hours. Flash floods possible in low-lying areas."
        ),
        "affected_areas": ["Colombo", "Gampaha", "Kalutara"],
        "issued_at": _hours_from_load(-2),
        "expires_at": _hours_from_load(24),
        "source": "Department of Meteorology",
    },
    {
        "id": "alert-2",
        "type": "flood",
        "severity": "watch",
        "title": "Flood Watch - Kalu Ganga Basin",
        "description": (
            "Water levels rising in Kalu Ganga. Residents in low-lying areas should "
            "remain vigilant and prepare for possible evacuation."
        ),
        "affected_areas": ["Ratnapura", "Kalutara"],
        "issued_at": _hours_from_load(-4),
        "expires_at": _hours_from_load(48),
        "source": "Irrigation Department",
    },
    {
        "id": "alert-3",
        "type": "flood",
        "severity": "emergency",
        "title": "Flood Emergency - Attanagalu Oya",
        "description": (
            "Danger level exceeded at Dunamale station. Immediate evacuation "
            "recommended for residents in flood-prone areas."
        ),
        "affected_areas": ["Gampaha"],
        "issued_at": _hours_from_load(-1),
        "expires_at": _hours_from_load(12),
        "source": "Disaster Management Center",
    },
    {
        "id": "alert-4",
        "type": "landslide",
        "severity": "advisory",
        "title": "Landslide Risk - Central Highlands",
        "description": (
            "Increased landslide risk due to saturated soil conditions. Residents in "
            "hilly areas should monitor local conditions."
        ),
        "affected_areas": ["Kandy", "Nuwara Eliya", "Badulla"],
        "issued_at": _hours_from_load(-6),
        "expires_at": _hours_from_load(72),
        "source": "National Building Research Organisation",
    },
]

_NEWS_ITEMS: list[dict] = [
    {
        "id": "news-1",
        "title": "Southwest Monsoon Intensifies Over Sri Lanka",
        "summary": (
            "The Department of Meteorology reports intensified monsoon activity bringing "
            "heavy rainfall to southwestern regions. Multiple districts placed on high alert."
        ),
        "source": "Daily News",
        "url": "https://www.dailynews.lk",
        "published_at": _hours_from_load(-3),
        "category": "weather",
    },
    {
        "id": "news-2",
        "title": "Disaster Management Center Activates Emergency Response",
        "summary": (
            "DMC has activated emergency response protocols in Western and Sabaragamuwa "
            "provinces due to rising water levels in major rivers."
        ),
        "source": "Ada Derana",
        "url": "https://www.adaderana.lk",
        "published_at": _hours_from_load(-5),
        "category": "flood",
    },
    {
        "id": "news-3",
        "title": "Schools Closed in Gampaha District Due to Flooding",
        "summary": (
            "Education authorities have ordered closure of schools in flood-affected "
            "areas of Gampaha district as a precautionary measure."
        ),
        "source": "News First",
        "url": "https://www.newsfirst.lk",
        "published_at": _hours_from_load(-8),
        "category": "disaster",
    },
    {
        "id": "news-4",
        "title": "Relief Operations Underway in Ratnapura",
        "summary": (
            "Government relief teams and volunteers are providing assistance to "
            "families affected by flooding in Ratnapura district."
        ),
        "source": "Sunday Times",
        "url": "https://www.sundaytimes.lk",
        "published_at": _hours_from_load(-12),
        "category": "disaster",
    },
    {
        "id": "news-5",
        "title": "Weather Update: Rain to Continue for Next 48 Hours",
        "summary": (
            "Meteorological department forecasts continued rainfall across the island "
            "with particularly heavy precipitation expected in southwestern regions."
        ),
        "source": "Daily Mirror",
        "url": "https://www.dailymirror.lk",
        "published_at": _hours_from_load(-16),
        "category": "weather",
    },
]


def _matches_district(value: str, district: str | None) -> bool:
    return district is None or value.lower() == district.strip().lower()


def list_stations(district: str | None = None) -> list[dict]:
    """Return all river stations, stamped with the current time."""
    stamp = _iso(_now())
    return [
        {**station, "last_updated": stamp}
        for station in _RIVER_STATIONS
        if _matches_district(station["district"], district)
    ]


def get_station(station_id: str) -> dict | None:
    for station in _RIVER_STATIONS:
        if station["id"] == station_id:
            return dict(station)
    return None


def list_risk_zones(district: str | None = None) -> list[dict]:
    return [copy.deepcopy(z) for z in _FLOOD_RISK_ZONES if _matches_district(z["district"], district)]


def list_alerts(district: str | None = None) -> list[dict]:
    """Return hazard alerts, optionally only those affecting ``district``."""
    return [
        copy.deepcopy(alert)
        for alert in _HAZARD_ALERTS
        if district is None or any(_matches_district(area, district) for area in alert["affected_areas"])
    ]


def list_news() -> list[dict]:
    return copy.deepcopy(_NEWS_ITEMS)


def districts_overview() -> dict:
    return {
        "districts": list(DISTRICTS),
        "center": SRI_LANKA_CENTER,
        "bounds": dict(SRI_LANKA_BOUNDS),
    }
