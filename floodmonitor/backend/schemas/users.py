"""Pydantic schemas for authentication and user-scoped endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, EmailStr, Field, field_validator

from floodmonitor.backend.core.data.catalog import DISTRICTS
from floodmonitor.backend.schemas.dashboard import AlertSeverity, CamelModel, UtcDatetime

Theme = Literal["light", "dark", "system"]

# ── Auth ────────────────────────────────────────────────────────────────────


class LoginIn(CamelModel):
    # Credentials are only checked against the stored account here; the
    # length rules apply at registration.
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterIn(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)
    email: EmailStr | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class UserOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str | None = None


class MessageOut(CamelModel):
    message: str


# ── Preferences ─────────────────────────────────────────────────────────────


class PreferencesOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    alerts_enabled: bool
    email_alerts: bool
    warning_threshold: AlertSeverity
    preferred_districts: list[str]
    theme: Theme


class PreferencesUpdateIn(CamelModel):
    """Partial update; omitted fields keep their stored value."""

    alerts_enabled: bool | None = None
    email_alerts: bool | None = None
    warning_threshold: AlertSeverity | None = None
    preferred_districts: list[str] | None = None
    theme: Theme | None = None

    @field_validator("preferred_districts")
    @classmethod
    def _known_districts(cls, value):
        if value is None:
            return value
        unknown = [d for d in value if d not in DISTRICTS]
        if unknown:
            raise ValueError(f"Unknown district(s): {', '.join(unknown)}")
        return list(dict.fromkeys(value))


# ── Favourites ──────────────────────────────────────────────────────────────


class FavoriteIn(CamelModel):
    station_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class FavoriteOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    station_id: str
    name: str
    latitude: float
    longitude: float
    created_at: UtcDatetime
