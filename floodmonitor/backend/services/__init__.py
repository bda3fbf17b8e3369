"""Services package – re-exports all public service functions."""

from __future__ import annotations

from floodmonitor.backend.services import accounts, monitoring, weather
from floodmonitor.backend.services.errors import (
    DuplicateFavoriteError,
    DuplicateUsernameError,
    FavoriteNotFoundError,
    ServiceError,
    StationNotFoundError,
)

__all__ = [
    "DuplicateFavoriteError",
    "DuplicateUsernameError",
    "FavoriteNotFoundError",
    "ServiceError",
    "StationNotFoundError",
    "accounts",
    "monitoring",
    "weather",
]
