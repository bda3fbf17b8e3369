"""Domain errors raised by the service layer and mapped to HTTP codes by the API."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for expected, user-facing failures."""


class StationNotFoundError(ServiceError):
    def __init__(self, station_id: str):
        super().__init__("Station not found")
        self.station_id = station_id


class DuplicateUsernameError(ServiceError):
    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class DuplicateFavoriteError(ServiceError):
    def __init__(self, station_id: str):
        super().__init__("Station is already in favorites")
        self.station_id = station_id


class FavoriteNotFoundError(ServiceError):
    def __init__(self, favorite_id: int):
        super().__init__("Favorite not found")
        self.favorite_id = favorite_id
