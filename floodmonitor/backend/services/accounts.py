"""Accounts service – users, their dashboard preferences and favourite stations."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from floodmonitor.backend.core.db.models import FavoriteLocation, User, UserPreferences
from floodmonitor.backend.core.security.passwords import hash_password, verify_password
from floodmonitor.backend.services.errors import (
    DuplicateFavoriteError,
    DuplicateUsernameError,
    FavoriteNotFoundError,
)
from floodmonitor.backend.services.monitoring import require_station

logger = logging.getLogger(__name__)


# ── Users ───────────────────────────────────────────────────────────────────


def get_user(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def register_user(db: Session, username: str, password: str, email: str | None = None) -> User:
    """
    Create a user with default preferences.

    Raises:
        DuplicateUsernameError: If ``username`` is taken
    """
    if get_user_by_username(db, username) is not None:
        raise DuplicateUsernameError(username)

    user = User(username=username, password=hash_password(password), email=email)
    user.preferences = UserPreferences()
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same name.
        db.rollback()
        raise DuplicateUsernameError(username) from exc
    db.refresh(user)
    logger.info("Registered user %s", username)
    return user


def authenticate(db: Session, username: str, password: str) -> User | None:
    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password):
        return None
    return user


# ── Preferences ─────────────────────────────────────────────────────────────


def get_preferences(db: Session, user: User) -> UserPreferences:
    """Return the user's preferences, creating the defaults on first access."""
    stmt = select(UserPreferences).where(UserPreferences.user_id == user.id)
    prefs = db.execute(stmt).scalar_one_or_none()
    if prefs is not None:
        return prefs

    prefs = UserPreferences(user_id=user.id)
    db.add(prefs)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request created the row first; use theirs.
        db.rollback()
        return db.execute(stmt).scalar_one()
    db.refresh(prefs)
    return prefs


def update_preferences(db: Session, user: User, changes: dict[str, Any]) -> UserPreferences:
    prefs = get_preferences(db, user)
    for key, value in changes.items():
        if value is not None:
            setattr(prefs, key, value)
    db.commit()
    db.refresh(prefs)
    return prefs


# ── Favourites ──────────────────────────────────────────────────────────────


def list_favorites(db: Session, user: User) -> list[FavoriteLocation]:
    stmt = (
        select(FavoriteLocation)
        .where(FavoriteLocation.user_id == user.id)
        .order_by(FavoriteLocation.id)
    )
    return list(db.execute(stmt).scalars().all())


def add_favorite(
    db: Session,
    user: User,
    station_id: str,
    name: str,
    latitude: float,
    longitude: float,
) -> FavoriteLocation:
    """
    Bookmark a station for ``user``.

    Raises:
        StationNotFoundError: If ``station_id`` is not a known station
        DuplicateFavoriteError: If the station is already bookmarked
    """
    require_station(station_id)

    favorite = FavoriteLocation(
        user_id=user.id,
        station_id=station_id,
        name=name,
        latitude=latitude,
        longitude=longitude,
    )
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateFavoriteError(station_id) from exc
    db.refresh(favorite)
    return favorite


def remove_favorite(db: Session, user: User, favorite_id: int) -> None:
    """Delete one of the user's favourites; other users' rows are invisible."""
    favorite = db.execute(
        select(FavoriteLocation).where(
            FavoriteLocation.id == favorite_id,
            FavoriteLocation.user_id == user.id,
        )
    ).scalar_one_or_none()
    if favorite is None:
        raise FavoriteNotFoundError(favorite_id)
    db.delete(favorite)
    db.commit()
