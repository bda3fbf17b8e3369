"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from floodmonitor.backend.core.db.models import User
from floodmonitor.backend.core.weather.cache import WeatherCache
from floodmonitor.backend.services import accounts

SESSION_USER_KEY = "user_id"


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_weather_cache(request: Request) -> WeatherCache:
    return request.app.state.weather_cache


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the logged-in user from the session cookie or fail with 401."""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    user = accounts.get_user(db, user_id)
    if user is None:
        # Account removed since the cookie was issued.
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user
