"""Authentication and user-scoped route handlers.

Sessions are signed cookies managed by Starlette's ``SessionMiddleware``;
the only value kept in them is the user id.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from floodmonitor.backend.api.deps import SESSION_USER_KEY, get_current_user, get_db
from floodmonitor.backend.core.db.models import User
from floodmonitor.backend.schemas import (
    FavoriteIn,
    FavoriteOut,
    LoginIn,
    MessageOut,
    PreferencesOut,
    PreferencesUpdateIn,
    RegisterIn,
    UserOut,
)
from floodmonitor.backend.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Auth ───────────────────────────────────────────────────────────────────


@router.post("/auth/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(request: Request, body: RegisterIn, db: Session = Depends(get_db)) -> User:
    """Create an account and log it in straight away."""
    user = accounts.register_user(db, body.username, body.password, body.email)
    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/auth/login", response_model=UserOut)
def login(request: Request, body: LoginIn, db: Session = Depends(get_db)) -> User:
    user = accounts.authenticate(db, body.username, body.password)
    if user is None:
        logger.info("Failed login for %s", body.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/auth/logout", response_model=MessageOut)
def logout(request: Request) -> MessageOut:
    request.session.clear()
    return MessageOut(message="Logged out successfully")


@router.get("/auth/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> User:
    return user


# ── Preferences ────────────────────────────────────────────────────────────


@router.get("/user/preferences", response_model=PreferencesOut)
def get_preferences(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return accounts.get_preferences(db, user)


@router.put("/user/preferences", response_model=PreferencesOut)
def update_preferences(
    body: PreferencesUpdateIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    return accounts.update_preferences(db, user, changes)


# ── Favourites ─────────────────────────────────────────────────────────────


@router.get("/user/favorites", response_model=list[FavoriteOut])
def list_favorites(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return accounts.list_favorites(db, user)


@router.post("/user/favorites", response_model=FavoriteOut, status_code=status.HTTP_201_CREATED)
def add_favorite(
    body: FavoriteIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return accounts.add_favorite(db, user, body.station_id, body.name, body.latitude, body.longitude)


@router.delete("/user/favorites/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(
    favorite_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    accounts.remove_favorite(db, user, favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
