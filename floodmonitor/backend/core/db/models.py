"""
SQLAlchemy ORM Models
"""

import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    username = Column(String(50), unique=True, nullable=False)
    password = Column(Text, nullable=False)  # bcrypt hash
    email = Column(String(255))
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    preferences = relationship(
        "UserPreferences", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    favorites = relationship("FavoriteLocation", back_populates="user", cascade="all, delete-orphan")


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    alerts_enabled = Column(Boolean, default=True, nullable=False)
    email_alerts = Column(Boolean, default=False, nullable=False)
    warning_threshold = Column(String(20), default="warning", nullable=False)
    preferred_districts = Column(JSON, default=list, nullable=False)
    theme = Column(String(10), default="system", nullable=False)

    user = relationship("User", back_populates="preferences")


class FavoriteLocation(Base):
    __tablename__ = "favorite_locations"
    __table_args__ = (UniqueConstraint("user_id", "station_id", name="uq_favorite_user_station"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    station_id = Column(String(100), nullable=False)
    name = Column(String(200), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="favorites")


class WaterLevelHistory(Base):
    __tablename__ = "water_level_history"

    id = Column(Integer, primary_key=True)
    station_id = Column(String(100), nullable=False, index=True)
    level = Column(Float, nullable=False)
    status = Column(String(20), nullable=False)
    trend = Column(String(20), nullable=False)
    recorded_at = Column(DateTime, nullable=False, index=True)
