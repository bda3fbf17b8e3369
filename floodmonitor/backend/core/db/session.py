"""
Database Configuration and Management (SQLAlchemy)

Handles engine setup, session creation and table initialisation.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker

from floodmonitor.backend.core.db.models import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for ``database_url``.

    SQLite gets cross-thread access enabled (FastAPI runs sync endpoints in
    a threadpool) and foreign keys switched on so cascading deletes behave
    as they do on PostgreSQL.
    """
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"

    connect_args = {"check_same_thread": False} if is_sqlite else {}
    engine = create_engine(database_url, echo=echo, connect_args=connect_args)

    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, database_url: str, echo: bool = False):
        self.url = make_url(database_url)
        self.engine = create_db_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def _ensure_sqlite_dir(self) -> None:
        if self.url.get_backend_name() == "sqlite" and self.url.database not in (None, "", ":memory:"):
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)

    def init_database(self) -> None:
        """Create all tables that do not exist yet."""
        logger.info("Checking/creating database tables...")
        self._ensure_sqlite_dir()
        try:
            Base.metadata.create_all(bind=self.engine)
        except Exception as e:
            logger.error(f"Error creating tables: {e}")
            raise
        logger.info("Database tables created/verified successfully")

    def table_names(self) -> list[str]:
        return sorted(inspect(self.engine).get_table_names())

    def dispose(self) -> None:
        self.engine.dispose()
