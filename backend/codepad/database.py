"""SQLAlchemy engine & session for SQLite (WAL mode).

Storage calls are synchronous: the file store saves inline after every
mutation, so a plain (non-async) engine is used.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from codepad.config import settings
from codepad.models.base import Base

logger = logging.getLogger(__name__)


def _configure_sqlite(dbapi_conn, _connection_record):
    """Apply SQLite PRAGMAs for a single-writer local store."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA cache_size=-8000")  # 8 MB
    cursor.close()


def make_engine(database_path: str | Path | None = None) -> Engine:
    """Create an engine for ``database_path`` (defaults to settings)."""
    db_path = Path(database_path or settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=settings.debug and settings.log_level == "DEBUG",
    )
    # Apply SQLite PRAGMAs on each new connection
    event.listen(engine, "connect", _configure_sqlite)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables (first run)."""
    Base.metadata.create_all(engine)
    logger.info("Database tables created/verified at %s", engine.url.database)
