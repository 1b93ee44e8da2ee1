"""Database engine and session management.

The engine is the single store handle for the process. ``init_db`` ensures the
schema exists and ``close_db`` releases pooled connections; both are driven by
the application lifespan.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from civic_reporter.core.config import settings
from civic_reporter.db.base import Base

logger = logging.getLogger(__name__)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # FastAPI runs sync endpoints in a threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    pool_pre_ping=True,
    echo=settings.debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for FastAPI to get DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables that do not exist yet."""
    import civic_reporter.models  # noqa: F401 - register models for create_all

    Base.metadata.create_all(bind=engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))


def close_db() -> None:
    """Dispose of the engine's connection pool."""
    engine.dispose()
    logger.info("Database connection closed.")
