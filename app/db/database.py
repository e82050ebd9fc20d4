# /app/db/database.py

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..core.config import get_settings
from ..core.errors import StorageUnavailableError
from .base_class import Base

logger = logging.getLogger(__name__)

# Both stay None until a DATABASE_URL is configured. Callers must go through
# get_db(), which turns the missing configuration into StorageUnavailableError.
engine: Optional[Engine] = None
SessionLocal: Optional[sessionmaker] = None


def _make_engine(url: str) -> Engine:
    # The 'check_same_thread' argument is only needed for SQLite.
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


def configure(url: Optional[str]):
    """(Re)binds the engine and session factory. Passing None disables storage."""
    global engine, SessionLocal
    if engine is not None:
        engine.dispose()
    if not url:
        engine = None
        SessionLocal = None
        return
    engine = _make_engine(url)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def is_configured() -> bool:
    return SessionLocal is not None


def init_db():
    """Creates any missing tables. A no-op when storage is not configured."""
    if engine is None:
        logger.warning("DATABASE_URL is not set; content and profile storage are disabled.")
        return
    # Importing the registry makes every model known to Base.metadata.
    from . import base  # noqa: F401
    Base.metadata.create_all(bind=engine)


# Dependency to get a DB session. This will be used in our API routers.
def get_db():
    if SessionLocal is None:
        raise StorageUnavailableError()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


configure(get_settings().database_url)
