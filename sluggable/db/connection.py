import logging
from typing import Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from sluggable.core.config import settings  # centralized settings

logger = logging.getLogger(__name__)

# --- Engine cache ---
_engines: Dict[str, Engine] = {}

def get_engine(url: Optional[str] = None) -> Engine:
    """
    Return a cached SQLAlchemy engine for the given URL, defaulting to
    settings.DATABASE_URL.
    """
    url = url or settings.DATABASE_URL
    if not url:
        logger.critical("DATABASE_URL is not configured. Cannot create engine.")
        raise RuntimeError("Missing DATABASE_URL")
    if url not in _engines:
        logger.info("Creating engine (ending): ...%s", str(url)[-20:])
        _engines[url] = create_engine(url, echo=settings.DB_ECHO, pool_pre_ping=True)
    return _engines[url]


def get_session(url: Optional[str] = None) -> Session:
    """
    Return a SQLAlchemy Session bound to the engine for url.
    Autoflush is off so that slug lookups never flush a half-built record.
    """
    engine = get_engine(url)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()
    logger.debug("Session created for engine %s", engine.url.render_as_string(hide_password=True))
    return session


def dispose_engines() -> None:
    for url, engine in list(_engines.items()):
        engine.dispose()
        del _engines[url]
