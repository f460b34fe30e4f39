"""SQLAlchemy engine and session handling for the user store."""

from __future__ import annotations

import threading
from typing import Iterator

import structlog
from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from scribeai.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    pass


_engines: dict[str, Engine] = {}
_engines_lock = threading.Lock()


def get_engine(database_url: str) -> Engine:
    """Return the engine for ``database_url``, creating tables on first use."""
    engine = _engines.get(database_url)
    if engine is not None:
        return engine

    with _engines_lock:
        engine = _engines.get(database_url)
        if engine is not None:
            return engine

        connect_args = {}
        if database_url.startswith("sqlite"):
            # Routes run in FastAPI's threadpool.
            connect_args["check_same_thread"] = False
        engine = create_engine(database_url, connect_args=connect_args)

        from scribeai import models  # noqa: F401  (registers tables)

        Base.metadata.create_all(engine)
        logger.info("database_ready", dialect=engine.dialect.name)
        _engines[database_url] = engine
        return engine


def get_db(settings: Settings = Depends(get_settings)) -> Iterator[Session]:
    """Yield a request-scoped session."""
    factory = sessionmaker(bind=get_engine(settings.database_url), expire_on_commit=False)
    db = factory()
    try:
        yield db
    finally:
        db.close()
