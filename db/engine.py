"""
db.engine - One engine per process, one session per unit of work.

init_db() may be called again with another URL (the tests do this per
test); the previous engine is disposed first.  SQLite files are opened
in WAL mode with foreign keys enforced, which the location tree's
parent links rely on.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker | None = None

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA foreign_keys=ON",
    "PRAGMA synchronous=NORMAL",
)


def _apply_sqlite_pragmas(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    for pragma in SQLITE_PRAGMAS:
        cur.execute(pragma)
    cur.close()


def init_db(db_url: str) -> Engine:
    """Bind the catalog to *db_url* and make sure every table exists."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(db_url, echo=False, future=True)
    if _engine.dialect.name == "sqlite":
        event.listen(_engine, "connect", _apply_sqlite_pragmas)

    Base.metadata.create_all(_engine)
    _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.debug(f"Catalog database at {db_url}")
    return _engine


def get_session() -> Session:
    """A fresh session on the current engine; close it when done."""
    if _session_factory is None:
        raise RuntimeError("init_db() has not been called")
    return _session_factory()
