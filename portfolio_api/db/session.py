from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBRuntime:
    """The process-wide storage handle: one engine plus its session factory."""

    engine: Engine
    SessionLocal: sessionmaker

    def dispose(self) -> None:
        self.engine.dispose()


def _ensure_sqlite_parent_dir(database_url: str) -> None:
    database = make_url(database_url).database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def create_engine_and_sessionmaker(database_url: str, *, echo: bool = False) -> DBRuntime:
    """Create SQLAlchemy engine + sessionmaker.

    Notes:
      - SQLite needs check_same_thread=False because FastAPI runs sync routes in a threadpool.
      - WAL lets readers proceed while a single writer holds the lock.
    """
    is_sqlite = database_url.startswith("sqlite")

    connect_args: dict = {}
    engine_kwargs: dict = dict(echo=echo, future=True, pool_pre_ping=True)
    if is_sqlite:
        _ensure_sqlite_parent_dir(database_url)
        connect_args["check_same_thread"] = False
        connect_args["timeout"] = 5
        # QueuePool + SQLite file DBs leads to "database is locked" under threads.
        engine_kwargs["poolclass"] = NullPool
    engine_kwargs["connect_args"] = connect_args

    engine = create_engine(database_url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # pragma: no cover
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.execute("PRAGMA busy_timeout=5000")
            except Exception:
                logger.warning("Could not apply SQLite pragmas", exc_info=True)
            finally:
                cursor.close()

    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    return DBRuntime(engine=engine, SessionLocal=SessionLocal)
