"""Database engine & session management.

One SQLite database holds configuration records, the content type and role
registries and user accounts. ``SITEADMIN_DB_PATH=:memory:`` selects a
single in-memory database shared by every thread of the process (tests,
throwaway runs); it is lost when the engine is disposed.
"""
from __future__ import annotations

import os
import threading
try:  # POSIX file locking for gunicorn multi-worker safety
    import fcntl  # type: ignore
except ImportError:  # pragma: no cover - non-POSIX platforms skip the file lock
    fcntl = None  # type: ignore
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session as SASession, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from siteadmin import config as app_config
from siteadmin.db.models import Base
from siteadmin.utils.logging import get_logger

LOG = get_logger("siteadmin.db")

SCHEMA_LOCK_NAME = ".siteadmin_schema.lock"

_engine: Optional[Engine] = None
_scoped: Optional[scoped_session] = None
_LOCK = threading.Lock()


def _enable_foreign_keys(dbapi_conn, _record) -> None:
    # users_roles relies on ON DELETE CASCADE.
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(db_path: str) -> Engine:
    if db_path == app_config.MEMORY_DB:
        # One shared connection: every thread sees the same in-memory database.
        engine = create_engine(
            "sqlite://",
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        parent_dir = os.path.dirname(os.path.abspath(db_path)) or "."
        os.makedirs(parent_dir, exist_ok=True)
        if not os.access(parent_dir, os.W_OK):
            raise RuntimeError(f"Site DB directory not writable: {parent_dir}")
        engine = create_engine(f"sqlite:///{db_path}", future=True)
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


@contextmanager
def _schema_lock(db_path: str) -> Iterator[None]:
    """Serialize DDL across worker processes sharing one database file."""
    if fcntl is None or db_path == app_config.MEMORY_DB:
        yield
        return
    lock_path = os.path.join(os.path.dirname(os.path.abspath(db_path)) or ".", SCHEMA_LOCK_NAME)
    with open(lock_path, "w") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def _create_schema(engine: Engine) -> None:
    try:
        Base.metadata.create_all(engine)
    except OperationalError as exc:  # pragma: no cover - concurrency edge
        if "already exists" not in str(exc).lower():
            raise
        LOG.warning("Schema create encountered existing tables (benign race)")


def init_engine_once() -> None:
    global _engine, _scoped
    if _engine is not None:
        return
    with _LOCK:
        if _engine is not None:
            return
        db_path = app_config.get_db_path()
        LOG.info("Initializing site database engine at %s", db_path)
        engine = _build_engine(db_path)
        with _schema_lock(db_path):
            _create_schema(engine)
        _scoped = scoped_session(sessionmaker(bind=engine, expire_on_commit=False, class_=SASession))
        _engine = engine
        LOG.debug("site schema ready")


def get_engine() -> Engine:
    if _engine is None:
        init_engine_once()
    return _engine  # type: ignore[return-value]


def get_scoped_session() -> scoped_session:
    if _scoped is None:
        init_engine_once()
    if _scoped is None:
        raise RuntimeError("Scoped session could not be initialized.")
    return _scoped


@contextmanager
def app_session() -> Iterator[SASession]:
    """Unit of work: commit on success, roll back and re-raise on error."""
    sess = get_scoped_session()()
    try:
        yield sess
        sess.commit()
    except Exception:
        sess.rollback()
        raise
    finally:
        sess.close()


def reset_for_tests(drop: bool = False) -> None:
    """Forget the engine so the next use re-reads ``SITEADMIN_DB_PATH``."""
    global _engine, _scoped
    with _LOCK:
        if _scoped is not None:
            _scoped.remove()
        if _engine is not None:
            if drop:
                Base.metadata.drop_all(_engine)
            _engine.dispose()
        _engine = None
        _scoped = None


__all__ = [
    "init_engine_once",
    "get_engine",
    "get_scoped_session",
    "app_session",
    "reset_for_tests",
]
