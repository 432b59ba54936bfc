"""Database engine, session and transactional unit for SQLite (dev) / PostgreSQL (prod)."""
from collections.abc import Generator, Iterator
from contextlib import contextmanager
import logging
import os
import time
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.pool import StaticPool

from ride_core.errors import Conflict, TimedOut, Unavailable
from utils.config import DATABASE_URL

LOG = logging.getLogger(__name__)

# Runtime safety: when TESTING=true, never use production DB.
if os.environ.get("TESTING") == "true":
    url = DATABASE_URL
    if "movr.db" in url or (":memory:" not in url and "test" not in url.lower().split("?")[0]):
        raise RuntimeError(
            "Tests must not run against production. Set TESTING_DATABASE_URL to sqlite:///:memory: "
            "(or another test URL containing :memory: or 'test')."
        )


def build_engine(database_url: str):
    """Create an engine; SQLite gets shared-thread connections and foreign keys."""
    connect_args = {"check_same_thread": False} if "sqlite" in database_url else {}
    engine_kw = {"connect_args": connect_args, "echo": False}
    # In-memory SQLite: use one connection so all sessions share the same DB.
    if "sqlite" in database_url and ":memory:" in database_url:
        engine_kw["poolclass"] = StaticPool
    engine = create_engine(database_url, **engine_kw)

    # Enable foreign keys for SQLite so FK behaviour is consistent.
    if "sqlite" in database_url:

        @event.listens_for(engine, "connect")
        def _sqlite_fk(dbapi_conn, connection_record):
            dbapi_conn.execute("PRAGMA foreign_keys=ON")

    return engine


_engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: yield a DB session and close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def deadline_after(timeout_s: Optional[float]) -> Optional[float]:
    """Absolute monotonic deadline timeout_s from now (None = no deadline)."""
    if timeout_s is None:
        return None
    return time.monotonic() + timeout_s


def check_deadline(deadline: Optional[float]) -> None:
    """Raise TimedOut when the deadline has passed."""
    if deadline is not None and time.monotonic() >= deadline:
        raise TimedOut()


@contextmanager
def transaction(session: Session, deadline: Optional[float] = None) -> Iterator[Session]:
    """
    One transactional unit: commit on clean exit, roll back on any error.

    The deadline is checked once more right before commit; after commit it has no effect.
    Optimistic version mismatches surface as Conflict, connection-level failures as Unavailable.
    """
    try:
        yield session
        check_deadline(deadline)
        session.commit()
    except StaleDataError as e:
        session.rollback()
        LOG.warning("Concurrent update detected, rolled back: %s", e)
        raise Conflict("Vehicle was modified by another request") from e
    except (OperationalError, InterfaceError) as e:
        session.rollback()
        LOG.warning("Store unavailable, rolled back: %s", e)
        raise Unavailable() from e
    except BaseException:
        session.rollback()
        raise
