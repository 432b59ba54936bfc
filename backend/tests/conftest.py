# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.orm import Session

from db import SessionLocal, get_db
from main import app
from models import Base
from repositories.user_repository import create_user
from repositories.vehicle_repository import create_vehicle


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


def _enable_sqlite_savepoints(eng) -> None:
    """pysqlite defers BEGIN until the first write; emit it ourselves so the outer transaction is real."""

    @event.listens_for(eng, "connect")
    def _no_implicit_begin(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None

    @event.listens_for(eng, "begin")
    def _explicit_begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    eng = _get_engine()
    _enable_sqlite_savepoints(eng)
    # Drop any connection opened before the listeners existed.
    eng.dispose()
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture
def db_session(engine):
    """Function-scoped session; commits become savepoints inside an outer transaction that is rolled back."""
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, autoflush=False, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory: register a user with a unique email."""
    def _make(first_name: str = "Ada", last_name: str = "Rider"):
        email = f"rider-{uuid.uuid4().hex[:8]}@example.com"
        return create_user(
            db_session,
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone_numbers=["555-0100"],
        )
    return _make


@pytest.fixture
def make_vehicle(db_session):
    """Factory: register an Available vehicle."""
    def _make(battery: int = 80, vehicle_type: str = "scooter"):
        return create_vehicle(db_session, battery=battery, vehicle_type=vehicle_type)
    return _make


def pytest_sessionfinish(session, exitstatus):
    """Remove any temporary test DB files created during the run (e.g. under /tmp)."""
    import glob
    for pattern in ["/tmp/test_*.db", "test_*.db"]:
        for path in glob.glob(pattern):
            try:
                os.remove(path)
            except OSError:
                pass
