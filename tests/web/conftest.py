"""Web test fixtures: TestClient with shared in-memory SQLite."""

from __future__ import annotations

from datetime import datetime

import bcrypt
import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from daflash.constants import AGENCY_TZ
from daflash.models.client import Client
from daflash.rate_limit import InMemoryCounterStore, RateLimiter
from daflash.repositories.sqlalchemy import SQLAlchemyClientRepository
from tests.conftest import SCHEMA_DDL

ADMIN_EMAIL = "owner@daflash.com"
ADMIN_PASSWORD = "testpass"
ADMIN_PASSWORD_HASH = bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()


def _make_test_engine():
    """Create a fresh in-memory SQLite engine with shared connection pool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        for statement in SCHEMA_DDL.strip().split(";"):
            stmt = statement.strip()
            if stmt:
                conn.execute(text(stmt))
        conn.commit()

    return engine


def create_client_in_db(engine, **overrides) -> Client:
    """Create a client in the test DB. Shared helper for web route tests."""
    defaults = dict(client_name="Acme Realty", email="ops@acme.com")
    defaults.update(overrides)
    with engine.connect() as conn:
        return SQLAlchemyClientRepository(conn).create(Client(**defaults))


def line_item_json(**overrides) -> dict:
    data = {"name": "Website Build", "quantity": 2, "unit_price": "100.00", "discount_percent": "10"}
    data.update(overrides)
    return data


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch):
    """Set up in-memory DB and patch the web app to use it."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)
    monkeypatch.setattr(app_module.app.state, "login_limiter", RateLimiter(InMemoryCounterStore(), 5, 60))

    from daflash.settings import settings

    monkeypatch.setattr(settings, "admin_emails", [ADMIN_EMAIL])
    monkeypatch.setattr(settings, "admin_password_hash", ADMIN_PASSWORD_HASH)
    monkeypatch.setattr(settings, "numbering_mode", "scan")
    monkeypatch.setattr(settings, "demo_content", True)

    yield engine

    engine.dispose()


@pytest.fixture()
def test_engine(web_test_db):
    """Expose the test engine for helpers that need direct DB access."""
    return web_test_db


@pytest.fixture()
def client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app)


@pytest.fixture()
def auth_client(client):
    """Client that is already logged in as an allowed admin."""
    response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture()
def client_uuid(test_engine) -> str:
    return create_client_in_db(test_engine).uuid


@pytest.fixture()
def freeze_clock(monkeypatch):
    """Pin ``daflash.clock.now`` (and so ``today``) to an agency-local moment."""
    from daflash import clock

    def _freeze(year: int, month: int, day: int, hour: int = 12) -> None:
        moment = datetime(year, month, day, hour, tzinfo=AGENCY_TZ)
        monkeypatch.setattr(clock, "now", lambda: moment)

    return _freeze
