"""
Test configuration: in-memory SQLite per test, test credentials, API client.

Environment is set before any app module is imported so the cached settings
never point at the live database.
"""

import os

os.environ["DB_URL"] = "sqlite://"
os.environ["TOKEN_KEY"] = "test-token-key"
os.environ["EMAIL"] = "test@example.com"
os.environ["TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.core.security import create_token, hash_password
from app.db.init_db import init_db
from app.db.session import create_db_engine, get_db

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "correct horse battery staple"


@pytest.fixture(scope="session", autouse=True)
def test_account():
    """Configure the single account with a known password."""
    settings = get_settings()
    settings.email = TEST_EMAIL
    settings.pw_hash = hash_password(TEST_PASSWORD)
    settings.token_key = "test-token-key"
    return settings


@pytest.fixture()
def engine():
    eng = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    from app.main import app

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {create_token(TEST_EMAIL)}"}


@pytest.fixture()
def frozen_now(monkeypatch):
    """Pin the clock used by start/end transitions."""
    stamps = {"value": "2023-05-09T07:00:00+00:00"}
    monkeypatch.setattr("app.crud.lifecycle.now_iso", lambda: stamps["value"])
    return stamps
