"""
Shared fixtures and configuration for all tests.
"""
import os
from contextlib import contextmanager
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Override environment settings for testing
os.environ["ENVIRONMENT"] = "testing"
os.environ["SECRET_KEY"] = "testsecretkey"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["BACKEND_CORS_ORIGINS"] = '["http://localhost:3000"]'

from taskvibe.core import security
from taskvibe.db.base import Base
from taskvibe.db.session import init_db
from taskvibe.main import create_app
from taskvibe.storage import MemoryStore, SqlAlchemyStore

TEST_USER_ID = "user-1"
OTHER_USER_ID = "user-2"


class FrozenClock:
    """Clock that only moves when a test tells it to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(datetime(2024, 3, 14, 9, 30))


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    """
    Create a database session for each test.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sql_store(db):
    return SqlAlchemyStore(db)


@pytest.fixture(params=["memory", "database"])
def store(request):
    """Run the test once against each storage backend."""
    if request.param == "memory":
        return MemoryStore()
    return SqlAlchemyStore(request.getfixturevalue("db"))


@pytest.fixture
def user(store):
    return store.upsert_user(TEST_USER_ID, {"email": "test@example.com"})


@pytest.fixture
def other_user(store):
    return store.upsert_user(OTHER_USER_ID, {"email": "other@example.com"})


# API fixtures run on a memory store owned by the test


@pytest.fixture
def api_store():
    return MemoryStore()


@pytest.fixture
def app(api_store):
    @contextmanager
    def provide_store():
        yield api_store

    return create_app(store_provider=provide_store)


@pytest.fixture
def client(app):
    """Return a TestClient for making requests to the app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Log in as the offline user and return the bearer header."""
    response = client.post("/api/v1/login/offline")
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def authorized_client(client, auth_headers):
    """Return a TestClient that sends the offline user's token."""
    client.headers.update(auth_headers)
    return client


@pytest.fixture
def other_user_headers(api_store):
    """Bearer header for a second, independent user."""
    api_store.upsert_user(OTHER_USER_ID, {"email": "other@example.com"})
    return {"Authorization": f"Bearer {security.create_access_token(OTHER_USER_ID)}"}
