import os
from datetime import timedelta

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("COOKIE_SECURE", "false")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventhub import models
from eventhub.database import Base, get_db
from eventhub.main import app
from eventhub.utils import now_local

TEST_DATABASE_URL = "sqlite:///:memory:"

# StaticPool + :memory: so every session (test code and app requests) shares one database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)


def override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(name="session")
def session_fixture():
    """Fresh schema per test."""
    Base.metadata.create_all(test_engine)
    with TestSessionLocal() as session:
        yield session
    Base.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def future_slot(minutes: int = 120):
    """(date, time) strings for a moment ``minutes`` from now."""
    when = now_local() + timedelta(minutes=minutes)
    return when.strftime("%Y-%m-%d"), when.strftime("%H:%M")


def event_payload(minutes: int = 120, **overrides) -> dict:
    day, hhmm = future_slot(minutes)
    payload = {
        "name": "Jazz Night",
        "description": "Live jazz by the river",
        "date": day,
        "time": hhmm,
        "location": "Riverside Hall",
        "category": "Music",
    }
    payload.update(overrides)
    return payload


def register(client: TestClient, name="Alice", email="alice@example.com", password="secret1") -> str:
    """Register a user and return their session token."""
    response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["token"]


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    return auth_headers(register(client))


@pytest.fixture
def bob(client):
    return auth_headers(register(client, name="Bob", email="bob@example.com"))


@pytest.fixture
def make_event(session):
    """Insert an event directly, bypassing the lead-time rule (e.g. for past events)."""

    def _make(organizer_id: str, starts_in_minutes: int, **fields) -> models.Event:
        when = now_local() + timedelta(minutes=starts_in_minutes)
        event = models.Event(
            name=fields.pop("name", "Seeded event"),
            description=fields.pop("description", "Seeded"),
            date=when.date(),
            time=when.strftime("%H:%M"),
            location=fields.pop("location", "Town Square"),
            category=fields.pop("category", "Other"),
            organizer_id=organizer_id,
            **fields,
        )
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    return _make


def current_user_id(client: TestClient, headers: dict) -> str:
    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]["id"]
