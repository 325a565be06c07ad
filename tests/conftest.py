import os

# Settings are read at import time, so configure the environment first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from travelapp import models  # noqa: F401
from travelapp.db import Base, get_db
from travelapp.main import app

# ---------- TEST FIXTURES ----------

@pytest.fixture()
def engine():
    # One in-memory database per test, shared across threads via StaticPool
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture()
def db_session(engine):
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = Session()
    yield session
    session.close()

@pytest.fixture()
def client(engine):
    """Override get_db dependency for FastAPI TestClient."""
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

# ---------- TEST DATA HELPERS ----------

def auth_header(token):
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture()
def make_user(client):
    """Registers and logs in a user; returns (user_id, token)."""
    def _make(username="alice", email=None, password="s3cret-pass"):
        email = email or f"{username}@example.com"
        res = client.post("/api/auth/register", json={"username": username, "email": email, "password": password})
        assert res.status_code == 201, res.text
        res = client.post("/api/auth/login", json={"username": username, "password": password})
        assert res.status_code == 200, res.text
        body = res.json()
        return body["userId"], body["token"]
    return _make

def rent_dict(host_id, title="Sea View Flat", city="Lisbon", country="Portugal", **extra):
    data = {
        "hostId": host_id,
        "title": title,
        "location": {"country": country, "city": city, "address": "Rua Augusta 1"},
        "bedroomCount": 2,
        "bathroomCount": 1,
        "maxGuests": 4,
        "price": 1200,
        "pricePerNight": 80,
        "propertyType": "apartment",
    }
    data.update(extra)
    return data

@pytest.fixture()
def make_rent(client):
    def _make(host_id, token, **extra):
        res = client.post("/api/long-term-stays", json=rent_dict(host_id, **extra), headers=auth_header(token))
        assert res.status_code == 201, res.text
        return res.json()
    return _make

def booking_dict(property_id, guest_id, host_id, check_in="2025-03-01", check_out="2025-03-05", **extra):
    data = {
        "propertyId": property_id,
        "guestId": guest_id,
        "hostId": host_id,
        "checkInDate": check_in,
        "checkOutDate": check_out,
        "numberOfGuests": 2,
        "pricing": {"pricePerNight": 80, "total": 350},
    }
    data.update(extra)
    return data
