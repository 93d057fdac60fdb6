import os
import tempfile

# настройки читаются при импорте rideshare, поэтому окружение — до импорта
_DB_DIR = tempfile.mkdtemp(prefix="rideshare-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_USERNAMES"] = ""
os.environ["COOKIE_SECURE"] = "false"

import pytest
from fastapi.testclient import TestClient

from rideshare.db import Base, SessionLocal, engine, init_db
from rideshare.main import app
from rideshare.services.users import promote_user_to_admin


@pytest.fixture(autouse=True)
def _fresh_db():
    init_db()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_client():
    """Каждый клиент — отдельный браузер со своей кукой сессии."""
    clients = []

    def _make():
        c = TestClient(app)
        c.__enter__()
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()


def register(client, username, **extra):
    payload = {
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
        "name": username.title(),
        "phone": "+92 300 0000000",
    }
    payload.update(extra)
    resp = client.post("/api/register", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


def car_payload(**extra):
    payload = {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2020,
        "color": "White",
        "registrationNumber": "LEA-1234",
        "seatingCapacity": 4,
    }
    payload.update(extra)
    return payload


def ride_payload(car_id, **extra):
    payload = {
        "carId": car_id,
        "pickupLocation": "DHA Phase 5, Lahore",
        "destination": "Gulberg III, Lahore",
        "departureDate": "2031-05-01T08:00:00",
        "departureTime": "08:00",
        "availableSeats": 3,
        "farePerSeat": "250.00",
        "preferences": {"instantBooking": True, "womenOnly": False, "noSmoking": True},
    }
    payload.update(extra)
    return payload


@pytest.fixture
def driver(make_client):
    c = make_client()
    user = register(c, "driver")
    car = c.post("/api/cars", json=car_payload()).json()
    return {"client": c, "user": user, "car": car}


@pytest.fixture
def passenger(make_client):
    c = make_client()
    user = register(c, "passenger")
    return {"client": c, "user": user}


@pytest.fixture
def admin(make_client, db):
    c = make_client()
    user = register(c, "admin")
    promote_user_to_admin(db, user["id"])
    return {"client": c, "user": user}
