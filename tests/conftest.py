import pytest
from fastapi.testclient import TestClient

from brightidy_api.app.core.config import Settings
from brightidy_api.app.core.db import JsonStore
from brightidy_api.app.main import create_app


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "db.json")


@pytest.fixture
def settings(db_path):
    return Settings(database_path=db_path, permissive_status_updates=False, reset_corrupt_database=False)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(db_path):
    return JsonStore(db_path)


def register(client, username, password, role):
    return client.post("/register", json={"username": username, "password": password, "role": role})


def login(client, username, password):
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def signup(client, username, role, password="pw"):
    """Register and log in, returning auth headers."""
    assert register(client, username, password, role).status_code == 201
    return login(client, username, password)


BOOKING = {
    "propertyAddress": "1 Main St",
    "propertyType": "apartment",
    "date": "2024-01-01",
    "time": "09:00",
    "duration": 2,
}


def create_booking(client, headers, **overrides):
    response = client.post("/bookings", json={**BOOKING, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["booking"]


@pytest.fixture
def alice(client):
    return signup(client, "alice", "client")


@pytest.fixture
def bob(client):
    return signup(client, "bob", "cleaner")


@pytest.fixture
def carol(client):
    return signup(client, "carol", "cleaner")


@pytest.fixture
def admin(client):
    return signup(client, "root", "admin")
