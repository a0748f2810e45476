import pytest
from argon2 import PasswordHasher

from event_backend.auth_service.utils import CredentialHasher
from event_backend.gateway.server import create_app
from event_backend.tests.fakes import FakeCollection


@pytest.fixture
def store():
    return {"users": FakeCollection(), "events": FakeCollection()}


@pytest.fixture
def hasher():
    # Cheap argon2 parameters keep the suite fast
    return CredentialHasher(PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1))


@pytest.fixture
def app(store, hasher):
    app = create_app(db=store, hasher=hasher)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_event(client):
    """POST an event and return the created document."""

    def _make(**overrides):
        payload = {
            "title": "Jazz Night",
            "shortDescription": "Live jazz downtown",
            "fullDescription": "An evening of live jazz with local bands.",
            "price": "25.5",
            "date": "2025-05-01T19:00:00Z",
            "category": "music",
            "location": "Blue Note",
            "organizer": "org@example.com",
        }
        payload.update(overrides)
        response = client.post("/api/events", json=payload)
        assert response.status_code == 201
        return response.get_json()["event"]

    return _make
