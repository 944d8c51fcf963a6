"""
Test Configuration and Fixtures

MongoDB is replaced by mongomock for the whole suite, so no database
server is needed. Environment defaults are set before the app is imported.
"""

import os

import mongomock
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("MONGODB_DB", "devconnect_test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from devconnect.core.auth import TokenService  # noqa: E402
from devconnect.db import mongodb  # noqa: E402
from devconnect.main import app  # noqa: E402


@pytest.fixture
def mongo_client():
    """Fresh in-memory MongoDB client installed as the app's client."""
    client = mongomock.MongoClient()
    mongodb.set_mongo_client(client)
    yield client
    mongodb.set_mongo_client(None)


@pytest.fixture
def db(mongo_client):
    return mongodb.get_mongo_db()


@pytest.fixture
def tokens():
    return TokenService(secret_key="unit-test-secret")


@pytest.fixture
def client(mongo_client):
    with TestClient(app) as test_client:
        yield test_client


def register(client, name="Alice", email="a@x.com", password="secret1") -> str:
    """Register through the API and return the token."""
    resp = client.post("/api/users", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def auth_headers(token: str) -> dict:
    return {"x-auth-token": token}


@pytest.fixture
def alice(client):
    return auth_headers(register(client, "Alice", "a@x.com", "secret1"))


@pytest.fixture
def bob(client):
    return auth_headers(register(client, "Bob", "b@x.com", "secret2"))
