"""
Shared fixtures for the Khata API tests.
Every test gets a fresh in-memory SQLite database and its own app instance.
"""

import os

# Settings are cached on first use, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from khata.infrastructure.database import Database
from khata.main import create_app


def register(client, name="Ravi Kumar", email="ravi@mailbox.in", phone="+919876543210", password="secret123"):
    """Register a user and return the ``data`` block (user + token)."""
    r = client.post("/api/auth/register", json={
        "name": name,
        "email": email,
        "phone": phone,
        "password": password,
    })
    assert r.status_code == 201, r.text
    return r.json()["data"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def client(database):
    """Create a test client bound to the in-memory database"""
    app = create_app(database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def account(client):
    return register(client)


@pytest.fixture
def auth_headers(account):
    return bearer(account["token"])


@pytest.fixture
def other_headers(client):
    data = register(client, name="Meera Shah", email="meera@mailbox.in", phone="+919812345678")
    return bearer(data["token"])


@pytest.fixture
def create_customer(client, auth_headers):
    """Factory: create a customer for the default account and return its data."""

    def _create(name="Anand Traders", phone="+919000000001", headers=None, **extra):
        payload = {"name": name, "phone": phone, **extra}
        r = client.post("/api/customers", json=payload, headers=headers or auth_headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _create


@pytest.fixture
def create_transaction(client, auth_headers):
    """Factory: record a ledger entry for the default account and return its data."""

    def _create(customer_id, type="credit", amount=100, description="Goods on credit", headers=None, **extra):
        payload = {
            "customer_id": customer_id,
            "type": type,
            "amount": amount,
            "description": description,
            **extra,
        }
        r = client.post("/api/transactions", json=payload, headers=headers or auth_headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _create
