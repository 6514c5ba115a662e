"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from customer_service_api.app.core.config import settings
from customer_service_api.app.core.db import init_db


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the store at a fresh SQLite file with migrations applied."""
    db_file = tmp_path / "customers.db"
    monkeypatch.setattr(settings, "database_url", str(db_file))
    init_db()
    return db_file


@pytest.fixture
def client():
    from customer_service_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def alice() -> dict:
    """Wire-format payload for a sample customer."""
    return {
        "name": "Alice",
        "email": "a@x.com",
        "mobileNumber": "1234567890",
        "branchAddress": "Nairobi",
    }
