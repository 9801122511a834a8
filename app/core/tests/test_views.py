"""Tests for the health check endpoint."""

import pytest

from core.connection import DatabaseConnectionManager


@pytest.mark.django_db
def test_healthy(client):
    response = client.get("/health/")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


def test_unhealthy_when_database_unreachable(client, monkeypatch):
    monkeypatch.setattr(DatabaseConnectionManager, "is_available", lambda self: False)

    response = client.get("/health/")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"
