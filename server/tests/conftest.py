"""Shared fixtures for the server tests."""

import pytest
from fastapi.testclient import TestClient

import server.diagram_db as diagram_db
from server.app import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    """A TestClient backed by a throwaway SQLite file."""
    monkeypatch.setattr(diagram_db, "DIAGRAM_DB_PATH", tmp_path / "diagrams.db")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
