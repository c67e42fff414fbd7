"""
Tests for app-level routes and the error envelope.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

import api.middleware as middleware
from config.settings import Settings
from main import create_app


class TestMetaRoutes:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "OK"
        assert "X-Process-Time" in r.headers

    def test_api_docs_lists_endpoints(self, client):
        body = client.get("/api-docs").json()
        assert "POST /api/auth/register" in body["endpoints"]["auth"]
        assert "DELETE /api/tasks/{id}" in body["endpoints"]["tasks"]

    def test_unknown_route(self, client):
        r = client.get("/nope")
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Route not found", "path": "/nope"}


class TestUnhandledErrors:
    @pytest.fixture()
    def failing_client(self):
        app = create_app()

        @app.get("/boom")
        async def boom():
            raise RuntimeError("database exploded")

        return TestClient(app, raise_server_exceptions=False)

    def test_raw_message_hidden(self, failing_client, monkeypatch):
        monkeypatch.setattr(middleware.config, "debug", False)
        r = failing_client.get("/boom")
        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "Server Error"}

    def test_raw_message_shown_in_debug(self, failing_client, monkeypatch):
        monkeypatch.setattr(middleware.config, "debug", True)
        r = failing_client.get("/boom")
        assert r.status_code == 500
        assert r.json()["message"] == "RuntimeError: database exploded"


class TestSettings:
    def test_secret_is_required(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_blank_secret_rejected(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "   ")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
