from __future__ import annotations

from datetime import datetime

import pytest

from src.moodboard.moodboard.main import create_app


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app({"TESTING": True})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def container(app):
    return app.extensions["moodboard.container"]


@pytest.fixture
def login():
    """Log a test client in; returns the session user payload."""

    def _login(client, username: str = "staff", password: str = "staff123") -> dict:
        resp = client.post("/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["user"]

    return _login


@pytest.fixture
def make_user(app, container):
    def _make(username: str, password: str = "secret123") -> int:
        with app.app_context():
            return container.user_service.create_account(
                full_name=username.title(),
                username=username,
                password=password,
            )

    return _make


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 1, 9, 30, 0)
