"""Shared fixtures: a Flask app backed by a temp notes file."""

from pathlib import Path

import pytest

from app import create_app

PASSWORD = "s3cret-pass"


@pytest.fixture()
def notes_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "notes.json"


@pytest.fixture()
def app(notes_file: Path):
    return create_app(
        {
            "APP_PASSWORD": PASSWORD,
            "FLASK_SECRET": "test-secret",
            "NOTES_DATA_DIR": str(notes_file.parent),
            "NOTES_FILE": notes_file.name,
            "TESTING": True,
        }
    )


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def authed_client(client):
    client.post("/", data={"action": "login", "password": PASSWORD})
    return client
