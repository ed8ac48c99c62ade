"""
Shared fixtures: every test gets its own SQLite file under tmp_path.
"""

import pytest
from fastapi.testclient import TestClient

from exercise_tracker.config import Settings
from exercise_tracker.db.engine import get_engine
from exercise_tracker.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{tmp_path / 'test.sqlite'}")


@pytest.fixture
def engine(settings):
    return get_engine(settings.database_url)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    def _make(username):
        resp = client.post("/api/exercise/new-user", data={"username": username})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _make
