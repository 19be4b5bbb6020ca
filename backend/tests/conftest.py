"""Shared fixtures: every test gets a fresh app with its own upload dir."""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from repo_activities import ActivityRepo
from service_activities import ActivityService
from settings import Settings


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app_settings(upload_dir):
    return Settings(upload_dir=str(upload_dir), public_base_url="")


@pytest.fixture
def client(app_settings):
    with TestClient(create_app(app_settings)) as c:
        yield c


@pytest.fixture
def svc():
    return ActivityService(ActivityRepo())


@pytest.fixture
def central_park():
    return {"description": "Morning run in Central Park", "timestamp": "2024-01-01T08:00:00Z"}


@pytest.fixture
def gym():
    return {"description": "Gym session", "timestamp": "2024-01-02T08:00:00Z"}
