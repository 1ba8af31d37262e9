"""Pytest configuration for the Blog & Travel Tracker test suite."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from blog_tracker_api.app.core.config import Settings
from blog_tracker_api.app.core.db import init_db
from blog_tracker_api.app.main import create_app


class FakeClock:
    """Deterministic clock for store timestamps."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 10, 5, tzinfo=timezone.utc))


@pytest.fixture
def db_path(tmp_path) -> str:
    """A migrated tracker database in a temporary directory."""
    path = str(tmp_path / "tracker.db")
    init_db(path)
    return path


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(database_url=str(tmp_path / "api.db"), database_timeout=1.0)


@pytest.fixture
def client(app_settings):
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client
