"""Shared test fixtures for the CORS gate service."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["PORT"] = "3000"
os.environ["CORS_MODE"] = "any"
os.environ["CORS_LOG_ORIGINS"] = "false"

import pytest
from fastapi.testclient import TestClient

from corsgate.core.database import Base, engine, session_scope
from corsgate.main import create_app
from corsgate.services.message_service import seed_demo_messages


@pytest.fixture(autouse=True)
def reset_db():
    """Drop and recreate all tables between tests for isolation."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with session_scope() as db:
        seed_demo_messages(db)
    yield


@pytest.fixture
def make_client():
    """Build a TestClient for an app wrapped with the given origin policy."""

    def _make(policy=None, settings=None):
        return TestClient(create_app(settings=settings, policy=policy))

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
