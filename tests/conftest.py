"""Pytest fixtures for the Task Service tests."""

import pytest
from fastapi.testclient import TestClient

from task_service.config import Settings
from task_service.main import create_app
from task_service.store import TaskStore


@pytest.fixture
def settings() -> Settings:
    """Settings for an unseeded test app."""
    return Settings(seed_samples=False)


@pytest.fixture
def store() -> TaskStore:
    """An empty task store."""
    return TaskStore()


@pytest.fixture
def client(settings: Settings, store: TaskStore) -> TestClient:
    """Create a test client for the API, backed by ``store``."""
    return TestClient(create_app(settings, store))
