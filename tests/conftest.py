# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Builds an isolated app (own db file) per test
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.models import Task, User
from core.store import Store
from lib.persistence import JsonFilePersistence


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db_path(tmp_path):
    """Path of a db file that does not exist yet."""
    return tmp_path / "db.json"


@pytest.fixture
def persistence(db_path):
    return JsonFilePersistence(db_path)


@pytest.fixture
def test_settings(db_path):
    """Settings pointing at the per-test db file."""
    return Settings(DB_PATH=str(db_path), LOCK_TIMEOUT_SECONDS=0.5)


@pytest.fixture
def client(test_settings):
    """TestClient with the lifespan running (store loaded)."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def sample_task_dict():
    """Sample task payload."""
    return {"id": 5, "name": "x", "completed": False}


@pytest.fixture
def sample_user_dict():
    """Sample user payload."""
    return {"id": 1, "username": "a", "password": "p"}


@pytest.fixture
def populated_store(sample_task_dict, sample_user_dict):
    """Store with two tasks and one user."""
    store = Store()
    store.insert_task(Task(**sample_task_dict))
    store.insert_task(Task(id=7, name="Ship it", completed=True))
    store.insert_user(User(**sample_user_dict))
    return store
