# tests/conftest.py
import os

# No artificial delay and no mock data for the app-level store under test
os.environ.setdefault("SIMULATED_LATENCY_MS", "0")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from stockdesk.repositories import build_memory_store, get_store
from tests.factories import seed


@pytest.fixture
def store():
    return build_memory_store(seed(), latency_ms=0)


@pytest.fixture
def empty_store():
    return build_memory_store(latency_ms=0)


@pytest.fixture
def client(store):
    from stockdesk.main import app

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
