import os
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

# Default to the memory backend so importing the app never needs MongoDB
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from src.tasky_api.main import create_app  # noqa: E402
from src.tasky_api.repositories import InMemoryRepository  # noqa: E402
from src.tasky_api.settings import get_settings  # noqa: E402


def make_settings(**overrides):
    return replace(get_settings(), **{"persistence_backend": "memory", **overrides})


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def client(repo):
    # Context manager runs the lifespan (connect + index) before requests
    with TestClient(create_app(make_settings(), repository=repo)) as c:
        yield c


@pytest.fixture
def settings_factory():
    return make_settings
