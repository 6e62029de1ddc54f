"""Shared fixtures for generator and API tests.

The API is exercised through FastAPI's TestClient (in-memory, no server).
"""

import pytest

from src.models.generator import GenerationConfig, TierLimits


@pytest.fixture()
def client():
    """FastAPI TestClient, no network needed."""
    from fastapi.testclient import TestClient

    from src.api.main import app

    return TestClient(app)


@pytest.fixture()
def roomy_limits():
    """Limits large enough not to interfere with small inputs."""
    return TierLimits(max_lists=None, max_items_per_list=None, max_combinations=1_000_000)


@pytest.fixture()
def hyphen_config():
    return GenerationConfig(separator="-")
