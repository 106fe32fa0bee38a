"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import build_test_app, build_test_config, build_test_context
from tests.mocks.llm_mocks import FakeLLMProvider, StaticIdentityVerifier


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring a database (in-memory SQLite)"
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable that overrides config.yaml."""
    from core.config_loader import _ENV_OVERRIDES

    for env_name, *_ in _ENV_OVERRIDES:
        monkeypatch.delenv(env_name, raising=False)
    return monkeypatch


@pytest.fixture
def app_config(tmp_path):
    return build_test_config(str(tmp_path / "blobs"))


@pytest.fixture
def database():
    """Fresh in-memory database with all tables created."""
    from database.database import Database

    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def fake_llm():
    return FakeLLMProvider()


@pytest.fixture
def identity_verifier():
    return StaticIdentityVerifier()


@pytest.fixture
def app_context(app_config):
    """Context without an LLM provider: extraction is heuristic only."""
    context = build_test_context(app_config)
    yield context
    context.database.dispose()


@pytest.fixture
def client(app_context, identity_verifier):
    from fastapi.testclient import TestClient

    app = build_test_app(app_context, identity_verifier)
    return TestClient(app, raise_server_exceptions=False)
